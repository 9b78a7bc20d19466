"""
Banned phrase checks applied to user-generated content.
"""
import logging
from typing import Optional

from sqlmodel import Session, select

from community_api.errors import InvalidRequestError
from community_api.models import BannedWord

logger = logging.getLogger(__name__)


def find_banned_phrase(session: Session, *texts: Optional[str]) -> Optional[str]:
    """Return the first enabled banned phrase found in any of ``texts``."""
    haystacks = [t.lower() for t in texts if t]
    if not haystacks:
        return None

    phrases = session.exec(
        select(BannedWord.phrase).where(
            BannedWord.enabled == True,  # noqa: E712
            BannedWord.deleted_at.is_(None),
        )
    ).all()
    for phrase in phrases:
        needle = phrase.lower()
        if any(needle in text for text in haystacks):
            return phrase
    return None


def ensure_clean(session: Session, *texts: Optional[str]) -> None:
    phrase = find_banned_phrase(session, *texts)
    if phrase is not None:
        logger.info("Rejected content containing banned phrase %r", phrase)
        raise InvalidRequestError("Content contains a banned phrase")
