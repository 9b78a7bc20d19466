"""
Per-member "recently visited communities" list.

Ranks are 1-based and contiguous, rank 1 being the most recent visit.
The list never holds more than ``MAX_RECENT`` entries.
"""
import logging
from typing import List

from sqlmodel import Session, select

from community_api.models import RecentCommunity
from community_api.utils.timeutil import utcnow

logger = logging.getLogger(__name__)

MAX_RECENT = 5


def list_recent(session: Session, member_id: str) -> List[RecentCommunity]:
    return session.exec(
        select(RecentCommunity)
        .where(RecentCommunity.member_id == member_id)
        .order_by(RecentCommunity.recent_rank)
    ).all()


def touch(session: Session, member_id: str, community_id: str) -> RecentCommunity:
    """Record a visit: move or insert the community at rank 1."""
    entries = list_recent(session, member_id)
    current = next((e for e in entries if e.community_id == community_id), None)
    others = [e for e in entries if e is not current]

    if current is None:
        current = RecentCommunity(member_id=member_id, community_id=community_id, recent_rank=1)
    current.recent_rank = 1
    current.last_activity_at = utcnow()
    session.add(current)

    for rank, entry in enumerate(others, start=2):
        if rank > MAX_RECENT:
            logger.debug("Evicting community %s from member %s recents", entry.community_id, member_id)
            session.delete(entry)
            continue
        entry.recent_rank = rank
        session.add(entry)

    session.commit()
    session.refresh(current)
    return current


def remove(session: Session, entry: RecentCommunity) -> None:
    member_id = entry.member_id
    session.delete(entry)
    session.flush()
    for rank, remaining in enumerate(list_recent(session, member_id), start=1):
        remaining.recent_rank = rank
        session.add(remaining)
    session.commit()
