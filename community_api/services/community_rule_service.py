"""
Ordered rule lists attached to a community.

A community holds at most ``MAX_RULES`` rules with 1-based, contiguous
``rule_index`` values. Inserting at an index shifts later rules down,
moving a rule shifts the ones in between, and removing a rule closes the gap.
"""
import logging
from typing import List, Optional

from sqlmodel import Session, select

from community_api.errors import InvalidRequestError, NotFoundError
from community_api.models import Community, CommunityRule

logger = logging.getLogger(__name__)

MAX_RULES = 10


def get_live_community(session: Session, community_id: str) -> Community:
    community = session.get(Community, community_id)
    if community is None or community.deleted_at is not None:
        raise NotFoundError("Community not found")
    return community


def list_rules(session: Session, community_id: str) -> List[CommunityRule]:
    return session.exec(
        select(CommunityRule)
        .where(CommunityRule.community_id == community_id)
        .order_by(CommunityRule.rule_index)
    ).all()


def _resequence(session: Session, ordered: List[CommunityRule]) -> None:
    """Number ``ordered`` as 1..n."""
    # (community_id, rule_index) is unique: park moving rows on negative indices first
    moving = [(position, rule) for position, rule in enumerate(ordered, start=1) if rule.rule_index != position]
    for position, rule in moving:
        rule.rule_index = -position
        session.add(rule)
    session.flush()
    for position, rule in moving:
        rule.rule_index = position
        session.add(rule)
    session.flush()


def add_rule(session: Session, community_id: str, rule_line: str, rule_index: Optional[int] = None) -> CommunityRule:
    """Append a rule, or insert it at ``rule_index`` and shift later rules down."""
    rules = list(list_rules(session, community_id))
    if len(rules) >= MAX_RULES:
        raise InvalidRequestError(f"A community can have at most {MAX_RULES} rules")

    append_at = len(rules) + 1
    if rule_index is None:
        rule_index = append_at
    elif rule_index < 1 or rule_index > append_at:
        raise InvalidRequestError(f"rule_index must be between 1 and {append_at}")

    rule = CommunityRule(community_id=community_id, rule_index=0, rule_line=rule_line)
    session.add(rule)
    session.flush()
    rules.insert(rule_index - 1, rule)
    _resequence(session, rules)

    session.commit()
    session.refresh(rule)
    return rule


def get_rule(session: Session, community_id: str, rule_id: str) -> CommunityRule:
    rule = session.get(CommunityRule, rule_id)
    if rule is None or rule.community_id != community_id:
        raise NotFoundError("Rule not found")
    return rule


def update_rule(
    session: Session,
    rule: CommunityRule,
    rule_line: Optional[str] = None,
    rule_index: Optional[int] = None,
) -> CommunityRule:
    if rule_index is not None and rule_index != rule.rule_index:
        rules = [r for r in list_rules(session, rule.community_id) if r.id != rule.id]
        if rule_index < 1 or rule_index > len(rules) + 1:
            raise InvalidRequestError(f"rule_index must be between 1 and {len(rules) + 1}")
        rules.insert(rule_index - 1, rule)
        _resequence(session, rules)
    if rule_line is not None:
        rule.rule_line = rule_line
    session.add(rule)
    session.commit()
    session.refresh(rule)
    return rule


def delete_rule(session: Session, rule: CommunityRule) -> None:
    community_id = rule.community_id
    session.delete(rule)
    session.flush()

    _resequence(session, list(list_rules(session, community_id)))
    session.commit()
    logger.info("Deleted rule from community %s and resequenced", community_id)
