"""
Community Rules API Routes
Ordered rules shown on a community page (at most 10 per community).
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session

from community_api.database import get_session
from community_api.security import Actor, require_member_or_admin
from community_api.services import community_rule_service
from community_api.services.ownership import ensure_owner_or_admin

router = APIRouter()


class RuleCreateRequest(BaseModel):
    rule_line: str = Field(min_length=1, max_length=500)
    rule_index: Optional[int] = None


class RuleUpdateRequest(BaseModel):
    rule_line: Optional[str] = Field(default=None, min_length=1, max_length=500)
    rule_index: Optional[int] = None


class RuleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    community_id: str
    rule_index: int
    rule_line: str


@router.get("/communities/{community_id}/rules", response_model=List[RuleResponse])
def list_rules(community_id: str, session: Session = Depends(get_session)):
    community_rule_service.get_live_community(session, community_id)
    return community_rule_service.list_rules(session, community_id)


@router.post("/communities/{community_id}/rules", response_model=RuleResponse, status_code=201)
def add_rule(
    community_id: str,
    request: RuleCreateRequest,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    community = community_rule_service.get_live_community(session, community_id)
    ensure_owner_or_admin(actor, community.owner_id, "communities")
    return community_rule_service.add_rule(session, community_id, request.rule_line, request.rule_index)


@router.put("/communities/{community_id}/rules/{rule_id}", response_model=RuleResponse)
def update_rule(
    community_id: str,
    rule_id: str,
    request: RuleUpdateRequest,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    community = community_rule_service.get_live_community(session, community_id)
    ensure_owner_or_admin(actor, community.owner_id, "communities")
    rule = community_rule_service.get_rule(session, community_id, rule_id)
    return community_rule_service.update_rule(session, rule, request.rule_line, request.rule_index)


@router.delete("/communities/{community_id}/rules/{rule_id}", status_code=204)
def delete_rule(
    community_id: str,
    rule_id: str,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    """Remove a rule; the remaining rules are renumbered 1..n."""
    community = community_rule_service.get_live_community(session, community_id)
    ensure_owner_or_admin(actor, community.owner_id, "communities")
    rule = community_rule_service.get_rule(session, community_id, rule_id)
    community_rule_service.delete_rule(session, rule)
    return Response(status_code=204)
