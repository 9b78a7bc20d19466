"""
Report API Routes
Members flag posts and comments; admins triage the reports.
"""

from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session, select

from community_api.database import get_session
from community_api.models import CommentReport, PostReport
from community_api.security import Actor, require_admin, require_member_or_admin
from community_api.services.audit_service import record_event
from community_api.services.comment_service import get_live_comment
from community_api.services.ownership import ensure_owner_or_admin
from community_api.services.post_service import get_live_post
from community_api.utils.pagination import Page, PageParams, page_params, paginate
from community_api.utils.sql import apply_date_range, live_row_or_404
from community_api.utils.timeutil import utcnow

router = APIRouter()

ReportStatus = Literal["pending", "reviewed", "resolved", "dismissed"]
CLOSED_STATUSES = ("resolved", "dismissed")


# ============================================================================
# Request/Response Models
# ============================================================================


class PostReportCreateRequest(BaseModel):
    report_type: str = Field(min_length=1, max_length=50)
    reason: Optional[str] = Field(default=None, max_length=2000)


class PostReportUpdateRequest(BaseModel):
    status: Optional[ReportStatus] = None
    resolution_notes: Optional[str] = None


class PostReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    post_id: str
    reporter_id: str
    reporter_kind: str
    admin_id: Optional[str] = None
    report_type: str
    reason: Optional[str] = None
    status: str
    resolution_notes: Optional[str] = None
    resolved_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class CommentReportCreateRequest(BaseModel):
    report_reason: str = Field(min_length=1, max_length=2000)


class CommentReportUpdateRequest(BaseModel):
    status: Optional[ReportStatus] = None
    resolution: Optional[str] = None


class CommentReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    comment_id: str
    reporter_id: str
    reporter_kind: str
    admin_id: Optional[str] = None
    report_reason: str
    status: str
    resolution: Optional[str] = None
    resolved_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


def _apply_status(report, status: Optional[str], actor: Actor) -> None:
    """Closing a report stamps when and by whom it was closed."""
    if status is None or status == report.status:
        return
    report.status = status
    if status in CLOSED_STATUSES:
        report.resolved_at = utcnow()
        report.admin_id = actor.id
    else:
        report.resolved_at = None


# ============================================================================
# Post Reports
# ============================================================================


@router.post("/posts/{post_id}/reports", response_model=PostReportResponse, status_code=201)
def report_post(
    post_id: str,
    request: PostReportCreateRequest,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    get_live_post(session, post_id)

    existing = session.exec(
        select(PostReport).where(
            PostReport.post_id == post_id,
            PostReport.reporter_id == actor.id,
            PostReport.deleted_at.is_(None),
        )
    ).first()
    if existing:
        raise HTTPException(status_code=409, detail="You have already reported this post")

    report = PostReport(
        post_id=post_id,
        reporter_id=actor.id,
        reporter_kind=actor.kind,
        report_type=request.report_type,
        reason=request.reason,
    )
    session.add(report)
    session.commit()
    session.refresh(report)
    return report


@router.get("/post-reports", response_model=Page[PostReportResponse])
def list_post_reports(
    status: Optional[ReportStatus] = None,
    post_id: Optional[str] = None,
    report_type: Optional[str] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    statement = select(PostReport).where(PostReport.deleted_at.is_(None))
    if status:
        statement = statement.where(PostReport.status == status)
    if post_id:
        statement = statement.where(PostReport.post_id == post_id)
    if report_type:
        statement = statement.where(PostReport.report_type == report_type)
    statement = apply_date_range(statement, PostReport.created_at, created_from, created_to)
    return paginate(session, statement.order_by(PostReport.created_at.desc()), params)


@router.get("/post-reports/{report_id}", response_model=PostReportResponse)
def get_post_report(
    report_id: str,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    report = live_row_or_404(session, PostReport, report_id, "Report")
    ensure_owner_or_admin(actor, report.reporter_id, "reports")
    return report


@router.put("/post-reports/{report_id}", response_model=PostReportResponse)
def update_post_report(
    report_id: str,
    request: PostReportUpdateRequest,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    report = live_row_or_404(session, PostReport, report_id, "Report")
    _apply_status(report, request.status, actor)
    if request.resolution_notes is not None:
        report.resolution_notes = request.resolution_notes
    report.updated_at = utcnow()

    session.add(report)
    record_event(
        session,
        "post_report.update",
        actor_id=actor.id,
        actor_kind=actor.kind,
        entity_type="post_report",
        entity_id=report.id,
        details=report.status,
    )
    session.commit()
    session.refresh(report)
    return report


# ============================================================================
# Comment Reports
# ============================================================================


@router.post("/comments/{comment_id}/reports", response_model=CommentReportResponse, status_code=201)
def report_comment(
    comment_id: str,
    request: CommentReportCreateRequest,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    get_live_comment(session, comment_id)

    existing = session.exec(
        select(CommentReport).where(
            CommentReport.comment_id == comment_id,
            CommentReport.reporter_id == actor.id,
            CommentReport.deleted_at.is_(None),
        )
    ).first()
    if existing:
        raise HTTPException(status_code=409, detail="You have already reported this comment")

    report = CommentReport(
        comment_id=comment_id,
        reporter_id=actor.id,
        reporter_kind=actor.kind,
        report_reason=request.report_reason,
    )
    session.add(report)
    session.commit()
    session.refresh(report)
    return report


@router.get("/comment-reports", response_model=Page[CommentReportResponse])
def list_comment_reports(
    status: Optional[ReportStatus] = None,
    comment_id: Optional[str] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    params: PageParams = Depends(page_params),
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    statement = select(CommentReport).where(CommentReport.deleted_at.is_(None))
    if status:
        statement = statement.where(CommentReport.status == status)
    if comment_id:
        statement = statement.where(CommentReport.comment_id == comment_id)
    statement = apply_date_range(statement, CommentReport.created_at, created_from, created_to)
    return paginate(session, statement.order_by(CommentReport.created_at.desc()), params)


@router.get("/comment-reports/{report_id}", response_model=CommentReportResponse)
def get_comment_report(
    report_id: str,
    actor: Actor = Depends(require_member_or_admin),
    session: Session = Depends(get_session),
):
    report = live_row_or_404(session, CommentReport, report_id, "Report")
    ensure_owner_or_admin(actor, report.reporter_id, "reports")
    return report


@router.put("/comment-reports/{report_id}", response_model=CommentReportResponse)
def update_comment_report(
    report_id: str,
    request: CommentReportUpdateRequest,
    actor: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    report = live_row_or_404(session, CommentReport, report_id, "Report")
    _apply_status(report, request.status, actor)
    if request.resolution is not None:
        report.resolution = request.resolution
    report.updated_at = utcnow()

    session.add(report)
    record_event(
        session,
        "comment_report.update",
        actor_id=actor.id,
        actor_kind=actor.kind,
        entity_type="comment_report",
        entity_id=report.id,
        details=report.status,
    )
    session.commit()
    session.refresh(report)
    return report
