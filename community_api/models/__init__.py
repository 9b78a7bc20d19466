from community_api.models.admin import Admin
from community_api.models.admin_action import AdminAction
from community_api.models.appeal import Appeal
from community_api.models.audit_log import AuditLog
from community_api.models.auth_session import AuthSession
from community_api.models.banned_word import BannedWord
from community_api.models.category import Category
from community_api.models.comment import Comment
from community_api.models.comment_report import CommentReport
from community_api.models.community import Community
from community_api.models.community_membership import CommunityMembership
from community_api.models.community_rule import CommunityRule
from community_api.models.configuration import Configuration
from community_api.models.data_export_log import DataExportLog
from community_api.models.external_integration import ExternalIntegration
from community_api.models.guest import Guest
from community_api.models.member import Member
from community_api.models.password_reset import PasswordReset
from community_api.models.post import Post
from community_api.models.post_moderation_log import PostModerationLog
from community_api.models.post_report import PostReport
from community_api.models.post_snapshot import PostSnapshot
from community_api.models.recent_community import RecentCommunity
from community_api.models.search_log import SearchLog
from community_api.models.vote import Vote

__all__ = [
    "Member",
    "Admin",
    "Guest",
    "AuthSession",
    "PasswordReset",
    "Category",
    "Community",
    "CommunityRule",
    "CommunityMembership",
    "RecentCommunity",
    "Post",
    "PostSnapshot",
    "PostModerationLog",
    "Comment",
    "Vote",
    "PostReport",
    "CommentReport",
    "BannedWord",
    "Configuration",
    "ExternalIntegration",
    "AdminAction",
    "Appeal",
    "AuditLog",
    "SearchLog",
    "DataExportLog",
]
