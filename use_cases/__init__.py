"""Application layer contracts for orchestrating high-level flows."""

from .access_policy import View, can_review_agents, is_reachable, redirect_target, resolve_view
from .agent_review import AgentReviewBoard
from .auth_flow import AuthFlowResult, AuthFlowStatus, route_request
from .bootstrap import StartupResult, StartupStatus, run_startup
from .profile_store import SessionProfileStore
from .receipt_upload import ReceiptUpload
from .session_models import AccountStatus, AuthSession, Role, StoreSnapshot, UserProfile, is_approved, is_super_admin
from .signup_forms import FormValidation, validate_login, validate_profile, validate_signup

__all__ = [
    "AccountStatus",
    "AgentReviewBoard",
    "AuthFlowResult",
    "AuthFlowStatus",
    "AuthSession",
    "FormValidation",
    "ReceiptUpload",
    "Role",
    "SessionProfileStore",
    "StartupResult",
    "StartupStatus",
    "StoreSnapshot",
    "UserProfile",
    "View",
    "can_review_agents",
    "is_approved",
    "is_reachable",
    "is_super_admin",
    "redirect_target",
    "resolve_view",
    "route_request",
    "run_startup",
    "validate_login",
    "validate_profile",
    "validate_signup",
]
