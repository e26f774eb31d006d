"""Page routing orchestration (application layer)."""

from dataclasses import dataclass
from typing import Literal, Optional

from use_cases import access_policy
from use_cases.access_policy import View
from use_cases.profile_store import SessionProfileStore

AuthFlowStatus = Literal["LOADING", "RENDER", "REDIRECT"]


@dataclass(frozen=True)
class AuthFlowResult:
    """Result contract for page routing."""

    status: AuthFlowStatus
    reason: str
    view: Optional[View] = None


def route_request(store: SessionProfileStore, requested: View) -> AuthFlowResult:
    """Decide which page this run renders for the store's current snapshot."""
    snapshot = store.snapshot
    if snapshot.is_loading:
        return AuthFlowResult(status="LOADING", reason="session_resolving")

    view = access_policy.resolve_view(requested, snapshot)
    if view == requested:
        return AuthFlowResult(status="RENDER", reason="allowed", view=view)
    reason = "auth_required" if not snapshot.is_authenticated else "role_redirect"
    return AuthFlowResult(status="REDIRECT", reason=reason, view=view)
