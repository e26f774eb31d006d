"""Centralized role/status based access control for every page."""

import logging
from enum import Enum

from use_cases.session_models import StoreSnapshot, is_approved, is_super_admin

log = logging.getLogger(__name__)


class View(str, Enum):
    LANDING = "landing"
    AUTH = "auth"
    ADMIN_DASHBOARD = "admin-dashboard"
    AGENT_DASHBOARD = "agent-dashboard"
    PENDING_APPROVAL = "pending"


PUBLIC_VIEWS = (View.LANDING, View.AUTH)


def _signed_in(snapshot: StoreSnapshot) -> bool:
    return snapshot.is_authenticated and snapshot.is_profile_resolved


def redirect_target(snapshot: StoreSnapshot) -> View:
    """Canonical page for the snapshot's user."""
    if not _signed_in(snapshot):
        # An authenticated user whose profile could not be resolved stays on the auth page.
        return View.AUTH
    profile = snapshot.profile
    if is_super_admin(profile):
        return View.ADMIN_DASHBOARD
    if is_approved(profile):
        return View.AGENT_DASHBOARD
    # pending_approval and rejected share a page
    return View.PENDING_APPROVAL


def is_reachable(view: View, snapshot: StoreSnapshot) -> bool:
    if view in PUBLIC_VIEWS:
        return not _signed_in(snapshot)
    if not _signed_in(snapshot):
        return False

    profile = snapshot.profile
    if view == View.ADMIN_DASHBOARD:
        return is_super_admin(profile)
    if view == View.AGENT_DASHBOARD:
        return profile.role == "agent" and is_approved(profile)
    if view == View.PENDING_APPROVAL:
        return profile.role == "agent" and not is_approved(profile)
    return False


def resolve_view(requested: View, snapshot: StoreSnapshot) -> View:
    """Return the requested view when allowed, otherwise where the user belongs."""
    if is_reachable(requested, snapshot):
        return requested
    target = redirect_target(snapshot)
    log.debug(f"Redirecting {requested.value} -> {target.value}")
    return target


def can_review_agents(snapshot: StoreSnapshot) -> bool:
    """Only a signed-in super admin may change an agent's status."""
    authorized = snapshot.is_authenticated and is_super_admin(snapshot.profile)
    if not authorized:
        log.warning(
            "Agent review denied for user %s (role=%s)",
            snapshot.session.user_id if snapshot.session else None,
            snapshot.profile.role if snapshot.profile else None,
        )
    return authorized
