"""Session & profile store: the single owner of who is signed in."""

import logging
from typing import Any, Callable, Dict, Optional

from infrastructure.supabase_backend import BackendError, SessionSubscription, SupabaseBackend
from use_cases.access_policy import View
from use_cases.session_models import AuthSession, StoreSnapshot, UserProfile

log = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]
Navigator = Callable[[View], None]

SIGNUP_ATTRIBUTES = ("name", "phone_number", "career", "payment_receipt_url")

# Columns a user may never write on their own profile.
PROTECTED_FIELDS = frozenset({"id", "role", "status", "created_at", "updated_at"})


def _error_message(exc: Exception, fallback: str) -> str:
    return str(exc).strip() or fallback


class SessionProfileStore:
    """
    Holds {session, profile, is_loading} and keeps it in line with the
    provider's session-change events. Views read `snapshot`; only the store
    mutates it.
    """

    def __init__(
        self,
        backend: SupabaseBackend,
        notify: Notifier,
        navigate: Navigator,
        profiles_table: str = "profiles",
    ):
        self.backend = backend
        self.notify = notify
        self.navigate = navigate
        self.profiles_table = profiles_table

        self._session: Optional[AuthSession] = None
        self._profile: Optional[UserProfile] = None
        self._is_loading = True
        self._subscription: Optional[SessionSubscription] = None
        self._events_seen = 0

    @property
    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(session=self._session, profile=self._profile, is_loading=self._is_loading)

    @property
    def is_initialized(self) -> bool:
        return self._subscription is not None

    def _finish_loading(self) -> None:
        if self._is_loading:
            self._is_loading = False
            log.debug("Initial session resolve finished")

    # --- lifecycle ---

    def initialize(self) -> None:
        if self._subscription is not None:
            return

        # Listen before reading so an event fired during the read is not lost.
        self._subscription = self.backend.on_session_change(self._on_session_change)
        events_before = self._events_seen

        try:
            session = self.backend.get_session()
        except BackendError as e:
            log.error(f"Error reading persisted session: {e}")
            session = None

        if self._events_seen != events_before:
            # A newer event already updated the snapshot.
            if self._session is None:
                self._finish_loading()
            return

        self._session = session
        if session is None:
            self._finish_loading()
        elif self._profile is None or self._profile.id != session.user_id:
            self.load_profile(session.user_id)
        else:
            self._finish_loading()

    def refresh_session(self) -> None:
        """Re-read the provider session on the script thread; an expired token is refreshed here."""
        if self._session is None:
            return

        try:
            session = self.backend.get_session()
        except BackendError as e:
            # Keep the current snapshot; the next run retries.
            log.error(f"Error refreshing session: {e}")
            return

        if session is None:
            log.info(f"Session for user {self._session.user_id} ended")
            self._session = None
            self._profile = None
            return

        self._session = session
        if self._profile is not None and self._profile.id != session.user_id:
            self.load_profile(session.user_id)

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_session_change(self, event: str, session: Optional[AuthSession]) -> None:
        self._events_seen += 1
        log.info(f"Auth event {event} (user={session.user_id if session else None})")
        self._session = session

        if event == "SIGNED_OUT" or session is None:
            self._profile = None
            self._finish_loading()
            return

        if self._profile is None or self._profile.id != session.user_id:
            self.load_profile(session.user_id)

    def load_profile(self, user_id: str) -> Optional[UserProfile]:
        try:
            row = self.backend.read_record(self.profiles_table, user_id)
            profile = UserProfile.from_record(row)
        except (BackendError, ValueError, KeyError, TypeError) as e:
            log.error(f"Error fetching user profile {user_id}: {e}")
            self._profile = None
            self.notify("error", "Failed to fetch user profile")
            return None
        finally:
            self._finish_loading()

        self._profile = profile
        return profile

    # --- user actions ---

    def sign_up(self, email: str, password: str, attributes: Dict[str, Any]) -> bool:
        if not (attributes.get("payment_receipt_url") or "").strip():
            self.notify("error", "Please upload your payment receipt")
            return False

        metadata = {key: attributes.get(key) for key in SIGNUP_ATTRIBUTES}
        # Never trust caller-supplied role/status.
        metadata["role"] = "agent"
        metadata["status"] = "pending_approval"

        try:
            self.backend.sign_up(email, password, metadata)
        except BackendError as e:
            log.error(f"Error during sign up: {e}")
            self.notify("error", _error_message(e, "Failed to sign up"))
            return False

        self.navigate(View.PENDING_APPROVAL)
        self.notify("success", "Sign up successful! Your account is pending approval.")
        return True

    def sign_in(self, email: str, password: str) -> bool:
        # The profile arrives through the session-change handler, not from here.
        try:
            self.backend.sign_in_with_password(email, password)
        except BackendError as e:
            log.error(f"Error during sign in: {e}")
            self.notify("error", _error_message(e, "Failed to sign in"))
            return False

        self.notify("success", "Signed in successfully!")
        return True

    def sign_out(self) -> bool:
        try:
            self.backend.sign_out()
        except BackendError as e:
            log.error(f"Error during sign out: {e}")
            self.notify("error", _error_message(e, "Failed to sign out"))
            return False

        self._session = None
        self._profile = None
        self.navigate(View.LANDING)
        self.notify("success", "Signed out successfully")
        return True

    def update_profile(self, patch: Dict[str, Any]) -> bool:
        if self._session is None:
            return False

        user_id = self._session.user_id
        dropped = PROTECTED_FIELDS.intersection(patch)
        if dropped:
            log.warning(f"Ignoring protected profile fields {sorted(dropped)} for user {user_id}")
        clean = {k: v for k, v in patch.items() if k not in PROTECTED_FIELDS}
        if not clean:
            return False

        try:
            self.backend.update_record(self.profiles_table, user_id, clean)
        except BackendError as e:
            log.error(f"Error updating profile {user_id}: {e}")
            self.notify("error", _error_message(e, "Failed to update profile"))
            return False

        # Re-read so server-side columns such as updated_at are current.
        self.load_profile(user_id)
        self.notify("success", "Profile updated successfully")
        return True
