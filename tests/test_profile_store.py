from unittest.mock import MagicMock

import pytest

from infrastructure.supabase_backend import AuthenticationError, BackendError, RecordNotFoundError, SessionSubscription
from use_cases import access_policy
from use_cases.access_policy import View
from use_cases.profile_store import SessionProfileStore
from use_cases.session_models import AuthSession


def _row(user_id="u-1", role="agent", status="pending_approval", **extra):
    row = {
        "id": user_id,
        "name": "Ana",
        "phone_number": "5551234567",
        "role": role,
        "status": status,
        "payment_receipt_url": "https://x/r.pdf",
        "created_at": "2026-01-02T10:00:00+00:00",
        "updated_at": "2026-01-02T10:00:00+00:00",
    }
    row.update(extra)
    return row


def _session(user_id="u-1"):
    return AuthSession(user_id=user_id, access_token="token", email="a@x.com")


@pytest.fixture
def backend():
    mock = MagicMock()
    mock.handlers = []
    mock.calls = []
    mock.get_session.return_value = None
    mock.read_record.return_value = _row()

    def subscribe(callback):
        mock.calls.append("subscribe")
        mock.handlers.append(callback)
        return SessionSubscription(id="sub-1", _release=mock.release)

    mock.on_session_change.side_effect = subscribe
    return mock


@pytest.fixture
def notify():
    return MagicMock()


@pytest.fixture
def navigate():
    return MagicMock()


@pytest.fixture
def store(backend, notify, navigate):
    return SessionProfileStore(backend, notify=notify, navigate=navigate)


def _fire(backend, event, session):
    for handler in backend.handlers:
        handler(event, session)


# --- initialize ---

def test_initialize_without_session_finishes_loading(store, backend):
    store.initialize()

    snapshot = store.snapshot
    assert snapshot.is_loading is False
    assert snapshot.profile is None
    assert snapshot.session is None
    backend.read_record.assert_not_called()


def test_initialize_subscribes_before_reading_session(store, backend):
    def read_session():
        backend.calls.append("get_session")
        return None

    backend.get_session.side_effect = read_session
    store.initialize()

    assert backend.calls == ["subscribe", "get_session"]


def test_initialize_with_persisted_session_loads_profile(store, backend):
    backend.get_session.return_value = _session()
    store.initialize()

    backend.read_record.assert_called_once_with("profiles", "u-1")
    assert store.snapshot.profile.id == "u-1"
    assert store.snapshot.is_loading is False


def test_event_during_initial_read_is_not_lost(store, backend):
    def read_session():
        # Sign-in lands between subscribing and the (stale) read returning.
        _fire(backend, "SIGNED_IN", _session())
        return None

    backend.get_session.side_effect = read_session
    store.initialize()

    snapshot = store.snapshot
    assert snapshot.session is not None
    assert snapshot.profile.id == "u-1"
    assert snapshot.is_loading is False
    backend.read_record.assert_called_once()


def test_initialize_twice_subscribes_once(store, backend):
    store.initialize()
    store.initialize()
    assert backend.on_session_change.call_count == 1


def test_close_releases_subscription(store, backend):
    store.initialize()
    store.close()
    backend.release.assert_called_once()
    assert store.is_initialized is False


def test_initialize_survives_session_read_error(store, backend):
    backend.get_session.side_effect = AuthenticationError("refresh token expired")
    store.initialize()
    assert store.snapshot.is_loading is False
    assert store.snapshot.session is None


# --- refresh_session ---

def test_refresh_session_picks_up_new_token(store, backend):
    backend.get_session.return_value = _session()
    store.initialize()
    backend.get_session.return_value = AuthSession(user_id="u-1", access_token="fresh-token")

    store.refresh_session()

    assert store.snapshot.session.access_token == "fresh-token"
    assert store.snapshot.profile.id == "u-1"
    backend.read_record.assert_called_once()


def test_refresh_session_clears_expired_session(store, backend):
    backend.get_session.return_value = _session()
    store.initialize()
    backend.get_session.return_value = None

    store.refresh_session()

    assert store.snapshot.session is None
    assert store.snapshot.profile is None
    assert access_policy.redirect_target(store.snapshot) == View.AUTH


def test_refresh_session_keeps_state_on_backend_error(store, backend):
    backend.get_session.return_value = _session()
    store.initialize()
    backend.get_session.side_effect = BackendError("network down")

    store.refresh_session()

    assert store.snapshot.session.user_id == "u-1"
    assert store.snapshot.profile is not None


def test_refresh_session_without_session_skips_backend(store, backend):
    store.initialize()
    backend.get_session.reset_mock()

    store.refresh_session()

    backend.get_session.assert_not_called()


# --- load_profile ---

def test_load_profile_failure_does_not_hang(store, backend, notify):
    backend.get_session.return_value = _session()
    backend.read_record.side_effect = RecordNotFoundError("read profiles: record not found")

    store.initialize()

    assert store.snapshot.profile is None
    assert store.snapshot.is_loading is False
    notify.assert_called_once_with("error", "Failed to fetch user profile")


def test_load_profile_with_malformed_row_is_a_fetch_error(store, backend, notify):
    backend.read_record.return_value = _row(role="owner")
    assert store.load_profile("u-1") is None
    notify.assert_called_once_with("error", "Failed to fetch user profile")


def test_is_loading_flips_exactly_once(store, backend):
    seen = []
    backend.get_session.return_value = _session()

    def read(table, key):
        seen.append(store.snapshot.is_loading)
        return _row()

    backend.read_record.side_effect = read
    store.initialize()
    store.load_profile("u-1")
    store.update_profile({"name": "Ana Maria"})

    # Only the very first fetch runs while loading.
    assert seen == [True, False, False]
    assert store.snapshot.is_loading is False


def test_reload_failure_does_not_restart_loading(store, backend):
    backend.get_session.return_value = _session()
    store.initialize()

    backend.read_record.side_effect = BackendError("network down")
    store.load_profile("u-1")

    assert store.snapshot.is_loading is False


# --- sign up ---

def test_sign_up_forces_agent_role_and_pending_status(store, backend, navigate):
    ok = store.sign_up(
        "a@x.com",
        "secret1",
        {
            "name": "A",
            "phone_number": "5551234",
            "payment_receipt_url": "https://x/r.pdf",
            "role": "super_admin",
            "status": "approved",
        },
    )

    assert ok is True
    email, password, metadata = backend.sign_up.call_args.args
    assert (email, password) == ("a@x.com", "secret1")
    assert metadata == {
        "name": "A",
        "phone_number": "5551234",
        "career": None,
        "payment_receipt_url": "https://x/r.pdf",
        "role": "agent",
        "status": "pending_approval",
    }
    navigate.assert_called_once_with(View.PENDING_APPROVAL)


def test_sign_up_scenario_routes_to_pending(store, backend):
    store.initialize()

    def confirm_signup(email, password, metadata):
        # The backend creates the profile from the sign-up metadata.
        backend.read_record.return_value = _row(user_id="new-user", **{
            k: metadata[k] for k in ("name", "phone_number", "role", "status", "payment_receipt_url")
        })
        _fire(backend, "SIGNED_IN", _session("new-user"))
        return "new-user"

    backend.sign_up.side_effect = confirm_signup
    store.sign_up("a@x.com", "secret1", {
        "name": "A", "phone_number": "5551234", "payment_receipt_url": "https://x/r.pdf",
    })

    profile = store.snapshot.profile
    assert profile.role == "agent"
    assert profile.status == "pending_approval"
    assert access_policy.redirect_target(store.snapshot) == View.PENDING_APPROVAL


def test_sign_up_requires_receipt(store, backend, notify, navigate):
    ok = store.sign_up("a@x.com", "secret1", {"name": "A", "phone_number": "5551234", "payment_receipt_url": " "})

    assert ok is False
    backend.sign_up.assert_not_called()
    navigate.assert_not_called()
    notify.assert_called_once_with("error", "Please upload your payment receipt")


def test_sign_up_failure_surfaces_provider_message(store, backend, notify, navigate):
    backend.sign_up.side_effect = AuthenticationError("User already registered")

    ok = store.sign_up("a@x.com", "secret1", {"payment_receipt_url": "https://x/r.pdf"})

    assert ok is False
    navigate.assert_not_called()
    notify.assert_called_once_with("error", "User already registered")


# --- sign in ---

def test_sign_in_waits_for_session_event_to_load_profile(store, backend, navigate):
    store.initialize()
    backend.sign_in_with_password.return_value = _session()

    assert store.sign_in("a@x.com", "secret1") is True
    # No profile and no navigation until the provider announces the session.
    assert store.snapshot.profile is None
    backend.read_record.assert_not_called()
    navigate.assert_not_called()

    _fire(backend, "SIGNED_IN", _session())
    assert store.snapshot.profile.id == "u-1"


def test_sign_in_failure_uses_generic_fallback(store, backend, notify):
    backend.sign_in_with_password.side_effect = AuthenticationError("")

    assert store.sign_in("a@x.com", "bad") is False
    notify.assert_called_once_with("error", "Failed to sign in")
    assert store.snapshot.session is None


def test_token_refresh_does_not_refetch_profile(store, backend):
    backend.get_session.return_value = _session()
    store.initialize()
    _fire(backend, "TOKEN_REFRESHED", _session())
    assert backend.read_record.call_count == 1


# --- sign out ---

def test_sign_out_clears_profile_and_navigates_home(store, backend, navigate):
    backend.get_session.return_value = _session()
    store.initialize()

    assert store.sign_out() is True
    assert store.snapshot.profile is None
    assert store.snapshot.session is None
    navigate.assert_called_once_with(View.LANDING)


def test_sign_out_failure_keeps_state(store, backend, notify, navigate):
    backend.get_session.return_value = _session()
    store.initialize()
    backend.sign_out.side_effect = AuthenticationError("network down")

    assert store.sign_out() is False
    assert store.snapshot.profile is not None
    navigate.assert_not_called()
    notify.assert_called_once_with("error", "network down")


def test_signed_out_event_clears_profile(store, backend):
    backend.get_session.return_value = _session()
    store.initialize()
    _fire(backend, "SIGNED_OUT", None)
    assert store.snapshot.profile is None


# --- update profile ---

def test_update_profile_writes_then_reads(store, backend):
    backend.get_session.return_value = _session()
    store.initialize()
    backend.read_record.reset_mock()
    backend.read_record.return_value = _row(name="Ana Maria", updated_at="2026-02-01T00:00:00+00:00")

    assert store.update_profile({"name": "Ana Maria"}) is True

    backend.update_record.assert_called_once_with("profiles", "u-1", {"name": "Ana Maria"})
    backend.read_record.assert_called_once_with("profiles", "u-1")
    assert store.snapshot.profile.updated_at == "2026-02-01T00:00:00+00:00"


def test_update_profile_never_sends_role_or_status(store, backend):
    backend.get_session.return_value = _session()
    store.initialize()

    store.update_profile({"career": "Broker", "role": "super_admin", "status": "approved"})

    backend.update_record.assert_called_once_with("profiles", "u-1", {"career": "Broker"})


def test_update_profile_requires_user(store, backend):
    store.initialize()
    assert store.update_profile({"name": "X"}) is False
    backend.update_record.assert_not_called()


def test_update_profile_failure_keeps_snapshot(store, backend, notify):
    backend.get_session.return_value = _session()
    store.initialize()
    before = store.snapshot.profile
    backend.update_record.side_effect = RecordNotFoundError("update profiles: no row matched id u-1")

    assert store.update_profile({"name": "X"}) is False
    assert store.snapshot.profile == before
    notify.assert_called_once_with("error", "update profiles: no row matched id u-1")
