"""Supabase adapter for auth, profile rows and receipt storage."""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Optional, Type

import httpx
from postgrest.exceptions import APIError
from storage3.exceptions import StorageException
from supabase import Client
from supabase_auth.errors import AuthError

if TYPE_CHECKING:
    from use_cases.session_models import AuthSession

log = logging.getLogger(__name__)

# PostgREST code for ".single()" matching zero rows
_NO_ROWS_CODE = "PGRST116"


class BackendError(Exception):
    """Base class for every failure coming out of the backend."""


class BackendConfigError(BackendError):
    pass


class BackendUnavailableError(BackendError):
    pass


class AuthenticationError(BackendError):
    pass


class RecordNotFoundError(BackendError):
    pass


class StorageUploadError(BackendError):
    pass


SessionCallback = Callable[[str, Optional["AuthSession"]], None]


@dataclass
class SessionSubscription:
    """Handle returned by on_session_change; call unsubscribe() to stop events."""

    id: str
    _release: Callable[[], None]
    active: bool = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self._release()
        self.active = False


def to_auth_session(session: Any) -> Optional["AuthSession"]:
    from use_cases.session_models import AuthSession

    if session is None or getattr(session, "user", None) is None:
        return None
    return AuthSession(
        user_id=str(session.user.id),
        access_token=session.access_token,
        expires_at=session.expires_at,
        email=session.user.email,
    )


@contextmanager
def _translate(action: str, error_cls: Type[BackendError]) -> Iterator[None]:
    try:
        yield
    except BackendError:
        raise
    except AuthError as e:
        raise AuthenticationError(e.message or f"{action} failed") from e
    except APIError as e:
        if e.code == _NO_ROWS_CODE:
            raise RecordNotFoundError(f"{action}: record not found") from e
        raise error_cls(e.message or f"{action} failed") from e
    except StorageException as e:
        message = getattr(e, "message", None) or str(e)
        raise StorageUploadError(message or f"{action} failed") from e
    except httpx.HTTPError as e:
        log.error(f"Network error during {action}: {e}")
        raise BackendUnavailableError(f"Network error during {action}") from e


class SupabaseBackend:
    def __init__(self, client: Client):
        self.client = client

    # --- auth ---

    def sign_up(self, email: str, password: str, attributes: Dict[str, Any]) -> Optional[str]:
        with _translate("sign up", AuthenticationError):
            response = self.client.auth.sign_up(
                {"email": email, "password": password, "options": {"data": attributes}}
            )
        return str(response.user.id) if response.user else None

    def sign_in_with_password(self, email: str, password: str) -> "AuthSession":
        with _translate("sign in", AuthenticationError):
            response = self.client.auth.sign_in_with_password({"email": email, "password": password})
        session = to_auth_session(response.session)
        if session is None:
            raise AuthenticationError("Sign in did not return a session")
        return session

    def sign_out(self) -> None:
        with _translate("sign out", AuthenticationError):
            self.client.auth.sign_out()

    def get_session(self) -> Optional["AuthSession"]:
        with _translate("session read", AuthenticationError):
            return to_auth_session(self.client.auth.get_session())

    def on_session_change(self, callback: SessionCallback) -> SessionSubscription:
        def _relay(event, session):
            callback(event, to_auth_session(session))

        sub = self.client.auth.on_auth_state_change(_relay)
        return SessionSubscription(id=sub.id, _release=sub.unsubscribe)

    # --- rows ---

    def read_record(self, table: str, key: str) -> Dict[str, Any]:
        with _translate(f"read {table}", BackendError):
            response = self.client.table(table).select("*").eq("id", key).single().execute()
        if not response.data:
            raise RecordNotFoundError(f"read {table}: record not found")
        return response.data

    def update_record(self, table: str, key: str, patch: Dict[str, Any]) -> None:
        with _translate(f"update {table}", BackendError):
            response = self.client.table(table).update(patch).eq("id", key).execute()
        # Row-level security hides rows instead of failing; no row back means no write.
        if not response.data:
            raise RecordNotFoundError(f"update {table}: no row matched id {key}")

    def list_records(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        with _translate(f"list {table}", BackendError):
            query = self.client.table(table).select("*")
            for column, value in (filters or {}).items():
                query = query.eq(column, value)
            if order_by:
                query = query.order(order_by, desc=descending)
            response = query.execute()
        return list(response.data or [])

    # --- storage ---

    def upload_object(self, bucket: str, path: str, data: bytes, content_type: Optional[str] = None) -> str:
        options = {"content-type": content_type} if content_type else None
        with _translate("upload", StorageUploadError):
            store = self.client.storage.from_(bucket)
            store.upload(path, data, options)
            url = store.get_public_url(path)
        log.info(f"Uploaded {len(data)} bytes to {bucket}/{path}")
        return url
