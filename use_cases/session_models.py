"""Session and profile DTOs shared across application layers."""

from dataclasses import dataclass, fields
from typing import Any, Dict, Literal, Optional

Role = Literal["agent", "super_admin"]
AccountStatus = Literal["pending_approval", "approved", "rejected"]

ROLES = ("agent", "super_admin")
ACCOUNT_STATUSES = ("pending_approval", "approved", "rejected")


@dataclass(frozen=True)
class AuthSession:
    """Read-only view of the provider session."""

    user_id: str
    access_token: str
    expires_at: Optional[int] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class UserProfile:
    id: str
    name: str
    phone_number: str
    role: Role
    status: AccountStatus
    career: Optional[str] = None
    payment_receipt_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> "UserProfile":
        """Build a profile from a `profiles` row, dropping columns we do not model."""
        if row.get("role") not in ROLES:
            raise ValueError(f"Unknown role: {row.get('role')!r}")
        if row.get("status") not in ACCOUNT_STATUSES:
            raise ValueError(f"Unknown status: {row.get('status')!r}")
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in row.items() if k in known}
        values["id"] = str(values["id"])
        return cls(**values)


@dataclass(frozen=True)
class StoreSnapshot:
    session: Optional[AuthSession] = None
    profile: Optional[UserProfile] = None
    is_loading: bool = True

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    @property
    def is_profile_resolved(self) -> bool:
        return self.profile is not None


def is_super_admin(profile: Optional[UserProfile]) -> bool:
    return profile is not None and profile.role == "super_admin"


def is_approved(profile: Optional[UserProfile]) -> bool:
    return profile is not None and profile.status == "approved"
