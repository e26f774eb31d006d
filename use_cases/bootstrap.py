"""Startup orchestration: one store per browser session."""

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Optional, Tuple

from infrastructure.supabase_backend import BackendConfigError
from use_cases.profile_store import SessionProfileStore

log = logging.getLogger(__name__)

StartupStatus = Literal["CONTINUE", "STOP"]


@dataclass(frozen=True)
class StartupResult:
    """Result contract for startup/bootstrap orchestration."""

    status: StartupStatus
    planned_steps: Tuple[str, ...]
    reason: str = ""
    store: Optional[SessionProfileStore] = None


def run_startup(
    get_existing: Callable[[], Optional[SessionProfileStore]],
    create_store: Callable[[], SessionProfileStore],
) -> StartupResult:
    """Reuse the session's store or build and initialize a new one."""
    executed_steps = []

    store = get_existing()
    if store is None:
        try:
            store = create_store()
        except BackendConfigError as e:
            log.error(f"Startup stopped: {e}")
            return StartupResult(status="STOP", planned_steps=tuple(executed_steps), reason=str(e))
        executed_steps.append("create_store")

    if not store.is_initialized:
        store.initialize()
        executed_steps.append("initialize_store")
    else:
        store.refresh_session()
        executed_steps.append("refresh_session")

    return StartupResult(status="CONTINUE", planned_steps=tuple(executed_steps), store=store)
