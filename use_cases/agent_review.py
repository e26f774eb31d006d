"""Admin review of agent applications."""

import logging
from dataclasses import replace
from typing import List, Optional

from infrastructure.supabase_backend import BackendError, SupabaseBackend
from use_cases.access_policy import can_review_agents
from use_cases.profile_store import Notifier, SessionProfileStore
from use_cases.session_models import UserProfile

log = logging.getLogger(__name__)

REVIEW_DECISIONS = ("approved", "rejected")


class AgentReviewBoard:
    def __init__(
        self,
        store: SessionProfileStore,
        backend: SupabaseBackend,
        notify: Notifier,
        profiles_table: str = "profiles",
    ):
        self.store = store
        self.backend = backend
        self.notify = notify
        self.profiles_table = profiles_table
        self.agents: List[UserProfile] = []
        self.loaded = False

    def load_agents(self) -> List[UserProfile]:
        """Fetch every agent profile, newest first. Keeps the old list on failure."""
        if not can_review_agents(self.store.snapshot):
            return self.agents

        try:
            rows = self.backend.list_records(
                self.profiles_table,
                filters={"role": "agent"},
                order_by="created_at",
                descending=True,
            )
            agents = [UserProfile.from_record(row) for row in rows]
        except (BackendError, ValueError, KeyError, TypeError) as e:
            log.error(f"Error fetching agents: {e}")
            self.notify("error", str(e) or "Failed to fetch agents")
            return self.agents

        self.agents = agents
        self.loaded = True
        return agents

    def pending_agents(self) -> List[UserProfile]:
        return [a for a in self.agents if a.status == "pending_approval"]

    def set_status(self, agent_id: str, status: str) -> bool:
        if status not in REVIEW_DECISIONS:
            raise ValueError(f"Unsupported review decision: {status!r}")
        if not can_review_agents(self.store.snapshot):
            self.notify("error", "Only administrators can review agents")
            return False

        try:
            self.backend.update_record(self.profiles_table, agent_id, {"status": status})
        except BackendError as e:
            log.error(f"Error updating agent {agent_id} status: {e}")
            self.notify("error", str(e) or "Failed to update agent status")
            return False

        # Local list changes only after the backend confirmed the write.
        self.agents = [replace(a, status=status) if a.id == agent_id else a for a in self.agents]
        log.info(f"Agent {agent_id} marked {status}")
        self.notify("success", f"Agent {status} successfully")
        return True

    def receipt_url(self, agent: UserProfile) -> Optional[str]:
        if not agent.payment_receipt_url:
            self.notify("error", "No payment receipt available")
            return None
        return agent.payment_receipt_url
