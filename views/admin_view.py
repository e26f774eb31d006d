import pandas as pd
import streamlit as st

import ui
from use_cases.agent_review import AgentReviewBoard
from use_cases.profile_store import SessionProfileStore
from utils import session_manager

AGENT_COLUMNS = ["Name", "Phone", "Career", "Status", "Created At"]


def agents_frame(agents):
    rows = [
        {
            "Name": a.name,
            "Phone": a.phone_number,
            "Career": a.career or "N/A",
            "Status": a.status.replace("_", " "),
            "Created At": pd.to_datetime(a.created_at).date() if a.created_at else None,
        }
        for a in agents
    ]
    return pd.DataFrame(rows, columns=AGENT_COLUMNS)


def _render_pending(board: AgentReviewBoard):
    pending = board.pending_agents()
    if not pending:
        st.info("No applications awaiting review.")
        return

    st.warning(f"Awaiting approval: {len(pending)}")
    for agent in pending:
        st.markdown(
            f"**{agent.name}** {ui.status_badge(agent.status)}\n\n{agent.phone_number} | {agent.career or 'N/A'}",
            unsafe_allow_html=True,
        )
        c1, c2, c3 = st.columns([1, 1, 1.2])
        with c1:
            if st.button("✅ Approve", key=f"approve_{agent.id}", use_container_width=True):
                if board.set_status(agent.id, "approved"):
                    st.rerun()
        with c2:
            if st.button("⛔ Reject", key=f"reject_{agent.id}", use_container_width=True):
                if board.set_status(agent.id, "rejected"):
                    st.rerun()
        with c3:
            if agent.payment_receipt_url:
                st.link_button("👁 Receipt", agent.payment_receipt_url, use_container_width=True)
            elif st.button("👁 Receipt", key=f"receipt_{agent.id}", use_container_width=True):
                board.receipt_url(agent)
                st.rerun()
        st.divider()


def render_admin_dashboard(store: SessionProfileStore):
    profile = store.snapshot.profile
    if ui.render_user_header(
        "Admin Dashboard", "Manage agent applications and approvals", profile.name, "Super Admin"
    ):
        session_manager.logout(store)

    board = session_manager.get_agent_board(store)
    if not board.loaded:
        with st.spinner("Loading agents..."):
            board.load_agents()

    if st.button("🔄 Refresh", key="refresh_agents"):
        board.load_agents()

    st.subheader("Agent Applications")
    with st.expander("🛡 Applications awaiting review", expanded=True):
        _render_pending(board)

    st.subheader("All agents")
    if board.agents:
        st.dataframe(agents_frame(board.agents), use_container_width=True, hide_index=True)
    else:
        st.info("No agents found")
