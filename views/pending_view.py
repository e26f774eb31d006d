import streamlit as st

from use_cases.profile_store import SessionProfileStore
from utils import session_manager


def render_pending(store: SessionProfileStore):
    profile = store.snapshot.profile
    # Rejected agents are routed here too; only the wording differs.
    rejected = profile is not None and profile.status == "rejected"

    with st.container(border=True):
        if rejected:
            st.header("⛔ Application Not Approved")
            st.write(
                "Your application was reviewed and not approved. "
                "Please contact our team if you believe this is a mistake."
            )
        else:
            st.header("⏳ Account Pending Approval")
            st.caption("Your account is awaiting administrator approval.")
            st.write(
                "Thank you for registering with us. Your account is currently being reviewed "
                "by our team. This process may take 1-2 business days."
            )
            st.caption("You will receive an email notification once your account has been approved.")

    if st.button("Sign Out", key="pending_sign_out"):
        session_manager.logout(store)
