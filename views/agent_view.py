import streamlit as st

import ui
from use_cases.profile_store import SessionProfileStore
from use_cases.signup_forms import validate_profile
from utils import session_manager


def _render_profile_form(store: SessionProfileStore):
    profile = store.snapshot.profile
    with st.form("agent_profile_form"):
        name = st.text_input("Full Name", value=profile.name)
        phone_number = st.text_input("Phone Number", value=profile.phone_number)
        career = st.text_input("Career", value=profile.career or "")
        if st.form_submit_button("💾 Save"):
            validation = validate_profile(name, phone_number)
            if not validation.is_valid:
                for message in validation.errors.values():
                    st.error(message)
            elif store.update_profile(
                {"name": name.strip(), "phone_number": phone_number.strip(), "career": career.strip() or None}
            ):
                st.rerun()


def render_agent_dashboard(store: SessionProfileStore):
    profile = store.snapshot.profile
    if ui.render_user_header("Agent Dashboard", "Welcome to your agent dashboard", profile.name, "Agent"):
        session_manager.logout(store)

    c_welcome, c_profile = st.columns([1, 1])
    with c_welcome:
        st.subheader(f"Welcome, {profile.name}!")
        st.caption("Your agent account has been approved")
        st.write(
            "You now have access to all agent features. Browse properties, "
            "manage clients, and more from your dashboard."
        )
    with c_profile:
        with st.expander("👤 My profile", expanded=False):
            _render_profile_form(store)
