import streamlit as st

from infrastructure.observability import setup_observability, tag_user
setup_observability()

import ui
from use_cases import auth_flow, bootstrap
from use_cases.access_policy import View
from utils import session_manager
from views import admin_view, agent_view, landing_view, login_view, pending_view

# --- PAGE SETTINGS ---
st.set_page_config(page_title="REE | Agent Portal", layout="wide")
ui.setup_style()

# --- STARTUP ORCHESTRATION ---
session_manager.init_session_state()
startup_result = bootstrap.run_startup(session_manager.get_existing_store, session_manager.create_store)
if startup_result.status == "STOP":
    st.error(f"🚨 The portal is not configured: {startup_result.reason}")
    st.stop()

store = startup_result.store
ui.flush_notices(session_manager.pop_notices())

# --- ROUTING ---
route = auth_flow.route_request(store, session_manager.get_requested_view())

if route.status == "LOADING":
    ui.render_loading()
    st.stop()

if route.status == "REDIRECT":
    # Keep the address in line with the page actually shown.
    session_manager.navigate(route.view)

tag_user(store.snapshot)

if route.view == View.LANDING:
    landing_view.render_landing()
elif route.view == View.AUTH:
    login_view.render_auth_screen(store)
elif route.view == View.ADMIN_DASHBOARD:
    admin_view.render_admin_dashboard(store)
elif route.view == View.AGENT_DASHBOARD:
    agent_view.render_agent_dashboard(store)
elif route.view == View.PENDING_APPROVAL:
    pending_view.render_pending(store)

# Notices raised while rendering this run
ui.flush_notices(session_manager.pop_notices())
