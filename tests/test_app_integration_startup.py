import sys
import importlib
from unittest.mock import patch, MagicMock
import pytest
import streamlit as st

from use_cases.access_policy import View
from use_cases.auth_flow import AuthFlowResult
from use_cases.bootstrap import StartupResult
from use_cases.session_models import StoreSnapshot


def _import_app():
    if "app" in sys.modules:
        del sys.modules["app"]
    try:
        importlib.import_module("app")
    except Exception as e:
        pytest.fail(f"app.py import failed with error: {e}")


@patch("infrastructure.observability.tag_user")
@patch("views.landing_view.render_landing")
@patch("use_cases.auth_flow.route_request")
@patch("use_cases.bootstrap.run_startup")
@patch("ui.setup_style")
def test_app_startup_headless_integration(
    mock_setup_style,
    mock_run_startup,
    mock_route,
    mock_render_landing,
    mock_tag_user,
):
    st.session_state.clear()
    store = MagicMock()
    store.snapshot = StoreSnapshot(is_loading=False)

    mock_run_startup.return_value = StartupResult(status="CONTINUE", planned_steps=(), store=store)
    mock_route.return_value = AuthFlowResult(status="RENDER", reason="allowed", view=View.LANDING)

    _import_app()

    mock_run_startup.assert_called_once()
    mock_route.assert_called_once_with(store, View.LANDING)
    mock_render_landing.assert_called_once()
    mock_tag_user.assert_called_once_with(store.snapshot)


@patch("infrastructure.observability.tag_user")
@patch("views.pending_view.render_pending")
@patch("use_cases.auth_flow.route_request")
@patch("use_cases.bootstrap.run_startup")
@patch("ui.setup_style")
def test_app_redirect_updates_requested_view(
    mock_setup_style,
    mock_run_startup,
    mock_route,
    mock_render_pending,
    mock_tag_user,
):
    st.session_state.clear()
    st.session_state.requested_view = View.AGENT_DASHBOARD.value
    store = MagicMock()

    mock_run_startup.return_value = StartupResult(status="CONTINUE", planned_steps=(), store=store)
    mock_route.return_value = AuthFlowResult(status="REDIRECT", reason="role_redirect", view=View.PENDING_APPROVAL)

    _import_app()

    mock_route.assert_called_once_with(store, View.AGENT_DASHBOARD)
    mock_render_pending.assert_called_once_with(store)
    assert st.session_state.requested_view == "pending"
