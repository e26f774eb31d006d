import streamlit as st

import auth
from use_cases.access_policy import View
from use_cases.agent_review import AgentReviewBoard
from use_cases.profile_store import SessionProfileStore
from use_cases.receipt_upload import ReceiptUpload

"""
SESSION STATE CONTRACT

Streamlit session keys owned by this module. Each browser session gets its
own store, and views receive it explicitly from app.py.

store: SessionProfileStore | None
    session + profile snapshot owner
    default: None

requested_view: str
    value of the View the user last navigated to
    default: "landing"

receipt_upload: ReceiptUpload | None
    receipt state of the current sign-up attempt
    default: None

agent_board: AgentReviewBoard | None
    admin review list
    default: None

pending_notices: list[tuple[str, str]]
    (level, message) toasts waiting for the next run
    default: []
"""


def init_session_state():
    if "store" not in st.session_state:
        st.session_state.store = None
    if "requested_view" not in st.session_state:
        st.session_state.requested_view = View.LANDING.value
    if "receipt_upload" not in st.session_state:
        st.session_state.receipt_upload = None
    if "agent_board" not in st.session_state:
        st.session_state.agent_board = None
    if "pending_notices" not in st.session_state:
        st.session_state.pending_notices = []


def notify(level: str, message: str) -> None:
    """Queue a toast; st.rerun() would drop one shown immediately."""
    if "pending_notices" not in st.session_state:
        st.session_state.pending_notices = []
    st.session_state.pending_notices.append((level, message))


def pop_notices():
    notices = list(st.session_state.get("pending_notices", []))
    st.session_state.pending_notices = []
    return notices


def navigate(view: View) -> None:
    st.session_state.requested_view = view.value


def get_requested_view() -> View:
    try:
        return View(st.session_state.get("requested_view", View.LANDING.value))
    except ValueError:
        return View.LANDING


def get_existing_store():
    return st.session_state.get("store")


def create_store() -> SessionProfileStore:
    store = SessionProfileStore(
        auth.create_backend(),
        notify=notify,
        navigate=navigate,
        profiles_table=auth.get_profiles_table(),
    )
    st.session_state.store = store
    return store


def get_receipt_upload(store: SessionProfileStore) -> ReceiptUpload:
    if st.session_state.get("receipt_upload") is None:
        st.session_state.receipt_upload = ReceiptUpload(
            store.backend, notify=notify, bucket=auth.get_receipts_bucket()
        )
    return st.session_state.receipt_upload


def reset_receipt_upload():
    st.session_state.receipt_upload = None


def get_agent_board(store: SessionProfileStore) -> AgentReviewBoard:
    board = st.session_state.get("agent_board")
    if board is None or board.store is not store:
        board = AgentReviewBoard(store, store.backend, notify=notify, profiles_table=store.profiles_table)
        st.session_state.agent_board = board
    return board


def logout(store: SessionProfileStore):
    if store.sign_out():
        # Release the session-change listener; the next run builds a fresh store.
        store.close()
        st.session_state.store = None
        st.session_state.agent_board = None
        reset_receipt_upload()
    st.rerun()
