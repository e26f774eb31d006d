import streamlit as st

from use_cases.access_policy import View
from utils import session_manager

FEATURES = [
    ("For Agents", "Access to exclusive property listings and tools to help you manage your real estate business."),
    ("Easy Management", "Powerful tools to manage your properties, clients, and transactions all in one place."),
    ("Support", "Our team is here to help you succeed. Get support whenever you need it."),
]


def _go_to_auth(signup: bool):
    if signup:
        st.query_params["tab"] = "signup"
    else:
        st.query_params.pop("tab", None)
    session_manager.navigate(View.AUTH)
    st.rerun()


def render_landing():
    c_brand, c_login, c_signup = st.columns([6, 1, 1])
    c_brand.markdown("<div class='ree-brand'>REE</div>", unsafe_allow_html=True)
    if c_login.button("Login", key="landing_login"):
        _go_to_auth(signup=False)
    if c_signup.button("Sign Up", key="landing_signup", type="primary"):
        _go_to_auth(signup=True)

    st.markdown("<br>", unsafe_allow_html=True)
    st.title("Welcome to REE")
    st.write(
        "Join our platform for real estate professionals. "
        "Create an account or sign in to access our services."
    )
    c_start, c_sign_in, _ = st.columns([1, 1, 4])
    if c_start.button("Get Started →", key="landing_get_started", type="primary"):
        _go_to_auth(signup=True)
    if c_sign_in.button("Sign In", key="landing_sign_in"):
        _go_to_auth(signup=False)

    st.divider()
    for column, (title, text) in zip(st.columns(len(FEATURES)), FEATURES):
        with column:
            st.subheader(title)
            st.caption(text)
