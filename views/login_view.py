import streamlit as st

from use_cases.profile_store import SessionProfileStore
from use_cases.signup_forms import validate_login, validate_signup
from utils import session_manager

AUTH_TABS = ["Login", "Sign Up"]


def _show_errors(validation):
    for message in validation.errors.values():
        st.error(message)


def _render_login(store: SessionProfileStore):
    with st.form("login_form", clear_on_submit=False):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign In", use_container_width=True)
        if submitted:
            validation = validate_login(email, password)
            if not validation.is_valid:
                _show_errors(validation)
            elif store.sign_in(email.strip(), password):
                # The router sends the user on once the session event has loaded the profile.
                st.rerun()


def _render_receipt_uploader(store: SessionProfileStore):
    receipt = session_manager.get_receipt_upload(store)

    if receipt.is_ready:
        c_file, c_remove = st.columns([4, 1])
        c_file.markdown(f"📄 **{receipt.filename}**  \nUploaded")
        if c_remove.button("🗑 Remove", key="remove_receipt"):
            receipt.clear()
            st.session_state.receipt_file_id = None
            st.rerun()
        return receipt

    uploaded = st.file_uploader(
        "Upload your payment receipt (PDF or image)",
        type=["pdf", "png", "jpg", "jpeg"],
        key="receipt_file",
    )
    # file_uploader keeps returning the same file on every rerun; upload each file once.
    if uploaded is not None and st.session_state.get("receipt_file_id") != uploaded.file_id:
        st.session_state.receipt_file_id = uploaded.file_id
        with st.spinner("Uploading..."):
            receipt.upload(uploaded.getvalue(), uploaded.name)
        st.rerun()
    return receipt


def _render_signup(store: SessionProfileStore):
    receipt = _render_receipt_uploader(store)

    with st.form("signup_form", clear_on_submit=False):
        name = st.text_input("Full Name *")
        email = st.text_input("Email *")
        phone_number = st.text_input("Phone Number *")
        career = st.text_input("Career")
        password = st.text_input("Password *", type="password")
        submitted = st.form_submit_button("Sign Up", use_container_width=True)
        if submitted:
            validation = validate_signup(
                name, email, phone_number, password, career, payment_receipt_url=receipt.url
            )
            if not validation.is_valid:
                _show_errors(validation)
                return
            ok = store.sign_up(
                email.strip(),
                password,
                {
                    "name": name.strip(),
                    "phone_number": phone_number.strip(),
                    "career": career.strip() or None,
                    "payment_receipt_url": receipt.url,
                },
            )
            if ok:
                session_manager.reset_receipt_upload()
                st.rerun()


def _render_session_exit(store: SessionProfileStore):
    st.warning("We could not load your profile. Sign out and try again, or contact support.")
    if st.button("Sign Out", key="auth_sign_out"):
        session_manager.logout(store)


def render_auth_screen(store: SessionProfileStore):
    st.markdown("<div class='ree-brand'>REE</div>", unsafe_allow_html=True)
    st.title("Welcome to REE")
    st.caption("Sign in to your account or create a new one")

    if store.snapshot.is_authenticated:
        # Signed in, but the router found no usable profile.
        _render_session_exit(store)
        return

    default_tab = 1 if st.query_params.get("tab") == "signup" else 0
    tab = st.radio("Mode", AUTH_TABS, index=default_tab, horizontal=True, label_visibility="collapsed")

    if tab == "Login":
        _render_login(store)
    else:
        _render_signup(store)
