import streamlit as st

_TOAST_ICONS = {
    "success": "✅",
    "error": "🚨",
    "info": "ℹ️",
}

_STATUS_BADGES = {
    "approved": ("approved", "#15803d", "#dcfce7"),
    "rejected": ("rejected", "#b91c1c", "#fee2e2"),
    "pending_approval": ("pending approval", "#a16207", "#fef9c3"),
}


def setup_style():
    st.markdown("""
    <style>
        .main .block-container {
            max-width: 1100px;
            padding-top: 2rem;
        }

        .ree-brand {
            font-size: 1.6rem;
            font-weight: 800;
            letter-spacing: 0.04em;
        }

        .ree-badge {
            display: inline-block;
            border-radius: 999px;
            padding: 0.1rem 0.7rem;
            font-size: 0.8rem;
            font-weight: 600;
        }
    </style>
    """, unsafe_allow_html=True)


def flush_notices(notices):
    for level, message in notices:
        st.toast(message, icon=_TOAST_ICONS.get(level, "ℹ️"))


def status_badge(status: str) -> str:
    label, color, background = _STATUS_BADGES.get(status, (status, "#334155", "#e2e8f0"))
    return f"<span class='ree-badge' style='color:{color};background:{background}'>{label}</span>"


def render_user_header(title: str, subtitle: str, name: str, role_label: str) -> bool:
    """Page header with the signed-in user's name; returns True when Sign Out was clicked."""
    c_title, c_user = st.columns([3, 1])
    with c_title:
        st.title(title)
        st.caption(subtitle)
    with c_user:
        st.markdown(f"**👤 {name}**  \n{role_label}")
        return st.button("Sign Out", key=f"sign_out_{title}", type="secondary")


def render_loading():
    with st.spinner("Loading your account..."):
        st.empty()
