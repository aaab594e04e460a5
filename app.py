# app.py
# ─────────────────────────────────────────────────────────────────────────────
# School maintenance console: Entry / Login
# - Single place that sets page config
# - Verifies bcrypt password of an admin/principal account
# - Redirects to the maintenance page with st.switch_page()
# ─────────────────────────────────────────────────────────────────────────────

import streamlit as st
from pymongo.errors import PyMongoError

from utils.auth import verify_login
from utils.guards import CONSOLE_ROLES

st.set_page_config(
    page_title="School Maintenance",
    page_icon="🛠️",
    layout="wide",
    initial_sidebar_state="collapsed",
)

st.markdown(
    """
    <style>
      #MainMenu, header, footer {visibility: hidden;}
      .small-note {opacity: .7; font-size: 0.9rem;}
    </style>
    """,
    unsafe_allow_html=True,
)


def go_home():
    st.switch_page("pages/1_Enrollment_Maintenance.py")


# ───────────────────────────── UI ───────────────────────────────────────────
def login_view():
    st.markdown("### 🛠️ School Maintenance")
    st.markdown("<div class='small-note'>Sign in with an admin or principal account</div>",
                unsafe_allow_html=True)

    email = st.text_input("Email", key="login_email", value="")
    password = st.text_input("Password", type="password", key="login_pw")

    if st.button("Login", use_container_width=True):
        try:
            user = verify_login(email, password, roles=CONSOLE_ROLES)
        except PyMongoError as e:
            st.error(f"Database unavailable: {e}")
            st.stop()

        if not user:
            st.error("Invalid credentials, or the account cannot use this console.")
            st.stop()

        st.session_state.user = {
            "email": user["email"],
            "role": user.get("role", ""),
        }
        go_home()


def auto_route_if_logged_in():
    u = st.session_state.get("user")
    if u and u.get("role") in CONSOLE_ROLES:
        go_home()


# ───────────────────────────── Entry ────────────────────────────────────────
if __name__ == "__main__":
    auto_route_if_logged_in()
    login_view()
