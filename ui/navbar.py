import streamlit as st

from application.session_controller import SessionController
from config.constant import APP_TITLE
from domain.errors import IdentityError
from infra.auth.firebase_auth import FirebaseAuthGateway


def _go(controller: SessionController, view: str) -> None:
    controller.go_to_view(view)
    st.rerun()


def sign_out(gateway: FirebaseAuthGateway) -> None:
    gateway.sign_out()
    # phiên OIDC của Streamlit (Google) cũng phải đóng, nếu không sẽ tự đăng nhập lại
    if getattr(getattr(st, "user", None), "is_logged_in", False):
        st.logout()
    st.rerun()


def render_navbar(controller: SessionController, gateway: FirebaseAuthGateway) -> None:
    identity = controller.identity
    brand, home_col, profile_col, settings_col, logout_col = st.columns([4, 1, 1, 1, 1])
    with brand:
        st.markdown(f"### 🐞 {APP_TITLE}")
        if identity:
            st.caption(identity.display_name or identity.email)
    with home_col:
        if st.button("Home", key="nav_home", use_container_width=True):
            _go(controller, "home")
    with profile_col:
        if st.button("Profile", key="nav_profile", use_container_width=True):
            _go(controller, "profile")
    with settings_col:
        if st.button("Settings", key="nav_settings", use_container_width=True):
            _go(controller, "settings")
    with logout_col:
        if st.button("Log out", key="nav_logout", use_container_width=True):
            try:
                sign_out(gateway)
            except IdentityError as e:
                st.error(e.message)
    st.divider()


def back_to_home(controller: SessionController) -> None:
    if st.button("← Back to Home", key="back_home"):
        _go(controller, "home")
