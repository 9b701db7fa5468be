from typing import Optional

import streamlit as st

from application.session_controller import SessionController
from config.logging import logger
from config.settings import settings
from domain.errors import IdentityError
from domain.password_policy import password_checks, validate_password
from infra.auth.firebase_auth import FirebaseAuthGateway

CHECKLIST_LABELS = {
    "length": "At least 8 characters",
    "uppercase": "One uppercase letter",
    "lowercase": "One lowercase letter",
    "number": "One number",
    "special": "One special character",
}


def password_checklist(password: str) -> None:
    checks = password_checks(password)
    lines = [f"{'✅' if checks[key] else '⬜'} {label}" for key, label in CHECKLIST_LABELS.items()]
    st.caption("  \n".join(lines))


def _google_id_token() -> Optional[str]:
    user = getattr(st, "user", None)
    if user is None or not getattr(user, "is_logged_in", False):
        return None
    tokens = getattr(user, "tokens", None) or {}
    return tokens.get("id")


def exchange_google_login(controller: SessionController, gateway: FirebaseAuthGateway) -> None:
    """Turn a completed Streamlit OIDC (Google) login into a Firebase session."""
    if not settings.GOOGLE_SIGN_IN_ENABLED or controller.is_authenticated:
        return
    token = _google_id_token()
    if not token:
        return
    try:
        gateway.sign_in_with_google(token)
    except IdentityError as e:
        logger.warning(f"[auth] Google exchange failed: {e.code}")
        st.error(e.message)
        st.logout()
        return
    st.rerun()


def _google_button() -> None:
    if not settings.GOOGLE_SIGN_IN_ENABLED:
        return
    st.markdown("or")
    if st.button("Continue with Google", use_container_width=True):
        st.login("google")


def render_login(controller: SessionController, gateway: FirebaseAuthGateway) -> None:
    if st.button("← Back"):
        controller.go_to_page("landing")
        st.rerun()

    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.header("Welcome back")
        with st.form("login_form"):
            email = st.text_input("Email")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Log in", type="primary", use_container_width=True)
        if submitted:
            try:
                with st.spinner("Signing in…"):
                    gateway.sign_in(email.strip(), password)
            except IdentityError as e:
                st.error(e.message)
            else:
                st.rerun()

        _google_button()
        st.caption("Don't have an account?")
        if st.button("Sign up"):
            controller.go_to_page("signup")
            st.rerun()


def render_signup(controller: SessionController, gateway: FirebaseAuthGateway) -> None:
    if st.button("← Back"):
        controller.go_to_page("landing")
        st.rerun()

    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.header("Create your account")
        name = st.text_input("Full name")
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        if password:
            password_checklist(password)

        if st.button("Create account", type="primary", use_container_width=True):
            check = validate_password(password)
            if not check.valid:
                st.error(check.reason)
            else:
                try:
                    with st.spinner("Creating account…"):
                        gateway.create_account(email.strip(), password, name.strip())
                except IdentityError as e:
                    st.error(e.message)
                else:
                    st.rerun()

        _google_button()
        st.caption("Already have an account?")
        if st.button("Log in"):
            controller.go_to_page("login")
            st.rerun()
