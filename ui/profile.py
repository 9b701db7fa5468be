import streamlit as st

from application.session_controller import SessionController
from domain.errors import IdentityError
from domain.password_policy import validate_password
from infra.auth.firebase_auth import FirebaseAuthGateway
from infra.db.repositories.review_repo import format_local
from ui.auth_screens import password_checklist
from ui.navbar import back_to_home


def render(controller: SessionController, gateway: FirebaseAuthGateway) -> None:
    back_to_home(controller)
    identity = controller.identity
    st.header("Profile")
    if identity.creation_time:
        st.caption(f"Member since {format_local(identity.creation_time, '%B %d, %Y')}")

    with st.container(border=True):
        st.subheader("Display name")
        with st.form("profile_name"):
            name = st.text_input("Display name", value=identity.display_name)
            if st.form_submit_button("Update name"):
                try:
                    gateway.update_display_name(name.strip())
                except IdentityError as e:
                    st.error(e.message)
                else:
                    st.success("Display name updated successfully!")

    with st.container(border=True):
        st.subheader("Email")
        with st.form("profile_email"):
            email = st.text_input("Email", value=identity.email)
            current = st.text_input("Current password", type="password", key="email_current_password")
            if st.form_submit_button("Update email"):
                if not current:
                    st.error("Current password is required to change email.")
                else:
                    try:
                        gateway.update_email(email.strip(), current)
                    except IdentityError as e:
                        st.error(e.message)
                    else:
                        st.success("Email updated successfully!")

    with st.container(border=True):
        st.subheader("Password")
        current = st.text_input("Current password", type="password", key="password_current_password")
        new_password = st.text_input("New password", type="password", key="password_new")
        if new_password:
            password_checklist(new_password)
        confirm = st.text_input("Confirm new password", type="password", key="password_confirm")
        if st.button("Update password"):
            check = validate_password(new_password)
            if not current:
                st.error("Current password is required to change password.")
            elif new_password != confirm:
                st.error("New passwords do not match.")
            elif not check.valid:
                st.error(check.reason)
            else:
                try:
                    gateway.update_password(current, new_password)
                except IdentityError as e:
                    st.error(e.message)
                else:
                    st.success("Password updated successfully!")
