import streamlit as st

from application.session_controller import SessionController
from config.constant import INTERFACE_LANGUAGES
from stores.session_state_store import SessionStateStore, UserPreferences
from ui.navbar import back_to_home


def render(controller: SessionController, store: SessionStateStore) -> None:
    back_to_home(controller)
    st.header("Settings")
    prefs = store.preferences()

    with st.form("settings_form"):
        st.subheader("Notifications")
        notifications = st.toggle("Push notifications", value=prefs.notifications,
                                  help="Receive notifications about code reviews")
        email_notifications = st.toggle("Email notifications", value=prefs.email_notifications,
                                        help="Receive email updates about your activity")

        st.subheader("Preferences")
        dark_mode = st.toggle("Dark mode", value=prefs.dark_mode)
        lang_codes = list(INTERFACE_LANGUAGES)
        interface_language = st.selectbox(
            "Interface language",
            lang_codes,
            index=lang_codes.index(prefs.interface_language) if prefs.interface_language in lang_codes else 0,
            format_func=lambda c: INTERFACE_LANGUAGES[c],
        )

        if st.form_submit_button("Save settings", type="primary"):
            store.set_preferences(UserPreferences(
                notifications=notifications,
                email_notifications=email_notifications,
                dark_mode=dark_mode,
                interface_language=interface_language,
            ))
            st.success("Settings saved successfully!")
