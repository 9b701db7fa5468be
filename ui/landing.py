import streamlit as st

from application.session_controller import SessionController
from config.constant import APP_TITLE

FEATURES = [
    ("🐞 Find bugs early", "Logic errors, unhandled edge cases and risky patterns, flagged line by line."),
    ("⚡ Performance insights", "Spot slow algorithms and wasteful resource usage before they ship."),
    ("🔒 Security review", "Catch common vulnerabilities such as injection and unsafe input handling."),
    ("✨ Corrected code", "Get a complete, production-quality rewrite of your snippet."),
]


def render(controller: SessionController) -> None:
    st.title(f"🐞 {APP_TITLE}")
    st.subheader("AI-powered code reviews in seconds")
    st.write(
        "Paste your code, pick a language and get a quality score, a list of issues, "
        "actionable suggestions and a corrected version of your code."
    )

    col_login, col_signup, _ = st.columns([1, 1, 4])
    with col_login:
        if st.button("Log in", use_container_width=True):
            controller.go_to_page("login")
            st.rerun()
    with col_signup:
        if st.button("Sign up", type="primary", use_container_width=True):
            controller.go_to_page("signup")
            st.rerun()

    st.divider()
    cols = st.columns(len(FEATURES))
    for col, (title, body) in zip(cols, FEATURES):
        with col:
            with st.container(border=True):
                st.markdown(f"**{title}**")
                st.caption(body)
