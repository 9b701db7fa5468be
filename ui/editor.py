from dataclasses import replace

import streamlit as st

from application.review_workspace import submit_review
from application.session_controller import SessionController
from config.constant import LANGUAGE_LABELS, LANGUAGE_VALUES
from domain.ports import CodeReviewPort, HistoryRepositoryPort
from infra.utils.decoding import safe_decode
from stores.session_state_store import SessionStateStore
from ui import result_panel
from ui.navbar import back_to_home
from utils.language import guess_lang_from_name


def render(
    controller: SessionController,
    store: SessionStateStore,
    service: CodeReviewPort,
    history: HistoryRepositoryPort,
) -> None:
    state = store.workspace(controller)
    back_to_home(controller)

    # mỗi lần mở editor là một bộ widget mới
    session_no = controller.nav.editor_session
    code_key = f"code_{session_no}"
    lang_key = f"language_{session_no}"
    upload_key = f"upload_{session_no}"
    if code_key not in st.session_state:
        st.session_state[code_key] = state.code
    if lang_key not in st.session_state:
        st.session_state[lang_key] = state.language if state.language in LANGUAGE_VALUES else LANGUAGE_VALUES[0]

    left, right = st.columns(2)
    with left:
        with st.container(border=True):
            uploaded = st.file_uploader("Upload a source file", key=upload_key)
            if uploaded is not None and st.session_state.get(f"{upload_key}_seen") != uploaded.file_id:
                st.session_state[f"{upload_key}_seen"] = uploaded.file_id
                st.session_state[code_key] = safe_decode(uploaded.getvalue())
                detected = guess_lang_from_name(uploaded.name)
                if detected:
                    st.session_state[lang_key] = detected

            language = st.selectbox(
                "Language",
                LANGUAGE_VALUES,
                format_func=lambda v: LANGUAGE_LABELS.get(v, v),
                key=lang_key,
            )
            code = st.text_area("Your code", height=420, placeholder="Paste your code…", key=code_key)

            if code != state.code or language != state.language:
                state = replace(state, code=code, language=language)
                store.set_workspace(state)

            if st.button("🔍 Review Code", type="primary", use_container_width=True, disabled=state.is_loading):
                with st.spinner("Analyzing your code..."):
                    state = submit_review(state, service, history, controller.identity.uid)
                store.set_workspace(state)
                if state.history_saved is False:
                    st.warning("Review completed, but it could not be saved to your history.")

    with right:
        result_panel.render(state)
