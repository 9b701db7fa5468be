import streamlit as st

from application.session_controller import SessionController
from config.constant import CODE_PREVIEW_CHARS, LANGUAGE_LABELS
from domain.models import ReviewRecord
from domain.ports import HistoryRepositoryPort
from infra.db.repositories.review_repo import format_local
from utils.report_pdf import score_band

_BAND_ICON = {"good": "🟢", "fair": "🟡", "poor": "🔴"}


def _history_card(controller: SessionController, item: ReviewRecord, idx: int) -> None:
    with st.container(border=True):
        head, score = st.columns([3, 1])
        with head:
            st.markdown(f"**{LANGUAGE_LABELS.get(item.language, item.language)}**")
            st.caption(format_local(item.created_at))
        with score:
            st.markdown(f"{_BAND_ICON[score_band(item.result.score)]} **{item.result.score}**")
        st.code(item.source_code[:CODE_PREVIEW_CHARS], language=item.language)
        if st.button("Open", key=f"history_{idx}", use_container_width=True):
            controller.start_review(item)
            st.rerun()


def render(controller: SessionController, history: HistoryRepositoryPort) -> None:
    identity = controller.identity
    title, action = st.columns([3, 1])
    with title:
        st.header(f"Welcome Back, {identity.display_name or 'Developer'}")
        st.caption("Start a new analysis or review your past activity.")
    with action:
        if st.button("➕ Start New Review", type="primary", use_container_width=True):
            controller.start_review(None)
            st.rerun()

    st.subheader("Review History")
    with st.spinner("Loading history..."):
        items = history.list_reviews(identity.uid)

    if not items:
        with st.container(border=True):
            st.markdown("#### No Reviews Yet")
            st.caption("Your completed code reviews will appear here.")
        return

    cols = st.columns(3)
    for idx, item in enumerate(items):
        with cols[idx % 3]:
            _history_card(controller, item, idx)
