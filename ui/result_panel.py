import streamlit as st
import streamlit.components.v1 as components

from application.review_workspace import WorkspaceState
from config.constant import EXT_MAP
from utils.code_diff import make_github_like_unified_html
from utils.report_pdf import REPORT_FILENAME, build_report_pdf, score_band

_BAND_LABEL = {"good": "🟢 Good", "fair": "🟡 Fair", "poor": "🔴 Needs work"}
_CATEGORY_ICON = {"Logic": "🔴", "Performance": "🟣", "Readability": "🔵", "Security": "🟡", "Style": "⚪"}


def render(state: WorkspaceState) -> None:
    if state.is_loading:
        st.info("Analyzing your code... This might take a moment.")
        return

    if state.error:
        with st.container(border=True):
            st.markdown("#### ❌ Analysis Failed")
            st.write(state.error)
        return

    result = state.result
    if result is None:
        with st.container(border=True):
            st.markdown("#### Awaiting Analysis")
            st.caption('Enter your code and click "Review Code" to see the AI-powered analysis here.')
        return

    with st.container(border=True):
        st.markdown("#### Code Quality Report")
        st.metric("Overall Score", f"{result.score}/100", _BAND_LABEL[score_band(result.score)], delta_color="off")
        st.progress(result.score / 100)

        report_tab, code_tab = st.tabs(["Issues & Suggestions", "Corrected Code"])
        with report_tab:
            st.markdown("##### Identified Issues")
            if not result.issues:
                st.caption("No issues found. Great job!")
            for issue in result.issues:
                line = f"Line {issue.line}" if issue.line is not None else "General"
                st.markdown(f"{_CATEGORY_ICON.get(issue.category, '⚪')} **{issue.category}** · `{line}`  \n{issue.message}")

            st.markdown("##### Suggestions")
            for suggestion in result.suggestions:
                st.markdown(f"- {suggestion}")

        with code_tab:
            st.code(result.corrected_code, language=state.language)
            with st.expander("ℹ️ Diff"):
                filename = "snippet" + EXT_MAP.get(state.language, ".txt")
                components.html(
                    make_github_like_unified_html(state.code, result.corrected_code, filename=filename),
                    height=380,
                    scrolling=True,
                )

    st.download_button(
        "⬇️ Download PDF Report",
        data=build_report_pdf(result, state.language),
        file_name=REPORT_FILENAME,
        mime="application/pdf",
        use_container_width=True,
    )
