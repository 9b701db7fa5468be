# app/main.py
import streamlit as st

from application.code_review_service import CodeReviewService
from config.constant import APP_TITLE
from config.logging import logger
from infra.factories.code_review_factory import build_auth_gateway, build_from_settings, build_history_repository
from stores.session_state_store import SessionStateStore
from ui import auth_screens, editor, home, landing, profile, settings_page
from ui.navbar import render_navbar


@st.cache_resource
def review_service() -> CodeReviewService:
    # stateless, dùng chung cho mọi phiên
    return build_from_settings()


# ============== Page ==============
st.set_page_config(page_title=APP_TITLE, page_icon="🐞", layout="wide")

# ============== Session objects ==============
store = SessionStateStore()
gateway = store.gateway(build_auth_gateway)
controller = store.controller(gateway)
history = build_history_repository(gateway)

auth_screens.exchange_google_login(controller, gateway)

# ============== Router ==============
if controller.is_authenticated:
    render_navbar(controller, gateway)
    view = controller.nav.view
    logger.debug(f"[session] render view={view}")
    if view == "editor":
        editor.render(controller, store, review_service(), history)
    elif view == "profile":
        profile.render(controller, gateway)
    elif view == "settings":
        settings_page.render(controller, store)
    else:
        home.render(controller, history)
else:
    page = controller.nav.page
    if page == "login":
        auth_screens.render_login(controller, gateway)
    elif page == "signup":
        auth_screens.render_signup(controller, gateway)
    else:
        landing.render(controller)
