# stores/session_state_store.py
from dataclasses import dataclass
from typing import Any, MutableMapping, Optional

import streamlit as st

from application.review_workspace import WorkspaceState, start_session
from application.session_controller import SessionController
from infra.auth.firebase_auth import FirebaseAuthGateway

SESSION_KEYS = {
    "gateway": "auth_gateway",
    "controller": "session_controller",
    "workspace": "workspace",
    "workspace_source": "workspace_source",
    "preferences": "preferences",
}


@dataclass
class UserPreferences:
    notifications: bool = True
    email_notifications: bool = True
    dark_mode: bool = True
    interface_language: str = "en"


class SessionStateStore:
    """Typed access to the per-browser-session objects kept in ``st.session_state``."""

    def __init__(self, backend: Optional[MutableMapping[str, Any]] = None):
        self._state = backend if backend is not None else st.session_state

    def gateway(self, factory) -> FirebaseAuthGateway:
        if SESSION_KEYS["gateway"] not in self._state:
            self._state[SESSION_KEYS["gateway"]] = factory()
        return self._state[SESSION_KEYS["gateway"]]

    def controller(self, gateway: FirebaseAuthGateway) -> SessionController:
        if SESSION_KEYS["controller"] not in self._state:
            self._state[SESSION_KEYS["controller"]] = SessionController(gateway)
        return self._state[SESSION_KEYS["controller"]]

    def workspace(self, controller: SessionController) -> WorkspaceState:
        """
        Workspace cho lần mở editor hiện tại. Chỉ reset khi lựa chọn (mới / item history) thay đổi,
        để các rerun của Streamlit không mint id mới.
        """
        source = controller.nav.editor_session
        if self._state.get(SESSION_KEYS["workspace_source"]) != source or SESSION_KEYS["workspace"] not in self._state:
            self._state[SESSION_KEYS["workspace_source"]] = source
            self._state[SESSION_KEYS["workspace"]] = start_session(controller.nav.selected_review)
        return self._state[SESSION_KEYS["workspace"]]

    def set_workspace(self, state: WorkspaceState) -> None:
        self._state[SESSION_KEYS["workspace"]] = state

    def preferences(self) -> UserPreferences:
        if SESSION_KEYS["preferences"] not in self._state:
            self._state[SESSION_KEYS["preferences"]] = UserPreferences()
        return self._state[SESSION_KEYS["preferences"]]

    def set_preferences(self, prefs: UserPreferences) -> None:
        self._state[SESSION_KEYS["preferences"]] = prefs
