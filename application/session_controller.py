"""Which screen a browser session is on, driven by navigation and identity changes."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Optional

from config.logging import logger
from domain.models import Identity, ReviewRecord
from domain.ports import IdentityPort

UNAUTHENTICATED_PAGES = ("landing", "login", "signup")
AUTHENTICATED_VIEWS = ("home", "editor", "profile", "settings")


@dataclass(frozen=True)
class NavigationState:
    page: str = "landing"        # unauthenticated screen
    view: str = "home"           # authenticated screen
    selected_review: Optional[ReviewRecord] = None
    editor_session: int = 0      # bumped every time the editor is (re)opened


def on_identity_change(
    previous: Optional[Identity], current: Optional[Identity], nav: NavigationState
) -> NavigationState:
    """Pure edge-triggered transition: sign-in lands on home, sign-out lands on landing."""
    if previous is None and current is not None:
        return replace(nav, view="home", selected_review=None)
    if previous is not None and current is None:
        return replace(nav, page="landing")
    return nav


class SessionController:
    def __init__(self, gateway: IdentityPort):
        self.nav = NavigationState()
        self.identity: Optional[Identity] = gateway.current_identity
        self._previous: Optional[Identity] = self.identity
        self._unsubscribe: Optional[Callable[[], None]] = gateway.on_session_change(self._handle_change)

    def _handle_change(self, identity: Optional[Identity]) -> None:
        self.nav = on_identity_change(self._previous, identity, self.nav)
        self._previous = identity
        self.identity = identity
        logger.info(f"[session] identity={identity.uid if identity else None} page={self.nav.page} view={self.nav.view}")

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    def go_to_page(self, page: str) -> None:
        if page not in UNAUTHENTICATED_PAGES:
            raise ValueError(f"Unknown page: {page}")
        self.nav = replace(self.nav, page=page)

    def go_to_view(self, view: str) -> None:
        if view not in AUTHENTICATED_VIEWS:
            raise ValueError(f"Unknown view: {view}")
        self.nav = replace(self.nav, view=view)

    def start_review(self, selected: Optional[ReviewRecord] = None) -> None:
        self.nav = replace(
            self.nav, view="editor", selected_review=selected, editor_session=self.nav.editor_session + 1
        )

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
