"""Tests for SessionStateStore using a plain dict instead of st.session_state."""

from __future__ import annotations

from dataclasses import replace

from conftest import make_record

from stores.session_state_store import SessionStateStore, UserPreferences


class FakeGateway:
    current_identity = None

    def on_session_change(self, listener):
        return lambda: None


def _store():
    return SessionStateStore(backend={})


class TestSessionStateStore:
    def test_gateway_is_built_once(self):
        store = _store()
        built = []

        def factory():
            built.append(FakeGateway())
            return built[-1]

        first = store.gateway(factory)
        assert store.gateway(factory) is first
        assert len(built) == 1

    def test_controller_is_reused(self):
        store = _store()
        gateway = FakeGateway()
        assert store.controller(gateway) is store.controller(gateway)

    def test_workspace_survives_reruns(self):
        store = _store()
        controller = store.controller(FakeGateway())
        controller.start_review()

        ws = store.workspace(controller)
        store.set_workspace(replace(ws, code="edited"))
        assert store.workspace(controller).code == "edited"
        assert store.workspace(controller).review_id == ws.review_id

    def test_workspace_resets_when_editor_reopened(self):
        store = _store()
        controller = store.controller(FakeGateway())
        controller.start_review()
        fresh = store.workspace(controller)

        controller.start_review(make_record(record_id="r-9"))
        opened = store.workspace(controller)
        assert opened.review_id == "r-9"
        assert opened.review_id != fresh.review_id

    def test_preferences_default_and_update(self):
        store = _store()
        assert store.preferences() == UserPreferences()
        store.set_preferences(UserPreferences(dark_mode=False, interface_language="fr"))
        assert store.preferences().interface_language == "fr"
