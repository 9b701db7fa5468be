"""Credential gateway over the Firebase Authentication REST API.

The gateway owns the session object (tokens + identity) for one browser
session. Listeners registered with ``on_session_change`` are told whenever the
signed-in user appears, disappears or changes.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import requests

from config.logging import logger
from domain.errors import IdentityError
from domain.models import Identity
from domain.password_policy import validate_password
from domain.ports import IdentityPort, SessionListener

IDENTITY_URL = "https://identitytoolkit.googleapis.com/v1/accounts:{action}"
TOKEN_URL = "https://securetoken.googleapis.com/v1/token"

INVALID_CREDENTIALS = "Invalid email or password."
WRONG_CURRENT_PASSWORD = "Current password is incorrect."
NOT_SIGNED_IN = "No user is currently signed in."
GOOGLE_SIGN_IN_FAILED = "Failed to sign in with Google. Please try again."
DEFAULT_MESSAGE = "An unexpected error occurred. Please try again."

ERROR_MESSAGES: Dict[str, str] = {
    "EMAIL_EXISTS": "This email address is already in use.",
    "INVALID_EMAIL": "Please enter a valid email address.",
    "MISSING_EMAIL": "Please enter a valid email address.",
    "WEAK_PASSWORD": (
        "Password must be at least 8 characters and include uppercase, lowercase, "
        "number, and special character."
    ),
    # not-found và wrong-password gộp chung để không lộ email nào đã tồn tại
    "EMAIL_NOT_FOUND": INVALID_CREDENTIALS,
    "INVALID_PASSWORD": INVALID_CREDENTIALS,
    "INVALID_LOGIN_CREDENTIALS": INVALID_CREDENTIALS,
    "MISSING_PASSWORD": INVALID_CREDENTIALS,
    "USER_DISABLED": "This account has been disabled.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts. Please try again later.",
    "CREDENTIAL_TOO_OLD_LOGIN_AGAIN": "Please sign in again to continue.",
    "TOKEN_EXPIRED": "Please sign in again to continue.",
    "INVALID_ID_TOKEN": "Please sign in again to continue.",
}

_REAUTH_FAILURES = {"INVALID_PASSWORD", "INVALID_LOGIN_CREDENTIALS", "EMAIL_NOT_FOUND"}

# refresh slightly before the provider considers the token expired
_EXPIRY_SKEW_SECONDS = 60


def error_code(payload: Any) -> str:
    """Extract the bare code from an Identity Toolkit error body ("WEAK_PASSWORD : ..." -> "WEAK_PASSWORD")."""
    try:
        message = payload["error"]["message"]
    except (KeyError, TypeError):
        return ""
    return str(message).split(":")[0].split(" ")[0].strip()


def map_error(code: str) -> IdentityError:
    return IdentityError(ERROR_MESSAGES.get(code, DEFAULT_MESSAGE), code=code or None)


def read_body(resp: requests.Response, action: str) -> Dict[str, Any]:
    """JSON object of a response. A non-JSON body (proxy or 5xx HTML page) is a transport failure."""
    if not resp.content:
        return {}
    try:
        data = resp.json()
    except ValueError as e:
        logger.warning(f"[auth] {action}: non-JSON body, status {resp.status_code}")
        raise IdentityError(DEFAULT_MESSAGE, code="NETWORK") from e
    if not isinstance(data, dict):
        raise IdentityError(DEFAULT_MESSAGE, code="NETWORK")
    return data


@dataclass
class AuthSession:
    identity: Identity
    id_token: str
    refresh_token: str
    expires_at: float


class FirebaseAuthGateway(IdentityPort):
    def __init__(
        self,
        api_key: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15.0,
        clock: Callable[[], float] = time.time,
    ):
        self._api_key = api_key
        self._http = session or requests.Session()
        self._timeout = timeout
        self._clock = clock
        self._session: Optional[AuthSession] = None
        self._listeners: List[SessionListener] = []

    # ---------- session & subscription ----------
    @property
    def current_identity(self) -> Optional[Identity]:
        return self._session.identity if self._session else None

    def on_session_change(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_session(self, new_session: Optional[AuthSession]) -> None:
        before = self.current_identity
        self._session = new_session
        after = self.current_identity
        if before == after:
            return
        logger.info(f"[auth] Session changed: {before.uid if before else '-'} -> {after.uid if after else '-'}")
        for listener in list(self._listeners):
            listener(self.current_identity)

    def id_token(self) -> Optional[str]:
        """Current ID token, refreshed through the secure-token endpoint when expired."""
        if self._session is None:
            return None
        if self._clock() >= self._session.expires_at - _EXPIRY_SKEW_SECONDS:
            self._refresh()
        return self._session.id_token

    def _refresh(self) -> None:
        try:
            resp = self._http.post(
                TOKEN_URL,
                params={"key": self._api_key},
                data={"grant_type": "refresh_token", "refresh_token": self._session.refresh_token},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"[auth] Token refresh failed: {e}")
            raise IdentityError(DEFAULT_MESSAGE, code="NETWORK") from e
        data = read_body(resp, "token refresh")
        if resp.status_code >= 400:
            self._set_session(None)
            raise map_error(error_code(data))
        if not data.get("id_token"):
            raise IdentityError(DEFAULT_MESSAGE, code="NETWORK")
        self._session = replace(
            self._session,
            id_token=data["id_token"],
            refresh_token=data.get("refresh_token") or self._session.refresh_token,
            expires_at=self._clock() + int(data.get("expires_in", 3600)),
        )

    # ---------- transport ----------
    def _post(self, action: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not self._api_key:
            raise IdentityError("Authentication is not configured. Set FIREBASE_API_KEY in .env.", code="CONFIG")
        try:
            resp = self._http.post(
                IDENTITY_URL.format(action=action),
                params={"key": self._api_key},
                json=payload,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"[auth] {action} request failed: {e}")
            raise IdentityError(DEFAULT_MESSAGE, code="NETWORK") from e

        data = read_body(resp, action)
        if resp.status_code >= 400:
            code = error_code(data)
            logger.info(f"[auth] {action} rejected: {code or resp.status_code}")
            raise map_error(code)
        return data

    def _lookup(self, id_token: str) -> Dict[str, Any]:
        users = self._post("lookup", {"idToken": id_token}).get("users") or [{}]
        return users[0]

    def _start_session(self, data: Dict[str, Any]) -> Identity:
        info = self._lookup(data["idToken"])
        created_ms = info.get("createdAt")
        creation_time = (
            datetime.fromtimestamp(int(created_ms) / 1000, tz=timezone.utc).isoformat() if created_ms else None
        )
        identity = Identity(
            uid=data.get("localId") or info.get("localId", ""),
            email=info.get("email") or data.get("email", ""),
            display_name=info.get("displayName") or data.get("displayName", ""),
            creation_time=creation_time,
        )
        self._set_session(AuthSession(
            identity=identity,
            id_token=data["idToken"],
            refresh_token=data.get("refreshToken", ""),
            expires_at=self._clock() + int(data.get("expiresIn", 3600)),
        ))
        return identity

    def _require_session(self) -> AuthSession:
        if self._session is None:
            raise IdentityError(NOT_SIGNED_IN)
        return self._session

    def _reauthenticate(self, current_password: str) -> AuthSession:
        current = self._require_session()
        if not current.identity.email:
            raise IdentityError(NOT_SIGNED_IN)
        try:
            data = self._post("signInWithPassword", {
                "email": current.identity.email,
                "password": current_password,
                "returnSecureToken": True,
            })
        except IdentityError as e:
            if e.code in _REAUTH_FAILURES:
                raise IdentityError(WRONG_CURRENT_PASSWORD, code=e.code) from e
            raise
        self._session = replace(
            current,
            id_token=data["idToken"],
            refresh_token=data.get("refreshToken", current.refresh_token),
            expires_at=self._clock() + int(data.get("expiresIn", 3600)),
        )
        return self._session

    def _apply_update(self, data: Dict[str, Any], **identity_changes: Any) -> Identity:
        current = self._require_session()
        self._set_session(replace(
            current,
            identity=replace(current.identity, **identity_changes),
            id_token=data.get("idToken") or current.id_token,
            refresh_token=data.get("refreshToken") or current.refresh_token,
            expires_at=(
                self._clock() + int(data["expiresIn"]) if data.get("expiresIn") else current.expires_at
            ),
        ))
        return self._session.identity

    # ---------- operations ----------
    def create_account(self, email: str, password: str, display_name: str) -> Identity:
        check = validate_password(password)
        if not check.valid:
            raise IdentityError(check.reason, code="WEAK_PASSWORD")

        data = self._post("signUp", {"email": email, "password": password, "returnSecureToken": True})
        logger.info(f"[auth] Account created: {data.get('localId')}")
        # tài khoản đã tồn tại từ đây, nên đăng nhập trước rồi mới đặt tên
        identity = self._start_session(data)
        if not display_name:
            return identity
        try:
            return self.update_display_name(display_name)
        except IdentityError as e:
            logger.warning(f"[auth] Display name not set for {identity.uid}: {e.code}")
            return identity

    def sign_in(self, email: str, password: str) -> Identity:
        data = self._post("signInWithPassword", {"email": email, "password": password, "returnSecureToken": True})
        return self._start_session(data)

    def sign_in_with_google(self, google_id_token: str) -> Identity:
        try:
            data = self._post("signInWithIdp", {
                "postBody": f"id_token={google_id_token}&providerId=google.com",
                "requestUri": "http://localhost",
                "returnIdpCredential": True,
                "returnSecureToken": True,
            })
            return self._start_session(data)
        except IdentityError as e:
            logger.warning(f"[auth] Google sign-in failed: {e.code}")
            raise IdentityError(GOOGLE_SIGN_IN_FAILED, code=e.code) from e

    def sign_out(self) -> None:
        self._set_session(None)

    def update_display_name(self, name: str) -> Identity:
        current = self._require_session()
        data = self._post("update", {"idToken": self.id_token() or current.id_token, "displayName": name,
                                     "returnSecureToken": False})
        return self._apply_update(data, display_name=name)

    def update_email(self, new_email: str, current_password: str) -> Identity:
        session = self._reauthenticate(current_password)
        data = self._post("update", {"idToken": session.id_token, "email": new_email, "returnSecureToken": True})
        return self._apply_update(data, email=data.get("email") or new_email)

    def update_password(self, current_password: str, new_password: str) -> None:
        self._require_session()
        check = validate_password(new_password)
        if not check.valid:
            raise IdentityError(check.reason, code="WEAK_PASSWORD")

        session = self._reauthenticate(current_password)
        data = self._post("update", {"idToken": session.id_token, "password": new_password, "returnSecureToken": True})
        self._apply_update(data)
