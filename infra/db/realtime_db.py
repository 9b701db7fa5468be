import json
from typing import Any, Callable, Dict, Optional

import requests

from domain.errors import DatabaseError


class RealtimeDatabaseClient:
    """Thin REST client for Firebase Realtime Database (``<db>/<path>.json``)."""

    def __init__(
        self,
        database_url: str,
        token_provider: Callable[[], Optional[str]],
        session: Optional[requests.Session] = None,
        timeout: float = 15.0,
    ):
        self._base = (database_url or "").rstrip("/")
        self._token_provider = token_provider
        self._http = session or requests.Session()
        self._timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self._base}/{path.strip('/')}.json"

    def _send(self, method: str, path: str, params: Dict[str, str], body: Any = None) -> Any:
        if not self._base:
            raise DatabaseError("FIREBASE_DATABASE_URL is not configured")
        try:
            token = self._token_provider()
        except Exception as e:
            # mọi lỗi khi lấy token đều tính là lỗi của store
            raise DatabaseError(f"No auth token for {path}: {e}") from e
        if token:
            params = {**params, "auth": token}
        try:
            resp = self._http.request(
                method,
                self._url(path),
                params=params,
                json=body,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise DatabaseError(f"{method} {path} failed: {e}") from e

        if resp.status_code >= 400:
            try:
                detail = resp.json().get("error", resp.text)
            except (ValueError, AttributeError):
                detail = resp.text
            raise DatabaseError(f"{method} {path} -> {resp.status_code}: {detail}", status_code=resp.status_code)
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise DatabaseError(f"{method} {path} returned a non-JSON body") from e

    def get(self, path: str, order_by: Optional[str] = None, limit_to_last: Optional[int] = None) -> Any:
        params: Dict[str, str] = {}
        if order_by:
            # query params phải là JSON string, vd orderBy="date"
            params["orderBy"] = json.dumps(order_by)
        if limit_to_last is not None:
            params["limitToLast"] = str(limit_to_last)
        return self._send("GET", path, params)

    def put(self, path: str, value: Any) -> None:
        self._send("PUT", path, {}, body=value)
