"""Per-user review history in the Realtime Database.

Layout: ``users/{uid}/reviews/{sanitized id}`` -> full review record.
Saves are last-write-wins: two tabs saving the same id overwrite each other.
Reads are best effort and never raise.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from config.constant import HISTORY_LIMIT
from config.logging import logger
from domain.errors import DatabaseError, PersistenceError
from domain.models import ReviewRecord
from domain.ports import HistoryRepositoryPort
from infra.db.realtime_db import RealtimeDatabaseClient

_ILLEGAL_KEY_CHARS = re.compile(r"[.#$\[\]]")
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def sanitize_path_key(key: str) -> str:
    return _ILLEGAL_KEY_CHARS.sub("_", key)


def parse_timestamp(value: Any) -> datetime:
    try:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return _OLDEST
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_local(value: Any, fmt: str = "%Y-%m-%d %H:%M") -> str:
    """Timestamp in the host's local time; near datetime.min the UTC value is used as is."""
    dt = parse_timestamp(value)
    try:
        dt = dt.astimezone()
    except (OverflowError, OSError):
        pass
    return dt.strftime(fmt)


@dataclass
class HistoryListing:
    records: List[ReviewRecord] = field(default_factory=list)
    read_failed: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.records


def _children(data: Any) -> Iterable[tuple]:
    if isinstance(data, dict):
        return data.items()
    if isinstance(data, list):
        # RTDB trả về mảng khi các key là số liên tiếp
        return ((str(i), v) for i, v in enumerate(data) if v is not None)
    return ()


def materialize(data: Any, limit: int = HISTORY_LIMIT) -> List[ReviewRecord]:
    """Keep complete records only, one per id, newest first, at most ``limit``."""
    by_id: Dict[str, ReviewRecord] = {}
    for key, item in _children(data):
        if not isinstance(item, dict) or not (item.get("date") and item.get("code") and item.get("result")):
            continue
        if parse_timestamp(item["date"]) == _OLDEST:
            logger.warning(f"[history] Bỏ qua record {key}: date không hợp lệ {item['date']!r}")
            continue
        try:
            record = ReviewRecord.from_dict(item, key=key)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"[history] Bỏ qua record hỏng {key}: {e}")
            continue
        seen = by_id.get(record.id)
        if seen is None or parse_timestamp(record.created_at) > parse_timestamp(seen.created_at):
            by_id[record.id] = record

    ordered = sorted(by_id.values(), key=lambda r: parse_timestamp(r.created_at), reverse=True)
    return ordered[:limit]


class FirebaseReviewRepository(HistoryRepositoryPort):
    def __init__(self, db: RealtimeDatabaseClient, limit: int = HISTORY_LIMIT):
        self.db = db
        self.limit = limit

    @staticmethod
    def reviews_path(user_id: str) -> str:
        return f"users/{user_id}/reviews"

    def fetch(self, user_id: str) -> HistoryListing:
        path = self.reviews_path(user_id)
        try:
            try:
                data = self.db.get(path, order_by="date", limit_to_last=self.limit)
            except DatabaseError as e:
                # thường là thiếu ".indexOn": "date" trong rules
                logger.warning(f"[history] Indexed query failed, using plain read: {e}")
                data = self.db.get(path)
            return HistoryListing(records=materialize(data, self.limit))
        except Exception as e:
            logger.error(f"[history] Failed to fetch history for {user_id}: {e}")

        try:
            return HistoryListing(records=materialize(self.db.get(path), self.limit))
        except Exception as e:
            logger.error(f"[history] Fallback fetch also failed: {e}")
        return HistoryListing(read_failed=True)

    def list_reviews(self, user_id: str) -> List[ReviewRecord]:
        return self.fetch(user_id).records

    def save(self, user_id: str, record: ReviewRecord) -> None:
        path = f"{self.reviews_path(user_id)}/{sanitize_path_key(record.id)}"
        try:
            self.db.put(path, record.to_dict())
        except DatabaseError as e:
            logger.error(f"[history] Failed to save {path}: {e}")
            raise PersistenceError() from e
        logger.info(f"[history] Saved {path}")
