import re
from dataclasses import dataclass
from typing import Dict, Optional

from config.constant import PASSWORD_MIN_LENGTH, PASSWORD_SPECIAL_CHARS

_SPECIAL_RE = re.compile("[" + re.escape(PASSWORD_SPECIAL_CHARS) + "]")


@dataclass(frozen=True)
class PasswordCheck:
    valid: bool
    reason: Optional[str] = None


# (key, predicate, reason) theo thứ tự ưu tiên: length, uppercase, lowercase, digit, special
_RULES = (
    ("length", lambda p: len(p) >= PASSWORD_MIN_LENGTH,
     f"Password must be at least {PASSWORD_MIN_LENGTH} characters long."),
    ("uppercase", lambda p: re.search(r"[A-Z]", p) is not None,
     "Password must contain at least one uppercase letter."),
    ("lowercase", lambda p: re.search(r"[a-z]", p) is not None,
     "Password must contain at least one lowercase letter."),
    ("number", lambda p: re.search(r"[0-9]", p) is not None,
     "Password must contain at least one number."),
    ("special", lambda p: _SPECIAL_RE.search(p) is not None,
     f"Password must contain at least one special character ({PASSWORD_SPECIAL_CHARS})."),
)


def validate_password(password: str) -> PasswordCheck:
    """Authoritative gate: first failing rule wins."""
    password = password or ""
    for _key, predicate, reason in _RULES:
        if not predicate(password):
            return PasswordCheck(valid=False, reason=reason)
    return PasswordCheck(valid=True)


def password_checks(password: str) -> Dict[str, bool]:
    """All five predicates evaluated independently, for the live checklist."""
    password = password or ""
    return {key: predicate(password) for key, predicate, _reason in _RULES}
