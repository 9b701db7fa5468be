from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Issue:
    line: Optional[int]
    category: str  # Logic | Performance | Readability | Security | Style
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"line": self.line, "type": self.category, "message": self.message}


@dataclass
class AnalysisResult:
    score: int
    issues: List[Issue] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    corrected_code: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "issues": [i.to_dict() for i in self.issues],
            "suggestions": list(self.suggestions),
            "score": self.score,
            "editedCode": self.corrected_code,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AnalysisResult":
        """Lenient loader for records already persisted; fresh model replies go through the validator."""
        return cls(
            score=int(d.get("score", 0)),
            issues=[
                Issue(line=i.get("line"), category=i.get("type", "Style"), message=i.get("message", ""))
                for i in (d.get("issues") or [])
                if isinstance(i, dict)
            ],
            suggestions=[str(s) for s in (d.get("suggestions") or [])],
            corrected_code=d.get("editedCode", ""),
        )


@dataclass
class ReviewRecord:
    """One completed analysis as stored under users/{uid}/reviews/{id}."""

    id: str
    created_at: str  # ISO-8601 UTC timestamp
    language: str
    source_code: str
    result: AnalysisResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.created_at,
            "language": self.language,
            "code": self.source_code,
            "result": self.result.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any], key: str = "") -> "ReviewRecord":
        return cls(
            id=d.get("id") or key,
            created_at=d["date"],
            language=d.get("language", ""),
            source_code=d["code"],
            result=AnalysisResult.from_dict(d["result"]),
        )


@dataclass(frozen=True)
class Identity:
    uid: str
    email: str = ""
    display_name: str = ""
    creation_time: Optional[str] = None
