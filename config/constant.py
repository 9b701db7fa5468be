from typing import Dict, List


APP_TITLE = "Bugless"

LANGUAGE_OPTIONS: List[Dict[str, str]] = [
    {"value": "javascript", "label": "JavaScript"},
    {"value": "typescript", "label": "TypeScript"},
    {"value": "python", "label": "Python"},
    {"value": "java", "label": "Java"},
    {"value": "csharp", "label": "C#"},
    {"value": "cpp", "label": "C++"},
    {"value": "go", "label": "Go"},
    {"value": "rust", "label": "Rust"},
    {"value": "php", "label": "PHP"},
    {"value": "ruby", "label": "Ruby"},
    {"value": "swift", "label": "Swift"},
    {"value": "kotlin", "label": "Kotlin"},
    {"value": "sql", "label": "SQL"},
    {"value": "html", "label": "HTML"},
    {"value": "css", "label": "CSS"},
]
LANGUAGE_VALUES = [opt["value"] for opt in LANGUAGE_OPTIONS]
LANGUAGE_LABELS: Dict[str, str] = {opt["value"]: opt["label"] for opt in LANGUAGE_OPTIONS}
DEFAULT_LANGUAGE = LANGUAGE_VALUES[0]

EXT_MAP: Dict[str, str] = {
    "python": ".py", "javascript": ".js", "typescript": ".ts", "java": ".java",
    "csharp": ".cs", "cpp": ".cpp", "go": ".go", "rust": ".rs", "php": ".php",
    "ruby": ".rb", "swift": ".swift", "kotlin": ".kt", "sql": ".sql",
    "html": ".html", "css": ".css",
}

DEFAULT_CODE = 'function greet(name) {\n  console.log("Hello, " + name);\n}'

ISSUE_CATEGORIES = ("Logic", "Performance", "Readability", "Security", "Style")
FALLBACK_ISSUE_CATEGORY = "Style"

PASSWORD_MIN_LENGTH = 8
PASSWORD_SPECIAL_CHARS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

HISTORY_LIMIT = 20
MAX_ERROR_MESSAGE_LENGTH = 200
CODE_PREVIEW_CHARS = 150


INTERFACE_LANGUAGES: Dict[str, str] = {
    "en": "English", "es": "Spanish", "fr": "French", "de": "German", "ja": "Japanese",
}
