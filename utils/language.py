from typing import Optional

from config.constant import EXT_MAP, LANGUAGE_VALUES

_EXTRA_EXTS = {
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".tsx": "typescript",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".h": "cpp",
    ".htm": "html",
    ".kts": "kotlin",
}

_MAP = {ext: lang for lang, ext in EXT_MAP.items()}
_MAP.update(_EXTRA_EXTS)


def guess_lang_from_name(filename: str) -> Optional[str]:
    """Language value for an uploaded file name, or None if it is not one we review."""
    name = (filename or "").lower()
    for ext, lang in sorted(_MAP.items(), key=lambda item: len(item[0]), reverse=True):
        if name.endswith(ext) and lang in LANGUAGE_VALUES:
            return lang
    return None
