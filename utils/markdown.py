import re

_LANG_LINE = re.compile(r'^[A-Za-z0-9_.+\-]+$')


def strip_code_fence(text: str) -> str:
    """
    Bỏ cặp ``` bao ngoài (nếu có) của một reply, trả lại phần bên trong.
    Chỉ xử lý khi reply bắt đầu bằng fence; ``` nằm trong nội dung được giữ nguyên.
    """
    if not text:
        return ""

    fence = "```"
    stripped = text.strip()
    if not stripped.startswith(fence):
        return text

    end = stripped.rfind(fence)
    if end == 0:
        return text  # chỉ có 1 dấu, không hợp lệ

    inner = stripped[len(fence):end]
    first_line, sep, rest = inner.partition("\n")
    if sep and (not first_line.strip() or _LANG_LINE.fullmatch(first_line.strip())):
        return rest
    return inner
