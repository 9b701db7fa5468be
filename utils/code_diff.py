import difflib
import html
from typing import List

_STYLES = """
<style>
  .diff-gh {
    font-family: ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, "Liberation Mono", "Courier New", monospace;
    font-size: 13px;
    line-height: 1.5;
    white-space: pre;
    border: 1px solid #30363d;
    border-radius: 8px;
    overflow: hidden;
  }
  .diff-line { padding: 2px 10px; }
  .diff-line.add  { background: #12261e; color: #aff5b4; }
  .diff-line.del  { background: #25171c; color: #ffdcd7; }
  .diff-line.ctx  { background: #0d1117; color: #c9d1d9; }
  .diff-line.meta { background: #161b22; color: #79c0ff; font-weight: 600; }
</style>
"""


def _line_class(raw: str) -> str:
    if raw.startswith(("+++", "---", "@@")):
        return "meta"
    if raw.startswith("+"):
        return "add"
    if raw.startswith("-"):
        return "del"
    return "ctx"


def unified_diff_lines(submitted: str, corrected: str, filename: str = "snippet", n: int = 3) -> List[str]:
    return list(difflib.unified_diff(
        submitted.splitlines(),
        corrected.splitlines(),
        fromfile=f"a/{filename}",
        tofile=f"b/{filename}",
        n=n,
        lineterm="",
    ))


def make_github_like_unified_html(submitted: str, corrected: str, filename: str = "snippet", n: int = 3) -> str:
    """Unified diff of the submitted code against the corrected code, rendered as dark GitHub-style HTML."""
    udiff = unified_diff_lines(submitted, corrected, filename=filename, n=n)
    if not udiff:
        return _STYLES + '<div class="diff-gh"><div class="diff-line meta">No changes</div></div>'

    body = "".join(
        f'<div class="diff-line {_line_class(raw)}">{html.escape(raw)}</div>' for raw in udiff
    )
    return _STYLES + f'<div class="diff-gh">{body}</div>'
