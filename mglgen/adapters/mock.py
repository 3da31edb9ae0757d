"""
Textual transform — in-memory test double for the Go tools.

Rules are applied as literal substring replacement, in order, on every
line that is not a ``//`` comment (gofmt -r rewrites code, not comments).
Formatting and import fixing leave the text unchanged. Can be told to fail on
given file names to simulate a tool error.
"""

from __future__ import annotations

from pathlib import Path

from mglgen.adapters.base import SourceTransform, ToolError
from mglgen.core.models.rewrite import RewriteRule


class TextualTransform(SourceTransform):
    """Pure-Python stand-in for gofmt / goimports.

    ``call_log`` records ``(step, file name, detail)`` for every call.
    """

    def __init__(self, fail_on: set[str] | None = None, failure_output: str = "mock tool failure"):
        self._fail_on = set(fail_on or ())
        self._failure_output = failure_output
        self._call_log: list[tuple[str, str, str]] = []

    @property
    def name(self) -> str:
        return "textual"

    @property
    def call_log(self) -> list[tuple[str, str, str]]:
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def set_failure(self, file_name: str) -> None:
        """Make every step on ``file_name`` fail."""
        self._fail_on.add(file_name)

    def format(self, path: Path) -> None:
        self._record("format", path, "")

    def rewrite(self, path: Path, rule: RewriteRule) -> None:
        self._record("rewrite", path, str(rule))
        lines = path.read_text(encoding="utf-8").splitlines(keepends=True)
        rewritten = [
            line if line.lstrip().startswith("//") else line.replace(rule.pattern, rule.replacement)
            for line in lines
        ]
        path.write_text("".join(rewritten), encoding="utf-8")

    def fix_imports(self, path: Path) -> None:
        self._record("fix_imports", path, "")

    def _record(self, step: str, path: Path, detail: str) -> None:
        self._call_log.append((step, path.name, detail))
        if path.name in self._fail_on:
            raise ToolError([self.name, step, str(path)], output=self._failure_output, return_code=1)
