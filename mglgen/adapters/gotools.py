"""
Go toolchain transform — gofmt for formatting and rules, goimports for imports.

    gofmt -w <file>
    gofmt -w -r "<pattern -> replacement>" <file>    (once per rule)
    goimports -w <file>
"""

from __future__ import annotations

from pathlib import Path

from mglgen.adapters.base import SourceTransform
from mglgen.adapters.shell.command import is_tool_available, run_tool
from mglgen.core.models.rewrite import RewriteRule


class GoToolchainTransform(SourceTransform):
    """Run the Go source tools as blocking subprocesses."""

    def __init__(self, formatter: str = "gofmt", import_fixer: str = "goimports"):
        self._formatter = formatter
        self._import_fixer = import_fixer

    @property
    def name(self) -> str:
        return "gotools"

    def missing_tools(self, fix_imports: bool = False) -> list[str]:
        needed = [self._formatter, self._import_fixer] if fix_imports else [self._formatter]
        return [tool for tool in needed if not is_tool_available(tool)]

    def format(self, path: Path) -> None:
        run_tool([self._formatter, "-w", str(path)])

    def rewrite(self, path: Path, rule: RewriteRule) -> None:
        run_tool([self._formatter, "-w", "-r", str(rule), str(path)])

    def fix_imports(self, path: Path) -> None:
        run_tool([self._import_fixer, "-w", str(path)])
