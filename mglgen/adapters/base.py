"""
Source transform base — the contract between the generator and its tools.

Rendering formats each emitted file; derivation formats it, applies the
ordered rewrite rules, and normalizes imports. Both go through one
blocking call, ``SourceTransform.apply``, so the tools can be swapped for
a test double without touching the renderer or the walker.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from mglgen.core.models.rewrite import RewriteRule


class ToolError(Exception):
    """An external tool failed or could not be started.

    Attributes:
        args_list: Full argument vector of the failing invocation.
        output:    Combined stdout + stderr, verbatim.
        return_code: Exit status, or None when the tool never ran.
    """

    def __init__(self, args_list: Sequence[str], output: str = "", return_code: int | None = None):
        self.args_list = list(args_list)
        self.output = output
        self.return_code = return_code
        status = "could not be started" if return_code is None else f"exited with code {return_code}"
        super().__init__(f"Error executing {self.command}: {status}")

    @property
    def command(self) -> str:
        return " ".join(self.args_list)


class SourceTransform(ABC):
    """Abstract base class for in-place source transforms.

    To create a new transform:
        1. Subclass SourceTransform
        2. Implement name, format, rewrite, fix_imports
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The transform identifier (e.g., 'gotools', 'textual')."""

    def missing_tools(self, fix_imports: bool = False) -> list[str]:
        """Executables this transform needs but cannot find."""
        return []

    @abstractmethod
    def format(self, path: Path) -> None:
        """Reformat ``path`` in place."""

    @abstractmethod
    def rewrite(self, path: Path, rule: RewriteRule) -> None:
        """Apply a single rewrite rule to ``path`` in place."""

    @abstractmethod
    def fix_imports(self, path: Path) -> None:
        """Normalize the imports of ``path`` in place."""

    def apply(
        self,
        path: Path,
        rules: Sequence[RewriteRule] = (),
        fix_imports: bool = False,
    ) -> None:
        """Format, rewrite with each rule in order, then fix imports.

        Raises:
            ToolError: On the first failing step; later steps don't run.
        """
        self.format(path)
        for rule in rules:
            self.rewrite(path, rule)
        if fix_imports:
            self.fix_imports(path)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
