"""
Derivation — build the mgl64 tree from the mgl32 tree.

Walks the source tree depth-first in name order and, for every eligible
source file:

    1. reads it
    2. prepends a provenance comment naming the mgl32 file
    3. turns ``//go:generate`` directives into inert comments
    4. writes it to the mirrored path in the destination
    5. formats it
    6. applies each rewrite rule, in order
    7. normalizes its imports

The first failure aborts the whole run. Files already written stay on
disk; nothing is rolled back.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

from mglgen.adapters.base import SourceTransform, ToolError
from mglgen.adapters.gotools import GoToolchainTransform
from mglgen.core.models.config import CodegenConfig
from mglgen.core.models.rewrite import (
    MGL64_REWRITE_RULES,
    DerivationTarget,
    DeriveResult,
    RewriteRule,
)

logger = logging.getLogger(__name__)

# Directive that makes `go generate` re-run codegen, and its inert form
TRIGGER_DIRECTIVE = "//go:generate "
INERT_DIRECTIVE = "//#go:generate "


class DerivationError(Exception):
    """Deriving one file failed; the run stops here.

    Attributes:
        path:    Source-relative path of the failing file.
        command: Failing tool command line, if a tool failed.
        output:  Tool output, verbatim, if a tool failed.
    """

    def __init__(self, path: str, message: str, command: str = "", output: str = ""):
        self.path = path
        self.command = command
        self.output = output
        super().__init__(f"{path}: {message}")


# ── Text transformation ─────────────────────────────────────────


def provenance_comment(relative_path: str, source_package: str) -> str:
    return f"// This file is generated from {source_package}/{relative_path}; DO NOT EDIT\n\n"


def build_derived_source(text: str, relative_path: str, source_package: str) -> str:
    """Provenance header plus ``text`` with generate directives disabled."""
    return provenance_comment(relative_path, source_package) + text.replace(
        TRIGGER_DIRECTIVE, INERT_DIRECTIVE
    )


# ── Walk ────────────────────────────────────────────────────────


def _is_eligible(name: str, config: CodegenConfig) -> bool:
    return name.endswith(config.source_suffix) and name != config.generator_file


def walk_tree(
    source_root: Path,
    dest_root: Path,
    config: CodegenConfig,
    on_skip: Callable[[str], None] | None = None,
) -> Iterator[DerivationTarget]:
    """Yield every eligible file under ``source_root``, mirroring directories.

    Directories are created in the destination as they are visited, so a
    consumer that stops early leaves only the part of the tree it reached.
    Symlinks and other non-regular entries are reported to ``on_skip``.
    """
    excluded = dest_root.resolve()

    def visit(directory: Path) -> Iterator[DerivationTarget]:
        relative_dir = directory.relative_to(source_root)
        mirror = dest_root / relative_dir
        try:
            mirror.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DerivationError(relative_dir.as_posix(), f"cannot create {mirror}: {e}") from e

        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            relative = entry.relative_to(source_root)

            if entry.is_symlink() or not (entry.is_dir() or entry.is_file()):
                logger.warning("Ignored, not a regular file: %s", relative.as_posix())
                if on_skip is not None:
                    on_skip(relative.as_posix())
                continue

            if entry.is_dir():
                if entry.resolve() == excluded:
                    logger.debug("Not descending into destination %s", relative.as_posix())
                    continue
                yield from visit(entry)
                continue

            if not _is_eligible(entry.name, config):
                continue

            yield DerivationTarget(relative=relative, source=entry, dest=dest_root / relative)

    yield from visit(source_root)


# ── Per-file pipeline ───────────────────────────────────────────


def derive_file(
    target: DerivationTarget,
    transform: SourceTransform,
    source_package: str = "mgl32",
    rules: Sequence[RewriteRule] = MGL64_REWRITE_RULES,
) -> None:
    """Run the full pipeline for one file.

    Raises:
        DerivationError: If reading, writing or any tool step fails.
    """
    rel = target.relative_posix

    try:
        with open(target.source, encoding="utf-8", newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DerivationError(rel, f"cannot read source: {e}") from e

    derived = build_derived_source(text, rel, source_package)

    try:
        with open(target.dest, "w", encoding="utf-8", newline="") as f:
            f.write(derived)
        shutil.copymode(target.source, target.dest)
    except OSError as e:
        raise DerivationError(rel, f"cannot write {target.dest}: {e}") from e

    try:
        transform.apply(target.dest, rules, fix_imports=True)
    except ToolError as e:
        raise DerivationError(rel, str(e), command=e.command, output=e.output) from e

    logger.info("Derived %s → %s", rel, target.dest)


def derive_tree(
    dest_root: Path | str,
    source_root: Path | str = ".",
    transform: SourceTransform | None = None,
    config: CodegenConfig | None = None,
    rules: Sequence[RewriteRule] = MGL64_REWRITE_RULES,
) -> DeriveResult:
    """Mirror and rewrite every eligible file of ``source_root`` into ``dest_root``.

    Args:
        dest_root: Destination tree root (created if absent).
        source_root: Tree to derive from (default: cwd).
        transform: Tool port; defaults to gofmt/goimports from ``config``.
        config: Codegen settings; defaults apply when None.
        rules: Ordered rewrite rules.

    Raises:
        DerivationError: On the first failing file.
    """
    config = config or CodegenConfig()
    source_root = Path(source_root)
    dest_root = Path(dest_root)
    if transform is None:
        transform = GoToolchainTransform(config.formatter, config.import_fixer)

    result = DeriveResult(source_root=source_root, dest_root=dest_root)
    logger.debug("Deriving %s → %s with %r", source_root, dest_root, transform)

    for target in walk_tree(source_root, dest_root, config, on_skip=result.skipped.append):
        derive_file(target, transform, config.source_package, rules)
        result.derived.append(target)

    return result
