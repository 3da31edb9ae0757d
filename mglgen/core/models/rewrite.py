"""
Rewrite models — rules and targets for deriving one source tree from another.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

_ARROW = " -> "


class RewriteRule(BaseModel):
    """A textual ``pattern -> replacement`` substitution.

    Rules are applied in sequence, so a rule may target tokens that only
    exist once an earlier rule has run.
    """

    model_config = ConfigDict(frozen=True)

    pattern: str
    replacement: str

    @classmethod
    def parse(cls, raw: str) -> RewriteRule:
        """Parse ``"pattern -> replacement"``.

        Raises:
            ValueError: If the arrow is missing or either side is empty.
        """
        pattern, arrow, replacement = raw.partition(_ARROW)
        pattern, replacement = pattern.strip(), replacement.strip()
        if not arrow or not pattern or not replacement:
            raise ValueError(f"Invalid rewrite rule: {raw!r} (expected 'pattern -> replacement')")
        return cls(pattern=pattern, replacement=replacement)

    def __str__(self) -> str:
        return f"{self.pattern}{_ARROW}{self.replacement}"


# The fixed mgl32 → mgl64 rule sequence. Order matters.
MGL64_REWRITE_RULES: tuple[RewriteRule, ...] = tuple(
    RewriteRule.parse(raw)
    for raw in (
        "mgl32 -> mgl64",
        "float32 -> float64",
        "f32 -> f64",
        "a.Float32 -> a.Float64",
        "math.MaxFloat32 -> math.MaxFloat64",
        "math.SmallestNonzeroFloat32 -> math.SmallestNonzeroFloat64",
    )
)


class DerivationTarget(BaseModel):
    """One eligible file found while walking the source tree.

    Attributes:
        relative: Path relative to the source root.
        source:   Path of the file to read.
        dest:     Mirrored path in the destination tree.
    """

    relative: Path
    source: Path
    dest: Path

    @property
    def relative_posix(self) -> str:
        return self.relative.as_posix()


class DeriveResult(BaseModel):
    """Outcome of a complete derivation walk."""

    source_root: Path
    dest_root: Path
    derived: list[DerivationTarget] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)   # non-regular entries

    @property
    def count(self) -> int:
        return len(self.derived)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_root": str(self.source_root),
            "dest_root": str(self.dest_root),
            "derived": [t.relative_posix for t in self.derived],
            "skipped": list(self.skipped),
            "count": self.count,
        }
