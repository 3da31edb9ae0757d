"""
Template helpers — naming, indexing and repetition for generated types.

These are the functions a template can call. The naming table and the
column-major cell order match the storage layout of the generated
vector and matrix types; changing either changes generated code.

    typename(1, 3)      → "Vec3"
    typename(3, 3)      → "Mat3"
    typename(2, 3)      → "Mat2x3"
    matiter(2, 2)       → cells at offsets 0 (0,0), 1 (1,0), 2 (0,1), 3 (1,1)
    repeat(3, "v%d", "+") → "v0+v1+v2"
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from mglgen.core.models.generation import MatrixCell

_AXIS_LABELS = ("X", "Y", "Z", "W")

# Placeholder replaced by the repetition number in repeat_text()
REPEAT_TOKEN = "%d"


# ── Naming ──────────────────────────────────────────────────────


def type_name(rows: int, cols: int) -> str:
    """Type identifier for a ``rows`` × ``cols`` value."""
    if rows == 1:
        return f"Vec{cols}"
    if cols == 1:
        return f"Vec{rows}"
    if rows == cols:
        return f"Mat{rows}"
    return f"Mat{rows}x{cols}"


def axis_label(index: int) -> str:
    """Component name for axis ``index`` (0 → X … 3 → W).

    Raises:
        ValueError: For any index outside 0..3; nothing above 4
            dimensions is generated.
    """
    if isinstance(index, int) and not isinstance(index, bool) and 0 <= index < len(_AXIS_LABELS):
        return _AXIS_LABELS[index]
    raise ValueError(f"Can't generate element name for axis {index!r}")


# ── Indexing ────────────────────────────────────────────────────


def int_range(start: int, end: int) -> list[int]:
    """Integers from ``start`` up to, not including, ``end``."""
    return list(range(start, end))


def matrix_cells(rows: int, cols: int) -> list[MatrixCell]:
    """Every cell of a rows × cols matrix in column-major order."""
    return [
        MatrixCell(row=m, col=n, index=n * rows + m)
        for n in range(cols)
        for m in range(rows)
    ]


# ── Repetition / arithmetic ─────────────────────────────────────


def repeat_text(count: int, text: str, sep: str) -> str:
    """Repeat ``text`` ``count`` times joined by ``sep``.

    Each ``%d`` in a repetition is replaced with its number, so
    ``repeat_text(3, "col%d", ", ")`` gives ``"col0, col1, col2"``.
    """
    return sep.join(text.replace(REPEAT_TOKEN, str(i)) for i in range(count))


def add(*args: int) -> int:
    total = 0
    for a in args:
        total += a
    return total


def mul(*args: int) -> int:
    product = 1
    for a in args:
        product *= a
    return product


def enum(*args: int) -> list[int]:
    """Arguments as a list, for looping over a literal sequence."""
    return list(args)


def separator(sep: str, iteration: int) -> str:
    """``sep`` for every iteration but the first."""
    if iteration > 0:
        return sep
    return ""


# ── Registry ────────────────────────────────────────────────────

# Names the helpers are known by inside templates
TEMPLATE_HELPERS: dict[str, Callable[..., Any]] = {
    "typename": type_name,
    "elementname": axis_label,
    "iter": int_range,
    "matiter": matrix_cells,
    "enum": enum,
    "sep": separator,
    "repeat": repeat_text,
    "add": add,
    "mul": mul,
}
