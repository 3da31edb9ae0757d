"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from mglgen.adapters.mock import TextualTransform


@pytest.fixture
def transform() -> TextualTransform:
    """In-memory stand-in for gofmt / goimports."""
    return TextualTransform()


@pytest.fixture
def mgl32_tree(tmp_path: Path) -> Path:
    """A small mgl32 source tree with a mix of eligible and ignored files."""
    root = tmp_path / "mgl32"
    (root / "matstack").mkdir(parents=True)

    (root / "util.go").write_text(textwrap.dedent("""\
        //go:generate go run codegen.go -template vector.tmpl -output vector.go

        package mgl32

        import "math"

        const Epsilon float32 = 0.0000001

        func FloatEqual(a, b float32) bool {
        	return math.Abs(float64(a-b)) < math.MaxFloat32
        }
    """))
    (root / "vector.go").write_text(textwrap.dedent("""\
        package mgl32

        type Vec3 [3]float32

        func (v Vec3) X() float32 { return v[0] }
    """))
    (root / "matstack" / "matstack.go").write_text(textwrap.dedent("""\
        package matstack

        import "github.com/go-gl/mathgl/mgl32"

        type MatStack []mgl32.Mat4
    """))
    (root / "codegen.go").write_text("package main\n\nvar _ float32\n")
    (root / "vector.tmpl").write_text("<< Comment >>\n")
    (root / "README.md").write_text("mgl32 docs, float32 everywhere\n")
    return root
