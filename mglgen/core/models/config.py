"""
Codegen configuration model — validated contents of codegen.yml.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CodegenConfig(BaseModel):
    """Settings for rendering and derivation.

    Every field has a default, so an absent codegen.yml means the
    stock mgl32 → mgl64 setup.
    """

    model_config = ConfigDict(extra="forbid")

    source_package: str = "mgl32"      # named in derived provenance comments
    output_dir: str = "../mgl64"       # default derivation destination
    source_suffix: str = ".go"
    generator_file: str = "codegen.go"

    formatter: str = "gofmt"
    import_fixer: str = "goimports"
