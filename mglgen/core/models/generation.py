"""
Generation models — the values a template sees while it is rendered.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

# Provenance line carried into every template-rendered file
GENERATED_COMMENT = "This file is generated by codegen.go; DO NOT EDIT"


class GenerationContext(BaseModel):
    """Data passed into one template expansion.

    Attributes:
        comment:       Provenance comment the template places at the top.
        template_name: Base name of the template being rendered.
    """

    model_config = ConfigDict(frozen=True)

    comment: str = GENERATED_COMMENT
    template_name: str

    @classmethod
    def for_template(cls, template_path: Path | str) -> GenerationContext:
        """Default context for rendering ``template_path``."""
        return cls(template_name=Path(template_path).name)

    def template_vars(self) -> dict[str, object]:
        """Variables bound into the template scope."""
        return {
            "Comment": self.comment,
            "TemplateName": self.template_name,
            "ctx": self,
        }


class MatrixCell(BaseModel):
    """One cell of a matrix being generated.

    ``index`` is the column-major storage offset: ``col * rows + row``.
    Rendering a cell in a template emits that offset.
    """

    model_config = ConfigDict(frozen=True)

    row: int
    col: int
    index: int

    @property
    def m(self) -> int:
        return self.row

    @property
    def n(self) -> int:
        return self.col

    def __str__(self) -> str:
        return str(self.index)
