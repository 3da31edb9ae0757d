"""
Domain models — pydantic types shared by the renderer and the deriver.
"""

from mglgen.core.models.config import CodegenConfig
from mglgen.core.models.generation import GenerationContext, MatrixCell
from mglgen.core.models.rewrite import DerivationTarget, DeriveResult, RewriteRule

__all__ = [
    "CodegenConfig",
    "DerivationTarget",
    "DeriveResult",
    "GenerationContext",
    "MatrixCell",
    "RewriteRule",
]
