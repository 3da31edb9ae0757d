"""
Adapters — ports to the external source tools.

The renderer and deriver only talk to a ``SourceTransform``; which tools
sit behind it (gofmt/goimports, or an in-memory double) is chosen here.
"""

from mglgen.adapters.base import SourceTransform, ToolError
from mglgen.adapters.gotools import GoToolchainTransform
from mglgen.adapters.mock import TextualTransform

__all__ = [
    "GoToolchainTransform",
    "SourceTransform",
    "TextualTransform",
    "ToolError",
]
