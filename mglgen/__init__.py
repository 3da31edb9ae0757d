"""
mglgen — template-driven code generator for fixed-size vector and matrix types.

Renders mgl32 sources from templates and derives the mgl64 tree from mgl32.
"""

__version__ = "0.1.0"
