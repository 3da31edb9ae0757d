"""
Template renderer — expand one template into one generated source file.

Templates are Jinja2 with delimiters that stay clear of Go braces:

    << typename(1, 3) >>
    <% for i in iter(0, 3) %> ... <% endfor %>
    <# comment #>

The whole template is rendered in memory first; the output file is only
created once rendering succeeded, then it is handed to the formatter.
"""

from __future__ import annotations

import logging
from pathlib import Path

import jinja2

from mglgen.adapters.base import SourceTransform
from mglgen.core.models.generation import GenerationContext
from mglgen.core.services.template_helpers import TEMPLATE_HELPERS

logger = logging.getLogger(__name__)


class TemplateRenderError(Exception):
    """Template failed to parse or execute."""

    def __init__(self, template_path: Path, message: str):
        self.template_path = template_path
        super().__init__(f"{template_path}: {message}")


def build_environment(search_path: Path | str) -> jinja2.Environment:
    """Jinja2 environment with the codegen delimiters and helpers.

    Args:
        search_path: Directory templates (and their includes) load from.
    """
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(search_path)),
        block_start_string="<%",
        block_end_string="%>",
        variable_start_string="<<",
        variable_end_string=">>",
        comment_start_string="<#",
        comment_end_string="#>",
        undefined=jinja2.StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        autoescape=False,
    )
    env.globals.update(TEMPLATE_HELPERS)
    return env


def render_template(
    template_path: Path | str,
    context: GenerationContext | None = None,
) -> str:
    """Render ``template_path`` and return the text.

    Raises:
        TemplateRenderError: On syntax errors, undefined names, or a
            helper rejecting its arguments.
    """
    template_path = Path(template_path)
    if context is None:
        context = GenerationContext.for_template(template_path)

    env = build_environment(template_path.parent)
    try:
        template = env.get_template(template_path.name)
        return template.render(**context.template_vars())
    except jinja2.TemplateSyntaxError as e:
        raise TemplateRenderError(template_path, f"line {e.lineno}: {e.message}") from e
    except jinja2.TemplateNotFound as e:
        raise TemplateRenderError(template_path, f"template not found: {e.name}") from e
    except jinja2.TemplateError as e:
        raise TemplateRenderError(template_path, str(e)) from e
    except Exception as e:
        # any exception out of a helper aborts the render
        raise TemplateRenderError(template_path, f"helper error: {e!r}") from e


def render_to_file(
    template_path: Path | str,
    output_path: Path | str,
    transform: SourceTransform,
    context: GenerationContext | None = None,
) -> Path:
    """Render a template, write it to ``output_path`` and format it.

    Returns:
        The written output path.

    Raises:
        TemplateRenderError: If rendering fails; ``output_path`` is untouched.
        ToolError: If the formatter rejects the generated source.
        OSError: If the output can't be written.
    """
    output_path = Path(output_path)
    text = render_template(template_path, context)

    output_path.write_text(text, encoding="utf-8")
    logger.info("Rendered %s → %s", template_path, output_path)

    transform.apply(output_path)
    return output_path
