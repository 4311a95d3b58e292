"""Contains utilities for rendering Jinja2 templates."""

from pathlib import Path
from typing import Any

import jinja2
import structlog

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


def construct_jinja2_environment() -> jinja2.Environment:
    """Construct a Jinja2 environment that fails on undefined variables."""
    jinja_env = jinja2.Environment(
        undefined=jinja2.StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    return jinja_env


def construct_jinja2_template_from_string(template_string: str, environment: jinja2.Environment | None = None) -> jinja2.Template:
    """Construct a Jinja2 template from a string."""
    if environment is None:
        environment = construct_jinja2_environment()
    return environment.from_string(template_string)


def construct_jinja2_template_from_file(template_path: Path | str, environment: jinja2.Environment | None = None) -> jinja2.Template:
    """Construct a Jinja2 template from a file."""
    try:
        with open(template_path, encoding="utf-8") as f:
            template_content = f.read()
    except FileNotFoundError:
        logger.error("Jinja2 template not found", template_path=str(template_path))
        raise
    return construct_jinja2_template_from_string(template_content, environment)


def render_template(template: jinja2.Template, context: dict[str, Any]) -> str:
    """Render a Jinja2 template against a context."""
    try:
        return template.render(context)
    except jinja2.UndefinedError as exc:
        logger.error("Failed to render template", template=template.name, error=str(exc))
        raise
