"""Pure rendering functions: normalized records -> HTML or text.

All renderers follow the same pattern:
  - Input: list of TemperatureRecord (already finalized by the pipeline)
  - Output: str (HTML fragment, or plain text for the CLI)
  - No side effects, no I/O, no Prefect decorators

Used by flows/build.py (HTML) and cli.py (text).

Public API:
  - table: build_table_html
  - calendar: build_calendar_html
  - text: format_table, format_calendar, format_failures
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
