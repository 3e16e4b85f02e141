"""Pure rendering functions: stored tables -> matplotlib figures or HTML.

All renderers follow the same pattern:
  - Input: table payloads as written by flows/analyze.py (dicts and lists)
  - Output: ``matplotlib.figure.Figure`` or an HTML string
  - No side effects, no file I/O, no Prefect decorators

Used by flows/build.py, which saves the outputs through the result store.

Public API:
  - climate: build_yearly_values_figure, build_growing_season_figure, build_july_figure
  - seedset: build_seedset_figure
  - report: build_report_html

Adding a figure
---------------
1. Add ``build_<name>_figure(table) -> Figure`` to a renderer module, using
   ``new_figure()`` so styling stays consistent.
2. Wire it into ``flows/build.py``: load the table, call the builder,
   save with ``store.save_figure(...)``.
3. Add tests: call the builder with a small table and assert on the axes
   (titles, number of lines, annotations).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2
import matplotlib

matplotlib.use("Agg")

# Shared Jinja2 environment for the HTML report
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
