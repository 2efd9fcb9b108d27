from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, TemplateNotFound

from sheetgen.config import DEFAULT_TEMPLATE, DEFAULT_TEMPLATES_DIR
from sheetgen.errors import RenderError
from sheetgen.sheet.project import FieldTriple

log = logging.getLogger(__name__)

PACKAGE_TEMPLATES = Path(__file__).resolve().parents[1] / "templates"


def default_search_path(templates_dir: Optional[Path] = None) -> List[Path]:
    """
    Template directories, first match wins:
      - templates_dir, or ./templates of the invocation directory
      - the templates shipped with the package
    """
    first = Path(templates_dir) if templates_dir else Path.cwd() / DEFAULT_TEMPLATES_DIR
    return [first, PACKAGE_TEMPLATES]


class TemplateRenderer:
    """
    Renders namespace, class name and field triples through a Jinja2 template.

    The template receives:
      namespace  str
      classname  str
      tuples     ordered list of (name, type, remark)
    """

    def __init__(
        self,
        template_name: str = DEFAULT_TEMPLATE,
        search_path: Optional[Sequence[Path]] = None,
    ) -> None:
        self.template_name = template_name
        self.search_path = [Path(p) for p in (search_path or default_search_path())]
        self.env = Environment(
            loader=FileSystemLoader([str(p) for p in self.search_path]),
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )

    def _template(self):
        try:
            return self.env.get_template(self.template_name)
        except TemplateNotFound as e:
            searched = ", ".join(str(p) for p in self.search_path)
            raise RenderError(
                f"Template {self.template_name!r} not found (searched: {searched})"
            ) from e
        except TemplateError as e:
            raise RenderError(f"Template {self.template_name!r} is invalid: {e}") from e

    def render(self, namespace: str, class_name: str, triples: Sequence[FieldTriple]) -> str:
        tpl = self._template()
        try:
            return tpl.render(
                namespace=namespace,
                classname=class_name,
                tuples=[tuple(t) for t in triples],
            )
        except TemplateError as e:
            raise RenderError(f"Rendering {self.template_name!r} failed: {e}") from e
