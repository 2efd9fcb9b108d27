from .render import TemplateRenderer, default_search_path
from .write import write_output

__all__ = [
    "TemplateRenderer",
    "default_search_path",
    "write_output",
]
