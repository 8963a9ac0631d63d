from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

BASE_DIR = Path(__file__).resolve().parent.parent

template_env = Environment(
    loader=FileSystemLoader(str(BASE_DIR / "templates")),
    autoescape=select_autoescape(["html", "xml"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_template(name: str, **context) -> Markup:
    """Render a template into markup that is safe to embed in other templates"""
    return Markup(template_env.get_template(name).render(**context))
