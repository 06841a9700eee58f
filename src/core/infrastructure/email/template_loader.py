"""Jinja2 email templates from resources/email_templates/.

Each email is a pair of files sharing a stem: ``<stem>.html`` (autoescaped)
and ``<stem>.txt`` for the plain text part.
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

_TEMPLATES_DIR = Path(__file__).resolve().parents[4] / "resources" / "email_templates"

_env: Environment | None = None


def _get_env() -> Environment:
    global _env
    if _env is None:
        if not _TEMPLATES_DIR.exists():
            raise FileNotFoundError(
                f"Email templates directory not found: {_TEMPLATES_DIR}"
            )
        _env = Environment(
            loader=FileSystemLoader(_TEMPLATES_DIR),
            autoescape=select_autoescape(["html"], default_for_string=False),
            keep_trailing_newline=True,
        )
    return _env


def render_template(template_name: str, /, **variables: object) -> str:
    """Render one template file, e.g. ``"access_key.html"``.

    ``template_name`` is positional-only so templates may use a ``name``
    variable.

    Raises:
        jinja2.TemplateNotFound: If the template file does not exist
    """
    return _get_env().get_template(template_name).render(**variables)


def render_email(stem: str, /, **variables: object) -> tuple[str, str]:
    """Render the (html, plain text) bodies of an email."""
    return (
        render_template(f"{stem}.html", **variables),
        render_template(f"{stem}.txt", **variables),
    )
