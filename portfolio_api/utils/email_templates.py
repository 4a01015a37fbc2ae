from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def nl2br(value: str) -> Markup:
    return Markup("<br>").join(escape(value).split("\n"))


env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    keep_trailing_newline=True,
)
env.filters["nl2br"] = nl2br


class EmailTemplate:
    """
        Renders the Jinja2 templates used for outbound contact emails
    """

    def __init__(self, template: str):
        self.template = env.get_template(template)

    def render(self, **kwargs) -> str:
        return self.template.render(**kwargs)

    @staticmethod
    def contact_notification_text(name: str, email: str, subject: str, message: str) -> str:
        return EmailTemplate("contact_notification.txt").render(
            name=name, email=email, subject=subject, message=message)

    @staticmethod
    def contact_notification_html(name: str, email: str, subject: str, message: str) -> str:
        return EmailTemplate("contact_notification.html").render(
            name=name, email=email, subject=subject, message=message)
