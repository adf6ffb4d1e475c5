from jinja2 import DictLoader, Environment, select_autoescape

ACCOUNT_CREATED_SUBJECT = "Welcome to the Book Project"
ACCOUNT_DELETED_SUBJECT = "Your Book Project account has been deleted"
ACCOUNT_PASSWORD_CHANGED_SUBJECT = "Your Book Project password has been changed"

_TEMPLATES = {
    "base.html": (
        "<html><body>"
        "<p>Hi {{ username }},</p>"
        "{% block content %}{% endblock %}"
        "<p>The Book Project team</p>"
        "</body></html>"
    ),
    "account_created.html": (
        "{% extends 'base.html' %}{% block content %}"
        "<p>Your account has been created. You can now start adding books "
        "to your shelves.</p>"
        "{% endblock %}"
    ),
    "account_deleted.html": (
        "{% extends 'base.html' %}{% block content %}"
        "<p>Your account and all of your shelves have been deleted. "
        "We are sorry to see you go.</p>"
        "{% endblock %}"
    ),
    "password_changed.html": (
        "{% extends 'base.html' %}{% block content %}"
        "<p>The password for your account was just changed. If this was not "
        "you, please contact us straight away.</p>"
        "{% endblock %}"
    ),
}

_JINJA_ENV = Environment(
    loader=DictLoader(_TEMPLATES),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def username_from_email(email: str) -> str:
    return email.split("@", 1)[0]


def render(template_name: str, **context) -> str:
    return _JINJA_ENV.get_template(template_name).render(**context)


def account_created(username: str) -> str:
    return render("account_created.html", username=username)


def account_deleted(username: str) -> str:
    return render("account_deleted.html", username=username)


def password_changed(username: str) -> str:
    return render("password_changed.html", username=username)
