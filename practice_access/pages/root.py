"""Root landing page with API links and the no-role notice."""

from html import escape

from practice_access.pages._layout import render_page

_ERROR_NOTICES = {
    "no-role": (
        "Your account is not registered as a doctor or administrator. "
        "You have been signed out; register or contact an administrator."
    ),
}


def render_root_page(app_name: str, error: str | None = None) -> str:
    """Return HTML for the root landing page; error selects an optional notice."""
    notice = _ERROR_NOTICES.get(error or "")
    notice_html = f'        <p class="notice">{escape(notice)}</p>\n' if notice else ""
    body = (
        f"        <h1>{escape(app_name)}</h1>\n"
        f"{notice_html}"
        "        <p>Access and subscription control for the practice application.</p>\n"
        '        <p><a href="/docs">API documentation</a> · '
        '<a href="/api/v1/health">Health</a></p>\n'
    )
    return render_page(app_name, body)
