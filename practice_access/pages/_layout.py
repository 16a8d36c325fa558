"""Shared HTML shell for the server-rendered placeholder pages."""

from html import escape

_STYLE = """
        * { box-sizing: border-box; }
        body {
            font-family: system-ui, -apple-system, 'Segoe UI', sans-serif;
            margin: 0;
            min-height: 100vh;
            background: #f6f8fa;
            color: #1f2933;
            padding: 2rem 1rem;
        }
        .wrap { max-width: 560px; margin: 0 auto; }
        h1 { font-size: 1.6rem; margin-bottom: 0.5rem; }
        p { line-height: 1.5; }
        .notice {
            background: #fff4e5;
            border: 1px solid #f5c16c;
            border-radius: 8px;
            padding: 0.75rem 1rem;
        }
        a { color: #0b6bcb; }
        code { background: #eef1f4; padding: 0.1rem 0.3rem; border-radius: 4px; }
"""


def render_page(title: str, body: str) -> str:
    """Wrap body (trusted HTML) in the page shell; title is escaped."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
    <style>{_STYLE}</style>
</head>
<body>
    <div class="wrap">
{body}
    </div>
</body>
</html>
"""
