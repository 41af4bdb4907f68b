"""HTML pages served by the form-based interface."""

from html import escape

__all__ = ["render_form", "render_result"]

_PAGE = """<!DOCTYPE html>
<html>
<head>
    <title>URL-Shortener</title>
</head>
<body>
    <h2>URL-Shortener</h2>
{body}
</body>
</html>
"""

_FORM = """    <form method="post" action="/shorten">
        <input type="url" name="url" placeholder="Enter a URL" required>
        <input type="submit" value="Shorten">
    </form>"""


def render_form() -> str:
    return _PAGE.format(body=_FORM)


def render_result(original_url: str, short_url: str) -> str:
    """Render the page shown after a successful submission.

    Both URLs are user-influenced, so they are escaped before interpolation.
    """
    original = escape(original_url)
    short = escape(short_url)
    body = (
        f"    <p>Original URL: {original}</p>\n"
        f'    <p>Shortened URL: <a href="{short}">{short}</a></p>'
    )
    return _PAGE.format(body=body)
