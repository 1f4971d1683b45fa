import html

import bleach


def plain_text(value) -> str:
    """Strip every tag from user text and store it unescaped."""
    cleaned = bleach.clean(str(value or '').strip(), tags=set(), strip=True)
    return html.unescape(cleaned).strip()
