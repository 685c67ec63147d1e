"""
Navigation shell: header links and the routes that hide the header.
"""

NAV_LINKS = (
    ("Home", "#home"),
    ("About", "#about"),
    ("Gallery", "#gallery"),
    ("Contact", "#contact"),
)

HEADERLESS_PREFIXES = ("/admin", "/sign-in", "/sign-up")


def should_show_header(path: str) -> bool:
    return not (path or "").startswith(HEADERLESS_PREFIXES)
