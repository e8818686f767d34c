# rendering/fonts.py

from typing import Literal

WebFamily = Literal["serif", "sans-serif", "monospace"]

DEFAULT_FAMILY: WebFamily = "sans-serif"


def web_safe_family(font_name: str) -> WebFamily:
    """Map an embedded PDF font name to a generic family.

    Subset prefixes such as ``ABCDEF+Times-Roman`` are fine; only
    substrings are inspected.
    """
    name = font_name.lower()
    if "courier" in name or "mono" in name:
        return "monospace"
    if "times" in name or ("serif" in name and "sans" not in name):
        return "serif"
    # helvetica, arial and anything unknown
    return DEFAULT_FAMILY
