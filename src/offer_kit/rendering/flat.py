# rendering/flat.py

from collections.abc import Mapping

from offer_kit.templates.scanner import TOKEN_PATTERN


def substitute_text(text: str, values: Mapping[str, str]) -> str:
    """Replace each ``[name]`` whose exact name has a non-blank value.

    Tokens without a value stay bracketed so they remain visible. The pass
    runs once over the input, so inserted values are never rescanned.
    """

    def _replace(match) -> str:
        value = values.get(match.group(1))
        if value and value.strip():
            return value
        return match.group(0)

    return TOKEN_PATTERN.sub(_replace, text)
