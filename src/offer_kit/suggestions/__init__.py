from .base import EntitySuggester, parse_suggestions
from .config import SuggesterConfig
from .factory import create_entity_suggester
from .prompt import build_prompt, placeholder_hint

__all__ = [
    "EntitySuggester",
    "SuggesterConfig",
    "build_prompt",
    "create_entity_suggester",
    "parse_suggestions",
    "placeholder_hint",
]
