# src/offer_kit/suggestions/factory.py

from offer_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import EntitySuggester
from .config import SuggesterConfig


def create_entity_suggester(
    config: SuggesterConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> EntitySuggester:
    """Create an entity suggester from config.

    Args:
        config: Suggester configuration specifying provider, model, etc.
        metrics_hook: Optional metrics hook for observability.

    Returns:
        Configured EntitySuggester implementation.

    Raises:
        ValueError: If provider is unknown.

    Example:
        >>> config = SuggesterConfig(provider="openai", model="gpt-4o-mini")
        >>> suggester = create_entity_suggester(config)
        >>> values = await suggester.suggest(text=letter, names=["Candidate Name"])
    """
    if config.provider == "openai":
        from .openai import OpenAIEntitySuggester

        return OpenAIEntitySuggester(
            api_key=config.api_key,
            model=config.model,
            timeout=config.timeout,
            max_retries=config.max_retries,
            metrics_hook=metrics_hook,
        )

    if config.provider == "anthropic":
        from .anthropic import AnthropicEntitySuggester

        return AnthropicEntitySuggester(
            api_key=config.api_key,
            model=config.model,
            timeout=config.timeout,
            max_retries=config.max_retries,
            metrics_hook=metrics_hook,
        )

    raise ValueError(f"Unknown suggestion provider: {config.provider}")
