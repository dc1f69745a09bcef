"""Infrastructure layer: external API clients and caches."""
