"""Chart and table visualizers with their type registries."""
