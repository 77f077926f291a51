"""Router exports for the Mediashelf API."""
from . import catalog, config, health, players, search

__all__ = ["catalog", "config", "health", "players", "search"]
