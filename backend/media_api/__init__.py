"""FastAPI service exposing the Mediashelf catalog and players."""
from .app import create_app

__all__ = ["create_app"]
