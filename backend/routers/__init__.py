"""Routers module - FastAPI route handlers"""

from . import config, diff, export

__all__ = ["config", "diff", "export"]
