"""Flask UI and JSON API on top of the KWIC engine."""
from __future__ import annotations
from .web import app, main

__all__ = ["app", "main"]
