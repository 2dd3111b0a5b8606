# src/ktop/cli/__init__.py
"""
ktop CLI Package

This package exposes the top-level Typer `app` so tests and the console
entrypoint can import `ktop.cli.app`.
"""

from .main import app

__all__ = ["app"]
