"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (settings, logging, database access and error
types), ``schemas`` (pydantic models), ``services`` (validation, SQL
composition and the hours rollup) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
