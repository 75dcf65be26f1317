"""
Top‑level package for the Service Order Report API.

This file makes ``service_order_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``service_order_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
