"""
Top‑level router for version 1 of the API.

This router aggregates the report routers under a unified prefix.
When new reports are added, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import service_orders

router = APIRouter()

router.include_router(service_orders.router, prefix="/ordens-servico", tags=["ordens-servico"])
