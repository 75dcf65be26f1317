"""
Service layer for the service order report.

``ServiceOrderService.build_report`` turns a validated ``QueryRequest``
into the report payload: it composes the rows and counts queries,
runs both concurrently through the query executor, validates the rows
and computes the hour totals.  All queries are read-only and rely on
parameterized statements.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from service_order_api.app.core.db import QueryExecutor
from service_order_api.app.core.errors import UpstreamError
from service_order_api.app.schemas.service_order import ServiceOrder, ServiceOrderReport
from service_order_api.app.services.hours import calculate_totals, enrich_orders, group_hours
from service_order_api.app.services.report_filters import ComposedQuery, QueryRequest, build_date_range, compose_report_queries


logger = logging.getLogger(__name__)


class ServiceOrderService:
    """Service building the monthly service order report."""

    @classmethod
    async def _execute(cls, executor: QueryExecutor, query: ComposedQuery) -> List[Dict[str, Any]]:
        try:
            return await asyncio.to_thread(executor, query.sql, list(query.params))
        except Exception as exc:
            raise UpstreamError(str(exc) or exc.__class__.__name__) from exc

    @classmethod
    async def fetch(
        cls, executor: QueryExecutor, request: QueryRequest
    ) -> tuple[List[ServiceOrder], List[Dict[str, Any]]]:
        """Run the rows and counts queries concurrently.

        Returns the validated orders and the raw counts rows.  If either
        query fails the whole fetch fails with ``UpstreamError``.
        """
        date_range = build_date_range(request.month, request.year)
        rows_query, counts_query = compose_report_queries(request, date_range)
        logger.debug(
            "Fetching service orders %02d/%d with params %s",
            request.month,
            request.year,
            rows_query.params,
        )
        rows, counts_rows = await asyncio.gather(
            cls._execute(executor, rows_query),
            cls._execute(executor, counts_query),
        )
        try:
            orders = [ServiceOrder.model_validate(row) for row in rows]
        except ValidationError as exc:
            raise UpstreamError(f"Unexpected service order row: {exc}") from exc
        return orders, list(counts_rows)

    @classmethod
    async def build_report(cls, executor: QueryExecutor, request: QueryRequest) -> ServiceOrderReport:
        """Return the enriched orders and their ``totalizadores``."""
        orders, counts_rows = await cls.fetch(executor, request)
        enriched = enrich_orders(orders)
        by_ticket, by_task = group_hours(enriched)
        totals = calculate_totals(enriched, by_ticket, by_task, counts_rows)
        logger.info(
            "Service order report %02d/%d: %d orders, %.2f hours",
            request.month,
            request.year,
            len(enriched),
            totals.total_hours,
        )
        return ServiceOrderReport(chamados=enriched, totalizadores=totals)
