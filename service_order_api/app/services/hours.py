"""
Worked-hours calculation and rollup for service orders.

Hours are derived from the ``HHMM`` start/end strings of each order.
No correction is applied when the end precedes the start: such
records produce negative hours and are summed as they are.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from service_order_api.app.schemas.service_order import EnrichedServiceOrder, ServiceOrder, StorageCounts, Totals


DEFAULT_TIME = "0000"
_CENTS = Decimal("0.01")


def round_hours(value: float) -> float:
    """Round to two places, ties away from zero.

    The exact binary value is rounded, so 0.125 becomes 0.13 while
    1.005 (stored as 1.00499...) becomes 1.0.
    """
    return float(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


def _minutes(value: Optional[str]) -> int:
    value = (value or "").strip()
    if len(value) < 4 or not value[:4].isdecimal():
        value = DEFAULT_TIME
    return int(value[0:2]) * 60 + int(value[2:4])


def calculate_worked_hours(start: Optional[str] = DEFAULT_TIME, end: Optional[str] = DEFAULT_TIME) -> float:
    """Return the hours between two ``HHMM`` times, rounded to 2 places.

    Missing or malformed times count as ``"0000"``.

    >>> calculate_worked_hours("0900", "1730")
    8.5
    >>> calculate_worked_hours("1000", "0900")
    -1.0
    """
    return round_hours((_minutes(end) - _minutes(start)) / 60)


def enrich_orders(orders: Iterable[ServiceOrder]) -> List[EnrichedServiceOrder]:
    """Attach ``worked_hours`` to every order."""
    enriched: List[EnrichedServiceOrder] = []
    for order in orders:
        enriched.append(
            EnrichedServiceOrder(
                **order.model_dump(),
                worked_hours=calculate_worked_hours(order.start_time, order.end_time),
            )
        )
    return enriched


def group_hours(
    orders: Iterable[EnrichedServiceOrder],
) -> Tuple[Dict[str, float], Dict[int, float]]:
    """Sum hours per ticket, and per task for orders without a ticket.

    An order counts towards at most one group; the ticket wins over the
    task.  Orders with neither are left out of both mappings.
    """
    by_ticket: Dict[str, float] = {}
    by_task: Dict[int, float] = {}
    for order in orders:
        hours = order.worked_hours or 0
        ticket = (order.ticket_id or "").strip()
        if ticket:
            by_ticket[ticket] = by_ticket.get(ticket, 0) + hours
        elif order.task_id:
            by_task[order.task_id] = by_task.get(order.task_id, 0) + hours
    return by_ticket, by_task


def _average(total: float, count: int) -> float:
    return total / count if count > 0 else 0


def calculate_totals(
    orders: Sequence[EnrichedServiceOrder],
    by_ticket: Mapping[str, float],
    by_task: Mapping[Any, float],
    counts_rows: Sequence[Mapping[str, Any]],
) -> Totals:
    """Merge the database counts with the hour sums and averages.

    ``counts_rows`` is the result of the counts query; only its first
    row is used and all three counts default to zero when it is empty.
    """
    counts = StorageCounts.model_validate(counts_rows[0]) if counts_rows else StorageCounts()

    total_hours = sum(order.worked_hours or 0 for order in orders)
    ticket_hours = sum(by_ticket.values())
    task_hours = sum(by_task.values())

    return Totals(
        **counts.model_dump(),
        total_hours=round_hours(total_hours),
        ticket_hours=round_hours(ticket_hours),
        task_hours=round_hours(task_hours),
        average_hours_per_ticket=round_hours(_average(ticket_hours, len(by_ticket))),
        average_hours_per_task=round_hours(_average(task_hours, len(by_task))),
        tickets_with_hours=len(by_ticket),
        tasks_with_hours=len(by_task),
    )
