"""
Request validation and SQL composition for the service order report.

The report runs two queries over the same logical filter set: one
listing the rows and one computing counts.  Both start from an
immutable skeleton whose ``WHERE`` clause already holds the date-range
predicate (the first two bound values).  ``apply_filters`` appends the
remaining predicates in a fixed order, pairing every ``?`` placeholder
with exactly one positional value, so totals and rows can never see
different filters.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Tuple

from service_order_api.app.core.config import settings
from service_order_api.app.core.errors import ParameterValidationError, ValidationErrorKind


MIN_YEAR = 2000
MAX_YEAR = 3000

_JOINS = """
  FROM OS
  LEFT JOIN TAREFA ON OS.CODTRF_OS = TAREFA.COD_TAREFA
  LEFT JOIN PROJETO ON TAREFA.CODPRO_TAREFA = PROJETO.COD_PROJETO
  LEFT JOIN CLIENTE ON PROJETO.CODCLI_PROJETO = CLIENTE.COD_CLIENTE
  LEFT JOIN RECURSO ON OS.CODREC_OS = RECURSO.COD_RECURSO
  LEFT JOIN CHAMADO ON CAST(OS.CHAMADO_OS AS INTEGER) = CHAMADO.COD_CHAMADO
  WHERE OS.DTINI_OS >= ? AND OS.DTINI_OS < ?
"""

ROWS_SQL = """
  SELECT
    OS.COD_OS,
    OS.DTINI_OS,
    OS.HRINI_OS,
    OS.HRFIM_OS,
    OS.OBS_OS,
    OS.STATUS_OS,
    OS.CHAMADO_OS,
    OS.NUM_OS,
    OS.COMP_OS,
    OS.DTINC_OS,
    OS.CODTRF_OS,
    CLIENTE.COD_CLIENTE,
    CLIENTE.NOME_CLIENTE,
    RECURSO.COD_RECURSO,
    RECURSO.NOME_RECURSO,
    CHAMADO.STATUS_CHAMADO""" + _JOINS

COUNTS_SQL = """
  SELECT
    COUNT(*) AS TOTAL_OS,
    COUNT(DISTINCT OS.CHAMADO_OS) AS TOTAL_CHAMADOS,
    COUNT(DISTINCT RECURSO.COD_RECURSO) AS TOTAL_RECURSOS""" + _JOINS

ROWS_ORDER_BY = " ORDER BY OS.DTINI_OS DESC, OS.HRINI_OS DESC"

# Integral numbers, optionally signed or with a zero fraction ("+5", "5.0")
_INTEGER_RE = re.compile(r"[+-]?\d+(?:\.0*)?", re.ASCII)


@dataclass(frozen=True)
class QueryRequest:
    """Validated report parameters."""

    is_admin: bool
    month: int
    year: int
    client_code: Optional[str] = None
    client_filter: Optional[str] = None
    resource_filter: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class DateRange:
    """Half-open ``[start, end)`` interval as storage date literals."""

    start: str
    end: str


@dataclass(frozen=True)
class ComposedQuery:
    sql: str
    params: Tuple[Any, ...]


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_int(value: Optional[str]) -> Optional[int]:
    """Parse an integral query-string value, ``None`` when it is not one."""
    value = _clean(value)
    if value is None or _INTEGER_RE.fullmatch(value) is None:
        return None
    return int(value.split(".")[0])


def parse_query_params(is_admin: bool, params: Mapping[str, Optional[str]]) -> QueryRequest:
    """Validate raw query-string values and build a ``QueryRequest``.

    Checks run in a fixed order: month, year, the client code required
    from non-admin callers, then the integer codes.  The first failure
    raises ``ParameterValidationError``; nothing else happens.
    """
    month = parse_int(params.get("mes"))
    if month is None or not 1 <= month <= 12:
        raise ParameterValidationError(
            ValidationErrorKind.INVALID_MONTH,
            "Parâmetro 'mes' deve ser um número entre 1 e 12",
        )

    year = parse_int(params.get("ano"))
    if year is None or not MIN_YEAR <= year <= MAX_YEAR:
        raise ParameterValidationError(
            ValidationErrorKind.INVALID_YEAR,
            "Parâmetro 'ano' deve ser um número válido",
        )

    client_code = _clean(params.get("codCliente"))
    if not is_admin and not client_code:
        raise ParameterValidationError(
            ValidationErrorKind.MISSING_CLIENT_CODE,
            "Parâmetro 'codCliente' é obrigatório para usuários não admin",
        )

    request = QueryRequest(
        is_admin=is_admin,
        month=month,
        year=year,
        client_code=client_code,
        client_filter=_clean(params.get("codClienteFilter")),
        resource_filter=_clean(params.get("codRecursoFilter")),
        status=_clean(params.get("status")),
    )

    # Codes are bound as integers by apply_filters; the caller's own
    # client code is only bound for non-admin callers.
    codes = [
        ("codClienteFilter", request.client_filter),
        ("codRecursoFilter", request.resource_filter),
    ]
    if not is_admin:
        codes.insert(0, ("codCliente", request.client_code))
    for name, value in codes:
        if value is not None and parse_int(value) is None:
            raise ParameterValidationError(
                ValidationErrorKind.INVALID_CODE,
                f"Parâmetro '{name}' deve ser um código numérico",
            )
    return request


def build_date_range(month: int, year: int, fmt: Optional[str] = None) -> DateRange:
    """Return the first day of the month and the first day of the next one.

    December rolls over to January of the following year.  ``fmt``
    defaults to ``settings.date_literal_format`` (``DD.MM.YYYY``).
    """
    fmt = fmt or settings.date_literal_format
    start = date(year, month, 1)
    if month == 12:
        end = date(year + 1, 1, 1)
    else:
        end = date(year, month + 1, 1)
    return DateRange(start=start.strftime(fmt), end=end.strftime(fmt))


def apply_filters(base_sql: str, request: QueryRequest, date_range: DateRange) -> ComposedQuery:
    """Append the request's predicates to ``base_sql``.

    The returned params always begin with the date-range bounds; each
    further predicate adds exactly one value, in the same order as its
    text.  ``base_sql`` itself is never modified.
    """
    clauses: list[str] = []
    params: list[Any] = [date_range.start, date_range.end]

    if not request.is_admin and request.client_code:
        clauses.append("CLIENTE.COD_CLIENTE = ?")
        params.append(parse_int(request.client_code))

    if request.client_filter:
        clauses.append("CLIENTE.COD_CLIENTE = ?")
        params.append(parse_int(request.client_filter))

    if request.resource_filter:
        clauses.append("RECURSO.COD_RECURSO = ?")
        params.append(parse_int(request.resource_filter))

    if request.status:
        clauses.append("UPPER(CHAMADO.STATUS_CHAMADO) LIKE UPPER(?)")
        params.append(f"%{request.status}%")

    sql = base_sql.rstrip()
    if clauses:
        sql += " AND " + " AND ".join(clauses)
    return ComposedQuery(sql=sql, params=tuple(params))


def compose_report_queries(
    request: QueryRequest, date_range: DateRange
) -> Tuple[ComposedQuery, ComposedQuery]:
    """Build the rows query and the counts query for one request."""
    rows = apply_filters(ROWS_SQL, request, date_range)
    rows = ComposedQuery(sql=rows.sql + ROWS_ORDER_BY, params=rows.params)
    counts = apply_filters(COUNTS_SQL, request, date_range)
    return rows, counts
