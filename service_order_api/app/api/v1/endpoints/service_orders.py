"""
Service order (OS) report endpoint for API v1.

``GET /ordens-servico`` returns the service orders started in a given
month together with their ``totalizadores``.  Non-admin callers are
restricted to their own client code.  Query parameters are received
as raw strings and validated by the report service so that every
validation failure yields the same ``{"error": ...}`` body.
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from service_order_api.app.core.config import settings
from service_order_api.app.core.db import QueryExecutor, get_query_executor
from service_order_api.app.core.errors import ParameterValidationError, UpstreamError
from service_order_api.app.schemas.service_order import (
    ErrorResponse,
    ServerErrorResponse,
    ServiceOrderReport,
)
from service_order_api.app.services.report_filters import parse_query_params
from service_order_api.app.services.service_order_service import ServiceOrderService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=ServiceOrderReport,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ServerErrorResponse},
    },
)
async def get_service_orders(
    is_admin: Optional[str] = Query(None, alias="isAdmin"),
    cod_cliente: Optional[str] = Query(None, alias="codCliente"),
    mes: Optional[str] = Query(None),
    ano: Optional[str] = Query(None),
    cod_cliente_filter: Optional[str] = Query(None, alias="codClienteFilter"),
    cod_recurso_filter: Optional[str] = Query(None, alias="codRecursoFilter"),
    status_filter: Optional[str] = Query(None, alias="status"),
    executor: QueryExecutor = Depends(get_query_executor),
) -> Union[ServiceOrderReport, JSONResponse]:
    """Return the service orders of a month and their totals.

    - **isAdmin** — ``true`` lifts the client restriction.
    - **codCliente** — client code of the caller, required unless admin.
    - **mes**, **ano** — month (1–12) and year (2000–3000).
    - **codClienteFilter**, **codRecursoFilter** — optional client and
      resource codes.
    - **status** — case-insensitive substring of the ticket status.
    """
    try:
        request = parse_query_params(
            is_admin == "true",
            {
                "codCliente": cod_cliente,
                "mes": mes,
                "ano": ano,
                "codClienteFilter": cod_cliente_filter,
                "codRecursoFilter": cod_recurso_filter,
                "status": status_filter,
            },
        )
    except ParameterValidationError as e:
        logger.debug("Rejected service order query (%s): %s", e.kind.value, e.message)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": e.message})

    try:
        return await ServiceOrderService.build_report(executor, request)
    except UpstreamError as e:
        logger.exception("Error fetching service orders: %s", e.message)
        content = {"error": "Erro no servidor", "message": e.message}
        if settings.debug:
            content["details"] = repr(e.__cause__ or e)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)
