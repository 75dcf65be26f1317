"""
Pydantic models for the service order report.

Wire names follow the column names of the reporting database
(``COD_OS``, ``HRINI_OS`` and so on) so that clients built against the
original payload keep working.  Python code uses the snake_case
attribute names; aliases map between the two.  ``ServiceOrder`` rows
are validated once when they come back from the database and are
frozen afterwards.
"""

from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class ServiceOrder(BaseModel):
    """A service order (OS) row joined with client, resource and ticket."""

    order_id: int = Field(..., alias="COD_OS", examples=[1021])
    start_date: Optional[Union[date, str]] = Field(None, alias="DTINI_OS", examples=["2024-05-03"])
    start_time: Optional[str] = Field(None, alias="HRINI_OS", examples=["0900"])
    end_time: Optional[str] = Field(None, alias="HRFIM_OS", examples=["1730"])
    note: Optional[str] = Field(None, alias="OBS_OS")
    status: Optional[str] = Field(None, alias="STATUS_OS")
    ticket_id: Optional[str] = Field(None, alias="CHAMADO_OS", examples=["4512"])
    order_number: Optional[str] = Field(None, alias="NUM_OS")
    competence: Optional[str] = Field(None, alias="COMP_OS", examples=["05/2024"])
    inclusion_date: Optional[Union[datetime, date, str]] = Field(None, alias="DTINC_OS")
    task_id: Optional[int] = Field(None, alias="CODTRF_OS")
    client_code: Optional[int] = Field(None, alias="COD_CLIENTE")
    client_name: Optional[str] = Field(None, alias="NOME_CLIENTE")
    resource_code: Optional[int] = Field(None, alias="COD_RECURSO")
    resource_name: Optional[str] = Field(None, alias="NOME_RECURSO")
    ticket_status: Optional[str] = Field(None, alias="STATUS_CHAMADO")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def coerce_time(cls, v):
        # Some drivers hand HHMM columns back as integers (900 for 09:00).
        if isinstance(v, int):
            return f"{v:04d}"
        return v

    @field_validator("status", "ticket_id", "order_number", "competence", mode="before")
    @classmethod
    def coerce_text(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)


class EnrichedServiceOrder(ServiceOrder):
    """A service order with its worked hours."""

    worked_hours: float = Field(..., alias="TOTAL_HRS_OS", examples=[8.5])


class StorageCounts(BaseModel):
    """Counts computed by the database over the filtered set."""

    total_orders: int = Field(0, alias="TOTAL_OS")
    total_tickets: int = Field(0, alias="TOTAL_CHAMADOS")
    total_resources: int = Field(0, alias="TOTAL_RECURSOS")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


class Totals(StorageCounts):
    """The ``totalizadores`` object returned alongside the rows."""

    total_hours: float = Field(0, alias="TOTAL_HRS")
    ticket_hours: float = Field(0, alias="TOTAL_HRS_CHAMADOS")
    task_hours: float = Field(0, alias="TOTAL_HRS_TAREFAS")
    average_hours_per_ticket: float = Field(0, alias="MEDIA_HRS_POR_CHAMADO")
    average_hours_per_task: float = Field(0, alias="MEDIA_HRS_POR_TAREFA")
    tickets_with_hours: int = Field(0, alias="TOTAL_CHAMADOS_COM_HORAS")
    tasks_with_hours: int = Field(0, alias="TOTAL_TAREFAS_COM_HORAS")


class ServiceOrderReport(BaseModel):
    """Schema for the report response."""

    chamados: List[EnrichedServiceOrder]
    totalizadores: Totals


class ErrorResponse(BaseModel):
    error: str = Field(..., examples=["Parâmetro 'mes' deve ser um número entre 1 e 12"])


class ServerErrorResponse(BaseModel):
    error: str = Field(..., examples=["Erro no servidor"])
    message: str
    details: Optional[str] = None
