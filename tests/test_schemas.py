"""Schema documentation carried into the OpenAPI document."""
from service_order_api.app.schemas.service_order import (
    EnrichedServiceOrder,
    ErrorResponse,
    ServiceOrder,
)


def test_field_examples_use_json_schema_list():
    properties = ServiceOrder.model_json_schema(by_alias=True)["properties"]
    assert properties["COD_OS"]["examples"] == [1021]
    assert properties["HRINI_OS"]["examples"] == ["0900"]
    assert "example" not in properties["COD_OS"]


def test_enriched_and_error_examples():
    enriched = EnrichedServiceOrder.model_json_schema(by_alias=True)["properties"]
    assert enriched["TOTAL_HRS_OS"]["examples"] == [8.5]
    error = ErrorResponse.model_json_schema()["properties"]["error"]
    assert error["examples"] == ["Parâmetro 'mes' deve ser um número entre 1 e 12"]
