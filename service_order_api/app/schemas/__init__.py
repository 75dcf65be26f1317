"""
Pydantic schema definitions for API payloads.

Schemas are separated from the raw database rows so that the API
representation is validated once, at the fetch boundary.
"""
