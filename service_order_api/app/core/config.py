"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  In a
production deployment you should override these via environment
variables or a dedicated configuration service.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Service Order Report API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")

    # Development mode.  When enabled, 500 responses carry a ``details``
    # field describing the underlying exception.  Never enable it in
    # production.
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file in addition to the console handler.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path or connection string for the database holding the OS,
    # TAREFA, PROJETO, CLIENTE, RECURSO and CHAMADO tables.  A relative
    # path is resolved relative to the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "service_orders.db")

    # strftime pattern of the date literals bound to the date-range
    # predicate.  The default matches the ``DD.MM.YYYY`` literal format
    # accepted by the reporting database.
    date_literal_format: str = os.getenv("DATE_LITERAL_FORMAT", "%d.%m.%Y")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
