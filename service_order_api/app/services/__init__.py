"""
Service layer abstraction.

Services hold the report logic (parameter validation, SQL filter
composition, hours rollup) so that API handlers stay thin and the
logic can be tested without an HTTP client.
"""
