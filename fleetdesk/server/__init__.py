"""
fleetdesk Server Package.

This package contains the web server implementation for the fleetdesk back office.
It includes the API definition, configuration, exception handling and the
workflow services that combine repositories with business rules.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and constants.
    exception_handlers: Mapping of domain errors to HTTP responses.
    middleware: Request tracing and timing.
    services: Dependencies and multi-step workflows.
"""
