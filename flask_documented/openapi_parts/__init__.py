"""Modular pieces for the OpenAPI publisher.

This package holds constants, helpers, the route registration view of the
Flask URL map, and the operation/schema builders the publisher imports.
"""

__all__ = [
    "constants",
    "helpers",
    "registrations",
    "route",
    "schemas",
]
