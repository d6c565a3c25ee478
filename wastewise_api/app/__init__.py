"""
Application package initializer.

The service is organised in layers: ``core`` (configuration, logging,
security, the in-memory store, validation), ``schemas`` (pydantic
records and payloads), ``services`` (the storage facade, the enriched
chat view and sample-data seeding) and ``api`` (HTTP routes).
"""

from .main import app, create_app  # noqa: F401
