"""
Service layer.

``storage.Storage`` is the facade every handler goes through; the
other modules compose facade calls into response views or seed data.
Swapping the in-memory store for a database only touches the facade.
"""
