"""
Endpoint modules for the REST API.

Each module in this package defines an APIRouter for a specific
domain (auth, users, items, chats, messages, disposal centers,
events).  The routers are aggregated in ``api/router.py``.
"""
