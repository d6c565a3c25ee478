"""
Top-level package for the WasteWise API.

All functionality lives in submodules under ``app``; importing
``wastewise_api.app.main`` builds the ASGI application.
"""

__all__ = []
