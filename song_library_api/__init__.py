"""
Top-level package for the Song Library API.

All functionality lives in submodules under ``app``; the FastAPI
application itself is ``song_library_api.app.main:app``.
"""

__all__ = []
