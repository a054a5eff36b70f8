"""
Application package initializer.

The project is organised into layers: ``schemas`` (the song entity),
``repositories`` (storage gateway), ``services`` (catalog service),
``api`` (HTTP adapter, versioned under ``api/<version>/``) and
``core`` (configuration, logging, database bootstrap, errors).
"""

from .main import app  # noqa: F401
