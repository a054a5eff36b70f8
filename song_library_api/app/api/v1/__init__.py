"""
Version 1 of the Song Library API, mounted under ``/api/v1``.
"""
