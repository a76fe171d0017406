"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports: the SQLite-backed
    persistence controller and the JSON user-settings store.

Dependencies:
    Individual submodules depend on ``sqlite3``, filesystem APIs, and domain
    protocol definitions.

Call context:
    Imported by the app bootstrap (for runtime wiring) and by tests.
"""
