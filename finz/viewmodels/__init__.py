"""ViewModel package for UI state and command surfaces.

Call context:
    ``finz/app/main.py`` and the views import concrete viewmodels from this
    package to bind widget callbacks to state transitions.

Dependencies:
    Modules in this package depend on domain types and use cases only.
    Widgets and storage adapters remain outside.
"""
