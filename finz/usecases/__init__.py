"""Use-case layer for orchestrating GUI workflows.

Each module coordinates domain objects and the data-access context without
touching widgets, preserving MVVM + Hexagonal boundaries.
"""
