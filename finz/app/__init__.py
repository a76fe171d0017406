"""Application composition layer for the Tkinter GUI.

The bootstrap in this package owns the persistence handle, builds the
explicit view environment and mounts the root view without placing business
logic in views.
"""
