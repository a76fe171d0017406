"""Tkinter views (UI only). Widgets receive callbacks, view models and the
``Environment`` through their constructors."""
