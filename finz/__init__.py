"""FINZ personal budget desktop application (Tkinter, MVVM + Hexagonal)."""

__version__ = "0.1.0"
