"""Save-game format, atomic file I/O, validation and load planning for a store-building simulation."""

__version__ = "0.1.0"
__all__ = ["types", "io", "validation", "load", "extract", "quick"]