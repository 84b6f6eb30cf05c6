"""tripmap: multi-stop trip planning with routes, lodging and weather."""

__version__ = "1.0.0"
