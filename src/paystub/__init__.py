"""Pay stub calculation, composition and rendering."""

__version__ = "0.1.0"
