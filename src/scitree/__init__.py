"""scitree - upload registry and shared star annotations for a Tree of Science."""

__version__ = "0.1.0"
