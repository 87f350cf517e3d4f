"""genesis-tracker: local-first fitness and habit tracking."""

__version__ = "0.1.0"
