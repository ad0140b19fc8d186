"""Dance partner discovery, ranking and contact requests."""

__version__ = "0.3.0"
