"""Version information for lean-identity."""

__version__ = "0.1.0"
