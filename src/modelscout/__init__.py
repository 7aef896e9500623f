"""Model matching and cost estimation over a provider catalog."""

__version__ = "0.1.0"
