"""Analytics engine and report service for advertising account performance."""

__version__ = "0.1.0"
