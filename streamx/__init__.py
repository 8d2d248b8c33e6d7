"""StreamX: resilient multi-provider video metadata aggregation."""

__version__ = "1.0.0"
