"""plughealth - Recency-weighted health monitor for installed plugins."""

__version__ = "0.1.0"
