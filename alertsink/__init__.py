"""Forward pipeline alerts to AlertManager-compatible webhook endpoints."""

__version__ = "0.1.0"
