"""OpenID Connect discovery and authorization endpoints with layered YAML and environment configuration."""

__version__ = "0.1.0"