"""Spaceflight News API client, schema-driven executor and table migration."""

__version__ = "0.1.0"
