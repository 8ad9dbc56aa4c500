"""sfmcp — Salesforce CLI tool server with quota-aware manifest management."""

__version__ = "0.1.0"
