"""HVAC system sizing, a SQLite equipment catalogue, and quoting of compatible bundles."""

__version__ = "0.1.0"