"""JSON Patch generation for identity-management objects."""

__version__ = "0.1.0"
__all__ = ["builder", "builders", "models", "operations"]