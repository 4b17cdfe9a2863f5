"""Library circulation desk: catalogue, loans, reservations, history and a command shell."""

__version__ = "0.1.0"
__all__ = ["models", "storage", "catalog", "cli"]