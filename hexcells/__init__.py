"""A networked turn-based strategy game of cells on a hexagonal field."""

__version__ = "0.1.0"
__all__ = ["chat", "client", "console", "game", "host", "layout", "protocol", "server", "widgets"]