"""Read, edit and write CSV documents with index- and label-based access."""

__version__ = "0.1.0"
__all__ = ["converter", "document", "params", "parser"]