"""rescli: container lifecycle and account management CLI."""

__version__ = "0.1.0"
