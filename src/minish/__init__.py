"""minish: a minimal interactive shell with redirection and pipes."""

__version__ = "0.1.0"
