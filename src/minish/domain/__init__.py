"""Domain layer: pure parsing types and error kinds (no I/O)."""
