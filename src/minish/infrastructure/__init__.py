"""Infrastructure layer: filesystem access for builtins and redirection."""
