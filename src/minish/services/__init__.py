"""Service layer: line execution and the read-eval-print loop."""
