"""Pure projection calculations."""
