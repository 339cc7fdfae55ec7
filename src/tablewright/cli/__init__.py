"""tablewright command-line interface."""
