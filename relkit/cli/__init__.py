"""relkit command-line interface."""
