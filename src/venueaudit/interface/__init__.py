"""Interface layer: the command-line surface."""
