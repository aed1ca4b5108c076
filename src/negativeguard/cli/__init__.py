"""Command line interface for NegativeGuard."""
