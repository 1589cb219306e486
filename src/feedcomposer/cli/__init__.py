"""Command-line interface for feedcomposer."""
