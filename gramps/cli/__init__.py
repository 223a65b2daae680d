"""Command line interface for gramps."""
