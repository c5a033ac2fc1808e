"""Command-line interface for scopegrep."""
