"""Core types, configuration and errors for scopegrep."""
