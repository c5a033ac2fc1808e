"""Services that orchestrate multi-file searches."""
