"""User-facing interfaces for citesmith."""
