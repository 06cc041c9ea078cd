"""Command line tools for client IP resolution."""
