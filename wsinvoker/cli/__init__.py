"""Command-line interface for wsinvoker."""
