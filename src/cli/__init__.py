# path: src/cli/__init__.py
"""Command-line entry points."""
