# path: src/runtime/__init__.py

"""
Runtime wiring package for the variant datagen.

Holds the run context that stitches together:
- archives  (mod archive reading)
- semantics (tags, recipe classification, mapping reconciliation)
- synthesis (generated recipes + writer)

Usage:
    python -m cli.datagen --mods mods --out generated
"""
