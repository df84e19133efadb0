# tests/fakes/__init__.py
