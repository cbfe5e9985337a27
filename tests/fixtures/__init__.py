# tests/fixtures/__init__.py
"""Shared builders for process exports and callback payloads."""
