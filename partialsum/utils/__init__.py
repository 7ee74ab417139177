"""Hashing, record format, path and traversal helpers."""
