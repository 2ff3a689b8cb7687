"""Hashing, encoding and one-time-pad helpers."""
