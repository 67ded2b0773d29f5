"""Unit tests for core domain logic.

These tests exercise core business logic without touching the filesystem.
Storage is replaced with the in-memory fake from tests/fakes/.
"""
