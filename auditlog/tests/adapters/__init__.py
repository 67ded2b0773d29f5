"""Integration tests for adapter implementations.

These tests exercise adapters against real temporary directories
to validate correct translation between core domain models and
files on disk.
"""
