"""Shared building blocks for the prefix tools."""
