"""Configuration and console helpers shared by the prefix tools."""
