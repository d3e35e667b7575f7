"""Utility functions for repwise."""
