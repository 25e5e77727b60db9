"""Core model and algorithm tests."""
