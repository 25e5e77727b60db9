"""History API tests."""
