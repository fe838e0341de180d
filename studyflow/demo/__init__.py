"""Sample data for demos and tests."""
