"""Scheduling and statistics engine."""
