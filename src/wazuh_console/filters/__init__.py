"""Operator filter language for in-memory agent lists."""
