"""Shared helpers: exceptions, logging and JSON conversion."""
