"""Shared models, settings and utilities for the country atlas."""
