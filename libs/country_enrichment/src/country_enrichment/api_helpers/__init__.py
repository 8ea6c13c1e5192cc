"""Helpers for the World Bank country and indicator endpoints."""
