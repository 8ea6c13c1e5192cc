"""Programmatic enrichment: configuration, parallel detail fetching and merging."""
