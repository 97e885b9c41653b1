"""Client-side record exploration engine.

This package projects raw rows into record view models and narrows
them through field filters, free-text search, and per-record field search.
"""
