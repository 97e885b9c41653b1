"""Interactive explorer session layer.

This package owns session state snapshots, field metadata caching,
debounced entry points, and user-facing notifications.
"""
