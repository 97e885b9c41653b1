"""Record source collaborators.

This package lists record types and fields and fetches raw rows.
Sessions depend only on the record source protocol.
"""
