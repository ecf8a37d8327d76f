"""Placement Portal API client.

Async client for the campus placement portal backend: request lifecycle
(auth, retry, error normalization) and the admin feature services.
"""

__version__ = "1.0.0"
