"""
Shared service utilities.

- http.py - ``requests`` session with retry/backoff, JSON GET helper that
  maps failures onto the error types in ``daily_highs.errors``.
"""
