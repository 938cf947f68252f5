"""Adapter package for transport-specific failure types.

Purpose:
    Bridge concrete HTTP client failures (``requests`` exceptions and
    responses, the typed ``ApiError`` family) onto the domain ``FailureView``.

Dependencies:
    ``requests`` and the domain package.
"""
