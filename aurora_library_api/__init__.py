"""
Top-level package for the Aurora Library API.

The HTTP application lives in ``aurora_library_api.app`` and a small
``requests`` based client for it in ``aurora_library_api.client``.
"""

__all__ = []
