"""
Pydantic schema definitions for API payloads.

Schemas describe the bodies returned by the API and are separated from
the plain dictionaries kept by the storage layer.
"""
