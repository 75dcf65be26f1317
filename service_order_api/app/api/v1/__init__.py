"""
Version 1 of the API.

Breaking changes to the report payload should be introduced in a new
version subpackage (e.g. ``v2``) to preserve backwards compatibility.
"""
