# tests/domains/__init__.py

"""
Endpoint tests grouped by business domain.
"""
