"""
Integration tests package.

Flask test client and repository tests against the in-memory SQLite
database, with tables recreated for every test.
"""
