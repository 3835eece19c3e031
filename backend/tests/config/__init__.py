"""
Test configuration package.

``markers`` registers the custom pytest markers and tags collected tests
by location.
"""
