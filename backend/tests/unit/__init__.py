"""
Unit tests package.

Isolated tests for rules, validators, DTOs, security helpers and services
with mocked repositories; nothing here touches the database or HTTP.
"""
