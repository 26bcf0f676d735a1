"""
Test suite for the BGN collateralized issuers

Contains:
- tests/unit/          : Unit tests for individual modules and issuer scenarios
"""
