"""Test suite for the credential issuer.

Test structure:
- unit/: Services and value objects with mocked collaborators
- integration/: Adapters and services against SQLite, bcrypt and a mocked
  notification service
"""
