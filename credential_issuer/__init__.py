"""Credential issuer.

Allocation and lifecycle management for student codes, one-time
verification codes and one-time secret tokens.
"""
