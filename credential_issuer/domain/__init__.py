"""Domain layer - credential rules with no framework dependencies.

Structure:
- enums: credential purposes and notification types
- errors: credential failure types returned inside Result
- value_objects: sub-pillars, external tokens, email reset payloads
- notifications: tagged notification variants and their rendering
- protocols: ports implemented by infrastructure (store, hashing, delivery, logging)
"""
