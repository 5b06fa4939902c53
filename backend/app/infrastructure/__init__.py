"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/
    - All SQLAlchemy failures leave this layer as StoreError
"""
