"""Infrastructure Layer — store connection pool and logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Store failures leave this layer as DataAccessError or StoreConnectionError
"""
