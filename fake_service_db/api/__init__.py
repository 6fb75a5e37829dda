"""API Layer — FastAPI routes, dependencies, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every non-probe response is an Envelope whose code equals the HTTP status
"""
