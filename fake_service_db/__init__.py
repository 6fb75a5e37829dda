"""fake-service-db — customer lookup service speaking the chained fake-service envelope.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
