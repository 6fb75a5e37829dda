"""Pydantic Schemas — wire and row shapes validated at the system boundary.

Invariants:
    - Envelope is the only response document of the customer endpoint
    - Customer rows are validated before their names are used
"""
