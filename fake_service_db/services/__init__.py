"""Services — the imperative shell around the store query.

Invariants:
    - Services never write HTTP responses; they return Envelope values
    - Store access goes through the CustomerStore protocol
"""
