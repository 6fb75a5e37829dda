"""Customer Schema — per-row shape of the customer collection.

Invariants:
    - name must be a string; a NULL or non-text column is a decode failure
    - id is optional: the current query selects only name
"""

from pydantic import BaseModel


class Customer(BaseModel):
    """One customer row, validated strictly before it reaches a response."""
    id: str = ""
    name: str
