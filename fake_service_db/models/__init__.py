"""ORM Models — SQLAlchemy mappings of the store tables this service reads.

Invariants:
    - All models inherit from Base (db/base.py)
"""

from fake_service_db.models.customer import CustomerRecord  # noqa: F401
