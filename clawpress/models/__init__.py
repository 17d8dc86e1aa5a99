"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Flat schema: no cascades, no soft deletes, no versioning

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all runs
"""

from clawpress.models.user import User  # noqa: F401
from clawpress.models.post import Post  # noqa: F401
from clawpress.models.like import Like  # noqa: F401
from clawpress.models.comment import Comment  # noqa: F401
