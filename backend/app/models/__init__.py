"""ORM Models - SQLAlchemy declarative models for users and msgs.

Invariants:
    - All models inherit from Base (db/base.py)
    - Only the DAO (infrastructure/chat_dao.py) reads or writes these rows

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata is complete before create_all
"""

from app.models.user import User  # noqa: F401
from app.models.msg import Msg  # noqa: F401
