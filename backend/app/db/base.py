"""SQLAlchemy Declarative Base - shared base class for the chat ORM models.

Invariants:
    - users and msgs both inherit from Base
    - Base is the single source of truth for table metadata
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all chat ORM models."""
    pass
