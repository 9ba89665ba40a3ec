from sqlalchemy import Column, String, Integer, Text, CheckConstraint
from sqlalchemy.orm import deferred

from database import Base


class BookRecord(Base):
    """
    Persisted row of a Book aggregate.

    Columns:
    - key: opaque identity of the aggregate
    - title: core field, loaded with the row
    - content: deferred field, only SELECTed on first attribute access
    - version: optimistic concurrency counter, bumped on every UPDATE
    """
    __tablename__ = 'books'

    key = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    content = deferred(Column(Text, nullable=False, default=''))
    version = Column(Integer, nullable=False)

    __mapper_args__ = {
        'version_id_col': version,
    }

    __table_args__ = (
        CheckConstraint("key != ''"),
    )

    def __repr__(self) -> str:
        return f"<BookRecord key={self.key!r} version={self.version}>"


books_table = BookRecord.__table__
