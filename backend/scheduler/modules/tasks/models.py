from sqlalchemy import Column, Index, Integer, String, Text

from scheduler.db import Base


class Task(Base):
    __tablename__ = "scheduler"
    __table_args__ = (Index("idx_scheduler_date", "date"),)

    Id = Column("id", Integer, primary_key=True, autoincrement=True)
    Date = Column("date", String(8), nullable=False, default="")
    Title = Column("title", String(255), nullable=False, default="")
    Comment = Column("comment", Text, nullable=False, default="")
    Repeat = Column("repeat", String(128), nullable=False, default="")
