import uuid

from sqlalchemy import Column, Text
from sqlalchemy.orm import relationship

from todoapp.database import Base


def generate_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "User"
    id = Column(Text, primary_key=True, default=generate_id)
    username = Column(Text, nullable=False)
    password = Column(Text, nullable=False)

    todos = relationship("Todo", back_populates="owner", passive_deletes="all")
