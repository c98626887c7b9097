from sqlalchemy import Boolean, Column, ForeignKey, Text, false
from sqlalchemy.orm import relationship

from todoapp.database import Base
from todoapp.models.user import generate_id


class Todo(Base):
    __tablename__ = "Todo"
    id = Column(Text, primary_key=True, default=generate_id)
    task = Column(Text, nullable=False)
    done = Column(Boolean, nullable=False, default=False, server_default=false())
    user_id = Column(
        "userId",
        Text,
        ForeignKey("User.id", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
    )

    owner = relationship("User", back_populates="todos")
