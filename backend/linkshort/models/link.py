from sqlalchemy import Column, Integer, String, DateTime, func
from ..database import Base


class Link(Base):
    """Short link model"""
    __tablename__ = "links"

    id = Column(Integer, primary_key=True, index=True)
    # The unique index is the authoritative duplicate check
    code = Column(String(32), unique=True, index=True, nullable=False)
    long_url = Column(String(2048), nullable=False)
    clicks = Column(Integer, nullable=False, default=0, server_default="0")
    last_clicked = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Link {self.code} -> {self.long_url}>"
