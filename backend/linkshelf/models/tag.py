from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import relationship
from linkshelf.core.database import Base, utcnow
from linkshelf.models.link import link_tags


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)  # Stored as entered, e.g. "Technology"

    # Metadata
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    user = relationship("User", back_populates="tags")
    links = relationship(
        "Link",
        secondary=link_tags,
        back_populates="tags",
        order_by="Link.created_at.desc()",
    )

    # Tag names are unique per user regardless of case
    __table_args__ = (
        Index("ix_tags_user_id_lower_name", user_id, func.lower(name), unique=True),
    )

    @property
    def link_count(self) -> int:
        return len(self.links)
