from datetime import datetime

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from papermark.database import Base, new_id, utcnow


class Document(Base):
    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    team_id: Mapped[str] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str | None] = mapped_column(String(32), nullable=True)  # pdf, sheet, docs, ...
    created_at: Mapped[datetime] = mapped_column(default=utcnow)

    team = relationship("Team", back_populates="documents")
    dataroom_links = relationship("DataroomDocument", back_populates="document")
