from datetime import datetime

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from papermark.database import Base, new_id, utcnow


class Dataroom(Base):
    __tablename__ = "datarooms"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    team_id: Mapped[str] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)

    team = relationship("Team", back_populates="datarooms")
    folders = relationship("DataroomFolder", back_populates="dataroom", cascade="all, delete-orphan")
    documents = relationship("DataroomDocument", back_populates="dataroom", cascade="all, delete-orphan")


class DataroomFolder(Base):
    __tablename__ = "dataroom_folders"
    __table_args__ = (UniqueConstraint("dataroom_id", "path", name="uq_dataroom_folder_path"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    dataroom_id: Mapped[str] = mapped_column(
        ForeignKey("datarooms.id", ondelete="CASCADE"), index=True, nullable=False
    )
    parent_id: Mapped[str | None] = mapped_column(
        ForeignKey("dataroom_folders.id", ondelete="CASCADE"), index=True, nullable=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # e.g. "/reports/q1-2024"; set once at creation, not re-derived on rename
    path: Mapped[str] = mapped_column(String(1024), nullable=False)
    order_index: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    dataroom = relationship("Dataroom", back_populates="folders")
    parent = relationship("DataroomFolder", remote_side="DataroomFolder.id", back_populates="child_folders")
    child_folders = relationship("DataroomFolder", back_populates="parent")
    documents = relationship("DataroomDocument", back_populates="folder")


class DataroomDocument(Base):
    __tablename__ = "dataroom_documents"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    dataroom_id: Mapped[str] = mapped_column(
        ForeignKey("datarooms.id", ondelete="CASCADE"), index=True, nullable=False
    )
    document_id: Mapped[str] = mapped_column(
        ForeignKey("documents.id", ondelete="CASCADE"), index=True, nullable=False
    )
    folder_id: Mapped[str | None] = mapped_column(
        ForeignKey("dataroom_folders.id", ondelete="SET NULL"), index=True, nullable=True
    )
    order_index: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)

    dataroom = relationship("Dataroom", back_populates="documents")
    document = relationship("Document", back_populates="dataroom_links")
    folder = relationship("DataroomFolder", back_populates="documents")
