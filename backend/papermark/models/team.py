from datetime import datetime

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from papermark.database import Base, new_id, utcnow


class UserTeam(Base):
    __tablename__ = "users_teams"

    team_id: Mapped[str] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    role: Mapped[str] = mapped_column(String(16), default="MEMBER", nullable=False)  # ADMIN, MANAGER, MEMBER

    team = relationship("Team", back_populates="users")
    user = relationship("User", back_populates="teams")


class Team(Base):
    __tablename__ = "teams"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)

    users = relationship("UserTeam", back_populates="team", cascade="all, delete-orphan")
    datarooms = relationship("Dataroom", back_populates="team", cascade="all, delete-orphan")
    documents = relationship("Document", back_populates="team", cascade="all, delete-orphan")
