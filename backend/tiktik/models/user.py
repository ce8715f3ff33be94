from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime

from tiktik.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar: Mapped[str | None] = mapped_column(String(512), nullable=True)
    channel_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    channel_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    channel_banner: Mapped[str | None] = mapped_column(String(512), nullable=True)
    # Cached count of subscription rows with channel_id == id
    subscriber_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)

    videos = relationship("Video", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
    playlists = relationship("Playlist", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
