from __future__ import annotations
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, JSON, DateTime, Index, func

from .authz import Base  # shared metadata for create_all


# Auth activity: sign-ins (including rejected ones), sign-outs, profile edits
class AuthEvent(Base):
    __tablename__ = 'auth_events'
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # NULL when nobody is signed in (rejected login)
    actor_user_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    actor_role: Mapped[Optional[str]] = mapped_column(String(32))
    action: Mapped[str] = mapped_column(String(64), nullable=False)
    entity: Mapped[Optional[str]] = mapped_column(String(64))
    entity_id: Mapped[Optional[str]] = mapped_column(String(64))
    remote_addr: Mapped[Optional[str]] = mapped_column(String(64))
    meta: Mapped[dict] = mapped_column(JSON, default=dict)
    created_at: Mapped[str] = mapped_column(DateTime(timezone=True), server_default=func.now())
    __table_args__ = (Index('ix_auth_events_action_created', 'action', 'created_at'),)
