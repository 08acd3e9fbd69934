from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from hiring_funnel.db.base import Base


class RecPipelineStage(Base):
    __tablename__ = "pipeline_stages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    order: Mapped[int] = mapped_column("order", Integer, nullable=False, index=True)
    color: Mapped[str | None] = mapped_column(String(20), default="#3b82f6", nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # Explicit semantics; legacy rows leave both unset and rely on order/name conventions.
    is_terminal: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    stage_role: Mapped[str | None] = mapped_column(String(20), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
