from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from hiring_funnel.db.base import Base


class RecApplication(Base):
    __tablename__ = "applications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    job_id: Mapped[int] = mapped_column(ForeignKey("jobs.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    email: Mapped[str] = mapped_column(String(255), default="", nullable=False)

    status: Mapped[str] = mapped_column(String(50), default="submitted", nullable=False, index=True)
    source: Mapped[str | None] = mapped_column(String(50), default="public_apply", nullable=True)
    applied_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    current_stage: Mapped[int | None] = mapped_column(ForeignKey("pipeline_stages.id"), nullable=True, index=True)
    # Last-known transition cache; the stage history table is authoritative.
    stage_changed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    stage_changed_by: Mapped[int | None] = mapped_column(ForeignKey("users.id"), nullable=True)
