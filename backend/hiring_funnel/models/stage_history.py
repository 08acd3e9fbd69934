from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from hiring_funnel.db.base import Base


class RecStageTransition(Base):
    """
    One row of `application_stage_history`. Append-only: written by the stage-move
    workflow, removed only by cascade when the application is deleted.
    """

    __tablename__ = "application_stage_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    application_id: Mapped[int] = mapped_column(
        ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    from_stage: Mapped[int | None] = mapped_column(ForeignKey("pipeline_stages.id"), nullable=True)
    to_stage: Mapped[int] = mapped_column(ForeignKey("pipeline_stages.id"), nullable=False, index=True)
    changed_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    changed_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False, index=True)
