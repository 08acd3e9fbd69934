from hiring_funnel.db.base import Base
from hiring_funnel.models.application import RecApplication
from hiring_funnel.models.job import RecJob
from hiring_funnel.models.pipeline_stage import RecPipelineStage
from hiring_funnel.models.stage_history import RecStageTransition
from hiring_funnel.models.user import RecUser

__all__ = [
    "Base",
    "RecApplication",
    "RecJob",
    "RecPipelineStage",
    "RecStageTransition",
    "RecUser",
]
