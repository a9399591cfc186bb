"""In-memory snapshot repository.

Implements IAssessmentSnapshotRepository over a validated snapshot. Entities
are converted once at construction and handed out as fresh lists, so callers
can never mutate the repository's state.
"""

from collections.abc import Mapping
from typing import Any

import structlog

from ztmm_assessment.api.schemas import AssessmentSnapshotSchema
from ztmm_assessment.core.models import (
    Assessment,
    AssessmentResponse,
    FunctionCapability,
    MaturityStageImplementation,
    Pillar,
    ProcessTechnologyGroup,
    TechnologyProcess,
)
from ztmm_assessment.core.stages import MaturityStage

logger = structlog.get_logger(__name__)


class InMemorySnapshotRepository:
    """Read-only repository backed by one AssessmentSnapshotSchema."""

    def __init__(self, snapshot: AssessmentSnapshotSchema) -> None:
        """Convert a validated snapshot into core entities.

        A snapshot without maturity stages falls back to the full fixed
        stage sequence.

        Args:
            snapshot: Validated snapshot.
        """
        stages = sorted({stage.to_entity() for stage in snapshot.maturity_stages})
        self._stages: tuple[MaturityStage, ...] = tuple(stages) or tuple(MaturityStage)
        self._pillars: tuple[Pillar, ...] = tuple(p.to_entity() for p in snapshot.pillars)
        self._functions: tuple[FunctionCapability, ...] = tuple(
            f.to_entity() for f in snapshot.function_capabilities
        )
        self._items: tuple[TechnologyProcess, ...] = tuple(
            i.to_entity() for i in snapshot.technologies_processes
        )
        self._responses: tuple[AssessmentResponse, ...] = tuple(
            r.to_entity() for r in snapshot.assessment_responses
        )
        self._groups: tuple[ProcessTechnologyGroup, ...] = tuple(
            g.to_entity() for g in snapshot.process_technology_groups
        )
        self._implementations: tuple[MaturityStageImplementation, ...] = tuple(
            i.to_entity() for i in snapshot.maturity_stage_implementations
        )
        self._assessments: tuple[Assessment, ...] = tuple(
            a.to_entity() for a in snapshot.assessments
        )

        logger.debug(
            "Snapshot loaded",
            version=snapshot.version,
            pillar_count=len(self._pillars),
            function_count=len(self._functions),
            item_count=len(self._items),
            group_count=len(self._groups),
        )

    @classmethod
    def from_export(cls, payload: Mapping[str, Any]) -> "InMemorySnapshotRepository":
        """Validate an exported-data mapping and build a repository from it.

        Raises:
            pydantic.ValidationError: If the payload is not a valid snapshot.
        """
        return cls(AssessmentSnapshotSchema.model_validate(payload))

    async def list_maturity_stages(self) -> list[MaturityStage]:
        return list(self._stages)

    async def list_pillars(self) -> list[Pillar]:
        return list(self._pillars)

    async def list_function_capabilities(self) -> list[FunctionCapability]:
        return list(self._functions)

    async def list_technology_processes(self) -> list[TechnologyProcess]:
        return list(self._items)

    async def list_assessment_responses(self) -> list[AssessmentResponse]:
        return list(self._responses)

    async def list_process_technology_groups(self) -> list[ProcessTechnologyGroup]:
        return list(self._groups)

    async def list_maturity_stage_implementations(self) -> list[MaturityStageImplementation]:
        return list(self._implementations)

    async def list_assessments(self) -> list[Assessment]:
        return list(self._assessments)
