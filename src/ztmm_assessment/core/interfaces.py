"""Abstract interfaces (Protocol classes) for the maturity engine.

Two seams:

- ``IStageBreakdownSource`` is the "decode to StageBreakdown" capability. The
  flat item+response encoding and the compact achieved/target encoding both
  implement it, so gating and resolution are written once against the common
  breakdown shape.
- ``IAssessmentSnapshotRepository`` is the read-only storage collaborator.
  Its bulk reads are the only suspension points; everything after them is
  synchronous, pure computation.
"""

from collections.abc import Collection
from typing import Protocol, runtime_checkable

from ztmm_assessment.core.models import (
    Assessment,
    AssessmentResponse,
    DetailedAssessmentItem,
    FunctionCapability,
    MaturityStageImplementation,
    Pillar,
    ProcessTechnologyGroup,
    StageBreakdown,
    TechnologyProcess,
)
from ztmm_assessment.core.stages import MaturityStage


@runtime_checkable
class IStageBreakdownSource(Protocol):
    """Decodes one input encoding into per-stage breakdowns for a scope."""

    encoding: str

    def stage_breakdown(
        self,
        stage: MaturityStage,
        function_ids: Collection[int],
    ) -> StageBreakdown:
        """Build the un-annotated breakdown for one stage across the given functions."""
        ...

    def scope_totals(self, function_ids: Collection[int]) -> tuple[int, int]:
        """Return (assessed_items, total_items) across the given functions."""
        ...

    def describe_items(
        self,
        function: FunctionCapability,
        pillar_name: str,
        unassessed_label: str,
    ) -> list[DetailedAssessmentItem]:
        """Return unsorted detail rows for every item of one function."""
        ...


@runtime_checkable
class IAssessmentSnapshotRepository(Protocol):
    """Read-only bulk access to an assessment snapshot."""

    async def list_maturity_stages(self) -> list[MaturityStage]:
        """List the configured maturity stages."""
        ...

    async def list_pillars(self) -> list[Pillar]:
        """List all pillars."""
        ...

    async def list_function_capabilities(self) -> list[FunctionCapability]:
        """List all functions and capabilities, each tagged with its pillar."""
        ...

    async def list_technology_processes(self) -> list[TechnologyProcess]:
        """List flat-model assessable items."""
        ...

    async def list_assessment_responses(self) -> list[AssessmentResponse]:
        """List flat-model responses keyed by item id."""
        ...

    async def list_process_technology_groups(self) -> list[ProcessTechnologyGroup]:
        """List compact-model item-groups."""
        ...

    async def list_maturity_stage_implementations(
        self,
    ) -> list[MaturityStageImplementation]:
        """List per-stage descriptions placing groups at stages."""
        ...

    async def list_assessments(self) -> list[Assessment]:
        """List consolidated compact-model assessments keyed by group id."""
        ...
