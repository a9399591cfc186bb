"""Service layer running maturity report passes over a snapshot repository.

The service awaits the repository's bulk reads, picks the input encoding,
and hands in-memory collections to the pure engine. Every pass builds fresh
local structures, so concurrent report requests need no synchronisation.

No framework or persistence imports belong here; the repository is injected.
"""

import structlog

from ztmm_assessment.core.aggregator import HierarchyAggregator
from ztmm_assessment.core.breakdown import FlatAssessmentSource, percent
from ztmm_assessment.core.compact import CompactAssessmentSource
from ztmm_assessment.core.interfaces import (
    IAssessmentSnapshotRepository,
    IStageBreakdownSource,
)
from ztmm_assessment.core.models import DetailedAssessmentItem, MaturityReport
from ztmm_assessment.settings import Settings

logger = structlog.get_logger(__name__)


class FunctionNotFoundError(Exception):
    """Raised when a detail view is requested for an unknown function id."""


class MaturityReportService:
    """Builds maturity reports and function detail views.

    Depends only on the snapshot repository and settings injected at
    construction time.
    """

    def __init__(
        self,
        snapshot_repository: IAssessmentSnapshotRepository,
        settings: Settings | None = None,
    ) -> None:
        """Initialise the service.

        Args:
            snapshot_repository: Read-only source of the assessment snapshot.
            settings: Engine settings; defaults to environment-driven Settings.
        """
        self._repository = snapshot_repository
        self._settings = settings or Settings()

    async def _load_source(self) -> IStageBreakdownSource:
        """Read the collections for the configured encoding and wrap them."""
        encoding = self._settings.assessment_encoding

        groups = []
        if encoding != "flat":
            groups = await self._repository.list_process_technology_groups()

        if encoding == "compact" or (encoding == "auto" and groups):
            implementations = await self._repository.list_maturity_stage_implementations()
            assessments = await self._repository.list_assessments()
            return CompactAssessmentSource(groups, implementations, assessments)

        items = await self._repository.list_technology_processes()
        responses = await self._repository.list_assessment_responses()
        return FlatAssessmentSource(items, responses)

    async def build_report(self) -> MaturityReport:
        """Run one full report pass over the current snapshot.

        Returns:
            MaturityReport with one PillarSummary per pillar, in storage order,
            and overall assessed/total roll-ups.
        """
        stages = sorted(set(await self._repository.list_maturity_stages()))
        pillars = await self._repository.list_pillars()
        functions = await self._repository.list_function_capabilities()
        source = await self._load_source()

        summaries = HierarchyAggregator(source).build_pillar_summaries(pillars, functions, stages)

        assessed = sum(s.assessed_items for s in summaries)
        total = sum(s.total_items for s in summaries)

        logger.info(
            "Maturity report built",
            encoding=source.encoding,
            pillar_count=len(summaries),
            function_count=sum(len(s.functions) for s in summaries),
            pillars_with_gap=sum(1 for s in summaries if s.has_sequential_maturity_gap),
            functions_with_gap=sum(
                1 for s in summaries for f in s.functions if f.has_sequential_maturity_gap
            ),
            assessed_items=assessed,
            total_items=total,
        )

        return MaturityReport(
            encoding=source.encoding,
            pillars=tuple(summaries),
            assessed_items=assessed,
            total_items=total,
            assessment_percentage=percent(assessed, total),
            stages=tuple(stages),
        )

    async def get_function_details(self, function_id: int) -> list[DetailedAssessmentItem]:
        """Return the ordered detail rows for one function.

        Args:
            function_id: Function or capability identifier.

        Returns:
            Detail rows ordered by stage, then item name.

        Raises:
            FunctionNotFoundError: If no function has this id.
        """
        functions = await self._repository.list_function_capabilities()
        function = next((f for f in functions if f.id == function_id), None)
        if function is None:
            logger.warning("Function not found for detail view", function_id=function_id)
            raise FunctionNotFoundError(f"Function {function_id} not found")

        pillars = await self._repository.list_pillars()
        aggregator = HierarchyAggregator(await self._load_source())
        return aggregator.build_function_details(
            function,
            pillars,
            unassessed_label=self._settings.unassessed_status_label,
        )
