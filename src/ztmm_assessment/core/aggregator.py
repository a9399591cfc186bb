"""Hierarchy aggregation: Pillar -> Function -> Stage.

For every function, stage breakdowns are built over that function's items,
gated and resolved into a FunctionSummary. Pillar totals are the sum of the
function totals. Pillar breakdowns are recomputed directly over the union of
the pillar's items (not summed from function breakdowns), then gated; the
pillar's stages come from its resolved functions.

Stages with no items in a scope are not reported and therefore take no part
in gating for that scope.
"""

from collections.abc import Iterable, Sequence

import structlog

from ztmm_assessment.core.breakdown import percent
from ztmm_assessment.core.gating import validate_sequential_maturity
from ztmm_assessment.core.interfaces import IStageBreakdownSource
from ztmm_assessment.core.models import (
    DetailedAssessmentItem,
    FunctionCapability,
    FunctionSummary,
    Pillar,
    PillarSummary,
    StageBreakdown,
)
from ztmm_assessment.core.resolver import (
    calculate_overall_maturity_stage,
    calculate_pillar_maturity_stage,
)
from ztmm_assessment.core.stages import MaturityStage

logger = structlog.get_logger(__name__)

_ALL_STAGES: tuple[MaturityStage, ...] = tuple(MaturityStage)


class HierarchyAggregator:
    """Assembles pillar and function summaries from one breakdown source.

    Holds nothing but the injected, read-only source, so one instance can
    serve concurrent report passes.
    """

    def __init__(self, source: IStageBreakdownSource) -> None:
        """Initialise the aggregator.

        Args:
            source: Decoder for the flat or compact input encoding.
        """
        self._source = source

    def build_stage_breakdowns(
        self,
        function_ids: Iterable[int],
        stages: Sequence[MaturityStage] = _ALL_STAGES,
    ) -> tuple[StageBreakdown, ...]:
        """Build, filter and gate the stage breakdowns for a scope.

        Args:
            function_ids: Functions whose items make up the scope.
            stages: Stages to report; duplicates are ignored and the rest
                evaluated in stage order.

        Returns:
            Gated breakdowns for every stage that has at least one item.
        """
        scope = frozenset(function_ids)
        breakdowns = [self._source.stage_breakdown(stage, scope) for stage in sorted(set(stages))]
        reported = [breakdown for breakdown in breakdowns if breakdown.total_items > 0]
        return tuple(validate_sequential_maturity(reported))

    def build_function_summary(
        self,
        function: FunctionCapability,
        stages: Sequence[MaturityStage] = _ALL_STAGES,
    ) -> FunctionSummary:
        """Resolve one function into a FunctionSummary."""
        assessed, total = self._source.scope_totals({function.id})
        breakdowns = self.build_stage_breakdowns([function.id], stages)
        resolution = calculate_overall_maturity_stage(breakdowns)

        if resolution.has_gap:
            logger.debug(
                "Function sequential maturity gap",
                function_id=function.id,
                achieved_stage=resolution.stage.label,
                actual_stage=resolution.actual_stage.label,
            )

        return FunctionSummary(
            function_capability=function,
            assessed_items=assessed,
            total_items=total,
            assessment_percentage=percent(assessed, total),
            overall_maturity_stage=resolution.stage,
            actual_maturity_stage=resolution.actual_stage,
            maturity_stage_breakdown=breakdowns,
            has_sequential_maturity_gap=resolution.has_gap,
            sequential_maturity_explanation=resolution.explanation,
        )

    def build_pillar_summary(
        self,
        pillar: Pillar,
        functions: Iterable[FunctionCapability],
        stages: Sequence[MaturityStage] = _ALL_STAGES,
    ) -> PillarSummary:
        """Resolve one pillar and all of its functions.

        Args:
            pillar: The pillar to summarise.
            functions: All functions; those of other pillars are skipped.
            stages: Stages to report.
        """
        pillar_functions = [f for f in functions if f.pillar_id == pillar.id]
        summaries = tuple(self.build_function_summary(f, stages) for f in pillar_functions)

        assessed = sum(s.assessed_items for s in summaries)
        total = sum(s.total_items for s in summaries)
        breakdowns = self.build_stage_breakdowns([f.id for f in pillar_functions], stages)
        resolution = calculate_pillar_maturity_stage(summaries)

        return PillarSummary(
            pillar=pillar,
            functions=summaries,
            assessed_items=assessed,
            total_items=total,
            assessment_percentage=percent(assessed, total),
            overall_maturity_stage=resolution.stage,
            actual_maturity_stage=resolution.actual_stage,
            maturity_stage_breakdown=breakdowns,
            has_sequential_maturity_gap=resolution.has_gap,
            sequential_maturity_explanation=resolution.explanation,
        )

    def build_pillar_summaries(
        self,
        pillars: Iterable[Pillar],
        functions: Iterable[FunctionCapability],
        stages: Sequence[MaturityStage] = _ALL_STAGES,
    ) -> list[PillarSummary]:
        """Resolve every pillar, preserving input pillar order."""
        function_list = list(functions)
        return [self.build_pillar_summary(pillar, function_list, stages) for pillar in pillars]

    def build_function_details(
        self,
        function: FunctionCapability,
        pillars: Iterable[Pillar],
        unassessed_label: str = "Not Assessed",
    ) -> list[DetailedAssessmentItem]:
        """List the items of one function for a detail view.

        Rows are ordered by stage, then by item name.
        """
        pillar = next((p for p in pillars if p.id == function.pillar_id), None)
        rows = self._source.describe_items(
            function,
            pillar.name if pillar else "",
            unassessed_label,
        )
        return sorted(rows, key=lambda row: (row.stage_index, row.name.casefold(), row.name))
