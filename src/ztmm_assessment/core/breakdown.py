"""Stage breakdown calculation for the flat item+response encoding.

Each assessable item sits at exactly one stage and has zero or one response.
Items without a response only count toward ``total_items``; responded items
are bucketed by status:

    Fully Implemented, Superseded  -> completed
    Partially Implemented          -> in progress
    Not Implemented                -> not started

``completion_percentage`` here is completed / assessed. The compact decoder
divides by total instead; both behaviours are kept per encoding.
"""

from collections.abc import Callable, Collection, Iterable, Mapping
from dataclasses import dataclass
from typing import NamedTuple

from ztmm_assessment.core.models import (
    AssessmentResponse,
    DetailedAssessmentItem,
    FunctionCapability,
    StageBreakdown,
    TechnologyProcess,
)
from ztmm_assessment.core.stages import AssessmentStatus, MaturityStage, MaturityStatus


def percent(part: int, whole: int) -> int:
    """Return ``round(100 * part / whole)`` rounding halves up, 0 when whole is 0.

    Integer arithmetic keeps the result exact: percent(1, 8) == 13.
    """
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


@dataclass
class StageTally:
    """Mutable per-call counter used while building a single breakdown."""

    total: int = 0
    assessed: int = 0
    completed: int = 0
    in_progress: int = 0
    not_started: int = 0

    def add_unassessed(self) -> None:
        self.total += 1

    def add(self, status: AssessmentStatus) -> None:
        self.total += 1
        self.assessed += 1
        if status.is_completed:
            self.completed += 1
        elif status is AssessmentStatus.PARTIALLY_IMPLEMENTED:
            self.in_progress += 1
        elif status is AssessmentStatus.NOT_IMPLEMENTED:
            self.not_started += 1

    def to_breakdown(self, stage: MaturityStage, completion_base: int) -> StageBreakdown:
        """Freeze the tally into a StageBreakdown.

        Args:
            stage: Stage the tally was collected for.
            completion_base: Denominator for completion_percentage.
        """
        return StageBreakdown(
            stage=stage,
            total_items=self.total,
            assessed_items=self.assessed,
            completed_items=self.completed,
            in_progress_items=self.in_progress,
            not_started_items=self.not_started,
            percentage=percent(self.assessed, self.total),
            completion_percentage=percent(self.completed, completion_base),
            status=calculate_maturity_status(
                assessed_items=self.assessed,
                completed_items=self.completed,
                in_progress_items=self.in_progress,
                not_started_items=self.not_started,
            ),
        )


class _Counts(NamedTuple):
    assessed: int
    completed: int
    in_progress: int
    not_started: int


# Ordered decision table: the first matching rule wins.
_STATUS_RULES: tuple[tuple[Callable[[_Counts], bool], MaturityStatus], ...] = (
    (lambda c: c.assessed == 0, MaturityStatus.NOT_ASSESSED),
    (lambda c: c.completed == c.assessed and c.completed > 0, MaturityStatus.COMPLETED),
    (lambda c: c.in_progress > 0 or c.completed > 0, MaturityStatus.IN_PROGRESS),
    (lambda c: c.not_started == c.assessed, MaturityStatus.NOT_STARTED),
)


def calculate_maturity_status(
    *,
    assessed_items: int,
    completed_items: int,
    in_progress_items: int,
    not_started_items: int,
) -> MaturityStatus:
    """Classify a stage from its bucket counts.

    Priority order:
        1. nothing assessed                     -> not-assessed
        2. every assessed item completed        -> completed
        3. anything in progress or completed    -> in-progress
        4. every assessed item not started      -> not-started
        5. otherwise                            -> not-assessed

    Returns:
        The first MaturityStatus whose rule matches.
    """
    counts = _Counts(assessed_items, completed_items, in_progress_items, not_started_items)
    for rule, status in _STATUS_RULES:
        if rule(counts):
            return status
    return MaturityStatus.NOT_ASSESSED


def index_responses(
    responses: Iterable[AssessmentResponse],
) -> dict[int, AssessmentResponse]:
    """Key responses by item id. The first response recorded for an item wins."""
    by_item: dict[int, AssessmentResponse] = {}
    for response in responses:
        by_item.setdefault(response.tech_process_id, response)
    return by_item


def calculate_stage_breakdown(
    stage: MaturityStage,
    items: Iterable[TechnologyProcess],
    responses_by_item: Mapping[int, AssessmentResponse],
) -> StageBreakdown:
    """Bucket the items of one stage by their response status.

    Args:
        stage: Stage being summarised.
        items: Items assigned to this stage within the scope.
        responses_by_item: Responses keyed by item id (see index_responses).
            Responses for items outside ``items`` are ignored.

    Returns:
        Un-annotated StageBreakdown; completion_percentage is over assessed items.
    """
    tally = StageTally()
    for item in items:
        response = responses_by_item.get(item.id)
        if response is None:
            tally.add_unassessed()
        else:
            tally.add(response.status)
    return tally.to_breakdown(stage, completion_base=tally.assessed)


class FlatAssessmentSource:
    """IStageBreakdownSource over flat TechnologyProcess items and responses."""

    encoding = "flat"

    def __init__(
        self,
        items: Iterable[TechnologyProcess],
        responses: Iterable[AssessmentResponse],
    ) -> None:
        self._items: tuple[TechnologyProcess, ...] = tuple(items)
        self._responses: Mapping[int, AssessmentResponse] = index_responses(responses)

    def _items_in(self, function_ids: Collection[int]) -> list[TechnologyProcess]:
        return [item for item in self._items if item.function_capability_id in function_ids]

    def stage_breakdown(
        self,
        stage: MaturityStage,
        function_ids: Collection[int],
    ) -> StageBreakdown:
        stage_items = [item for item in self._items_in(function_ids) if item.stage == stage]
        return calculate_stage_breakdown(stage, stage_items, self._responses)

    def scope_totals(self, function_ids: Collection[int]) -> tuple[int, int]:
        scope_items = self._items_in(function_ids)
        assessed = sum(1 for item in scope_items if item.id in self._responses)
        return assessed, len(scope_items)

    def describe_items(
        self,
        function: FunctionCapability,
        pillar_name: str,
        unassessed_label: str,
    ) -> list[DetailedAssessmentItem]:
        rows: list[DetailedAssessmentItem] = []
        for item in self._items_in({function.id}):
            response = self._responses.get(item.id)
            rows.append(
                DetailedAssessmentItem(
                    pillar_name=pillar_name,
                    function_capability_name=function.name,
                    function_capability_type=function.type,
                    name=item.name,
                    description=item.description,
                    type=item.type,
                    maturity_stage_name=item.stage.label,
                    status=response.status.value if response else unassessed_label,
                    notes=response.notes if response else "",
                    stage_index=int(item.stage),
                )
            )
        return rows
