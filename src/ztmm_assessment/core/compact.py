"""Compact assessment decoding: one achieved/target record per item-group.

An item-group spans several stages through per-stage implementation
descriptions but carries a single consolidated Assessment. For a stage with
index ``i`` the group's contribution is reconstructed from the two pointers:

    no assessment                                       -> unassessed
    achieved > i                                        -> completed (surpassed)
    achieved == i                                       -> by implementation status
    target == i, or achieved < i and status is not
    Not Implemented                                     -> by implementation status
    otherwise                                           -> not started

``completion_percentage`` for this encoding is completed / total items, unlike
the flat encoding which divides by assessed items.
"""

from collections import defaultdict
from collections.abc import Collection, Iterable, Mapping

from ztmm_assessment.core.breakdown import StageTally
from ztmm_assessment.core.models import (
    Assessment,
    DetailedAssessmentItem,
    FunctionCapability,
    MaturityStageImplementation,
    ProcessTechnologyGroup,
    StageBreakdown,
)
from ztmm_assessment.core.stages import AssessmentStatus, MaturityStage


def decode_stage_status(stage_index: int, assessment: Assessment) -> AssessmentStatus:
    """Reconstruct a group's per-stage status from its two-pointer assessment.

    Args:
        stage_index: 0-based index of the stage being decoded.
        assessment: The group's consolidated assessment.

    Returns:
        The status the group contributes at this stage.
    """
    achieved = assessment.achieved_index
    status = assessment.implementation_status

    if achieved > stage_index:
        return AssessmentStatus.FULLY_IMPLEMENTED
    if achieved == stage_index:
        return status
    if assessment.target_index == stage_index or status is not AssessmentStatus.NOT_IMPLEMENTED:
        return status
    return AssessmentStatus.NOT_IMPLEMENTED


def index_assessments(assessments: Iterable[Assessment]) -> dict[int, Assessment]:
    """Key assessments by group id. The first assessment recorded for a group wins."""
    by_group: dict[int, Assessment] = {}
    for assessment in assessments:
        by_group.setdefault(assessment.process_technology_group_id, assessment)
    return by_group


def calculate_compact_stage_breakdown(
    stage: MaturityStage,
    groups: Iterable[ProcessTechnologyGroup],
    assessments_by_group: Mapping[int, Assessment],
) -> StageBreakdown:
    """Bucket the item-groups present at one stage.

    Args:
        stage: Stage being decoded.
        groups: Groups that have an implementation description at this stage.
        assessments_by_group: Assessments keyed by group id (see index_assessments).

    Returns:
        Un-annotated StageBreakdown; completion_percentage is over total items.
    """
    tally = StageTally()
    for group in groups:
        assessment = assessments_by_group.get(group.id)
        if assessment is None:
            tally.add_unassessed()
        else:
            tally.add(decode_stage_status(int(stage), assessment))
    return tally.to_breakdown(stage, completion_base=tally.total)


class CompactAssessmentSource:
    """IStageBreakdownSource over item-groups and their consolidated assessments.

    A group is placed at every stage it has an implementation description for,
    so one group contributes one item to each of those stages.
    """

    encoding = "compact"

    def __init__(
        self,
        groups: Iterable[ProcessTechnologyGroup],
        implementations: Iterable[MaturityStageImplementation],
        assessments: Iterable[Assessment],
    ) -> None:
        self._groups: tuple[ProcessTechnologyGroup, ...] = tuple(groups)
        stages_by_group: defaultdict[int, set[MaturityStage]] = defaultdict(set)
        for implementation in implementations:
            stages_by_group[implementation.process_technology_group_id].add(implementation.stage)
        self._stages_by_group: Mapping[int, frozenset[MaturityStage]] = {
            group_id: frozenset(stages) for group_id, stages in stages_by_group.items()
        }
        self._assessments: Mapping[int, Assessment] = index_assessments(assessments)

    def _groups_in(self, function_ids: Collection[int]) -> list[ProcessTechnologyGroup]:
        return [group for group in self._groups if group.function_capability_id in function_ids]

    def _stages_of(self, group: ProcessTechnologyGroup) -> frozenset[MaturityStage]:
        return self._stages_by_group.get(group.id, frozenset())

    def stage_breakdown(
        self,
        stage: MaturityStage,
        function_ids: Collection[int],
    ) -> StageBreakdown:
        stage_groups = [
            group for group in self._groups_in(function_ids) if stage in self._stages_of(group)
        ]
        return calculate_compact_stage_breakdown(stage, stage_groups, self._assessments)

    def scope_totals(self, function_ids: Collection[int]) -> tuple[int, int]:
        assessed = 0
        total = 0
        for group in self._groups_in(function_ids):
            cells = len(self._stages_of(group))
            total += cells
            if group.id in self._assessments:
                assessed += cells
        return assessed, total

    def describe_items(
        self,
        function: FunctionCapability,
        pillar_name: str,
        unassessed_label: str,
    ) -> list[DetailedAssessmentItem]:
        rows: list[DetailedAssessmentItem] = []
        for group in self._groups_in({function.id}):
            assessment = self._assessments.get(group.id)
            achieved = assessment.achieved_index if assessment else -1
            rows.append(
                DetailedAssessmentItem(
                    pillar_name=pillar_name,
                    function_capability_name=function.name,
                    function_capability_type=function.type,
                    name=group.name,
                    description=group.description,
                    type=group.type,
                    maturity_stage_name=MaturityStage(achieved).label if achieved >= 0 else "",
                    status=assessment.implementation_status.value if assessment else unassessed_label,
                    notes=assessment.notes if assessment else "",
                    stage_index=achieved,
                )
            )
        return rows
