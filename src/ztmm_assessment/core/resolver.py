"""Achieved vs. actual maturity stage resolution.

Function level works from gated stage breakdowns:

- actual stage: highest completed stage; failing that, the stage just below
  the lowest in-progress stage; failing that, Traditional.
- achieved stage: walk stages in order and keep advancing while each stage is
  completed and reachable under gating.

Pillar level averages stage indices of the pillar's resolved functions and
always rounds the mean up (ceil). Three functions at Initial, Initial, Optimal
(indices 1, 1, 3) resolve to index ceil(5 / 3) = 2, Advanced.
"""

import math
from collections.abc import Sequence

import structlog

from ztmm_assessment.core.models import FunctionSummary, StageBreakdown, StageResolution
from ztmm_assessment.core.stages import MaturityStage, MaturityStatus

logger = structlog.get_logger(__name__)

_EXPLANATION_PREFIX = "Sequential maturity requirements"


def _join_stage_labels(stages: Sequence[MaturityStage]) -> str:
    labels = [stage.label for stage in stages]
    if len(labels) == 1:
        return labels[0]
    return ", ".join(labels[:-1]) + " and " + labels[-1]


def _actual_stage(breakdowns: Sequence[StageBreakdown]) -> MaturityStage:
    completed = [b.stage for b in breakdowns if b.status is MaturityStatus.COMPLETED]
    if completed:
        return max(completed)

    in_progress = [b.stage for b in breakdowns if b.status is MaturityStatus.IN_PROGRESS]
    if in_progress:
        lowest = min(in_progress)
        return MaturityStage(lowest - 1) if lowest > MaturityStage.first() else MaturityStage.first()

    return MaturityStage.first()


def _achieved_stage(breakdowns: Sequence[StageBreakdown]) -> MaturityStage:
    achieved = MaturityStage.first()
    for breakdown in breakdowns:
        if breakdown.status is not MaturityStatus.COMPLETED or not breakdown.can_advance_to_this_stage:
            break
        achieved = breakdown.stage
    return achieved


def _function_gap_explanation(
    breakdowns: Sequence[StageBreakdown],
    achieved: MaturityStage,
    actual: MaturityStage,
) -> str:
    actual_breakdown = next((b for b in breakdowns if b.stage == actual), None)
    blocked = actual_breakdown.blocked_by_previous_stages if actual_breakdown else ()
    if blocked:
        noun = "stage" if len(blocked) == 1 else "stages"
        return (
            f"{_EXPLANATION_PREFIX}: Cannot advance to {actual.label} stage until all "
            f"items in the {_join_stage_labels(blocked)} {noun} are completed."
        )
    return (
        f"{_EXPLANATION_PREFIX}: Progress at the {actual.label} stage cannot be claimed "
        f"until all items in earlier stages are completed. Sequentially achieved stage "
        f"is {achieved.label}."
    )


def calculate_overall_maturity_stage(breakdowns: Sequence[StageBreakdown]) -> StageResolution:
    """Resolve the gated and ungated stage for one function.

    Args:
        breakdowns: Gated breakdowns (see validate_sequential_maturity), in
            stage order.

    Returns:
        StageResolution with an explanation when achieved and actual differ.
    """
    actual = _actual_stage(breakdowns)
    achieved = _achieved_stage(breakdowns)
    has_gap = actual != achieved
    explanation = _function_gap_explanation(breakdowns, achieved, actual) if has_gap else None

    return StageResolution(
        stage=achieved,
        actual_stage=actual,
        has_gap=has_gap,
        explanation=explanation,
    )


def _ceil_mean_stage(stages: Sequence[MaturityStage]) -> MaturityStage:
    return MaturityStage(math.ceil(sum(int(stage) for stage in stages) / len(stages)))


def calculate_pillar_maturity_stage(functions: Sequence[FunctionSummary]) -> StageResolution:
    """Resolve the pillar stage from its resolved function summaries.

    Both stages are the ceil of the mean stage index across functions: the
    actual stage uses each function's ungated stage, the achieved stage uses
    each function's gated stage.

    Args:
        functions: Resolved summaries of every function in the pillar.

    Returns:
        StageResolution; Traditional with no gap for a pillar without functions.
    """
    if not functions:
        return StageResolution(stage=MaturityStage.first(), actual_stage=MaturityStage.first())

    actual = _ceil_mean_stage([f.actual_maturity_stage for f in functions])
    achieved = _ceil_mean_stage([f.overall_maturity_stage for f in functions])
    has_gap = actual != achieved

    explanation: str | None = None
    if has_gap:
        gapped = sum(1 for f in functions if f.has_sequential_maturity_gap)
        verb = "has" if gapped == 1 else "have"
        explanation = (
            f"{_EXPLANATION_PREFIX}: {gapped} of {len(functions)} functions {verb} "
            f"completed later stages before finishing earlier ones. The pillar is "
            f"credited at {achieved.label} instead of {actual.label}."
        )
        logger.debug(
            "Pillar sequential maturity gap",
            achieved_stage=achieved.label,
            actual_stage=actual.label,
            functions_with_gap=gapped,
            function_count=len(functions),
        )

    return StageResolution(
        stage=achieved,
        actual_stage=actual,
        has_gap=has_gap,
        explanation=explanation,
    )
