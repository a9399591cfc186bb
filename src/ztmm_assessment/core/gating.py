"""Sequential maturity gating.

A stage only counts once every earlier reported stage in the same scope is
completed. Gating annotates each breakdown with whether it is reachable and
which earlier stages block it. Input breakdowns are left untouched.
"""

from collections.abc import Sequence
from dataclasses import replace

from ztmm_assessment.core.models import StageBreakdown
from ztmm_assessment.core.stages import MaturityStatus


def validate_sequential_maturity(breakdowns: Sequence[StageBreakdown]) -> list[StageBreakdown]:
    """Annotate stage breakdowns with sequential-gating results.

    Args:
        breakdowns: Breakdowns for one scope, in stage order.

    Returns:
        New breakdowns with ``can_advance_to_this_stage`` and
        ``blocked_by_previous_stages`` set. The first stage can always be
        advanced to; a later stage is blocked by every earlier stage whose
        status is not completed.
    """
    annotated: list[StageBreakdown] = []
    for position, breakdown in enumerate(breakdowns):
        blocked = tuple(
            earlier.stage
            for earlier in breakdowns[:position]
            if earlier.status is not MaturityStatus.COMPLETED
        )
        annotated.append(
            replace(
                breakdown,
                can_advance_to_this_stage=not blocked,
                blocked_by_previous_stages=blocked,
            )
        )
    return annotated
