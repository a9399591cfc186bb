"""Domain entities for the maturity aggregation engine.

Two families of frozen dataclasses live here:

- Raw input entities, as supplied by the storage collaborator. Flat model:
  TechnologyProcess + AssessmentResponse. Compact model:
  ProcessTechnologyGroup + MaturityStageImplementation + Assessment.
- Derived outputs (StageBreakdown, StageResolution, FunctionSummary,
  PillarSummary, MaturityReport, DetailedAssessmentItem). These are rebuilt
  on every call and never mutated; gating produces new breakdowns through
  ``dataclasses.replace``.
"""

from dataclasses import dataclass, field

from ztmm_assessment.core.stages import AssessmentStatus, MaturityStage, MaturityStatus


# ---------------------------------------------------------------------------
# Hierarchy
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Pillar:
    """Top-level organisational grouping of functions."""

    id: int
    name: str


@dataclass(frozen=True)
class FunctionCapability:
    """A function or capability area belonging to exactly one pillar.

    Attributes:
        id: Function identifier.
        name: Display name.
        type: Either 'Function' or 'Capability'.
        pillar_id: Owning pillar.
    """

    id: int
    name: str
    type: str
    pillar_id: int


# ---------------------------------------------------------------------------
# Flat encoding
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TechnologyProcess:
    """An assessable item occupying exactly one maturity stage.

    Attributes:
        id: Item identifier.
        name: Display name.
        description: Free-text description.
        type: Either 'Technology' or 'Process'.
        function_capability_id: Owning function.
        stage: The single stage this item belongs to.
    """

    id: int
    name: str
    description: str
    type: str
    function_capability_id: int
    stage: MaturityStage


@dataclass(frozen=True)
class AssessmentResponse:
    """Zero-or-one response recorded against a TechnologyProcess."""

    id: int
    tech_process_id: int
    status: AssessmentStatus
    notes: str = ""


# ---------------------------------------------------------------------------
# Compact encoding
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProcessTechnologyGroup:
    """An item-group spanning several stages through per-stage descriptions."""

    id: int
    name: str
    description: str
    type: str
    function_capability_id: int


@dataclass(frozen=True)
class MaturityStageImplementation:
    """What a group looks like at one stage; places the group at that stage."""

    id: int
    process_technology_group_id: int
    stage: MaturityStage
    description: str = ""


@dataclass(frozen=True)
class Assessment:
    """Consolidated two-pointer assessment of an item-group.

    Attributes:
        id: Assessment identifier.
        process_technology_group_id: Assessed group.
        achieved_index: Index of the highest stage fully surpassed, -1 if none.
        target_index: Index of the stage currently worked toward, None if unset.
        implementation_status: Status of the work at the target stage.
        notes: Free-text notes.
    """

    id: int
    process_technology_group_id: int
    achieved_index: int
    target_index: int | None
    implementation_status: AssessmentStatus
    notes: str = ""


# ---------------------------------------------------------------------------
# Derived outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StageBreakdown:
    """Per-stage item counts and status for one scope (function or pillar).

    Invariant: assessed_items == completed_items + in_progress_items
    + not_started_items, and assessed_items <= total_items.

    Attributes:
        stage: The stage these counts belong to.
        total_items: Items placed at this stage within the scope.
        assessed_items: Items with a response.
        completed_items: Fully Implemented or Superseded.
        in_progress_items: Partially Implemented.
        not_started_items: Not Implemented.
        percentage: Share of items assessed, 0-100.
        completion_percentage: Share of items completed, 0-100. The
            denominator differs per encoding (assessed vs. total).
        status: Derived MaturityStatus.
        can_advance_to_this_stage: Sequential-gating verdict.
        blocked_by_previous_stages: Earlier stages that are not completed.
    """

    stage: MaturityStage
    total_items: int = 0
    assessed_items: int = 0
    completed_items: int = 0
    in_progress_items: int = 0
    not_started_items: int = 0
    percentage: int = 0
    completion_percentage: int = 0
    status: MaturityStatus = MaturityStatus.NOT_ASSESSED
    can_advance_to_this_stage: bool = True
    blocked_by_previous_stages: tuple[MaturityStage, ...] = ()


@dataclass(frozen=True)
class StageResolution:
    """Gated vs. ungated stage for one scope.

    Attributes:
        stage: Achieved stage under sequential gating.
        actual_stage: Stage reached when gating is ignored.
        has_gap: True when the two differ.
        explanation: Human-readable reason for the gap, None without a gap.
    """

    stage: MaturityStage
    actual_stage: MaturityStage
    has_gap: bool = False
    explanation: str | None = None


@dataclass(frozen=True)
class FunctionSummary:
    """Resolved maturity for a single function."""

    function_capability: FunctionCapability
    assessed_items: int
    total_items: int
    assessment_percentage: int
    overall_maturity_stage: MaturityStage
    actual_maturity_stage: MaturityStage
    maturity_stage_breakdown: tuple[StageBreakdown, ...] = ()
    has_sequential_maturity_gap: bool = False
    sequential_maturity_explanation: str | None = None


@dataclass(frozen=True)
class PillarSummary:
    """Resolved maturity for a pillar, embedding its function summaries."""

    pillar: Pillar
    functions: tuple[FunctionSummary, ...]
    assessed_items: int
    total_items: int
    assessment_percentage: int
    overall_maturity_stage: MaturityStage
    actual_maturity_stage: MaturityStage
    maturity_stage_breakdown: tuple[StageBreakdown, ...] = ()
    has_sequential_maturity_gap: bool = False
    sequential_maturity_explanation: str | None = None


@dataclass(frozen=True)
class MaturityReport:
    """Output of one report pass: pillar summaries plus overall roll-ups."""

    encoding: str
    pillars: tuple[PillarSummary, ...] = ()
    assessed_items: int = 0
    total_items: int = 0
    assessment_percentage: int = 0
    stages: tuple[MaturityStage, ...] = field(default_factory=lambda: tuple(MaturityStage))


@dataclass(frozen=True)
class DetailedAssessmentItem:
    """One row of a function detail view."""

    pillar_name: str
    function_capability_name: str
    function_capability_type: str
    name: str
    description: str
    type: str
    maturity_stage_name: str
    status: str
    notes: str
    stage_index: int = -1
