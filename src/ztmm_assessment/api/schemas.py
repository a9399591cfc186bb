"""Pydantic schemas for assessment snapshots handed over by the storage layer.

A snapshot mirrors the exported data shape: camelCase top-level collections,
snake_case entity fields, 1-based stage ids (1=Traditional .. 4=Optimal).
Version 1.0.0 carries the flat item+response encoding, 2.0.0 the compact
item-group encoding; either may be present regardless of version.

Validation happens here, at the boundary. The engine only sees the frozen
core entities returned by the ``to_entity`` methods.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ztmm_assessment.core.models import (
    Assessment,
    AssessmentResponse,
    FunctionCapability,
    MaturityStageImplementation,
    Pillar,
    ProcessTechnologyGroup,
    TechnologyProcess,
)
from ztmm_assessment.core.stages import AssessmentStatus, MaturityStage, stage_index_from_id

_STAGE_COUNT = len(MaturityStage)


class _SnapshotModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ---------------------------------------------------------------------------
# Shared hierarchy
# ---------------------------------------------------------------------------


class PillarSchema(_SnapshotModel):
    """A pillar record."""

    id: int
    name: str

    def to_entity(self) -> Pillar:
        return Pillar(id=self.id, name=self.name)


class FunctionCapabilitySchema(_SnapshotModel):
    """A function or capability record tagged with its pillar."""

    id: int
    name: str
    type: Literal["Function", "Capability"] = "Function"
    pillar_id: int

    def to_entity(self) -> FunctionCapability:
        return FunctionCapability(id=self.id, name=self.name, type=self.type, pillar_id=self.pillar_id)


class MaturityStageSchema(_SnapshotModel):
    """A maturity stage record; id and name must agree (name case-insensitive)."""

    id: int = Field(..., ge=1, le=_STAGE_COUNT)
    name: str

    @model_validator(mode="after")
    def _name_matches_id(self) -> "MaturityStageSchema":
        expected = MaturityStage.from_stage_id(self.id)
        if MaturityStage.from_label(self.name) is not expected:
            raise ValueError(f"Maturity stage {self.id} must be named {expected.label!r}, got {self.name!r}")
        return self

    def to_entity(self) -> MaturityStage:
        return MaturityStage.from_stage_id(self.id)


# ---------------------------------------------------------------------------
# Flat encoding
# ---------------------------------------------------------------------------


class TechnologyProcessSchema(_SnapshotModel):
    """A flat-model assessable item placed at one stage."""

    id: int
    name: str
    description: str = ""
    type: Literal["Technology", "Process"] = "Technology"
    function_capability_id: int
    maturity_stage_id: int = Field(..., ge=1, le=_STAGE_COUNT)

    def to_entity(self) -> TechnologyProcess:
        return TechnologyProcess(
            id=self.id,
            name=self.name,
            description=self.description,
            type=self.type,
            function_capability_id=self.function_capability_id,
            stage=MaturityStage.from_stage_id(self.maturity_stage_id),
        )


class AssessmentResponseSchema(_SnapshotModel):
    """A flat-model response to one item."""

    id: int
    tech_process_id: int
    status: AssessmentStatus
    notes: str | None = None

    def to_entity(self) -> AssessmentResponse:
        return AssessmentResponse(
            id=self.id,
            tech_process_id=self.tech_process_id,
            status=self.status,
            notes=self.notes or "",
        )


# ---------------------------------------------------------------------------
# Compact encoding
# ---------------------------------------------------------------------------


class ProcessTechnologyGroupSchema(_SnapshotModel):
    """A compact-model item-group."""

    id: int
    name: str
    description: str = ""
    type: Literal["Technology", "Process"] = "Technology"
    function_capability_id: int

    def to_entity(self) -> ProcessTechnologyGroup:
        return ProcessTechnologyGroup(
            id=self.id,
            name=self.name,
            description=self.description,
            type=self.type,
            function_capability_id=self.function_capability_id,
        )


class MaturityStageImplementationSchema(_SnapshotModel):
    """Description of an item-group at one stage."""

    id: int
    process_technology_group_id: int
    maturity_stage_id: int = Field(..., ge=1, le=_STAGE_COUNT)
    description: str = ""

    def to_entity(self) -> MaturityStageImplementation:
        return MaturityStageImplementation(
            id=self.id,
            process_technology_group_id=self.process_technology_group_id,
            stage=MaturityStage.from_stage_id(self.maturity_stage_id),
            description=self.description,
        )


class AssessmentSchema(_SnapshotModel):
    """Consolidated achieved/target assessment of an item-group.

    Attributes:
        achieved_maturity_stage_id: Highest completed stage; null or 0 when
            nothing has been achieved.
        target_maturity_stage_id: Stage being worked toward; null when unset.
    """

    id: int
    process_technology_group_id: int
    achieved_maturity_stage_id: int | None = Field(default=None, ge=0, le=_STAGE_COUNT)
    target_maturity_stage_id: int | None = Field(default=None, ge=1, le=_STAGE_COUNT)
    implementation_status: AssessmentStatus
    notes: str | None = None
    last_updated: str | None = None

    def to_entity(self) -> Assessment:
        target = self.target_maturity_stage_id
        return Assessment(
            id=self.id,
            process_technology_group_id=self.process_technology_group_id,
            achieved_index=stage_index_from_id(self.achieved_maturity_stage_id),
            target_index=stage_index_from_id(target) if target else None,
            implementation_status=self.implementation_status,
            notes=self.notes or "",
        )


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


class AssessmentSnapshotSchema(_SnapshotModel):
    """A complete snapshot of one organisation's assessment data."""

    version: Literal["1.0.0", "2.0.0"] = "1.0.0"
    export_date: str | None = Field(default=None, alias="exportDate")

    pillars: list[PillarSchema] = Field(default_factory=list)
    function_capabilities: list[FunctionCapabilitySchema] = Field(
        default_factory=list, alias="functionCapabilities"
    )
    maturity_stages: list[MaturityStageSchema] = Field(default_factory=list, alias="maturityStages")

    technologies_processes: list[TechnologyProcessSchema] = Field(
        default_factory=list, alias="technologiesProcesses"
    )
    assessment_responses: list[AssessmentResponseSchema] = Field(
        default_factory=list, alias="assessmentResponses"
    )

    process_technology_groups: list[ProcessTechnologyGroupSchema] = Field(
        default_factory=list, alias="processTechnologyGroups"
    )
    maturity_stage_implementations: list[MaturityStageImplementationSchema] = Field(
        default_factory=list, alias="maturityStageImplementations"
    )
    assessments: list[AssessmentSchema] = Field(default_factory=list)
