"""Maturity stage and status enumerations.

Stage order is load-bearing: every "higher/lower stage" comparison in the
engine is integer arithmetic on ``MaturityStage`` values, never a name lookup.

Stages (index / storage id / label):
    0  1  Traditional
    1  2  Initial
    2  3  Advanced
    3  4  Optimal
"""

from enum import Enum, IntEnum


class MaturityStage(IntEnum):
    """Totally ordered maturity stages. The enum value is the stage index."""

    TRADITIONAL = 0
    INITIAL = 1
    ADVANCED = 2
    OPTIMAL = 3

    @property
    def label(self) -> str:
        """Human-readable stage name (e.g. 'Traditional')."""
        return self.name.capitalize()

    @property
    def stage_id(self) -> int:
        """Storage identifier (1-based) used by the persistence layer."""
        return self.value + 1

    @classmethod
    def first(cls) -> "MaturityStage":
        return cls.TRADITIONAL

    @classmethod
    def from_stage_id(cls, stage_id: int) -> "MaturityStage":
        """Map a 1-based storage identifier to its stage.

        Args:
            stage_id: Storage identifier in range 1-4.

        Returns:
            The matching MaturityStage.

        Raises:
            ValueError: If stage_id is outside 1-4.
        """
        if not (1 <= stage_id <= len(cls)):
            raise ValueError(f"Unknown maturity stage id {stage_id!r}")
        return cls(stage_id - 1)

    @classmethod
    def from_label(cls, label: str) -> "MaturityStage":
        """Map a stage label such as 'Advanced' to its stage.

        Raises:
            ValueError: If the label does not name a stage.
        """
        try:
            return cls[label.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown maturity stage {label!r}") from None


def stage_index_from_id(stage_id: int | None) -> int:
    """Return the 0-based index for an optional storage id.

    ``None`` and ``0`` both mean "no stage" and map to -1 so that they sort
    below every real stage.
    """
    if not stage_id:
        return -1
    return stage_id - 1


class AssessmentStatus(str, Enum):
    """Status of a single assessment response or consolidated assessment."""

    NOT_IMPLEMENTED = "Not Implemented"
    PARTIALLY_IMPLEMENTED = "Partially Implemented"
    FULLY_IMPLEMENTED = "Fully Implemented"
    SUPERSEDED = "Superseded"

    @property
    def is_completed(self) -> bool:
        return self in (AssessmentStatus.FULLY_IMPLEMENTED, AssessmentStatus.SUPERSEDED)


class MaturityStatus(str, Enum):
    """Derived completion status of one stage within a scope."""

    COMPLETED = "completed"
    IN_PROGRESS = "in-progress"
    NOT_STARTED = "not-started"
    NOT_ASSESSED = "not-assessed"
