"""Shared fixtures for ztmm-assessment tests.

Provides exported-data payloads in both input encodings for one pillar
("Identity") with two functions. In the flat payload:

    Authentication   Traditional completed, Initial completed, Advanced not started
    Identity Stores  Traditional in progress, Initial completed
"""

from typing import Any

import pytest

from ztmm_assessment.settings import Settings

_STAGES: list[dict[str, Any]] = [
    {"id": 1, "name": "Traditional"},
    {"id": 2, "name": "Initial"},
    {"id": 3, "name": "Advanced"},
    {"id": 4, "name": "Optimal"},
]

_PILLARS: list[dict[str, Any]] = [{"id": 1, "name": "Identity"}]

_FUNCTIONS: list[dict[str, Any]] = [
    {"id": 10, "name": "Authentication", "type": "Function", "pillar_id": 1},
    {"id": 11, "name": "Identity Stores", "type": "Function", "pillar_id": 1},
]


@pytest.fixture()
def flat_export() -> dict[str, Any]:
    """Version 1.0.0 payload using technologies/processes and responses."""
    return {
        "version": "1.0.0",
        "exportDate": "2024-05-01T12:00:00Z",
        "pillars": _PILLARS,
        "functionCapabilities": _FUNCTIONS,
        "maturityStages": _STAGES,
        "technologiesProcesses": [
            {"id": 100, "name": "Passwords", "description": "Password policy", "type": "Process",
             "function_capability_id": 10, "maturity_stage_id": 1},
            {"id": 101, "name": "MFA", "description": "Second factor", "type": "Technology",
             "function_capability_id": 10, "maturity_stage_id": 2},
            {"id": 102, "name": "Phishing-resistant MFA", "description": "FIDO2", "type": "Technology",
             "function_capability_id": 10, "maturity_stage_id": 3},
            {"id": 110, "name": "On-prem directory", "description": "", "type": "Technology",
             "function_capability_id": 11, "maturity_stage_id": 1},
            {"id": 111, "name": "Account inventory", "description": "", "type": "Process",
             "function_capability_id": 11, "maturity_stage_id": 1},
            {"id": 112, "name": "Cloud directory", "description": "", "type": "Technology",
             "function_capability_id": 11, "maturity_stage_id": 2},
        ],
        "assessmentResponses": [
            {"id": 1, "tech_process_id": 100, "status": "Fully Implemented"},
            {"id": 2, "tech_process_id": 101, "status": "Superseded", "notes": "Replaced by FIDO2 pilot"},
            {"id": 3, "tech_process_id": 102, "status": "Not Implemented"},
            {"id": 4, "tech_process_id": 110, "status": "Fully Implemented"},
            {"id": 5, "tech_process_id": 111, "status": "Partially Implemented"},
            {"id": 6, "tech_process_id": 112, "status": "Fully Implemented"},
        ],
    }


@pytest.fixture()
def compact_export() -> dict[str, Any]:
    """Version 2.0.0 payload using item-groups and consolidated assessments."""
    return {
        "version": "2.0.0",
        "pillars": _PILLARS,
        "functionCapabilities": _FUNCTIONS,
        "maturityStages": _STAGES,
        "processTechnologyGroups": [
            {"id": 1, "name": "MFA", "description": "Multi-factor authentication", "type": "Technology",
             "function_capability_id": 10, "order_index": 0},
            {"id": 2, "name": "Directory", "description": "Identity store", "type": "Technology",
             "function_capability_id": 11, "order_index": 0},
        ],
        "maturityStageImplementations": [
            {"id": 1, "process_technology_group_id": 1, "maturity_stage_id": 1, "description": "Passwords"},
            {"id": 2, "process_technology_group_id": 1, "maturity_stage_id": 2, "description": "SMS 2FA"},
            {"id": 3, "process_technology_group_id": 1, "maturity_stage_id": 3, "description": "FIDO2"},
            {"id": 4, "process_technology_group_id": 2, "maturity_stage_id": 1, "description": "On-prem"},
            {"id": 5, "process_technology_group_id": 2, "maturity_stage_id": 2, "description": "Cloud"},
        ],
        "assessments": [
            {"id": 1, "process_technology_group_id": 1, "achieved_maturity_stage_id": 2,
             "target_maturity_stage_id": 3, "implementation_status": "Partially Implemented",
             "notes": "", "last_updated": "2024-05-01T12:00:00Z"},
        ],
    }


@pytest.fixture()
def flat_settings() -> Settings:
    """Settings pinned to the flat encoding."""
    return Settings(assessment_encoding="flat")


@pytest.fixture()
def auto_settings() -> Settings:
    """Settings with automatic encoding detection."""
    return Settings(assessment_encoding="auto")
