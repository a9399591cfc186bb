"""Service-specific settings for the maturity assessment engine.

Repo-specific settings use the ZTMM_ env prefix.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for ztmm-assessment.

    Environment variable prefix: ZTMM_
    """

    service_name: str = "ztmm-assessment"

    # Input encoding: "auto" picks compact when any item-groups are present
    assessment_encoding: Literal["auto", "flat", "compact"] = "auto"

    # Function detail rows
    unassessed_status_label: str = "Not Assessed"

    model_config = SettingsConfigDict(env_prefix="ZTMM_")
