"""
PipelineVersion — frozen dataclass for deterministic reproducibility.

Every batch run records the full PipelineVersion so cleaned output can be
traced back to the exact marker lists and thresholds that produced it.
"""
from dataclasses import dataclass

from src.config.constants import CLEANER_VERSION, MARKERS_VERSION


@dataclass(frozen=True)
class PipelineVersion:
    """Contract of version to guarantee repeatability."""

    cleanerversion: str = CLEANER_VERSION
    markersversion: str = MARKERS_VERSION
    schemaversion: str = "cleaned-email-v1"

    def to_dict(self) -> dict:
        return {
            "cleanerversion": self.cleanerversion,
            "markersversion": self.markersversion,
            "schemaversion": self.schemaversion,
        }

    def __repr__(self) -> str:
        return f"{self.cleanerversion}+{self.markersversion}"
