"""Orchestration of region aggregation and ranking."""

from .census import Census
from .outcomes import RegionOutcome, SurveyReport

__all__ = ["Census", "RegionOutcome", "SurveyReport"]
