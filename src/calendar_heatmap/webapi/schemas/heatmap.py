#!/usr/bin/env python3
"""
Pydantic schemas for heatmap API.

These schemas define the query parameters and responses of the heatmap
endpoints. Values that fail range computation (unknown view, bad
start_date) are passed through and rejected by the engine with 400.
"""

from my_lib.pydantic.base import BaseSchema
from pydantic import Field

import calendar_heatmap.const


class HeatmapQueryParams(BaseSchema):
    """Query parameters for /api/heatmap and /api/heatmap.html.

    Unset fields fall back to the heatmap section of config.yaml.
    """

    view: str | None = None
    year: int | None = None
    month: int | None = Field(default=None, ge=1, le=12)
    week_start: int | None = Field(default=None, ge=0, le=6)
    recent_days: int | None = Field(default=None, ge=1, le=calendar_heatmap.const.MAX_RECENT_DAYS)
    start_date: str | None = None
    legend: bool | None = None
    locale: str | None = None
    max_value: float | None = None


class HeatmapCellResponse(BaseSchema):
    """One day cell."""

    date: str
    value: float
    color: str
    level: int
    title: str


class HeatmapResponse(BaseSchema):
    """Response for /api/heatmap endpoint."""

    start: str
    end: str
    aligned_start: str
    aligned_end: str
    max_value: float
    weekday_labels: list[str]
    weeks: list[list[HeatmapCellResponse]]
    legend: list[str] | None = None


class OverviewResponse(BaseSchema):
    """Response for /api/overview endpoint."""

    has_entries: bool
    has_today: bool
    streak: int
    last_missing: str | None = None


class ErrorResponse(BaseSchema):
    """Error response."""

    error: str


class CheckinRequest(BaseSchema):
    """Request body for /api/checkin endpoint."""

    value: int = Field(..., ge=0)


class CheckinResponse(BaseSchema):
    """Response for /api/checkin endpoint."""

    date: str
    value: int
    overview: OverviewResponse
