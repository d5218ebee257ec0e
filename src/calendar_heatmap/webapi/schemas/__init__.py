#!/usr/bin/env python3
"""Pydantic schemas for Web API."""

from calendar_heatmap.webapi.schemas.heatmap import (
    CheckinRequest,
    CheckinResponse,
    ErrorResponse,
    HeatmapCellResponse,
    HeatmapQueryParams,
    HeatmapResponse,
    OverviewResponse,
)

__all__ = [
    "CheckinRequest",
    "CheckinResponse",
    "ErrorResponse",
    "HeatmapCellResponse",
    "HeatmapQueryParams",
    "HeatmapResponse",
    "OverviewResponse",
]
