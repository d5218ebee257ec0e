#!/usr/bin/env python3
"""定数定義."""

from __future__ import annotations

import pathlib

# パス
DATA_PATH = pathlib.Path(__file__).parent.parent.parent / "data"
RECORDS_FILE = "records.json"

# スキーマファイル
_SCHEMA_DIR = pathlib.Path(__file__).parent.parent.parent / "schema"
SCHEMA_CONFIG = _SCHEMA_DIR / "config.schema"

# カラーパレット（5段階：活動なし→多い）
DEFAULT_COLORS: tuple[str, ...] = ("#ebedf0", "#9be9a8", "#40c463", "#30a14e", "#216e39")

# ビュー種別
VIEW_YEAR = "year"
VIEW_MONTH = "month"
VIEW_WEEK = "week"
VIEW_RECENT = "recent"
VIEWS = (VIEW_YEAR, VIEW_MONTH, VIEW_WEEK, VIEW_RECENT)

DAYS_PER_WEEK = 7
DEFAULT_RECENT_DAYS = 7

# Web API で受け付ける recent ビューの最大日数（約 10 年）
MAX_RECENT_DAYS = 3660

# スタイル
STYLE_ID = "calendar-heatmap-style"

CLASS_ROOT = "ch-root"
CLASS_GRID = "ch-grid"
CLASS_WEEK = "ch-week"
CLASS_DAY = "ch-day"
CLASS_LABELS = "ch-labels"
CLASS_LEGEND = "ch-legend"
CLASS_SWATCH = "ch-swatch"
CLASS_TOOLTIP = "ch-tooltip"

# ツールチップが購読するポインタイベント
EVENT_MOVE = "mousemove"
EVENT_LEAVE = "mouseleave"

# ポインタ位置からのツールチップのずらし量 (px)
TOOLTIP_OFFSET = 10
