#!/usr/bin/env python3
"""
設定ファイルの構造を定義する dataclass

config.yaml に基づいて型付けされた設定クラスを提供します。
"""

from __future__ import annotations

import pathlib
from dataclasses import dataclass, field
from typing import Any

import my_lib.config

import calendar_heatmap.const
from calendar_heatmap.exceptions import ConfigError

CONFIG_FILE_PATH = pathlib.Path("config.yaml")


@dataclass(frozen=True)
class HeatmapConfig:
    """ヒートマップの既定オプション"""

    view: str = calendar_heatmap.const.VIEW_YEAR
    week_start: int = 1  # 0: 日曜, 1: 月曜
    locale: str | None = None
    recent_days: int = calendar_heatmap.const.DEFAULT_RECENT_DAYS
    square_size: int = 14
    square_gap: int = 2
    legend: bool = False
    tooltip: bool = True
    color_scale: tuple[str, ...] = calendar_heatmap.const.DEFAULT_COLORS

    @classmethod
    def parse(cls, data: dict[str, Any]) -> HeatmapConfig:
        """dict から HeatmapConfig を生成.

        週の開始曜日は 0（日曜）と 1（月曜）のみ受け付け、
        それ以外の値は月曜として扱います。
        """
        week_start = 0 if data.get("week_start", 1) == 0 else 1
        color_scale = tuple(data.get("color_scale", ())) or calendar_heatmap.const.DEFAULT_COLORS
        return cls(
            view=data.get("view", calendar_heatmap.const.VIEW_YEAR),
            week_start=week_start,
            locale=data.get("locale"),
            recent_days=data.get("recent_days", calendar_heatmap.const.DEFAULT_RECENT_DAYS),
            square_size=data.get("square_size", 14),
            square_gap=data.get("square_gap", 2),
            legend=data.get("legend", False),
            tooltip=data.get("tooltip", True),
            color_scale=color_scale,
        )

    def to_options(self) -> dict[str, Any]:
        """エンジンに渡すオプション dict に変換."""
        return {
            "view": self.view,
            "week_start": self.week_start,
            "locale": self.locale,
            "recent_days": self.recent_days,
            "square_size": self.square_size,
            "square_gap": self.square_gap,
            "legend": self.legend,
            "tooltip": self.tooltip,
            "color_scale": self.color_scale,
        }


@dataclass(frozen=True)
class DataConfig:
    """データ保存設定"""

    records: pathlib.Path

    @classmethod
    def parse(cls, data: dict[str, Any]) -> DataConfig:
        """dict から DataConfig を生成"""
        default_path = calendar_heatmap.const.DATA_PATH / calendar_heatmap.const.RECORDS_FILE
        return cls(records=pathlib.Path(data.get("records", str(default_path))))


@dataclass(frozen=True)
class WebappConfig:
    """Web サーバー設定"""

    external_url: str | None = None

    @classmethod
    def parse(cls, data: dict[str, Any]) -> WebappConfig:
        """dict から WebappConfig を生成"""
        return cls(external_url=data.get("external_url"))


@dataclass(frozen=True)
class AppConfig:
    """アプリケーション設定（config.yaml）"""

    heatmap: HeatmapConfig = field(default_factory=HeatmapConfig)
    data: DataConfig = field(default_factory=lambda: DataConfig.parse({}))
    webapp: WebappConfig = field(default_factory=WebappConfig)

    @classmethod
    def parse(cls, data: dict[str, Any]) -> AppConfig:
        """dict から AppConfig を生成"""
        return cls(
            heatmap=HeatmapConfig.parse(data.get("heatmap", {})),
            data=DataConfig.parse(data.get("data", {})),
            webapp=WebappConfig.parse(data.get("webapp", {})),
        )


def load(config_file: pathlib.Path | None = None) -> AppConfig:
    """設定ファイルを読み込んで AppConfig を返す.

    Args:
        config_file: 設定ファイルパス。省略時は CONFIG_FILE_PATH を使用。

    Raises:
        ConfigError: 設定ファイルの読み込みに失敗した場合
    """
    if config_file is None:
        config_file = CONFIG_FILE_PATH
    try:
        raw = my_lib.config.load(str(config_file), calendar_heatmap.const.SCHEMA_CONFIG)
    except Exception as e:
        msg = f"設定ファイルの読み込みに失敗しました: {config_file}"
        raise ConfigError(msg) from e
    return AppConfig.parse(raw or {})
