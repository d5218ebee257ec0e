#!/usr/bin/env python3
# ruff: noqa: S101
"""
共通テストフィクスチャ

テスト全体で使用する共通のフィクスチャとヘルパーを定義します。
"""

import json
import logging
import pathlib
import unittest.mock
from datetime import date

import flask
import flask.testing
import my_lib.pytest_util
import pytest

import calendar_heatmap.config
import calendar_heatmap.webapi.server
from calendar_heatmap.surface import Document, Element

# テストで「今日」として使う日付
TODAY = date(2024, 3, 15)


# === 環境モック ===
@pytest.fixture(scope="session", autouse=True)
def env_mock():
    """テスト環境用の環境変数モック"""
    with unittest.mock.patch.dict(
        "os.environ",
        {
            "TEST": "true",
            "NO_COLORED_LOGS": "true",
        },
    ) as fixture:
        yield fixture


# === 表示面フィクスチャ ===
@pytest.fixture
def document() -> Document:
    """空の表示面"""
    return Document(title="test")


@pytest.fixture
def container(document: Document) -> Element:
    """body に取り付けた id="heatmap" のコンテナ"""
    node = document.create_element("div")
    node.id = "heatmap"
    document.body.append_child(node)
    return node


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def clock(today: date):
    """固定の今日を返す関数"""
    return lambda: today


# === テストデータフィクスチャ ===
@pytest.fixture
def sample_records() -> list[dict]:
    """サンプルの観測レコード

    Note: 2024-03-13 〜 2024-03-15 は連続、2024-03-12 は記録なし。
    """
    return [
        {"date": "2024-03-01", "value": 2},
        {"date": "2024-03-10", "value": 8},
        {"date": "2024-03-11", "value": 1},
        {"day": "2024-03-13", "count": 4},
        {"date": "2024-03-14", "value": 3},
        {"dateString": "2024-03-15", "value": 5},
    ]


@pytest.fixture
def temp_data_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """一時データディレクトリを作成（ワーカー固有）"""
    # pytest-xdist 並列実行時はワーカーIDをディレクトリ名に付加
    data_dir = my_lib.pytest_util.get_path(tmp_path / "data")
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


@pytest.fixture
def records_file(temp_data_dir: pathlib.Path, sample_records: list[dict]) -> pathlib.Path:
    """サンプルレコードを書き込んだ記録ファイル"""
    path = temp_data_dir / "records.json"
    path.write_text(json.dumps(sample_records), encoding="utf-8")
    return path


@pytest.fixture
def app_config(records_file: pathlib.Path) -> calendar_heatmap.config.AppConfig:
    """テスト用のアプリケーション設定"""
    return calendar_heatmap.config.AppConfig.parse(
        {
            "heatmap": {"view": "month", "week_start": 1, "legend": True},
            "data": {"records": str(records_file)},
        }
    )


# === Web API フィクスチャ ===
@pytest.fixture
def app(app_config: calendar_heatmap.config.AppConfig, clock) -> flask.Flask:
    """Flask アプリケーションフィクスチャ"""
    return calendar_heatmap.webapi.server.create_app(app_config, clock=clock)


@pytest.fixture
def client(app: flask.Flask) -> flask.testing.FlaskClient:
    """Flask テストクライアントフィクスチャ"""
    return app.test_client()


# === ロギング設定 ===
logging.getLogger("werkzeug").setLevel(logging.WARNING)
