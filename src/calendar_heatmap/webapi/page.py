#!/usr/bin/env python3
"""API エンドポイント.

ヒートマップ・今日の概要の取得と、今日の記録の追加（チェックイン）を提供します。
"""

import logging
from datetime import date
from typing import Any

import flask
import my_lib.time
from flask_pydantic import validate

import calendar_heatmap.config
import calendar_heatmap.engine
import calendar_heatmap.normalize
import calendar_heatmap.overview
import calendar_heatmap.records
import calendar_heatmap.render
import calendar_heatmap.view_range
import calendar_heatmap.webapi.schemas
from calendar_heatmap.exceptions import AlreadyCheckedInError, CalendarHeatmapError
from calendar_heatmap.options import DEFAULT_OPTIONS, RenderOptions

blueprint = flask.Blueprint("page", __name__)


def _get_app_config() -> calendar_heatmap.config.AppConfig:
    return flask.current_app.config["app_config"]


def _today() -> date:
    clock = flask.current_app.config.get("clock")
    if clock is not None:
        return clock()
    return my_lib.time.now().date()


def _load_records() -> list[Any]:
    return calendar_heatmap.records.load(_get_app_config().data.records)


def _build_options(query: calendar_heatmap.webapi.schemas.HeatmapQueryParams) -> RenderOptions:
    """config.yaml の既定値にクエリパラメータを重ねたオプションを作る."""
    options = DEFAULT_OPTIONS.merge(_get_app_config().heatmap.to_options())
    overrides = {key: value for key, value in query.model_dump().items() if value is not None}
    return options.merge(overrides)


def _error_response(message: str, status: int) -> tuple[flask.Response, int]:
    error = calendar_heatmap.webapi.schemas.ErrorResponse(error=message)
    return flask.jsonify(error.model_dump()), status


@blueprint.route("/api/heatmap")
@validate()
def get_heatmap(
    query: calendar_heatmap.webapi.schemas.HeatmapQueryParams,
) -> flask.Response | tuple[flask.Response, int]:
    """ヒートマップのセルモデルを JSON で取得."""
    try:
        options = _build_options(query)
        data = calendar_heatmap.normalize.normalize_data(_load_records())
        window = calendar_heatmap.view_range.generate_range(options, _today())
        grid = calendar_heatmap.render.build_grid(window, data, options)

        response = calendar_heatmap.webapi.schemas.HeatmapResponse(**grid.to_dict())
        return flask.jsonify(response.model_dump())

    except CalendarHeatmapError as e:
        logging.warning("Invalid heatmap request: %s", e)
        return _error_response(str(e), 400)
    except Exception as e:
        logging.exception("Error building heatmap")
        return _error_response(f"Internal server error: {type(e).__name__}: {e}", 500)


@blueprint.route("/api/heatmap.html")
@validate()
def get_heatmap_html(
    query: calendar_heatmap.webapi.schemas.HeatmapQueryParams,
) -> flask.Response | tuple[flask.Response, int]:
    """ヒートマップを HTML ページとして取得."""
    try:
        options = _build_options(query)
        html = calendar_heatmap.engine.render_html(_load_records(), options, _today())
        return flask.Response(html, mimetype="text/html")

    except CalendarHeatmapError as e:
        logging.warning("Invalid heatmap request: %s", e)
        return _error_response(str(e), 400)
    except Exception as e:
        logging.exception("Error rendering heatmap page")
        return _error_response(f"Internal server error: {type(e).__name__}: {e}", 500)


@blueprint.route("/api/overview")
def get_overview() -> flask.Response | tuple[flask.Response, int]:
    """今日の概要を取得."""
    try:
        overview = calendar_heatmap.overview.compute_daily_overview(_load_records(), _today())
        response = calendar_heatmap.webapi.schemas.OverviewResponse(**overview.to_dict())
        return flask.jsonify(response.model_dump())

    except CalendarHeatmapError as e:
        logging.warning("Invalid overview request: %s", e)
        return _error_response(str(e), 400)
    except Exception as e:
        logging.exception("Error computing overview")
        return _error_response(f"Internal server error: {type(e).__name__}: {e}", 500)


@blueprint.route("/api/checkin", methods=["POST"])
@validate()
def post_checkin(
    body: calendar_heatmap.webapi.schemas.CheckinRequest,
) -> flask.Response | tuple[flask.Response, int]:
    """今日の記録を追加（1 日 1 回まで）."""
    try:
        today = _today()
        path = _get_app_config().data.records
        entry = calendar_heatmap.records.append_today(path, body.value, today)

        overview = calendar_heatmap.overview.compute_daily_overview(calendar_heatmap.records.load(path), today)
        response = calendar_heatmap.webapi.schemas.CheckinResponse(
            date=entry["date"],
            value=entry["value"],
            overview=calendar_heatmap.webapi.schemas.OverviewResponse(**overview.to_dict()),
        )
        return flask.jsonify(response.model_dump()), 201

    except AlreadyCheckedInError as e:
        logging.info("Rejected check-in: %s", e)
        return _error_response(str(e), 409)
    except CalendarHeatmapError as e:
        logging.warning("Invalid check-in request: %s", e)
        return _error_response(str(e), 400)
    except Exception as e:
        logging.exception("Error checking in")
        return _error_response(f"Internal server error: {type(e).__name__}: {e}", 500)
