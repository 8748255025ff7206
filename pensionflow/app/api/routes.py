"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict, List

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from pensionflow.config import AppConfig
from pensionflow.core.editing import SeriesEditError, regenerate_series, update_record
from pensionflow.core.pension import calculate_pension
from pensionflow.core.project_file import (
    ProjectFileError,
    dump_project,
    export_project,
    load_project,
    project_filename,
)
from pensionflow.core.series import generate_series
from pensionflow.core.validation import check_series, check_settings
from pensionflow.core.wage_table import (
    RegionWages,
    WageTableError,
    load_wage_table,
    search_regions,
)
from pensionflow.models import Settings
from pensionflow.schemas.pension import (
    CalculateRequest,
    EditRequest,
    EditResponse,
    PingResponse,
    ProjectionRequest,
    ProjectionResponse,
    ProjectResponse,
    RegionsResponse,
    SeriesResponse,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

WAGE_TABLE_EXTENSION = "pensionflow.wage_table"


def _config() -> AppConfig:
    return current_app.config["PENSIONFLOW"]


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(SeriesEditError)
@api_bp.errorhandler(ProjectFileError)
@api_bp.errorhandler(WageTableError)
def _handle_domain_error(exc: ValueError):
    logger.warning("rejected request: %s", exc)
    return jsonify({"error": str(exc)}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    config = _config()
    response = PingResponse(message="pong", app=config.app_name, version=config.version)
    return jsonify(response.model_dump())


@api_bp.post("/series")
def series() -> Any:
    """Baseline 100%-ratio series for the given settings."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    settings = Settings.model_validate(raw_payload)
    response = SeriesResponse(
        series=generate_series(settings),
        warnings=check_settings(settings),
    )
    return jsonify(response.model_dump())


@api_bp.post("/calculate")
def calculate() -> Any:
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = CalculateRequest.model_validate(raw_payload)
    result = calculate_pension(payload.series, payload.settings)
    return jsonify(result.model_dump())


@api_bp.post("/projection")
def projection() -> Any:
    """Regenerate the series after a settings change and evaluate it."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = ProjectionRequest.model_validate(raw_payload)

    rows = regenerate_series(payload.settings, payload.previousSeries)
    response = ProjectionResponse(
        series=rows,
        result=calculate_pension(rows, payload.settings),
        warnings=check_settings(payload.settings) + check_series(rows),
    )
    return jsonify(response.model_dump())


@api_bp.post("/series/edit")
def edit_series() -> Any:
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = EditRequest.model_validate(raw_payload)

    rows = update_record(payload.series, payload.index, payload.field, payload.value)
    response = EditResponse(
        series=rows,
        result=calculate_pension(rows, payload.settings),
        warnings=check_series(rows),
    )
    return jsonify(response.model_dump())


@api_bp.post("/project/export")
def export() -> Any:
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = CalculateRequest.model_validate(raw_payload)

    bundle = export_project(payload.settings, payload.series)
    resp = current_app.response_class(dump_project(bundle), mimetype="application/json")
    resp.headers["Content-Disposition"] = f'attachment; filename="{project_filename()}"'
    return resp


@api_bp.post("/project/import")
def import_project() -> Any:
    """Load a saved bundle; the saved series is kept as-is."""
    bundle = load_project(request.get_data(as_text=True))
    response = ProjectResponse(
        settings=bundle.settings,
        series=bundle.data,
        result=calculate_pension(bundle.data, bundle.settings),
    )
    return jsonify(response.model_dump())


@api_bp.post("/wage-tables/parse")
def parse_wage_table() -> Any:
    """Parse an uploaded .xlsx/.xls/.csv wage table into regions."""
    upload = request.files.get("file")
    if upload is None or not upload.filename:
        raise WageTableError("no file uploaded")

    regions = load_wage_table(upload.stream, filename=upload.filename)
    if not regions:
        raise WageTableError("no wage data found (years in the first row, regions in the first column)")
    return jsonify(RegionsResponse(regions=regions).model_dump())


def _builtin_regions() -> List[RegionWages]:
    """Built-in wage table, read once per app and path."""
    path = _config().wage_table_path
    if not path:
        return []

    cache: Dict[str, List[RegionWages]] = current_app.extensions.setdefault(WAGE_TABLE_EXTENSION, {})
    if path not in cache:
        try:
            cache[path] = load_wage_table(path)
        except WageTableError as exc:
            logger.warning("built-in wage table unavailable: %s", exc)
            cache[path] = []
    return cache[path]


@api_bp.get("/wage-tables/builtin")
def builtin_wage_table() -> Any:
    regions = _builtin_regions()

    term = request.args.get("q", "")
    if term:
        regions = search_regions(regions, term)
    return jsonify(RegionsResponse(regions=regions).model_dump())
