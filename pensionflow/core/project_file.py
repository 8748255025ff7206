"""Save/load of a projection as a JSON bundle of settings and series."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, ValidationError

from pensionflow.models import Settings, YearRecord

logger = logging.getLogger(__name__)

PROJECT_FORMAT_VERSION = 1


class ProjectFileError(ValueError):
    pass


class ProjectBundle(BaseModel):
    model_config = ConfigDict(extra="ignore")

    version: int = PROJECT_FORMAT_VERSION
    timestamp: str = ""
    settings: Settings
    data: List[YearRecord]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def export_project(
    settings: Settings,
    series: Sequence[YearRecord],
    now: Optional[datetime] = None,
) -> ProjectBundle:
    # UTC with milliseconds, e.g. 2026-03-14T09:30:00.000Z
    stamp = (now or _utcnow()).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return ProjectBundle(
        version=PROJECT_FORMAT_VERSION,
        timestamp=stamp,
        settings=settings,
        data=list(series),
    )


def dump_project(bundle: ProjectBundle) -> str:
    return bundle.model_dump_json(indent=2)


def project_filename(now: Optional[datetime] = None) -> str:
    return f"pension-plan-{(now or _utcnow()).date().isoformat()}.json"


def load_project(text: str) -> ProjectBundle:
    """
    Parse a saved bundle. The series is returned exactly as saved, so edits
    survive the round trip instead of being regenerated from the settings.
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProjectFileError("file is not valid JSON") from exc

    if not isinstance(raw, dict) or "settings" not in raw or not isinstance(raw.get("data"), list):
        raise ProjectFileError("missing settings or data")

    try:
        bundle = ProjectBundle.model_validate(raw)
    except ValidationError as exc:
        raise ProjectFileError(f"invalid project file: {exc.error_count()} field error(s)") from exc

    logger.info("loaded project v%d with %d years", bundle.version, len(bundle.data))
    return bundle
