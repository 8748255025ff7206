from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from pensionflow.app import create_app
from pensionflow.config import AppConfig
from pensionflow.models import DEFAULT_SETTINGS, Settings


@pytest.fixture()
def app_config(tmp_path) -> AppConfig:
    table = tmp_path / "social_wages.csv"
    table.write_text(
        "region,2024,2025,2026\n"
        "Beijing,12813,13500,14200\n"
        "Chengdu,9201,,9900\n"
        "Shanghai,\"12,307\",12900,13400\n",
        encoding="utf-8",
    )
    return AppConfig(wage_table_path=str(table), log_level="WARNING")


@pytest.fixture()
def client(app_config: AppConfig) -> FlaskClient:
    app = create_app(app_config)
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def settings() -> Settings:
    return DEFAULT_SETTINGS.model_copy()
