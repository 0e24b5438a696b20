from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api.app import create_app
from app.config.settings import Settings
from app.processor.processor import build_processor
from app.waitlist.waitlist_log import WaitlistLog


@pytest.fixture()
def example_settings() -> Settings:
    return Settings(ai_provider="example", pdf_engine="pdfplumber")


@pytest.fixture()
def waitlist_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "waitlist.txt"


@pytest.fixture()
def app(example_settings: Settings, waitlist_path: Path) -> FastAPI:
    return create_app(
        example_settings,
        processor=build_processor(example_settings),
        waitlist=WaitlistLog(waitlist_path),
    )


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
