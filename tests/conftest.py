"""Test fixtures for the Okecho tank table tool."""

import json
import sys
from pathlib import Path

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from app import create_app
from services.calibration_store import CalibrationStore
from services.conversion_service import ConversionService
from services.tank_catalog import TankCatalog
from fixtures import SAMPLE_METADATA, SAMPLE_TABLES, as_json_document


@pytest.fixture
def store():
    """Calibration store built from the sample tables."""
    return CalibrationStore(SAMPLE_TABLES, metadata=SAMPLE_METADATA)


@pytest.fixture
def catalog(store):
    return TankCatalog(store)


@pytest.fixture
def service(store):
    return ConversionService(store)


@pytest.fixture
def tables_path(tmp_path):
    """Write the sample tables to a JSON file."""
    path = tmp_path / "calibration_tables.json"
    path.write_text(json.dumps(as_json_document()), encoding="utf-8")
    return path


@pytest.fixture
def app(tables_path, tmp_path):
    """Create Flask app for testing."""
    app = create_app("testing", overrides={
        "CALIBRATION_TABLES_PATH": tables_path,
        "LOG_DIR": tmp_path / "logs",
        "SECRET_KEY": "test-secret-key",
        "HISTORY_LIMIT": 5,
    })
    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()
