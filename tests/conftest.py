"""Pytest configuration and fixtures."""
import pytest
import tempfile
import shutil
from pathlib import Path
import geopandas as gpd
from shapely.geometry import Polygon
from doorcode.core.classifier import AreaClassifier
from doorcode.core.duckdb_store import DuckDBStore
from doorcode.core.locator import AdministrativeLocator
from doorcode.core.orchestrator import EnhancedAddressOrchestrator
from doorcode.core.rural import RuralAddressGenerator
from doorcode.core.sequence import InMemoryCounterStore, SequenceAllocator
from doorcode.registry.bbox import BoundingBoxRegistry


@pytest.fixture
def temp_db():
    """Create temporary DuckDB database."""
    temp_dir = tempfile.mkdtemp()
    db_path = Path(temp_dir) / "test.duckdb"
    db_store = DuckDBStore(db_path)
    yield db_store
    db_store.close()
    shutil.rmtree(temp_dir)


@pytest.fixture
def sample_boundaries():
    """Sample state and LGA polygons around Lagos."""
    # Lagos state
    state_poly = Polygon([
        (3.0, 6.3), (4.0, 6.3), (4.0, 6.8), (3.0, 6.8), (3.0, 6.3)
    ])

    # Two LGAs splitting the state at lon 3.5
    ikeja_poly = Polygon([
        (3.0, 6.3), (3.5, 6.3), (3.5, 6.8), (3.0, 6.8), (3.0, 6.3)
    ])
    ikorodu_poly = Polygon([
        (3.5, 6.3), (4.0, 6.3), (4.0, 6.8), (3.5, 6.8), (3.5, 6.3)
    ])

    return {
        "states": gpd.GeoDataFrame(
            [{"state_name": "Lagos", "geometry": state_poly}],
            crs="EPSG:4326"
        ),
        "lgas": gpd.GeoDataFrame(
            [
                {"state_code": "LA", "lga_code": "015", "lga_name": "Ikeja", "geometry": ikeja_poly},
                {"state_code": "LA", "lga_code": "016", "lga_name": "Ikorodu", "geometry": ikorodu_poly},
            ],
            crs="EPSG:4326"
        ),
    }


@pytest.fixture
def populated_db(temp_db, sample_boundaries):
    """Database with the Lagos sample boundaries."""
    temp_db.ingest_boundaries("admin1_state", sample_boundaries["states"])
    temp_db.ingest_boundaries("admin2_lga", sample_boundaries["lgas"])
    return temp_db


@pytest.fixture
def bbox_registry():
    """Bounding-box registry with the default test cities."""
    return BoundingBoxRegistry()


@pytest.fixture
def locator(bbox_registry):
    """Strict locator without a timeout thread."""
    return AdministrativeLocator(bbox_registry, best_effort=False, timeout=None)


@pytest.fixture
def counter_store():
    return InMemoryCounterStore()


@pytest.fixture
def orchestrator(locator, counter_store):
    """Orchestrator over the bounding-box registry with in-memory counters."""
    return EnhancedAddressOrchestrator(
        locator=locator,
        classifier=AreaClassifier(),
        allocator=SequenceAllocator(counter_store),
        rural_generator=RuralAddressGenerator(registry=locator.registry, timeout=None),
    )
