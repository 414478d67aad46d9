"""Put src/ on the import path and register the hypothesis profiles used by the tests."""

import sys
from pathlib import Path

from hypothesis import HealthCheck, settings


def pytest_configure() -> None:
    """Add the src directory to the import path."""
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


settings.register_profile(
    "default",
    settings(deadline=None, suppress_health_check=[HealthCheck.too_slow]),
)
settings.register_profile("ci", settings(max_examples=500, deadline=None))
settings.load_profile("default")
