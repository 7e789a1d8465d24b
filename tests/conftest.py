"""
Pytest configuration and shared fixtures for scaffolder tests.
"""

import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader

# Add src and tests to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from mocks import MockTaskContext  # noqa: E402

from scaffolder_core.actions import TemplateActionRegistry  # noqa: E402
from scaffolder_core.telemetry import (  # noqa: E402
    ScaffolderMetrics,
    reset_loggers,
    reset_telemetry,
)
from scaffolder_core.workflow import SUPPORTED_API_VERSION  # noqa: E402

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def working_directory(tmp_path: Path) -> Path:
    """Return a fresh working directory for task workspaces."""
    path = tmp_path / "work"
    path.mkdir()
    return path


# =============================================================================
# Telemetry Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_global_state() -> Generator[None, None, None]:
    """Reset cached loggers and telemetry around each test."""
    reset_loggers()
    reset_telemetry()
    yield
    reset_loggers()
    reset_telemetry()


@pytest.fixture
def metric_reader() -> InMemoryMetricReader:
    """Return an in-memory reader to collect recorded metrics."""
    return InMemoryMetricReader()


@pytest.fixture
def metrics(metric_reader: InMemoryMetricReader) -> ScaffolderMetrics:
    """Return ScaffolderMetrics backed by a private meter provider."""
    provider = MeterProvider(metric_readers=[metric_reader])
    return ScaffolderMetrics(provider.get_meter("scaffolder-test"))


@pytest.fixture
def collect_metrics(metric_reader: InMemoryMetricReader) -> Callable[[], dict[str, list[Any]]]:
    """Return a callable mapping metric name to its data points."""

    def _collect() -> dict[str, list[Any]]:
        data = metric_reader.get_metrics_data()
        collected: dict[str, list[Any]] = {}
        if data is None:
            return collected
        for resource_metrics in data.resource_metrics:
            for scope_metrics in resource_metrics.scope_metrics:
                for metric in scope_metrics.metrics:
                    if metric.data.data_points:
                        collected.setdefault(metric.name, []).extend(metric.data.data_points)
        return collected

    return _collect


# =============================================================================
# Task Fixtures
# =============================================================================


@pytest.fixture
def action_registry() -> TemplateActionRegistry:
    """Return an empty action registry."""
    return TemplateActionRegistry()


@pytest.fixture
def make_task() -> Callable[..., MockTaskContext]:
    """Factory building a MockTaskContext from steps and task fields."""

    def _make_task(
        steps: list[dict[str, Any]],
        *,
        parameters: dict[str, Any] | None = None,
        output: dict[str, Any] | None = None,
        api_version: str = SUPPORTED_API_VERSION,
        user: dict[str, Any] | None = None,
        template_name: str = "test-template",
        **kwargs: Any,
    ) -> MockTaskContext:
        data: dict[str, Any] = {
            "apiVersion": api_version,
            "steps": steps,
            "parameters": parameters or {},
            "output": output or {},
            "templateInfo": {
                "baseUrl": "https://example.com/templates/",
                "entity": {"metadata": {"name": template_name}},
            },
        }
        if user is not None:
            data["user"] = user
        return MockTaskContext.from_dict(data, **kwargs)

    return _make_task


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "workflow: Workflow runner tests")
    config.addinivalue_line("markers", "registry: Registry tests")
