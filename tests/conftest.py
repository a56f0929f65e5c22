"""Pytest configuration and shared fixtures"""
import pytest
from unittest.mock import Mock

from metricgrid.client.config import GridConfig
from metricgrid.client.controller import MetricsGridController
from metricgrid.client.page import Document


def make_http_client(names=None, error=None):
    """Stand-in for MetricGridHttpClient returning `names` or raising `error`"""
    client = Mock()
    client.server_base = "http://metrics.test"
    if error is not None:
        client.fetch_metric_names.side_effect = error
    else:
        client.fetch_metric_names.return_value = list(names or [])
    return client


@pytest.fixture
def grid_config():
    """Default grid configuration with a fast refresh timer"""
    return GridConfig(refresh_interval=0.01)


@pytest.fixture
def document():
    """Page holding a single metrics container"""
    return Document.with_container()


@pytest.fixture
def sample_http_client():
    """HTTP client serving two metrics"""
    return make_http_client(["cpu", "mem"])


@pytest.fixture
def controller(document, sample_http_client, grid_config):
    """Controller wired to the sample page and client"""
    return MetricsGridController(document, sample_http_client, grid_config)
