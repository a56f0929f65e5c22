"""Unit tests for the UI server routes

Runs the FastAPI app with a stand-in metrics client so startup loads the
grid without network access.
"""
from fastapi.testclient import TestClient

from metricgrid.client.controller import FAILURE_MESSAGE
from metricgrid.client.http_client import MetricsFetchError
from metricgrid.server.app import create_app
from metricgrid.server.config import ServerConfig

from conftest import make_http_client


def make_client(http_client, **grid):
    config = ServerConfig(page_title="Test metrics", grid={"refresh_interval": 30, **grid})
    return TestClient(create_app(config, http_client=http_client))


class TestIndexPage:
    """GET /"""

    def test_renders_grid_with_polling(self):
        with make_client(make_http_client(["cpu", "mem"])) as client:
            response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        html = response.text
        assert "<title>Test metrics</title>" in html
        assert 'id="cpu-sum"' in html
        assert 'id="mem-avg"' in html
        assert html.count("<img") == 6
        assert 'src="http://127.0.0.1:8080/metric/cpu/count.png?width=800&amp;height=500"' in html
        assert 'hx-get="/grid"' in html
        assert "every 30000ms" in html

    def test_failed_load_shows_message_without_polling(self):
        with make_client(make_http_client(error=MetricsFetchError("HTTP 500", status=500))) as client:
            response = client.get("/")

        assert response.status_code == 200
        assert FAILURE_MESSAGE in response.text
        assert "<img" not in response.text
        assert "hx-get" not in response.text


class TestGridFragment:
    """GET /grid"""

    def test_fragment_reflects_refresh(self):
        with make_client(make_http_client(["cpu"])) as client:
            controller = client.app.state.controller
            controller.refresh_metrics(controller.container, controller.metric_names)
            response = client.get("/grid")

        assert response.status_code == 200
        assert response.text.count("<img") == 3
        assert "?t=" in response.text
        assert "<html" not in response.text


class TestAssets:
    """Static assets and health"""

    def test_stylesheet(self):
        with make_client(make_http_client([])) as client:
            response = client.get("/css/style.css")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/css")
        assert ".image-responsive" in response.text

    def test_health(self):
        with make_client(make_http_client(["cpu", "mem"])) as client:
            response = client.get("/health")

        assert response.json() == {"status": "ok", "state": "rendered", "metrics": 2}

    def test_shutdown_cancels_refresh_timer(self):
        with make_client(make_http_client(["cpu"])) as client:
            controller = client.app.state.controller
            assert controller.refresh_armed

        assert not controller.refresh_armed


class TestChartOrigin:
    """Chart images point at the metrics server, not at this app"""

    def test_images_default_to_metrics_server(self):
        with make_client(make_http_client(["cpu"]), server="http://metrics:8080") as client:
            img = client.app.state.controller.image_for("cpu", "sum")
            src = img.get_attribute("src")
            local = client.get(src.replace("http://metrics:8080", ""))

        assert src == "http://metrics:8080/metric/cpu/sum.png?width=800&height=500"
        assert local.status_code == 404

    def test_explicit_image_base_url_kept(self):
        with make_client(make_http_client(["cpu"]), server="http://metrics:8080",
                         image_base_url="https://charts.example.com") as client:
            src = client.app.state.controller.image_for("cpu", "avg").get_attribute("src")

        assert src.startswith("https://charts.example.com/metric/cpu/avg.png?")


class TestContainerSelector:
    """Configured selector decides which container hosts the grid"""

    def test_id_selector_renders_grid(self):
        with make_client(make_http_client(["cpu"]), container_selector="#charts") as client:
            response = client.get("/")

        assert 'id="charts"' in response.text
        assert response.text.count("<img") == 3
