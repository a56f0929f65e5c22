"""Unit tests for image cells and chart URL construction"""
from urllib.parse import parse_qs, unquote, urlsplit

import pytest

from metricgrid.client.cells import AggregationOp, ImageCell, encode_metric_name, iter_cells


class TestImageCell:
    """Identity, label and source of a single cell"""

    def test_identity_and_label(self):
        cell = ImageCell("cpu", AggregationOp.SUM)

        assert cell.identity == "cpu-sum"
        assert cell.label == "cpu sum"

    def test_render_src_has_size_but_no_timestamp(self):
        cell = ImageCell("cpu", AggregationOp.AVG)

        assert cell.src(800, 500) == "/metric/cpu/avg.png?width=800&height=500"

    def test_refresh_src_puts_timestamp_first(self):
        cell = ImageCell("mem", AggregationOp.COUNT)

        assert cell.src(800, 500, timestamp=1700000000000) == \
            "/metric/mem/count.png?t=1700000000000&width=800&height=500"

    def test_base_url_is_prepended_without_double_slash(self):
        cell = ImageCell("cpu", AggregationOp.SUM)

        assert cell.src(10, 20, base_url="http://metrics:8080/").startswith("http://metrics:8080/metric/cpu/")


class TestEncoding:
    """Metric names that need percent-encoding"""

    @pytest.mark.parametrize("name", [
        "disk /var/lib",
        "latency?p=99&x=1",
        "100%",
        "temp#1",
        "наличие",
    ])
    def test_encoded_path_decodes_back_to_name(self, name):
        src = ImageCell(name, AggregationOp.SUM).src(800, 500)
        parts = urlsplit(src)

        segments = parts.path.split("/")
        assert segments[:2] == ["", "metric"]
        assert segments[3] == "sum.png"
        assert len(segments) == 4
        assert unquote(segments[2]) == name
        assert parse_qs(parts.query) == {"width": ["800"], "height": ["500"]}

    def test_matches_uri_component_unreserved_set(self):
        assert encode_metric_name("a-b_c.d!e~f*g'h(i)") == "a-b_c.d!e~f*g'h(i)"
        assert encode_metric_name("a b/c") == "a%20b%2Fc"


class TestIterCells:
    """Grid ordering"""

    def test_outer_names_inner_ops(self):
        identities = [cell.identity for cell in iter_cells(["cpu", "mem"])]

        assert identities == ["cpu-sum", "cpu-count", "cpu-avg", "mem-sum", "mem-count", "mem-avg"]

    def test_empty_names_yield_nothing(self):
        assert list(iter_cells([])) == []
