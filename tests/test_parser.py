"""End-to-end tests for parsing complete exposition texts"""
import math
import os
from pathlib import Path
from unittest.mock import patch
import pytest

from config import Config
from exposition import ExpositionParser, Metric, MetricType, ParseError, Sample, parse_complete

FIXTURES = Path(__file__).parent / "fixtures"


def fixture_files(prefix):
    """List the .prom fixtures whose name starts with prefix"""
    return sorted(p for p in FIXTURES.glob("*.prom") if p.name.startswith(prefix))


def assert_metric(metric, name, data_type, samples):
    assert metric.name == name, f"name {metric!r}"
    assert metric.data_type == data_type, f"type {metric!r}"
    assert metric.samples == samples


class TestParseComplete:
    """Test the pure parse entry point"""

    def test_parse_summary(self):
        """Test that repeated TYPE and sample pairs merge into one metric"""
        res = parse_complete(
            "\n"
            "# TYPE chain_account_commits summary\n"
            'chain_account_commits {quantile="0.5"} 0\n'
            "\n"
            "# TYPE chain_account_commits summary\n"
            'chain_account_commits {quantile="0.75"} 123\n'
            "\n"
            "# TYPE chain_account_commits summary\n"
            'chain_account_commits {quantile="0.95"} 50\n'
        )

        assert len(res) == 1
        assert_metric(res[0], "chain_account_commits", MetricType.SUMMARY, [
            Sample(labels={"quantile": "0.5"}, value=0.0),
            Sample(labels={"quantile": "0.75"}, value=123.0),
            Sample(labels={"quantile": "0.95"}, value=50.0),
        ])

    def test_parse_complete(self):
        res = parse_complete(
            "\n"
            "# HELP http_requests_total The total number of HTTP requests.\n"
            "# TYPE http_requests_total counter\n"
            'http_requests_total{method="post",code="200"} 1027 1395066363000\n'
            'http_requests_total{method="post",code="400"} 1028 1395066363000\n'
            "\n"
            "rpc_duration_seconds_count 2693\n"
        )

        assert len(res) == 2
        assert_metric(res[0], "http_requests_total", MetricType.COUNTER, [
            Sample(labels={"method": "post", "code": "200"}, value=1027.0, timestamp=1395066363000),
            Sample(labels={"method": "post", "code": "400"}, value=1028.0, timestamp=1395066363000),
        ])
        assert_metric(res[1], "rpc_duration_seconds_count", MetricType.UNTYPED, [
            Sample(labels={}, value=2693.0, timestamp=None),
        ])

    def test_output_sorted_by_name(self):
        """Test that metrics come out ordered by name, not by first appearance"""
        res = parse_complete(
            "b 1\n"
            "# TYPE a gauge\n"
            "c 3\n"
            "a 2\n"
        )

        assert [m.name for m in res] == ["a", "b", "c"]

    def test_type_after_samples_applies(self):
        res = parse_complete("x 1\nx 2\n# TYPE x counter\n")

        assert res[0].data_type == MetricType.COUNTER
        assert [s.value for s in res[0].samples] == [1.0, 2.0]

    def test_conflicting_types_last_wins(self):
        res = parse_complete("# TYPE x counter\nx 1\n# TYPE x gauge\n")
        assert res[0].data_type == MetricType.GAUGE

    def test_repeated_type_same_as_single(self):
        once = parse_complete("# TYPE x counter\nx 1\n")
        twice = parse_complete("# TYPE x counter\n# TYPE x counter\nx 1\n")
        assert once == twice

    def test_type_without_samples_kept(self):
        res = parse_complete("# TYPE declared_only histogram\n")
        assert res == [Metric("declared_only", MetricType.HISTOGRAM)]

    def test_special_values(self):
        res = parse_complete("a NaN\nb +Inf\nc -Inf\n")

        assert math.isnan(res[0].samples[0].value)
        assert res[1].samples[0].value == math.inf
        assert res[2].samples[0].value == -math.inf

    def test_duplicate_labels_last_wins(self):
        res = parse_complete('x{a="1",a="2"} 1\n')
        assert res[0].samples[0].labels == {"a": "2"}

    def test_empty_input(self):
        assert parse_complete("") == []

    def test_blank_and_comment_lines_only(self):
        assert parse_complete("\n   \n# nothing here\n") == []

    def test_semantically_odd_input_accepted(self):
        """Test that sample shapes are not checked against the declared type"""
        res = parse_complete("# TYPE s summary\ns{not_a_quantile=\"x\"} 1\n")
        assert res[0].data_type == MetricType.SUMMARY

    def test_rejects_bytes(self):
        with pytest.raises(TypeError):
            parse_complete(b"up 1\n")


class TestParseCompleteFailures:
    """Test that any malformed line fails the whole call"""

    def test_name_without_value(self):
        with pytest.raises(ParseError) as exc_info:
            parse_complete("up 1\nmetric_without_timestamp_and_labels\n")

        assert exc_info.value.line == 2
        assert exc_info.value.remainder == "\n"

    def test_unknown_type_keyword(self):
        """Test that an unknown TYPE keyword fails instead of falling back to untyped"""
        with pytest.raises(ParseError) as exc_info:
            parse_complete("# TYPE x sometype\nx 1\n")

        assert exc_info.value.rule == "type_declaration"
        assert exc_info.value.remainder.startswith("sometype")

    def test_error_message(self):
        with pytest.raises(ParseError, match=r"line 1, column 4: value rejected 'abc'"):
            parse_complete("up abc\n")


class TestHelpWiring:
    """HELP text is routed into Metric.help; these tests pin that choice"""

    def test_help_populates_metric_help(self):
        res = parse_complete(
            "# HELP http_requests_total The total number of HTTP requests.\n"
            "# TYPE http_requests_total counter\n"
            "http_requests_total 1\n"
        )

        assert res[0].help == "The total number of HTTP requests."

    def test_metric_without_help_has_none(self):
        assert parse_complete("up 1\n")[0].help is None

    def test_last_help_wins(self):
        res = parse_complete("# HELP up first\n# HELP up second\nup 1\n")
        assert res[0].help == "second"

    def test_help_alone_creates_no_metric(self):
        """Test that metrics only come from sample and TYPE lines"""
        assert parse_complete("# HELP up Target health.\n") == []

    def test_help_after_samples_applies(self):
        res = parse_complete("up 1\n# HELP up Target health.\n")
        assert res == [Metric("up", MetricType.UNTYPED, [Sample(labels={}, value=1.0)], "Target health.")]

    def test_help_for_other_metric_not_attached(self):
        res = parse_complete("# HELP down Not scraped.\nup 1\n")
        assert [m.name for m in res] == ["up"]
        assert res[0].help is None


class TestFixtureFiles:
    """Test the .prom fixtures: ok_* must parse, nok_* must fail"""

    @pytest.mark.parametrize("path", fixture_files("ok_"), ids=lambda p: p.name)
    def test_ok_fixture_files(self, path):
        parse_complete(path.read_text(encoding="utf-8"))

    @pytest.mark.parametrize("path", fixture_files("nok_"), ids=lambda p: p.name)
    def test_nok_fixture_files(self, path):
        with pytest.raises(ParseError):
            parse_complete(path.read_text(encoding="utf-8"))

    def test_text_format_example(self):
        res = parse_complete((FIXTURES / "ok_text_format_example.prom").read_text(encoding="utf-8"))
        by_name = {m.name: m for m in res}

        assert [m.name for m in res] == sorted(by_name)
        assert len(res) == 11
        assert by_name["http_requests_total"].data_type == MetricType.COUNTER
        assert by_name["http_request_duration_seconds"].data_type == MetricType.HISTOGRAM
        assert by_name["http_request_duration_seconds"].samples == []
        assert len(by_name["http_request_duration_seconds_bucket"].samples) == 6
        assert by_name["rpc_duration_seconds"].data_type == MetricType.SUMMARY
        assert [s.labels["quantile"] for s in by_name["rpc_duration_seconds"].samples] == [
            "0.01", "0.05", "0.5", "0.9", "0.99",
        ]
        assert by_name["msdos_file_access_time_seconds"].samples[0].labels["path"] == "C:\\DIR\\FILE.TXT"
        assert by_name["something_weird"].samples[0].timestamp == -3982045


class TestExpositionParser:
    """Test the configured parser facade"""

    def setup_method(self):
        """Setup test fixtures"""
        self.config = Config()
        self.parser = ExpositionParser(self.config)

    def test_parse(self):
        res = self.parser.parse("# TYPE up gauge\nup 1\n")
        assert res == [Metric("up", MetricType.GAUGE, [Sample(labels={}, value=1.0)])]

    def test_parse_failure_is_raised(self):
        with pytest.raises(ParseError):
            self.parser.parse("up\n")

    def test_parse_file(self, tmp_path):
        path = tmp_path / "metrics.prom"
        path.write_text("up 1\n", encoding="utf-8")

        assert [m.name for m in self.parser.parse_file(path)] == ["up"]

    def test_parse_file_from_config(self, tmp_path):
        path = tmp_path / "metrics.prom"
        path.write_text("# TYPE up gauge\nup 1\n", encoding="utf-8")

        with patch.dict(os.environ, {"PROMETHEUS_FILE": str(path)}):
            parser = ExpositionParser(Config())

        assert parser.parse_file()[0].data_type == MetricType.GAUGE

    def test_parse_file_without_path(self):
        config = Config()
        config.prometheus_file = None

        with pytest.raises(ValueError):
            ExpositionParser(config).parse_file()

    def test_parse_fixture_file(self):
        res = self.parser.parse_file(FIXTURES / "ok_node_exporter.prom")
        by_name = {m.name: m for m in res}

        assert by_name["node_load1"].samples[0].value == pytest.approx(0.36)
        assert by_name["node_scrape_collector_success"].data_type == MetricType.GAUGE
        assert by_name["process_start_time_seconds"].data_type == MetricType.UNTYPED
        assert math.isnan(by_name["go_memstats_last_gc_time_seconds"].samples[0].value)

    def test_default_config(self):
        assert isinstance(ExpositionParser().config, Config)
