"""Tests for the speed test orchestration."""

import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from speedprobe import bootstrap
from speedprobe.config import AppConfig, LoggingConfig, PathsConfig, ProbeConfig, WebConfig
from speedprobe.logging_setup import configure_logging
from speedprobe.measurements.manager import MeasurementManager
from speedprobe.measurements.models import LatencyStats


def _config(tmp: Path) -> AppConfig:
    return AppConfig(
        root_dir=tmp,
        paths=PathsConfig(logs_dir=tmp / "logs"),
        web=WebConfig(),
        probes=ProbeConfig(),
        logging=LoggingConfig(level="DEBUG"),
    )


class TestMeasurementManager(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.manager = MeasurementManager(_config(Path(self._tmp.name)))
        self.calls = mock.Mock()
        self.manager.download = self.calls.download
        self.manager.upload = self.calls.upload
        self.manager.latency = self.calls.latency
        self.manager.region = self.calls.region
        self.manager.address = self.calls.address

    def tearDown(self):
        self._tmp.cleanup()

    def test_probes_run_in_order(self):
        self.calls.download.run.return_value = 10.0
        self.calls.upload.run.return_value = 5.0
        self.calls.latency.run.return_value = LatencyStats(ping_ms=20.0, jitter_ms=1.0)
        self.manager.run_speedtest()
        self.assertEqual(
            [name for name, _, _ in self.calls.mock_calls],
            ["download.run", "upload.run", "latency.run", "region.run", "address.run"],
        )

    def test_report_assembled(self):
        self.calls.download.run.return_value = 100.0
        self.calls.upload.run.return_value = 50.0
        self.calls.latency.run.return_value = LatencyStats(ping_ms=20.0, jitter_ms=2.5, samples=[20.0] * 10)
        self.calls.region.run.return_value = "us-east"
        self.calls.address.run.return_value = "192.168.0.7"

        report = self.manager.run_speedtest()

        self.assertAlmostEqual(report.overall_speed, 65.01)
        self.assertEqual(report.download_mbps, 100.0)
        self.assertEqual(report.upload_mbps, 50.0)
        self.assertEqual(report.ping_ms, 20.0)
        self.assertEqual(report.jitter_ms, 2.5)
        self.assertEqual(report.region, "us-east")
        self.assertEqual(report.ip_address, "192.168.0.7")

    def test_failed_probe_leaves_score_absent(self):
        self.calls.download.run.return_value = None
        self.calls.upload.run.return_value = 50.0
        self.calls.latency.run.return_value = LatencyStats.failed()
        self.calls.region.run.return_value = None
        self.calls.address.run.return_value = None

        report = self.manager.run_speedtest()

        self.assertIsNone(report.overall_speed)
        self.assertIsNone(report.ping_ms)
        self.assertIsNone(report.jitter_ms)
        self.assertEqual(report.upload_mbps, 50.0)

    def test_unexpected_error_propagates(self):
        self.calls.upload.run.side_effect = RuntimeError("unexpected")
        with self.assertRaises(RuntimeError):
            self.manager.run_speedtest()
        self.calls.latency.run.assert_not_called()


class TestBootstrap(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        root = logging.getLogger()
        self._saved = (root.level, list(root.handlers))

    def tearDown(self):
        root = logging.getLogger()
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        level, handlers = self._saved
        root.setLevel(level)
        for handler in handlers:
            root.addHandler(handler)
        self._tmp.cleanup()

    def test_configure_logging(self):
        log_path = configure_logging(_config(self.tmp))
        self.assertEqual(log_path, self.tmp / "logs" / "speedprobe.log")
        self.assertEqual(logging.getLogger().level, logging.DEBUG)
        self.assertEqual(len(logging.getLogger().handlers), 2)

    def test_bootstrap_wires_app(self):
        config_file = self.tmp / "config.yaml"
        config_file.write_text("web:\n  port: 3100\n", encoding="utf-8")
        context = bootstrap(str(config_file), environ={"HOST": "1.1.1.1"})
        self.assertEqual(context.config.web.port, 3100)
        self.assertEqual(context.measurements.latency.host, "1.1.1.1")
        self.assertIn("/speedtest", [rule.rule for rule in context.web_app.url_map.iter_rules()])


if __name__ == "__main__":
    unittest.main()
