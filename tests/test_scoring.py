"""Tests for the composite score."""

import unittest

from speedprobe.measurements.scoring import (
    DOWNLOAD_WEIGHT,
    PING_WEIGHT,
    UPLOAD_WEIGHT,
    calculate_overall_speed,
)


class TestCalculateOverallSpeed(unittest.TestCase):
    def test_reference_values(self):
        self.assertAlmostEqual(calculate_overall_speed(100, 50, 20), 65.01)

    def test_weights_sum_to_one(self):
        self.assertAlmostEqual(DOWNLOAD_WEIGHT + UPLOAD_WEIGHT + PING_WEIGHT, 1.0)

    def test_missing_download(self):
        self.assertIsNone(calculate_overall_speed(None, 50, 20))

    def test_missing_upload(self):
        self.assertIsNone(calculate_overall_speed(100, None, 20))

    def test_missing_ping(self):
        self.assertIsNone(calculate_overall_speed(100, 50, None))

    def test_zero_ping(self):
        self.assertIsNone(calculate_overall_speed(100, 50, 0))

    def test_negative_ping(self):
        self.assertIsNone(calculate_overall_speed(100, 50, -1.0))

    def test_zero_speeds_still_score(self):
        self.assertAlmostEqual(calculate_overall_speed(0.0, 0.0, 10.0), 0.02)


if __name__ == "__main__":
    unittest.main()
