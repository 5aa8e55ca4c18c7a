"""Tests for status derivation, confidence clamping and telemetry estimates."""

import math
import unittest

from slip_parser.services.slip.normalize import (
    clamp_confidence,
    derive_status,
    estimate_cost,
    estimate_image_size_kb,
    normalize_slip_data,
)


class DeriveStatusTests(unittest.TestCase):
    def test_complete(self):
        self.assertEqual(derive_status({"transactionId": "T1", "toAccountNumber": "A1"}), "complete")

    def test_partial_transaction_only(self):
        self.assertEqual(derive_status({"transactionId": "T1", "toAccountNumber": None}), "partial")

    def test_partial_account_only(self):
        self.assertEqual(derive_status({"toAccountNumber": "A1"}), "partial")

    def test_empty(self):
        self.assertEqual(derive_status({"transactionId": None, "toAccountNumber": None}), "empty")

    def test_zero_id_counts_as_missing(self):
        self.assertEqual(derive_status({"transactionId": 0, "toAccountNumber": "A1"}), "partial")

    def test_empty_strings_count_as_missing(self):
        self.assertEqual(derive_status({"transactionId": "", "toAccountNumber": ""}), "empty")


class ClampConfidenceTests(unittest.TestCase):
    def test_above_range(self):
        self.assertEqual(clamp_confidence(150), 100)

    def test_below_range(self):
        self.assertEqual(clamp_confidence(-5), 0)

    def test_in_range_not_rounded(self):
        self.assertEqual(clamp_confidence(87.5), 87.5)

    def test_non_numeric(self):
        self.assertIsNone(clamp_confidence("high"))
        self.assertIsNone(clamp_confidence(None))
        self.assertIsNone(clamp_confidence("90"))

    def test_bool_is_not_numeric(self):
        self.assertIsNone(clamp_confidence(True))

    def test_nan(self):
        self.assertIsNone(clamp_confidence(math.nan))


class EstimateCostTests(unittest.TestCase):
    def test_default_rates(self):
        cost = estimate_cost(2000, 500, rate_per_1k_input=0.00015, rate_per_1k_output=0.0006)
        self.assertEqual(cost, 0.0006)

    def test_rounded_to_six_decimals(self):
        cost = estimate_cost(1, 1, rate_per_1k_input=0.00015, rate_per_1k_output=0.0006)
        self.assertEqual(cost, 0.000001)

    def test_zero_tokens(self):
        self.assertEqual(estimate_cost(0, 0, rate_per_1k_input=0.00015, rate_per_1k_output=0.0006), 0.0)


class EstimateImageSizeTests(unittest.TestCase):
    def test_raw_base64(self):
        self.assertEqual(estimate_image_size_kb("A" * 1368), 1)

    def test_data_uri_prefix_ignored(self):
        self.assertEqual(estimate_image_size_kb("data:image/png;base64," + "A" * 1368), 1)

    def test_halves_round_up(self):
        # 6144 * 3 / 4 / 1024 == 4.5
        self.assertEqual(estimate_image_size_kb("A" * 6144), 5)

    def test_small_image_rounds_to_zero(self):
        self.assertEqual(estimate_image_size_kb("A" * 100), 0)


class NormalizeSlipDataTests(unittest.TestCase):
    def test_full_reply(self):
        data = normalize_slip_data(
            {"transactionId": "T1", "toAccountNumber": "A1", "confidenceScore": 92, "rawText": "BML transfer"}
        )
        self.assertEqual(data.transaction_id, "T1")
        self.assertEqual(data.to_account_number, "A1")
        self.assertEqual(data.confidence_score, 92)
        self.assertEqual(data.raw_text, "BML transfer")

    def test_empty_strings_become_none(self):
        data = normalize_slip_data({"transactionId": "", "toAccountNumber": "  ", "rawText": ""})
        self.assertIsNone(data.transaction_id)
        self.assertIsNone(data.to_account_number)
        self.assertIsNone(data.raw_text)

    def test_missing_fields_become_none(self):
        data = normalize_slip_data({})
        self.assertEqual(
            data.model_dump(by_alias=True),
            {"transactionId": None, "toAccountNumber": None, "confidenceScore": None, "rawText": None},
        )

    def test_numeric_account_number_rendered_as_string(self):
        data = normalize_slip_data({"toAccountNumber": 7730000123456})
        self.assertEqual(data.to_account_number, "7730000123456")

    def test_zero_id_becomes_none(self):
        data = normalize_slip_data({"transactionId": 0, "toAccountNumber": 0.0})
        self.assertIsNone(data.transaction_id)
        self.assertIsNone(data.to_account_number)

    def test_confidence_clamped(self):
        self.assertEqual(normalize_slip_data({"confidenceScore": 150}).confidence_score, 100)
        self.assertIsNone(normalize_slip_data({"confidenceScore": "high"}).confidence_score)
