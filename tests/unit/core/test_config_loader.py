import unittest
import os
import yaml
from unittest.mock import patch, mock_open
from pydantic import ValidationError
from core.config_loader import (
    load_config, validate_weights, AppConfig, MatchingConfig, MatchingWeights,
    AGE_BAND_COMPATIBILITY
)
from core.models import AgeBand


class TestConfigLoader(unittest.TestCase):

    def setUp(self):
        self.sample_config = {
            "roster_file": "roster.yaml",
            "matching": {
                "weights": {
                    "interests": 0.4,
                    "age": 0.2,
                    "distance": 0.2,
                    "availability": 0.15,
                    "safety": 0.05
                },
                "min_overall_score": 40
            }
        }
        self.config_yaml = yaml.dump(self.sample_config)

    def test_load_config_from_yaml(self):
        with patch("builtins.open", mock_open(read_data=self.config_yaml)):
            with patch("os.path.exists", return_value=True):
                config = load_config("dummy_path.yaml")
                self.assertIsInstance(config, AppConfig)
                self.assertEqual(config.roster_file, "roster.yaml")
                self.assertEqual(config.matching.weights.interests, 0.4)
                self.assertEqual(config.matching.min_overall_score, 40)
                # Unspecified values fall back to model defaults
                self.assertEqual(config.matching.max_age_difference_months, 24)
                self.assertEqual(config.matching.safety_penalties.smoking_concern, 0.3)

    def test_defaults_when_file_missing(self):
        with patch("os.path.exists", return_value=False):
            config = load_config("missing.yaml")
        self.assertEqual(config.matching.weights, MatchingWeights())
        self.assertEqual(config.matching.default_radius_km, 8)
        self.assertEqual(config.matching.min_overall_score, 30)

    def test_env_var_override_weights(self):
        with patch("builtins.open", mock_open(read_data=self.config_yaml)):
            with patch("os.path.exists", return_value=True):
                with patch.dict(os.environ, {"MATCHING_WEIGHT_INTERESTS": "0.5",
                                             "MATCHING_WEIGHT_SAFETY": "0.1"}):
                    config = load_config("dummy_path.yaml")
                    self.assertEqual(config.matching.weights.interests, 0.5)
                    self.assertEqual(config.matching.weights.safety, 0.1)
                    self.assertEqual(config.matching.weights.age, 0.2)

    def test_env_var_override_thresholds(self):
        with patch("os.path.exists", return_value=False):
            with patch.dict(os.environ, {"DEFAULT_MATCH_RADIUS_KM": "12",
                                         "MAX_AGE_DIFFERENCE_MONTHS": "36",
                                         "MIN_OVERALL_SCORE": "50"}):
                config = load_config("missing.yaml")
                self.assertEqual(config.matching.default_radius_km, 12.0)
                self.assertEqual(config.matching.max_age_difference_months, 36.0)
                self.assertEqual(config.matching.min_overall_score, 50.0)

    def test_non_positive_thresholds_rejected(self):
        for env in ({"MAX_AGE_DIFFERENCE_MONTHS": "0"},
                    {"DEFAULT_MATCH_RADIUS_KM": "-3"},
                    {"MIN_OVERALL_SCORE": "-1"}):
            with self.subTest(env=env):
                with patch("os.path.exists", return_value=False):
                    with patch.dict(os.environ, env):
                        with self.assertRaises(ValidationError):
                            load_config("missing.yaml")

    def test_negative_explanation_factors_rejected(self):
        with self.assertRaises(ValidationError):
            MatchingConfig(explanation_max_factors=-1)

    def test_non_numeric_env_var_ignored(self):
        with patch("os.path.exists", return_value=False):
            with patch.dict(os.environ, {"MIN_OVERALL_SCORE": "high"}):
                config = load_config("missing.yaml")
                self.assertEqual(config.matching.min_overall_score, 30)

    def test_weight_mismatch_is_logged_not_raised(self):
        bad = yaml.dump({"matching": {"weights": {"interests": 0.9}}})
        with patch("builtins.open", mock_open(read_data=bad)):
            with patch("os.path.exists", return_value=True):
                with self.assertLogs("core.config_loader", level="WARNING") as logs:
                    config = load_config("dummy_path.yaml")
        self.assertEqual(config.matching.weights.interests, 0.9)
        self.assertTrue(any("not 1.0" in line for line in logs.output))


class TestValidateWeights(unittest.TestCase):

    def test_default_weights_valid(self):
        is_valid, message = validate_weights(MatchingWeights())
        self.assertTrue(is_valid)
        self.assertIn("1.00", message)

    def test_within_tolerance(self):
        weights = MatchingWeights(interests=0.455)
        self.assertTrue(validate_weights(weights)[0])

    def test_mismatch(self):
        weights = MatchingWeights(interests=0.6)
        is_valid, message = validate_weights(weights)
        self.assertFalse(is_valid)
        self.assertIn("1.15", message)


class TestAgeBandCompatibility(unittest.TestCase):

    def test_every_band_compatible_with_itself(self):
        for band in AgeBand:
            self.assertIn(band, AGE_BAND_COMPATIBILITY[band])

    def test_neighbours_only(self):
        bands = list(AgeBand)
        for i, band in enumerate(bands):
            expected = set(bands[max(0, i - 1):i + 2])
            self.assertEqual(set(AGE_BAND_COMPATIBILITY[band]), expected, band)

    def test_boundary_bands_truncated(self):
        self.assertEqual(len(AGE_BAND_COMPATIBILITY[AgeBand.INFANT_0_12M]), 2)
        self.assertEqual(len(AGE_BAND_COMPATIBILITY[AgeBand.TEEN_13_PLUS]), 2)

    def test_matching_config_defaults(self):
        config = MatchingConfig()
        self.assertEqual(config.explanation_threshold, 30)
        self.assertEqual(config.explanation_max_factors, 3)
        self.assertEqual(config.safety_penalties.pet_allergy_conflict, 0.5)


if __name__ == '__main__':
    unittest.main()
