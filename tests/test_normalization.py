"""Tests for feature summaries and normalizers."""

import numpy as np
import pytest

from predictkit.normalization import (
    LogisticNormalizer,
    MinMaxNormalizer,
    Normalizer,
    NormalizerType,
    Summary,
    ZScoreNormalizer,
    create_normalizer,
)


# --- Summary ---


class TestSummary:
    """Tests for Summary."""

    def test_summarize(self, sample_matrix):
        summary = Summary.summarize(sample_matrix)

        assert summary.length == 2
        np.testing.assert_allclose(summary.minimum, [0.0, 0.0])
        np.testing.assert_allclose(summary.maximum, [10.0, 1.0])
        np.testing.assert_allclose(summary.average, [4.375, 0.5125])
        np.testing.assert_allclose(summary.median, [3.75, 0.525])
        np.testing.assert_allclose(summary.standard_deviation, sample_matrix.std(axis=0))
        np.testing.assert_allclose(summary.range, [10.0, 1.0])

    def test_summarize_ignores_nan(self):
        x = np.array([[1.0, np.nan], [3.0, 4.0]])
        summary = Summary.summarize(x)
        np.testing.assert_allclose(summary.average, [2.0, 4.0])

    def test_summarize_empty(self):
        with pytest.raises(ValueError, match="no rows"):
            Summary.summarize(np.zeros((0, 3)))

    def test_summarize_requires_matrix(self):
        with pytest.raises(ValueError, match="2-D"):
            Summary.summarize(np.array([1.0, 2.0]))

    def test_read_only(self, summary):
        with pytest.raises(ValueError):
            summary.minimum[0] = 99.0
        with pytest.raises(AttributeError):
            summary.minimum = np.zeros(2)

    def test_median_defaults_to_average(self, summary):
        np.testing.assert_array_equal(summary.median, summary.average)

    def test_inconsistent_lengths(self):
        with pytest.raises(ValueError, match="inconsistent lengths"):
            Summary(minimum=[0.0], maximum=[1.0, 2.0], average=[0.5], standard_deviation=[0.1])

    def test_dict_round_trip(self, sample_matrix):
        summary = Summary.summarize(sample_matrix)
        assert Summary.from_dict(summary.to_dict()) == summary


# --- Normalizers ---


class TestNormalizers:
    """Tests for the concrete normalizers."""

    def test_min_max(self, summary):
        result = MinMaxNormalizer().normalize(np.array([5.0, 0.3]), summary)
        np.testing.assert_allclose(result, [0.5, 0.3])

    def test_min_max_zero_range(self):
        summary = Summary(minimum=[2.0], maximum=[2.0], average=[2.0], standard_deviation=[0.0])
        result = MinMaxNormalizer().normalize(np.array([2.0]), summary)
        np.testing.assert_array_equal(result, [0.0])

    def test_z_score(self, summary):
        result = ZScoreNormalizer().normalize(np.array([10.0, 0.0]), summary)
        np.testing.assert_allclose(result, [2.0, -2.0])

    def test_z_score_zero_std(self):
        summary = Summary(minimum=[1.0], maximum=[1.0], average=[1.0], standard_deviation=[0.0])
        result = ZScoreNormalizer().normalize(np.array([3.0]), summary)
        np.testing.assert_array_equal(result, [0.0])

    def test_logistic(self, summary):
        result = LogisticNormalizer().normalize(np.array([0.0, 1000.0]), summary)
        np.testing.assert_allclose(result, [0.5, 1.0])
        assert np.all(np.isfinite(result))

    @pytest.mark.parametrize(
        "normalizer", [MinMaxNormalizer(), ZScoreNormalizer(), LogisticNormalizer()]
    )
    def test_pure(self, normalizer, summary):
        """Normalizers never modify their input and keep its length."""
        x = np.array([7.0, 0.2])
        result = normalizer.normalize(x, summary)

        np.testing.assert_array_equal(x, [7.0, 0.2])
        assert result is not x
        assert len(result) == len(x)


class TestCreateNormalizer:
    """Tests for the normalizer factory."""

    @pytest.mark.parametrize(
        ("normalizer_type", "expected"),
        [
            ("min_max", MinMaxNormalizer),
            ("z_score", ZScoreNormalizer),
            (NormalizerType.LOGISTIC, LogisticNormalizer),
        ],
    )
    def test_create(self, normalizer_type, expected):
        normalizer = create_normalizer(normalizer_type)
        assert isinstance(normalizer, expected)
        assert isinstance(normalizer, Normalizer)

    def test_name_matches_type(self):
        for normalizer_type in NormalizerType:
            assert create_normalizer(normalizer_type).name == normalizer_type.value

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown normalizer type"):
            create_normalizer("robust")
