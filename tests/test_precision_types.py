"""Tests for precision_types module."""

import numpy as np
import pytest

from hypercomplex.data.precision_types import (
    DEFAULT_MPFR_PRECISION,
    HAS_FP8,
    MIN_MPFR_PRECISION,
    PrecisionFormat,
    get_dtype,
    get_eps,
    get_spec,
    get_tolerance,
    list_available_formats,
    parse_format,
)


class TestPrecisionFormat:
    """Tests for PrecisionFormat enum."""

    def test_all_formats_defined(self) -> None:
        """Verify all expected formats exist."""
        expected = {"fp64", "fp32", "fp16", "fp8_e4m3", "fp8_e5m2", "mpfr"}
        actual = {f.value for f in PrecisionFormat}
        assert actual == expected

    def test_format_values_lowercase(self) -> None:
        """Format values should be lowercase."""
        for fmt in PrecisionFormat:
            assert fmt.value == fmt.value.lower()

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("FP32", PrecisionFormat.FP32),
            ("fp8-e4m3", PrecisionFormat.FP8_E4M3),
            ("MPFR", PrecisionFormat.MPFR),
        ],
    )
    def test_parse_format_normalizes(self, name: str, expected: PrecisionFormat) -> None:
        """Names are case-insensitive and accept dashes."""
        assert parse_format(name) is expected


class TestGetSpec:
    """Tests for get_spec function."""

    @pytest.mark.parametrize(
        "fmt,expected_bits",
        [
            (PrecisionFormat.FP64, 64),
            (PrecisionFormat.FP32, 32),
            (PrecisionFormat.FP16, 16),
            ("fp64", 64),
            ("FP32", 32),
            ("fp16", 16),
        ],
    )
    def test_get_spec_bits(self, fmt: PrecisionFormat | str, expected_bits: int) -> None:
        """Verify bit counts for each format."""
        spec = get_spec(fmt)
        assert spec.bits == expected_bits

    def test_epsilon_matches_mantissa_bits(self) -> None:
        """Machine epsilon is 2^(-mantissa_bits) for every format."""
        for fmt in PrecisionFormat:
            spec = get_spec(fmt)
            assert spec.machine_epsilon == pytest.approx(
                2.0 ** -spec.mantissa_bits, rel=1e-2
            )

    def test_mpfr_bits_include_leading_bit(self) -> None:
        """MPFR precision counts the leading significand bit."""
        spec = get_spec("mpfr")
        assert spec.mantissa_bits == spec.bits - 1

    def test_only_mpfr_is_managed(self) -> None:
        """Every fixed-width format is a value type; mpfr is not."""
        for fmt in PrecisionFormat:
            assert get_spec(fmt).is_value_type == (fmt is not PrecisionFormat.MPFR)

    def test_mpfr_spec_describes_default_precision(self) -> None:
        """The mpfr entry reports the default bit precision."""
        assert get_spec("mpfr").bits == DEFAULT_MPFR_PRECISION
        assert MIN_MPFR_PRECISION < DEFAULT_MPFR_PRECISION

    def test_unknown_format_raises(self) -> None:
        """Unknown format should raise ValueError."""
        with pytest.raises(ValueError, match="Unknown precision format"):
            get_spec("fp128")


class TestGetDtype:
    """Tests for get_dtype function."""

    def test_fp64_dtype(self) -> None:
        """FP64 should return float64."""
        assert get_dtype("fp64") == np.float64

    def test_fp32_dtype(self) -> None:
        """FP32 should return float32."""
        assert get_dtype("fp32") == np.float32

    def test_fp16_dtype(self) -> None:
        """FP16 should return float16."""
        assert get_dtype("fp16") == np.float16

    def test_mpfr_has_no_dtype(self) -> None:
        """MPFR storage is not a numpy dtype."""
        with pytest.raises(ValueError, match="PrecisionContext"):
            get_dtype("mpfr")

    @pytest.mark.skipif(not HAS_FP8, reason="ml_dtypes not installed")
    def test_fp8_e4m3_dtype(self) -> None:
        """FP8_E4M3 should return float8_e4m3fn when available."""
        import ml_dtypes

        assert get_dtype("fp8_e4m3") == ml_dtypes.float8_e4m3fn

    @pytest.mark.skipif(HAS_FP8, reason="ml_dtypes is installed")
    def test_fp8_without_mldtypes_raises(self) -> None:
        """FP8 should raise ImportError when ml_dtypes not available."""
        with pytest.raises(ImportError, match="ml_dtypes"):
            get_dtype("fp8_e4m3")


class TestGetEps:
    """Tests for get_eps function."""

    def test_epsilon_decreases_with_precision(self) -> None:
        """Higher precision should have smaller epsilon."""
        eps_fp16 = get_eps("fp16")
        eps_fp32 = get_eps("fp32")
        eps_fp64 = get_eps("fp64")
        eps_mpfr = get_eps("mpfr")

        assert eps_fp16 > eps_fp32 > eps_fp64 > eps_mpfr

    def test_fp64_epsilon_matches_numpy(self) -> None:
        """FP64 epsilon should match numpy's finfo."""
        # Allow some tolerance as our value is theoretical
        assert abs(get_eps("fp64") - np.finfo(np.float64).eps) < 1e-17

    def test_mpfr_epsilon_follows_bits(self) -> None:
        """At 53 bits mpfr epsilon equals the double-precision epsilon."""
        assert get_eps("mpfr", bits=53) == np.finfo(np.float64).eps
        assert get_eps("mpfr", bits=256) < get_eps("mpfr", bits=128)


class TestGetTolerance:
    """Tests for get_tolerance function."""

    @pytest.mark.parametrize("kind", ["equality_tol", "norm_tol"])
    def test_tolerance_exists(self, kind: str) -> None:
        """All formats should define both tolerance kinds."""
        for fmt in PrecisionFormat:
            tol = get_tolerance(fmt, kind)
            assert isinstance(tol, float)
            assert tol > 0

    def test_tolerance_increases_with_lower_precision(self) -> None:
        """Lower precision should have higher tolerance."""
        tol_mpfr = get_tolerance("mpfr")
        tol_fp64 = get_tolerance("fp64")
        tol_fp32 = get_tolerance("fp32")
        tol_fp16 = get_tolerance("fp16")

        assert tol_fp16 > tol_fp32 > tol_fp64 > tol_mpfr

    def test_unknown_tolerance_type_raises(self) -> None:
        """Unknown tolerance type should raise ValueError."""
        with pytest.raises(ValueError, match="Unknown tolerance type"):
            get_tolerance("fp64", "invalid_tol")


class TestListAvailableFormats:
    """Tests for list_available_formats function."""

    def test_standard_formats_always_available(self) -> None:
        """FP16, FP32, FP64 and MPFR should always be available."""
        available = list_available_formats()

        assert PrecisionFormat.FP64 in available
        assert PrecisionFormat.FP32 in available
        assert PrecisionFormat.FP16 in available
        assert PrecisionFormat.MPFR in available

    @pytest.mark.skipif(not HAS_FP8, reason="ml_dtypes not installed")
    def test_fp8_available_with_mldtypes(self) -> None:
        """FP8 formats should be available when ml_dtypes installed."""
        available = list_available_formats()

        assert PrecisionFormat.FP8_E4M3 in available
        assert PrecisionFormat.FP8_E5M2 in available

    @pytest.mark.skipif(HAS_FP8, reason="ml_dtypes is installed")
    def test_fp8_unavailable_without_mldtypes(self) -> None:
        """FP8 formats should not be available without ml_dtypes."""
        available = list_available_formats()

        assert PrecisionFormat.FP8_E4M3 not in available
        assert PrecisionFormat.FP8_E5M2 not in available
