"""Unit tests for the Ok/Err result type."""

import pytest

from annos.domain.shared.error import NotFoundError
from annos.domain.shared.result import Err, Ok


class TestResult:
    def test_ok_unwraps_to_value(self):
        result = Ok(42)
        assert result.is_ok()
        assert not result.is_err()
        assert result.unwrap() == 42

    def test_err_unwrap_raises(self):
        result = Err(NotFoundError("missing"))
        assert result.is_err()
        with pytest.raises(ValueError, match="missing"):
            result.unwrap()

    def test_results_compare_by_value(self):
        assert Ok("a") == Ok("a")
        assert Ok("a") != Err(NotFoundError("a"))
