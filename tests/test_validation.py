import pandas as pd
import pytest

from prismplot.core import validation


def test_require_version_missing_package():
    with pytest.raises(ImportError, match="not-a-real-prismplot-dep >= 1.0 needed for this function"):
        validation.require_version("not-a-real-prismplot-dep", "1.0")


def test_require_version_too_old():
    with pytest.raises(ImportError, match="found"):
        validation.require_version("pandas", "999.0")
    validation.require_version("pandas", "0.1")


def test_check_columns_lists_every_missing_name():
    data = pd.DataFrame({"a": [1]})
    with pytest.raises(ValueError, match="'b', 'c'"):
        validation.check_columns(data, ["a", "b", None, "c"], "caller")
    validation.check_columns(data, ["a", None], "caller")


@pytest.mark.parametrize("value", [True, "1", float("nan"), float("inf"), -1, 0])
def test_check_positive_rejects(value):
    with pytest.raises(ValueError):
        validation.check_positive("size", value)


def test_check_positive_allows_zero_when_asked():
    assert validation.check_positive("pad", 0, allow_zero=True) == 0.0
    assert validation.check_positive("size", 3) == 3.0
