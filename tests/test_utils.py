from jivaoperator.utils import strip_name


def test_short_name_is_lowercased():
    assert strip_name("PVC-AbC") == "pvc-abc"


def test_short_name_unchanged():
    assert strip_name("pvc-1234") == "pvc-1234"


def test_long_name_is_truncated():
    result = strip_name("x" * 100)
    assert len(result) == 43
    assert set(result) == {"x"}


def test_trailing_dash_removed():
    assert strip_name("a" * 42 + "-") == "a" * 42


def test_trailing_dash_after_truncation_removed():
    assert strip_name("a" * 42 + "-" + "zzz") == "a" * 42


def test_only_one_trailing_dash_removed():
    assert strip_name("abc--") == "abc-"


def test_result_is_prefix_of_lowercased_input():
    name = "Pvc-0A1B2C3D-4E5F-6789-ABCD-EF0123456789-EXTRA"
    result = strip_name(name)
    assert name.lower().startswith(result)
    assert len(result) <= 43
    assert not result.endswith("-")