from core.domain.headers import HeaderSet


def test_lookup_ignores_case():
    headers = HeaderSet({"Content-Type": "text/plain"})
    assert headers["content-type"] == "text/plain"
    assert headers.get("CONTENT-TYPE") == "text/plain"
    assert "content-TYPE" in headers


def test_one_value_per_name_last_assignment_wins():
    headers = HeaderSet([("X-Token", "a"), ("x-token", "b")])
    assert len(headers) == 1
    assert headers["X-TOKEN"] == "b"
    assert list(headers) == ["x-token"]


def test_remove_normalizes_case_and_tolerates_missing():
    headers = HeaderSet({"Content-Length": "3"})
    headers.remove("CONTENT-LENGTH")
    headers.remove("content-length")
    assert len(headers) == 0


def test_values_are_stored_as_strings_and_none_is_skipped():
    headers = HeaderSet({"content-length": 12, "content-type": None})
    assert headers["content-length"] == "12"
    assert "content-type" not in headers


def test_equality_is_case_insensitive_on_names():
    assert HeaderSet({"Accept": "*/*"}) == {"accept": "*/*"}
    assert HeaderSet({"Accept": "*/*"}) != HeaderSet({"Accept": "text/html"})


def test_copy_is_independent():
    original = HeaderSet({"a": "1"})
    clone = original.copy()
    clone["b"] = "2"
    assert "b" not in original
