from __future__ import annotations

from relkit.core.structured import (
    as_obj_list,
    as_str_dict,
    get_bool,
    get_int,
    get_list,
    get_raw_str,
    get_str,
    get_table,
    is_str_dict,
)


def test_str_dict_narrowing() -> None:
    assert is_str_dict({"a": 1})
    assert not is_str_dict({1: "a"})
    assert as_str_dict([1]) is None
    assert as_obj_list([1, "a"]) == [1, "a"]
    assert as_obj_list({"a": 1}) is None


def test_getters() -> None:
    data: dict[str, object] = {
        "name": "  main  ",
        "empty": "   ",
        "message": "title\n\nbody\n",
        "count": 3,
        "flag": True,
        "table": {"k": "v"},
        "items": [1, 2],
    }
    assert get_str(data, "name") == "main"
    assert get_str(data, "empty") is None
    assert get_raw_str(data, "message") == "title\n\nbody\n"
    assert get_int(data, "count") == 3
    assert get_int(data, "flag") is None
    assert get_bool(data, "flag") is True
    assert get_table(data, "table") == {"k": "v"}
    assert get_table(data, "items") is None
    assert get_list(data, "items") == [1, 2]
    assert get_str(data, "missing") is None
