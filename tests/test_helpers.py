import sys

import pytest

from htmcore.helpers import (
    array_range,
    format_coded,
    open_input_stream,
    parse_uints,
    read_config,
    read_data,
)


def test_array_range_extends_high_by_average_gap():
    assert array_range([1.0, 2.0, 3.0]) == (1.0, 4.0)


def test_array_range_unsorted_bounds():
    values = [5.0, -2.0, 7.5, 0.0]
    low, high = array_range(values)
    assert low == min(values)
    assert high > max(values)


def test_array_range_too_short():
    with pytest.raises(ValueError):
        array_range([1.0])
    with pytest.raises(ValueError):
        array_range([])


def test_format_coded_breaks_lines():
    assert format_coded([1, 2, 3, 4], 2) == "1 2 \n3 4 \n"


def test_format_coded_partial_last_line():
    text = format_coded(range(5), 2)
    assert text.count("\n") == 2
    assert text.endswith("4 ")


def test_format_coded_rejects_zero():
    with pytest.raises(ValueError):
        format_coded([1], 0)


def test_read_config_sections_and_values(tmp_path):
    path = tmp_path / "config.txt"
    path.write_text(
        "# comment\n"
        "top = level\n"
        "\n"
        "[ScalarEncoder]\n"
        "w = 21\n"
        "  minValue\t=\t0.5  \n"
        "no equals sign here\n"
        "[SDRClassifier]\n"
        "steps=1, 2, 3\n",
        encoding="utf-8",
    )
    config = read_config(path)
    assert config[""] == {"top": "level"}
    assert config["ScalarEncoder"] == {"w": "21", "minValue": "0.5"}
    assert config["SDRClassifier"]["steps"] == "1, 2, 3"


def test_read_config_value_may_contain_equals(tmp_path):
    path = tmp_path / "c.ini"
    path.write_text("[s]\nk = a=b\n", encoding="utf-8")
    assert read_config(path)["s"]["k"] == "a=b"


def test_read_config_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_config(tmp_path / "absent.txt")


def test_read_data_reads_all_numbers(tmp_path):
    path = tmp_path / "data.txt"
    path.write_text("1.5 2\n-3e1\n\n4.25\n", encoding="utf-8")
    assert read_data(path) == [1.5, 2.0, -30.0, 4.25]


def test_read_data_mismatch(tmp_path):
    path = tmp_path / "data.txt"
    path.write_text("1 2 oops 3", encoding="utf-8")
    with pytest.raises(ValueError, match="mismatch"):
        read_data(path)


def test_read_data_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_data(tmp_path / "absent.txt")


def test_open_input_stream_from_file(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("10 11 12\n", encoding="utf-8")
    with open_input_stream({"flag": "true", "path": str(path)}) as stream:
        assert stream.read() == "10 11 12\n"


def test_open_input_stream_defaults_to_stdin():
    assert open_input_stream({"flag": "false", "path": "ignored"}) is sys.stdin


def test_parse_uints_extracts_numbers():
    assert parse_uints("12, 3 abc 45") == [12, 3, 45]
    assert parse_uints("{ 512 }") == [512]


def test_parse_uints_ignores_signs_and_empty():
    assert parse_uints("") == []
    assert parse_uints("-7") == [7]