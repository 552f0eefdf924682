import io

import pytest

from htmcore.demo import main, run_encoder_demo, run_spatial_pooler_demo


def test_encoder_demo_encodings_have_w_active_bits():
    encodings = run_encoder_demo(io.StringIO())
    assert encodings
    widths = {len(bits) for bits in encodings}
    assert len(widths) == 1
    assert all(sum(bits) == 5 for bits in encodings)


def test_encoder_demo_first_encoding_starts_at_bucket_zero():
    encodings = run_encoder_demo(io.StringIO())
    assert encodings[0][:5] == [1, 1, 1, 1, 1]
    assert sum(encodings[0][5:]) == 0


def test_encoder_demo_buckets_do_not_move_backwards():
    encodings = run_encoder_demo(io.StringIO())
    starts = [bits.index(1) for bits in encodings]
    assert starts == sorted(starts)
    assert starts[-1] == len(encodings[-1]) - 5


def test_encoder_demo_prints_one_line_per_encoding():
    out = io.StringIO()
    encodings = run_encoder_demo(out)
    lines = out.getvalue().splitlines()
    assert "ScalarEncoder Parameters" in lines[0]
    coded = [line for line in lines if line and line[0] in "01"]
    assert len(coded) == len(encodings)
    assert coded[0].split() == [str(bit) for bit in encodings[0]]


def test_spatial_pooler_demo_is_deterministic_with_seed():
    first_out, second_out = io.StringIO(), io.StringIO()
    first = run_spatial_pooler_demo(first_out, seed=7)
    second = run_spatial_pooler_demo(second_out, seed=7)
    assert first == second
    assert first_out.getvalue() == second_out.getvalue()


def test_spatial_pooler_demo_active_vectors_are_binary():
    results = run_spatial_pooler_demo(io.StringIO(), seed=3)
    assert results
    assert all(len(vector) == 50 for vector in results)
    assert all(set(vector) <= {0, 1} for vector in results)


def test_spatial_pooler_demo_reports_active_sizes():
    out = io.StringIO()
    results = run_spatial_pooler_demo(out, seed=11)
    text = out.getvalue()
    assert text.count("SpatialPooler Parameters") == 2
    sizes = [
        int(line.split(":")[1])
        for line in text.splitlines()
        if line.startswith("activeColumns size")
    ]
    assert sizes == [sum(vector) for vector in results]


def test_main_runs_encoder_demo(capsys):
    assert main(["encoder"]) == 0
    captured = capsys.readouterr().out
    assert "ScalarEncoder Parameters" in captured
    assert "SpatialPooler Parameters" not in captured


def test_main_defaults_to_spatial_pooler(capsys):
    assert main(["--seed", "5"]) == 0
    captured = capsys.readouterr().out
    assert captured.count("SpatialPooler Parameters") == 2


def test_main_rejects_unknown_demo():
    with pytest.raises(SystemExit):
        main(["nonsense"])