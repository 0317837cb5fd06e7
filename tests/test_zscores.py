import pytest

from releval.zscores import ZScore, ZScoreFormatError, parse_zscores, read_zscores


def test_single_line_parsed():
    result = parse_zscores("301 map 0.25 0.125\n")
    assert result == {"301": (ZScore("301", "map", 0.25, 0.125),)}


def test_sorted_by_qid_then_measure():
    text = "b P_5 1 2\na ndcg 3 4\nb map 5 6\na map 7 8\n"
    result = parse_zscores(text)
    assert list(result) == ["a", "b"]
    assert [z.meas for z in result["a"]] == ["map", "ndcg"]
    assert [z.meas for z in result["b"]] == ["P_5", "map"]
    assert all(z.qid == qid for qid, group in result.items() for z in group)


def test_missing_final_newline_accepted():
    assert parse_zscores("q m 1.5 2.5") == parse_zscores("q m 1.5 2.5\n")


def test_extra_whitespace_tolerated():
    result = parse_zscores("  q\tm   1.5 \t 2.5  \r\n")
    assert result["q"][0] == ZScore("q", "m", 1.5, 2.5)


def test_non_numeric_value_reads_as_zero():
    result = parse_zscores("q m abc 2x\n")
    assert result["q"][0].mean == 0.0
    assert result["q"][0].stddev == 2.0


@pytest.mark.parametrize(
    "text, line",
    [
        ("q m 1\n", 1),
        ("q m 1 2\nq n 1 2 3\n", 2),
        ("q m 1 2\n\nq n 1 2\n", 2),
        ("\n", 1),
        ("q\n", 1),
    ],
)
def test_malformed_lines(text, line):
    with pytest.raises(ZScoreFormatError) as info:
        parse_zscores(text)
    assert info.value.line == line


def test_empty_text_rejected():
    with pytest.raises(ZScoreFormatError):
        parse_zscores("")


def test_duplicates_kept():
    result = parse_zscores("q m 1 2\nq m 3 4\n")
    assert len(result["q"]) == 2


def test_read_file(tmp_path):
    path = tmp_path / "z.txt"
    path.write_text("2 map 0.5 0.1\n1 map 0.4 0.2\n")
    result = read_zscores(path)
    assert list(result) == ["1", "2"]
    assert result["2"][0].mean == 0.5


def test_read_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("")
    with pytest.raises(ZScoreFormatError):
        read_zscores(path)


def test_read_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_zscores(tmp_path / "absent.txt")