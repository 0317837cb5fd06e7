import pytest

from releval.relevance import (
    RelInfo,
    ResRels,
    ResRelsJg,
    UnknownRelFormatError,
    num_nonrel_judged_ret,
    num_q_average,
    num_rel,
    num_rel_average,
    num_rel_ret,
    num_ret,
)


@pytest.fixture
def sample():
    return ResRels(
        results_rel_list=[1, 0, -1, 2, -2, 0],
        num_rel=5,
        num_rel_ret=2,
        rel_levels=[10, 3, 2],
        num_nonpool=1,
        num_unjudged_in_pool=1,
    )


def test_num_ret_is_length_of_results(sample):
    assert num_ret(sample) == len(sample.results_rel_list)


def test_num_rel_and_rel_ret_pass_through(sample):
    assert num_rel(sample) == sample.num_rel
    assert num_rel_ret(sample) == sample.num_rel_ret


def test_num_nonrel_judged_ret_partitions_retrieved(sample):
    parts = (
        num_nonrel_judged_ret(sample)
        + sample.num_nonpool
        + sample.num_unjudged_in_pool
        + sample.num_rel_ret
    )
    assert parts == num_ret(sample)
    assert num_nonrel_judged_ret(sample) == 2


def test_res_rels_converts_sequences_to_tuples(sample):
    assert sample.results_rel_list == (1, 0, -1, 2, -2, 0)
    assert sample.num_rel_levels == 3


def test_res_rels_rejects_negative_counts():
    with pytest.raises(ValueError):
        ResRels(results_rel_list=[], num_rel=-1, num_rel_ret=0)


def test_res_rels_jg_counts_groups(sample):
    jg = ResRelsJg([sample, sample, sample])
    assert jg.num_jgs == 3


@pytest.mark.parametrize("complete, expected", [(False, 4), (True, 7)])
def test_num_q_average(complete, expected):
    assert num_q_average(4, 7, complete) == expected


def test_num_rel_average_without_complete_keeps_sum():
    infos = [RelInfo("1", "qrels", [1, 1, 1])]
    assert num_rel_average(11.0, infos, False) == 11.0


def test_num_rel_average_counts_positive_judgments():
    infos = [
        RelInfo("1", "qrels", [1, 0, 2, -1]),
        RelInfo("2", "qrels_jg", [[1, 0], [3, 1, 0]]),
    ]
    expected = infos[0].count_relevant() + infos[1].count_relevant()
    assert num_rel_average(0.0, infos, True) == expected
    assert infos[0].count_relevant() == 2


def test_num_rel_average_unknown_format_raises():
    infos = [RelInfo("1", "prefs", [1])]
    with pytest.raises(UnknownRelFormatError):
        num_rel_average(0.0, infos, True)


def test_unknown_format_ignored_when_not_complete():
    infos = [RelInfo("1", "prefs", [1])]
    assert num_rel_average(5.0, infos, False) == 5.0