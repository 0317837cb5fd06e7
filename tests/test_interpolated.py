import pytest

from releval.interpolated import (
    DEFAULT_RECALL_POINTS,
    eleven_pt_avg,
    iprec_at_recall,
)
from releval.relevance import ResRels


def _mixed():
    return ResRels([1, 0, 1], num_rel=2, num_rel_ret=2, rel_levels=(1, 2))


def test_perfect_ranking_is_one_everywhere():
    rr = ResRels([1, 1, 1, 0], num_rel=3, num_rel_ret=3, rel_levels=(1, 3))
    values = iprec_at_recall(rr, 1)
    assert list(values) == list(DEFAULT_RECALL_POINTS)
    assert all(v == pytest.approx(1.0) for v in values.values())
    assert eleven_pt_avg(rr, 1) == pytest.approx(1.0)


def test_mixed_ranking_values():
    values = iprec_at_recall(_mixed(), 1)
    assert values[0.5] == pytest.approx(1.0)
    assert values[1.0] == pytest.approx(2 / 3)


def test_interpolated_precision_never_increases_with_recall():
    rr = ResRels([0, 1, 0, 0, 1, 1, 0, 1], num_rel=5, num_rel_ret=4,
                 rel_levels=(4, 5))
    values = list(iprec_at_recall(rr, 1).values())
    assert all(a >= b for a, b in zip(values, values[1:]))


def test_average_matches_mean_of_points():
    rr = ResRels([0, 1, 0, 0, 1, 1, 0, 1], num_rel=5, num_rel_ret=4,
                 rel_levels=(4, 5))
    values = iprec_at_recall(rr, 1)
    assert eleven_pt_avg(rr, 1) == pytest.approx(sum(values.values()) / 11)


def test_unreached_recall_points_are_zero():
    rr = ResRels([1, 0, 0], num_rel=4, num_rel_ret=1, rel_levels=(2, 4))
    values = iprec_at_recall(rr, 1)
    assert values[1.0] == 0.0
    assert values[0.0] == pytest.approx(1.0)


def test_no_relevant_retrieved_gives_zero():
    rr = ResRels([0, 0, 0], num_rel=2, num_rel_ret=0, rel_levels=(3, 2))
    assert all(v == 0.0 for v in iprec_at_recall(rr, 1).values())
    assert eleven_pt_avg(rr, 1) == 0.0


def test_relevance_level_treats_lower_levels_as_nonrelevant():
    rr = ResRels([1, 2], num_rel=1, num_rel_ret=1, rel_levels=(0, 1, 1))
    assert iprec_at_recall(rr, 2, [1.0])[1.0] == pytest.approx(0.5)


def test_recall_points_are_sorted_in_result():
    values = iprec_at_recall(_mixed(), 1, [1.0, 0.2, 0.5])
    assert list(values) == [0.2, 0.5, 1.0]
    assert values == iprec_at_recall(_mixed(), 1, [0.2, 0.5, 1.0])


def test_subset_of_points_agrees_with_full_set():
    full = iprec_at_recall(_mixed(), 1)
    part = iprec_at_recall(_mixed(), 1, [0.2, 0.5, 0.8])
    for point, value in part.items():
        assert value == pytest.approx(full[point])


def test_three_point_average_is_average_of_points():
    rr = _mixed()
    points = [0.2, 0.5, 0.8]
    values = iprec_at_recall(rr, 1, points)
    assert eleven_pt_avg(rr, 1, points) == pytest.approx(
        sum(values.values()) / 3
    )


def test_empty_recall_points_rejected():
    with pytest.raises(ValueError):
        iprec_at_recall(_mixed(), 1, [])
    with pytest.raises(ValueError):
        eleven_pt_avg(_mixed(), 1, [])


def test_duplicate_recall_points_rejected():
    with pytest.raises(ValueError):
        iprec_at_recall(_mixed(), 1, [0.5, 0.5])