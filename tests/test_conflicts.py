import itertools

from planner.conflicts import any_selection_conflict, conflicting_pairs, conflicts_for, overlaps


def test_overlapping_periods_same_day(section_factory):
    a = section_factory("A-1-1", "T.Hai  1->3", "1->10")
    b = section_factory("B-1-2", "T.Hai  3->5", "1->10")
    assert overlaps(a, b)


def test_adjacent_periods_do_not_overlap(section_factory):
    a = section_factory("A-1-1", "T.Ba  1->3")
    b = section_factory("B-1-2", "T.Ba  4->5")
    assert not overlaps(a, b)


def test_different_day_no_overlap(section_factory):
    a = section_factory("A-1-1", "T.Hai  1->3")
    b = section_factory("B-1-2", "T.Ba  1->3")
    assert not overlaps(a, b)


def test_disjoint_weeks_no_overlap(section_factory):
    a = section_factory("A-1-1", "T.Hai  1->3", "1->8")
    b = section_factory("B-1-2", "T.Hai  1->3", "9->16")
    assert not overlaps(a, b)


def test_unscheduled_never_conflicts(section_factory):
    free = section_factory("F-1-1", "T.-  -", "1->20")
    others = [
        section_factory("A-1-2", "T.Hai  1->12", "1->20"),
        section_factory("B-1-3", "T.-  -", "1->20"),
    ]
    for other in others:
        assert not overlaps(free, other)
        assert not overlaps(other, free)
    assert conflicts_for(free, others) == []


def test_empty_week_set_never_conflicts(section_factory):
    a = section_factory("A-1-1", "T.Hai  1->3", "")
    b = section_factory("B-1-2", "T.Hai  1->3", "1->10")
    assert not overlaps(a, b)


def test_overlaps_is_symmetric(section_factory):
    sections = [
        section_factory("A-1-1", "T.Hai  1->3", "1->10"),
        section_factory("B-1-2", "T.Hai  2->4", "5->15"),
        section_factory("C-1-3", "T.Hai  4->6", "11->15"),
        section_factory("D-1-4", "T.Tư  1->12", "1->20"),
        section_factory("E-1-5", "T.-  -", "1->20"),
    ]
    for a, b in itertools.product(sections, repeat=2):
        assert overlaps(a, b) == overlaps(b, a)


def test_conflicts_for_keeps_pool_order_and_excludes_target(section_factory):
    target = section_factory("T-1-1", "T.Sáu  1->4", "1->10")
    pool = [
        section_factory("Z-1-2", "T.Sáu  4->6", "10"),
        target,
        section_factory("N-1-3", "T.Sáu  5->6", "1->10"),
        section_factory("A-1-4", "T.Sáu  1->1", "2"),
    ]
    assert [s.id for s in conflicts_for(target, pool)] == ["Z-1-2", "A-1-4"]


def test_end_to_end_selection_conflict(section_factory):
    x = section_factory("X-1-1", "T.Hai  1->3", "1->10")
    y = section_factory("Y-1-2", "T.Hai  2->4", "5->15")
    assert any_selection_conflict([x, y])

    y_late = section_factory("Y-1-2", "T.Hai  2->4", "11->15")
    assert not any_selection_conflict([x, y_late])


def test_any_selection_conflict_small_selections(section_factory):
    assert not any_selection_conflict([])
    assert not any_selection_conflict([section_factory("A-1-1")])


def test_conflicting_pairs(section_factory):
    a = section_factory("A-1-1", "T.Hai  1->3")
    b = section_factory("B-1-2", "T.Hai  3->4")
    c = section_factory("C-1-3", "T.Ba  1->3")
    d = section_factory("D-1-4", "T.Hai  2->2")
    pairs = [(p.id, q.id) for p, q in conflicting_pairs([a, b, c, d])]
    assert pairs == [("A-1-1", "B-1-2"), ("A-1-1", "D-1-4")]
