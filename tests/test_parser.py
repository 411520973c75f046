import unicodedata

import pytest

from catalog.models import Day, Interval
from catalog.parser import (
    parse_csv,
    parse_records,
    parse_schedule,
    parse_weeks,
    section_from_record,
    section_from_row,
)


def test_parse_schedule_basic():
    interval = parse_schedule("T.Ba 1->2")
    assert interval == Interval(Day.TUESDAY, 1, 2)
    assert interval.day == 1
    assert interval.period_count == 2
    assert interval.day_name == "T.Ba"


def test_parse_schedule_all_days():
    for day in Day:
        interval = parse_schedule(f"{day.token}  6->9")
        assert interval is not None
        assert interval.day is day
        assert (interval.start_period, interval.end_period) == (6, 9)


@pytest.mark.parametrize("raw", [
    "T.-  -",
    "",
    None,
    "T.CN 1->2",       # no Sunday
    "T.Ba 1-2",        # missing arrow
    "Thứ Ba 1->2",
    "T.Ba 5->3",       # reversed
    "T.Ba 0->2",
    "T.Ba 11->13",     # past last period
])
def test_parse_schedule_returns_none(raw):
    assert parse_schedule(raw) is None


def test_parse_schedule_decomposed_diacritics():
    raw = unicodedata.normalize("NFD", "T.Năm 3->5")
    assert parse_schedule(raw) == Interval(Day.THURSDAY, 3, 5)


def test_parse_weeks_ranges():
    weeks = parse_weeks("23->27,31->40")
    assert weeks == set(range(23, 28)) | set(range(31, 41))
    assert len(weeks) == 15


def test_parse_weeks_mixed():
    assert parse_weeks("26,27,31->43") == {26, 27} | set(range(31, 44))


def test_parse_weeks_strips_quotes_and_spaces():
    assert parse_weeks('"1 -> 3, 5"') == {1, 2, 3, 5}


@pytest.mark.parametrize("raw", ["", None, "abc", "->", "x->5", ",,,"])
def test_parse_weeks_unparseable_is_empty(raw):
    assert parse_weeks(raw) == frozenset()


def test_parse_weeks_drops_weeks_past_term():
    assert parse_weeks("1->2000000000") == frozenset()
    assert parse_weeks("50->53,54,2,99->100") == {2, 50, 51, 52, 53}


def test_parse_weeks_oversized_numbers():
    assert parse_weeks("1" * 5000) == frozenset()
    assert parse_weeks("3," + "9" * 5000 + "->4") == {3}


def test_parse_csv_oversized_count_keeps_row():
    text = (
        "hocphan_id,stt,ten_hoc_phan,si_so,da_dang_ky,giang_vien,thoi_khoa_bieu,tuan_hoc\n"
        "1234,1,Giải tích,60,10,Lê C,T.Hai  1->3,1->10\n"
        f"5678,1,Vật lý,{'9' * 5000},10,Phạm D,T.Ba  1->3,1->10\n"
    )
    sections = parse_csv(text)
    assert [s.id for s in sections] == ["1234-1-1", "5678-1-2"]
    assert sections[1].capacity == 0


def test_parse_weeks_reversed_range_is_empty():
    assert parse_weeks("9->3") == frozenset()
    assert parse_weeks("9->3,12") == {12}


def test_section_from_row():
    row = ["1234", "2", "Lập trình Python", "60", "60", "Trần B", "T.Hai  1->3", "1->10"]
    section = section_from_row(row, 4)
    assert section.id == "1234-2-4"
    assert section.course_code == "1234"
    assert section.capacity == 60
    assert section.is_full
    assert section.time_slot == Interval(Day.MONDAY, 1, 3)
    assert section.weeks == set(range(1, 11))
    assert section.raw_schedule == "T.Hai  1->3"
    assert section.is_scheduled
    assert section.remaining == 0


def test_section_from_row_short_row():
    assert section_from_row(["1234", "1", "Toán"], 1) is None


def test_section_from_row_uses_index_when_sequence_missing():
    row = ["1234", "", "Toán", "x", "", "C", "T.-  -", ""]
    section = section_from_row(row, 7)
    assert section.id == "1234-7-7"
    assert section.capacity == 0
    assert section.enrolled == 0
    assert section.time_slot is None
    assert section.weeks == frozenset()


def test_section_from_record_defaults():
    section = section_from_record({"hocphan_id": 1234, "ten_hoc_phan": "Toán rời rạc"}, 3)
    assert section.id == "1234-3-3"
    assert section.instructor == ""
    assert section.capacity == 0
    assert section.time_slot is None


def test_section_from_record_skips_incomplete():
    assert section_from_record({"ten_hoc_phan": "Toán"}, 0) is None
    assert section_from_record({"hocphan_id": "1", "ten_hoc_phan": ""}, 0) is None


def test_parse_csv_skips_header_blank_and_short_rows():
    text = (
        "hocphan_id,stt,ten_hoc_phan,si_so,da_dang_ky,giang_vien,thoi_khoa_bieu,tuan_hoc\n"
        '1234,1,"Kinh tế, chính trị",50,10,Lê C,T.Tư  6->9,"23->27,31->40"\n'
        "\n"
        "bad,row\n"
        "5678,2,Mạng máy tính,40,12,Phạm D,T.-  -,\n"
    )
    sections = parse_csv(text)
    assert [s.id for s in sections] == ["1234-1-1", "5678-2-4"]
    assert sections[0].title == "Kinh tế, chính trị"
    assert sections[0].raw_weeks == "23->27,31->40"
    assert len(sections[0].weeks) == 15
    assert sections[1].time_slot is None


def test_parse_csv_empty():
    assert parse_csv("") == []
    assert parse_csv("only,a,header\n") == []


def test_parse_records_skips_non_mappings():
    records = [
        {"hocphan_id": "1", "stt": "1", "ten_hoc_phan": "A", "si_so": "30", "da_dang_ky": "1"},
        "garbage",
        {"hocphan_id": "2", "stt": 2, "ten_hoc_phan": "B", "si_so": 30.0, "da_dang_ky": 30},
    ]
    sections = parse_records(records)
    assert [s.id for s in sections] == ["1-1-0", "2-2-2"]
    assert sections[1].is_full
