from foodfinder.data_ingestion.csv_reader import parse_csv, split_csv_line
from foodfinder.data_ingestion.headers import ECO_FRIENDLY_HEADERS, pick_first


def test_quoted_field_with_comma_and_escaped_quote():
    rows = parse_csv('name,note\nfoo,"a, ""b"" c"\n')
    assert rows == [{"name": "foo", "note": 'a, "b" c'}]


def test_fields_are_trimmed_after_quote_stripping():
    assert split_csv_line(' a , "b" ,c ') == ["a", "b", "c"]


def test_unmatched_quote_runs_to_end_of_line():
    rows = parse_csv('a,b\n"x,y\n')
    assert rows == [{"a": "x,y", "b": ""}]


def test_bom_prefixed_header_still_resolves_name_alias():
    content = "\ufeff\ufeff餐廳名稱,地址\n綠食堂,臺北市中正區\n"
    rows = parse_csv(content)
    assert pick_first(rows[0], ECO_FRIENDLY_HEADERS["name"]) == "綠食堂"
    assert pick_first(rows[0], ECO_FRIENDLY_HEADERS["address"]) == "臺北市中正區"


def test_crlf_and_blank_lines_are_skipped():
    rows = parse_csv("a,b\r\n\r\n1,2\r\n   \r\n3,4\r\n")
    assert rows == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]


def test_short_rows_are_padded_and_long_rows_truncated():
    assert parse_csv("a,b,c\n1\n") == [{"a": "1", "b": "", "c": ""}]
    assert parse_csv("a\n1,2,3\n") == [{"a": "1"}]


def test_empty_or_header_only_input():
    assert parse_csv("") == []
    assert parse_csv(" \n\t\r\n") == []
    assert parse_csv("\ufeff") == []
    assert parse_csv("name,address\n") == []


def test_decode_is_stable_when_rejoined():
    text = "name,address,phone\nA,Taipei,02-1234\nB,Tainan,\n"
    rows = parse_csv(text)

    headers = list(rows[0].keys())
    rejoined = "\n".join([",".join(headers)] + [",".join(row.values()) for row in rows])

    assert parse_csv(rejoined) == rows
