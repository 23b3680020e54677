import pytest

from foodfinder.search.index import RestaurantIndex, collation_key
from foodfinder.search.models import RestaurantRecord


@pytest.fixture
def index():
    return RestaurantIndex([
        RestaurantRecord(
            name="綠色小館 Green Bistro",
            address="臺北市大安區復興南路一段1號",
            eco_actions=["自備餐具", "減塑"],
        ),
        RestaurantRecord(name="ABC Café", address="臺北市中正區", eco_actions=["使用環保杯"]),
        RestaurantRecord(name="Green Garden", eco_actions=["餐具減量", "減塑"]),
        RestaurantRecord(name="大安 Green Corner", address="臺中市西區"),
    ])


def test_list_all_keeps_ingestion_order(index):
    names = [r.name for r in index.list_all()]
    assert names == ["綠色小館 Green Bistro", "ABC Café", "Green Garden", "大安 Green Corner"]
    assert len(index) == 4


def test_empty_keyword_returns_nothing(index):
    assert index.search("") == []
    assert index.search(" 　 ") == []
    assert index.suggest("") == []


def test_search_matches_name_or_address(index):
    names = [r.name for r in index.search("大安")]
    assert names == ["綠色小館 Green Bistro", "大安 Green Corner"]


def test_search_is_case_and_space_insensitive(index):
    assert [r.name for r in index.search("GREEN bistro")] == ["綠色小館 Green Bistro"]


def test_search_no_match(index):
    assert index.search("pizza") == []


def test_suggest_is_bounded_and_name_only(index):
    assert [r.name for r in index.suggest("green", limit=2)] == [
        "綠色小館 Green Bistro",
        "Green Garden",
    ]
    # "中正區" only appears in an address
    assert index.suggest("中正區") == []
    assert index.suggest("green", limit=0) == []


def test_suggest_default_limit():
    many = RestaurantIndex([RestaurantRecord(name=f"Noodle {i}") for i in range(8)])
    assert len(many.suggest("noodle")) == 5


@pytest.mark.parametrize("keyword", ["green", "大安", "c", "café"])
@pytest.mark.parametrize("limit", [1, 2, 5, 10])
def test_suggest_is_subset_of_search(index, keyword, limit):
    found = index.search(keyword)
    for record in index.suggest(keyword, limit):
        assert record in found


def test_find_by_exact_name(index):
    record = index.find_by_exact_name("ABC Café")
    assert record is not None
    assert index.find_by_exact_name(" abc café ") is record
    assert index.find_by_exact_name("abc") is None
    assert index.find_by_exact_name("") is None


def test_distinct_action_labels_use_stroke_order(index):
    assert index.list_distinct_action_labels() == ["自備餐具", "使用環保杯", "減塑", "餐具減量"]


def test_collation_differs_from_codepoint_order():
    labels = ["自備餐具", "餐具減量", "使用環保杯"]
    assert sorted(labels) != sorted(labels, key=collation_key)
    assert sorted(labels, key=collation_key) == ["自備餐具", "使用環保杯", "餐具減量"]


def test_distinct_action_labels_sort_by_stroke_count():
    index = RestaurantIndex([
        RestaurantRecord(name="a", eco_actions=["一次性", "八角", "減塑", "不使用"]),
    ])
    assert index.list_distinct_action_labels() == ["一次性", "八角", "不使用", "減塑"]


def test_empty_index():
    empty = RestaurantIndex([])
    assert empty.list_all() == []
    assert empty.search("x") == []
    assert empty.suggest("x") == []
    assert empty.find_by_exact_name("x") is None
    assert empty.list_distinct_action_labels() == []
