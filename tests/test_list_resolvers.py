import pytest

from pagebind.browser.locator import ElementLocator
from pagebind.criteria import ValidationTable
from pagebind.errors import IndexOutOfRangeError, NoMatchFoundError, PropertyKindError
from pagebind.lists import ListItemResolver


@pytest.fixture
def resolver(students_page, wait_engine):
    return ListItemResolver(ElementLocator(students_page, wait_engine))


def _item_reads(driver):
    return [call for call in driver.calls if call[0] == "tr"]


def test_first_item_is_alexander(resolver):
    item = resolver.get_item_at("Results", 1)

    assert item.field_values()["Last Name"] == "Alexander"
    assert item.name == "StudentsSearch.Results[1]"


def test_item_lookup_reads_no_further_than_requested(resolver, students_driver):
    item = resolver.get_item_at("Results", 2)

    assert item.field_values()["First Name"] == "Meredith"
    assert _item_reads(students_driver) == [("tr", 0), ("tr", 1)]


def test_index_past_end_reports_count_and_request(resolver):
    with pytest.raises(IndexOutOfRangeError) as excinfo:
        resolver.get_item_at("Results", 4)

    assert excinfo.value.requested == 4
    assert excinfo.value.count == 3
    assert excinfo.value.list_name == "Results"


def test_item_numbers_start_at_one(resolver):
    with pytest.raises(ValueError):
        resolver.get_item_at("Results", 0)


def test_non_list_property_is_rejected(resolver):
    with pytest.raises(PropertyKindError):
        resolver.get_item_at("Students", 1)


def test_find_item_returns_matching_row(resolver):
    table = ValidationTable.from_rows([("Last Name", "Equals", "Alonso")])

    item = resolver.find_item("Results", table)

    assert item.field_values()["First Name"] == "Meredith"
    assert item.name == "StudentsSearch.Results[2]"


def test_find_item_returns_first_match_in_document_order(resolver):
    table = ValidationTable.from_rows([("Last Name", "StartsWith", "A")])

    assert resolver.find_item("Results", table).field_values()["Last Name"] == "Alexander"


def test_find_item_stops_at_first_match(resolver, students_driver):
    table = ValidationTable.from_rows([("First Name", "Equals", "Carson")])

    resolver.find_item("Results", table)

    assert _item_reads(students_driver) == [("tr", 0)]


def test_find_item_without_match_reports_criteria(resolver):
    table = ValidationTable.from_rows([("Last Name", "Equals", "Zimmer")])

    with pytest.raises(NoMatchFoundError) as excinfo:
        resolver.find_item("Results", table)

    assert excinfo.value.list_name == "Results"
    assert "| Last Name | Equals | Zimmer |" in str(excinfo.value)


def test_find_item_with_match_false_returns_first_non_matching(resolver):
    table = ValidationTable.from_rows([("Last Name", "Equals", "Alexander")])

    item = resolver.find_item("Results", table, match=False)

    assert item.field_values()["Last Name"] == "Alonso"


def test_resolving_an_item_leaves_source_page_untouched(resolver, students_page):
    resolver.get_item_at("Results", 3)

    assert students_page.scope is None
    assert students_page.name == "StudentsSearch"
    assert students_page.get_property("Results") is not None


def test_item_sequence_can_be_enumerated_again(students_page, wait_engine):
    items = ElementLocator(students_page, wait_engine).get_list("Results")

    first = [item.field_values()["Last Name"] for item in items]
    second = [item.field_values()["Last Name"] for item in items]

    assert first == second == ["Alexander", "Alonso", "Anand"]


def test_unrendered_field_reads_as_none(resolver):
    item = resolver.get_item_at("Results", 1)

    assert item.field_values()["Enrollment Date"] is None
