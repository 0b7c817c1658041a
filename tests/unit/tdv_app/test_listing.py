"""Tests for the listing service that answers table view requests."""

from __future__ import annotations

import pytest

from tdv_app.api import ListingService, TableViewConfig
from tdv_app.services.listing import sort_key, sort_rows
from tdv_table.api import BodyKind, OnSortParam, SortOrder

pytestmark = pytest.mark.unit_app


def ids(rows) -> list[int]:
    return [row["id"] for row in rows]


def test_sort_key_ranks_numbers_dates_text() -> None:
    assert sort_key(3) == (0, 3.0)
    assert sort_key("10") == (0, 10.0)
    assert sort_key("2023-04-01")[0] == 1
    assert sort_key("Zed") == (2, "zed")


def test_sort_rows_numeric_strings_and_missing_last() -> None:
    rows = [{"id": 1, "v": "9"}, {"id": 2, "v": None}, {"id": 3, "v": "10"}, {"id": 4, "v": "abc"}]
    value = lambda row: row["v"]  # noqa: E731
    assert ids(sort_rows(rows, OnSortParam("v", SortOrder.ASC), value)) == [1, 3, 4, 2]
    assert ids(sort_rows(rows, OnSortParam("v", SortOrder.DESC), value)) == [4, 3, 1, 2]
    assert ids(sort_rows(rows, OnSortParam(), value)) == [1, 2, 3, 4]


class TestQueries:
    def test_substring_search_is_case_insensitive(self, people) -> None:
        listing = ListingService(people)
        listing.handle_search_change("ENGINEERING")
        assert ids(listing.filtered()) == [1, 3]

    def test_sort_dates_keeps_missing_last(self, people) -> None:
        listing = ListingService(people)
        listing.handle_sort(OnSortParam("joined", SortOrder.ASC))
        assert ids(listing.filtered()) == [2, 3, 1, 4]
        listing.handle_sort(OnSortParam("joined", SortOrder.DESC))
        assert ids(listing.filtered()) == [1, 3, 2, 4]

    def test_sort_numbers_descending(self, people) -> None:
        listing = ListingService(people)
        listing.handle_sort(OnSortParam("age", SortOrder.DESC))
        assert ids(listing.filtered()) == [4, 2, 1, 3]

    def test_default_sort_from_config(self, people) -> None:
        config = TableViewConfig(default_sort={"key": "age", "order": "asc"})
        listing = ListingService(people, config)
        assert ids(listing.page().rows) == [3, 1, 2, 4]

    def test_fuzzy_search(self, people) -> None:
        listing = ListingService(people, TableViewConfig(fuzzy_search=True))
        listing.handle_search_change("alice smth")
        assert ids(listing.filtered())[0] == 1
        listing.handle_search_change("zzzzqqq")
        assert listing.filtered() == []

    def test_page_slices_filtered_rows(self, many_rows) -> None:
        listing = ListingService(many_rows)
        listing.handle_pagination_change(3)
        page = listing.page()
        assert ids(page.rows) == [21, 22, 23, 24, 25]
        assert page.total == 25
        assert page.paging.page_index == 3


class TestHandlers:
    def test_sort_and_search_reset_to_first_page(self, many_rows) -> None:
        listing = ListingService(many_rows)
        listing.handle_pagination_change(3)
        listing.handle_sort(OnSortParam("name", SortOrder.ASC))
        assert listing.state.page_index == 1
        listing.handle_pagination_change(2)
        listing.handle_search_change("user")
        assert listing.state.page_index == 1
        assert listing.state.query == "user"

    def test_page_size_change_resets_page_and_selection(self, many_rows) -> None:
        listing = ListingService(many_rows)
        listing.handle_row_select(True, many_rows[0])
        listing.handle_pagination_change(2)
        listing.handle_select_change(25)
        assert listing.state.page_index == 1
        assert listing.state.page_size == 25
        assert listing.selected_rows == []

    def test_select_all_accumulates_across_pages(self, many_rows) -> None:
        listing = ListingService(many_rows)
        listing.handle_all_row_select(True, many_rows[:10])
        listing.handle_all_row_select(True, many_rows[5:20])
        assert len(listing.selected_rows) == 20
        listing.handle_all_row_select(False, many_rows[:10])
        assert ids(listing.selected_rows) == list(range(11, 21))

    def test_row_select_toggles_one(self, many_rows) -> None:
        listing = ListingService(many_rows)
        listing.handle_row_select(True, many_rows[4])
        assert listing.is_selected(many_rows[4])
        listing.handle_row_select(False, many_rows[4])
        assert not listing.is_selected(many_rows[4])

    def test_set_rows_drops_stale_selection(self, many_rows) -> None:
        listing = ListingService(many_rows)
        listing.handle_all_row_select(True, many_rows[:3])
        listing.set_rows(many_rows[1:])
        assert ids(listing.selected_rows) == [2, 3]


class TestBoundView:
    def test_build_view_renders_first_page(self, many_rows) -> None:
        listing = ListingService(many_rows)
        view = listing.build_view()
        render = view.render()
        assert render.body is BodyKind.ROWS
        assert len(render.rows) == 10
        assert render.footer.page_count == 3

    def test_header_clicks_resort_rows(self, many_rows) -> None:
        listing = ListingService(many_rows)
        view = listing.build_view()
        view.click_header("name")
        assert listing.state.sort == OnSortParam("name", SortOrder.ASC)
        assert view.data[0]["name"] == "user 01"
        view.click_header("name")
        assert view.data[0]["name"] == "user 25"
        view.click_header("name")
        assert listing.state.sort.order is SortOrder.NONE
        assert view.data[0]["id"] == 1

    def test_pager_and_page_size_round_trip(self, many_rows) -> None:
        listing = ListingService(many_rows)
        view = listing.build_view()
        view.change_page(3)
        assert view.paging_data.page_index == 3
        assert len(view.data) == 5
        view.change_page_size(25)
        assert view.paging_data.page_index == 1
        assert view.paging_data.page_size == 25
        assert len(view.data) == 25

    def test_selection_persists_across_pages(self, many_rows) -> None:
        listing = ListingService(many_rows)
        view = listing.build_view()
        view.toggle_row(view.data[0])
        view.change_page(2)
        assert view.header_checkbox().checked is False
        view.toggle_all()
        assert len(listing.selected_rows) == 11
        view.change_page(1)
        assert view.render().rows[0].checked is True
        assert view.header_checkbox().indeterminate is True

    def test_search_refreshes_view(self, people) -> None:
        listing = ListingService(people)
        view = listing.build_view()
        listing.search(view, "nobody")
        assert view.render().body is BodyKind.EMPTY
        listing.search(view, "")
        assert len(view.data) == 4

    def test_expand_field_drives_sub_rows(self, people) -> None:
        listing = ListingService(people, TableViewConfig(expand_field="joined"))
        view = listing.build_view()
        assert view.toggle_expanded(view.data[3]) is None
        view.toggle_expanded(view.data[0])
        render = view.render()
        assert render.sub_row_count == 1
        assert render.rows[0].sub_content == "2023-04-01"

    def test_refresh_while_loading_shows_overlay(self, people) -> None:
        listing = ListingService(people)
        view = listing.build_view()
        listing.refresh(view, loading=True)
        assert view.render().overlay is True
        assert view.click_header("name") is None

    def test_empty_dataset(self) -> None:
        listing = ListingService([])
        render = listing.build_view().render()
        assert render.body is BodyKind.EMPTY
        assert render.footer is None


class TestRowsWithoutId:
    @pytest.fixture
    def listing(self) -> ListingService:
        return ListingService([{"name": f"person {i}"} for i in range(15)])

    def test_selecting_one_row_checks_only_that_row(self, listing: ListingService) -> None:
        view = listing.build_view()
        view.toggle_row(view.data[0], True)
        assert [row.checked for row in view.render().rows] == [True] + [False] * 9
        assert view.header_checkbox().indeterminate is True
        view.toggle_row(view.data[0], False)
        assert listing.selected_rows == []

    def test_positions_stay_stable_across_sorting(self, listing: ListingService) -> None:
        view = listing.build_view()
        target = view.data[2]
        view.toggle_row(target, True)
        view.click_header("name")
        view.click_header("name")
        checked = [row.row for row in view.render().rows if row.checked]
        assert checked == [target]

    def test_select_all_then_next_page(self, listing: ListingService) -> None:
        view = listing.build_view()
        view.toggle_all(True)
        view.change_page(2)
        assert view.header_checkbox().checked is False
        assert len(listing.selected_rows) == 10


def test_nan_and_infinity_names_sort_as_text() -> None:
    names = ["Zoe", "Nan", "Amy", "Bob", "Infinity", "Carl", "inf"]
    rows = [{"id": idx, "name": name} for idx, name in enumerate(names)]
    ordered = sort_rows(rows, OnSortParam("name", SortOrder.ASC), lambda row: row["name"])
    assert [row["name"] for row in ordered] == ["Amy", "Bob", "Carl", "inf", "Infinity", "Nan", "Zoe"]
    assert sort_key("NaN") == (2, "nan")
    assert sort_key("1e3") == (0, 1000.0)


def test_float_nan_values_sort_last() -> None:
    rows = [{"id": 1, "v": float("nan")}, {"id": 2, "v": 2.0}, {"id": 3, "v": 1.0}]
    ordered = sort_rows(rows, OnSortParam("v", SortOrder.ASC), lambda row: row["v"])
    assert ids(ordered) == [3, 2, 1]
