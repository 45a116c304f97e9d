"""Tests for ListPager items, selection, pagination and rendering."""

from __future__ import annotations

import io

import pytest

from list_pager.config import PagerConfig
from list_pager.errors import DuplicateIdError, EmptyStateError, NotFoundError
from list_pager.events import EmptyEvent, RemoveEvent, ResetEvent, SelectEvent
from list_pager.pager import ListPager
from list_pager.terminal import TerminalInput

from conftest import RecordingCanvas


def _pager(length: int = 10, marker: str = "> ") -> tuple[ListPager, RecordingCanvas]:
    canvas = RecordingCanvas()
    config = PagerConfig(x=0, y=0, length=length, marker=marker)
    return ListPager(config=config, canvas=canvas, input=TerminalInput(io.BytesIO())), canvas


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------


class TestAddItem:
    def test_first_add_selects(self, pager: ListPager, recorder: list) -> None:
        pager.add_item("g", "Google")

        assert pager.selected == "g"
        assert recorder == [("select", SelectEvent(id="g"))]

    def test_later_adds_keep_selection(self, pager: ListPager, recorder: list) -> None:
        pager.add_item("g", "Google")
        pager.add_item("y", "Yahoo")
        pager.add_item("c", "Cloudup")

        assert pager.selected == "g"
        assert [e for e, _ in recorder] == ["select"]

    def test_duplicate_rejected(self, sites: ListPager) -> None:
        with pytest.raises(DuplicateIdError):
            sites.add_item("g", "Google again")
        assert len(sites) == 4

    def test_numeric_ids(self, pager: ListPager) -> None:
        pager.add_item(1, "one")
        pager.add_item(2, "two")
        pager.down()
        assert pager.selected == 2

    def test_add_while_stopped_does_not_redraw_again(
        self, pager: ListPager, canvas: RecordingCanvas
    ) -> None:
        pager.add_item("g", "Google")
        draws = canvas.draw_count()
        pager.add_item("y", "Yahoo")
        assert canvas.draw_count() == draws

    def test_add_while_running_redraws(self, pager: ListPager, canvas: RecordingCanvas) -> None:
        pager.add_item("g", "Google")
        pager.start()
        pager.add_item("y", "Yahoo")
        assert canvas.last_frame() == ["> Google", "  Yahoo"]

    def test_count_tracks_adds_and_removes(self, pager: ListPager) -> None:
        for i in range(7):
            pager.add_item(i, f"item {i}")
        pager.remove_item(3)
        pager.remove_item(0)
        with pytest.raises(NotFoundError):
            pager.remove_item(3)
        assert len(pager) == 5
        assert len(pager.items) == 5


class TestLookup:
    def test_item_at(self, sites: ListPager) -> None:
        assert sites.item_at(1).label == "Yahoo"
        assert sites.item_at(4) is None
        assert sites.item_at(-1) is None

    def test_get_item(self, sites: ListPager) -> None:
        assert sites.get_item("c").label == "Cloudup"
        assert sites.get_item("zzz") is None


class TestUpdateItem:
    def test_update_redraws(self, sites: ListPager, canvas: RecordingCanvas) -> None:
        sites.update_item("y", "Yahoo!")
        assert sites.get_item("y").label == "Yahoo!"
        assert canvas.last_frame()[1] == "  Yahoo!"

    def test_update_missing_raises(self, sites: ListPager) -> None:
        with pytest.raises(NotFoundError):
            sites.update_item("zzz", "label")

    def test_update_keeps_selection(self, sites: ListPager) -> None:
        sites.update_item("g", "Alphabet")
        assert sites.selected == "g"


class TestRemoveItem:
    def test_remove_only_item(self, pager: ListPager, recorder: list) -> None:
        pager.add_item("g", "Google")
        recorder.clear()

        pager.remove_item("g")

        assert pager.selected is None
        assert recorder == [("remove", RemoveEvent(id="g")), ("empty", EmptyEvent())]

    def test_remove_selected_selects_previous(self, recorder: list, sites: ListPager) -> None:
        sites.select_item("c")
        recorder.clear()

        sites.remove_item()

        assert sites.selected == "y"
        assert recorder == [("remove", RemoveEvent(id="c")), ("select", SelectEvent(id="y"))]

    def test_remove_defaults_to_selection(self, sites: ListPager) -> None:
        sites.down()
        sites.remove_item()
        assert sites.get_item("y") is None
        assert sites.selected == "g"

    def test_remove_first_selected_clears_selection(
        self, recorder: list, sites: ListPager
    ) -> None:
        recorder.clear()
        sites.remove_item("g")

        assert sites.selected is None
        assert len(sites) == 3
        assert recorder == [("remove", RemoveEvent(id="g"))]

    def test_remove_unselected_keeps_selection(self, recorder: list, sites: ListPager) -> None:
        sites.select_item("c")
        recorder.clear()

        sites.remove_item("h")

        assert sites.selected == "c"
        assert recorder == [("remove", RemoveEvent(id="h"))]

    def test_remove_unknown_raises(self, sites: ListPager) -> None:
        with pytest.raises(NotFoundError):
            sites.remove_item("zzz")
        assert len(sites) == 4

    def test_remove_without_selection_raises(self, pager: ListPager) -> None:
        with pytest.raises(EmptyStateError):
            pager.remove_item()

    def test_state_updated_before_notifications(self, sites: ListPager) -> None:
        seen: list = []
        sites.select_item("y")
        sites.on("remove", lambda e: seen.append((sites.selected, sites.get_item(e.id))))

        sites.remove_item()

        assert seen == [("g", None)]

    def test_remove_redraws(self, sites: ListPager, canvas: RecordingCanvas) -> None:
        sites.remove_item("y")
        assert canvas.last_frame() == ["> Google", "  Cloudup", "  Github"]

    def test_exactly_one_empty_event(self, pager: ListPager, recorder: list) -> None:
        pager.add_item("a", "A")
        pager.add_item("b", "B")
        pager.remove_item("a")
        pager.remove_item("b")
        assert [e for e, _ in recorder].count("empty") == 1

    def test_listener_removing_predecessor_suppresses_stale_select(
        self, recorder: list, sites: ListPager
    ) -> None:
        def drop_yahoo(event: RemoveEvent) -> None:
            if event.id == "c":
                sites.remove_item("y")

        sites.select_item("c")
        sites.on("remove", drop_yahoo)
        recorder.clear()

        sites.remove_item()

        assert sites.selected == "g"
        assert sites.get_item("y") is None
        assert recorder == [
            ("remove", RemoveEvent(id="c")),
            ("remove", RemoveEvent(id="y")),
            ("select", SelectEvent(id="g")),
        ]

    def test_listener_refilling_list_suppresses_empty(
        self, recorder: list, pager: ListPager
    ) -> None:
        pager.add_item("a", "A")
        pager.on("remove", lambda e: pager.add_item("b", "B") if e.id == "a" else None)
        recorder.clear()

        pager.remove_item("a")

        assert len(pager) == 1
        assert pager.selected == "b"
        assert recorder == [("remove", RemoveEvent(id="a")), ("select", SelectEvent(id="b"))]


class TestReentrantListeners:
    """Listeners calling mutators from inside a notification."""

    def test_select_listener_removes_selection(self, recorder: list, sites: ListPager) -> None:
        sites.on("select", lambda e: sites.remove_item(e.id) if e.id == "h" else None)
        recorder.clear()

        sites.select_item("h")

        assert sites.get_item("h") is None
        assert sites.selected == "c"
        assert recorder == [
            ("select", SelectEvent(id="h")),
            ("remove", RemoveEvent(id="h")),
            ("select", SelectEvent(id="c")),
        ]

    def test_select_listener_redirects_selection(self, recorder: list, sites: ListPager) -> None:
        sites.on("select", lambda e: sites.select_item("g") if e.id == "h" else None)
        recorder.clear()

        sites.select_item("h")

        assert sites.selected == "g"
        assert recorder == [("select", SelectEvent(id="h")), ("select", SelectEvent(id="g"))]

    def test_empty_listener_adds_item(
        self, recorder: list, pager: ListPager, canvas: RecordingCanvas
    ) -> None:
        pager.add_item("a", "A")
        pager.on("empty", lambda e: pager.add_item("z", "Placeholder"))
        recorder.clear()

        pager.remove_item("a")

        assert pager.selected == "z"
        assert recorder == [
            ("remove", RemoveEvent(id="a")),
            ("empty", EmptyEvent()),
            ("select", SelectEvent(id="z")),
        ]
        assert canvas.last_frame() == ["> Placeholder"]

    def test_reset_listener_adds_item(
        self, recorder: list, sites: ListPager, canvas: RecordingCanvas
    ) -> None:
        sites.on("reset", lambda e: sites.add_item("n", "New"))
        recorder.clear()

        sites.reset()

        assert [item.id for item in sites.items] == ["n"]
        assert sites.selected == "n"
        assert recorder == [("reset", ResetEvent()), ("select", SelectEvent(id="n"))]
        assert canvas.last_frame() == ["> New"]

    def test_remove_listener_reads_consistent_state(self, sites: ListPager) -> None:
        seen: list = []
        sites.on("remove", lambda e: seen.append((e.id, sites.selected, len(sites))))
        sites.select_item("y")

        sites.remove_item()
        sites.remove_item()

        assert seen == [("y", "g", 3), ("g", None, 2)]


class TestReset:
    def test_reset_clears_items_and_selection(self, recorder: list, sites: ListPager) -> None:
        recorder.clear()
        sites.reset()

        assert len(sites) == 0
        assert sites.selected is None
        assert recorder == [("reset", ResetEvent())]

    def test_reset_redraws_empty_page(self, sites: ListPager, canvas: RecordingCanvas) -> None:
        sites.reset()
        assert canvas.last_frame() == []

    def test_reset_keeps_headers(self, sites: ListPager, canvas: RecordingCanvas) -> None:
        sites.add_header("title", "Sites")
        sites.reset()
        assert canvas.last_frame() == ["Sites"]

    def test_add_after_reset_selects_like_fresh_instance(self, sites: ListPager) -> None:
        sites.reset()
        sites.add_item("n", "New")
        sites.add_item("m", "More")

        fresh, _ = _pager()
        fresh.add_item("n", "New")
        fresh.add_item("m", "More")

        assert sites.selected == fresh.selected == "n"
        assert sites.render_lines() == fresh.render_lines()


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


class TestSelection:
    def test_select_item(self, recorder: list, sites: ListPager) -> None:
        recorder.clear()
        sites.select_item("h")
        assert sites.selected == "h"
        assert recorder == [("select", SelectEvent(id="h"))]

    def test_select_unknown_raises(self, sites: ListPager) -> None:
        with pytest.raises(NotFoundError):
            sites.select_item("zzz")
        assert sites.selected == "g"

    def test_google_yahoo_example(self, pager: ListPager) -> None:
        pager.add_item("g", "Google")
        pager.add_item("y", "Yahoo")
        assert pager.selected == "g"

        pager.down()
        assert pager.selected == "y"

        pager.down()
        assert pager.selected == "y"

    def test_up_at_first_is_noop(self, recorder: list, sites: ListPager) -> None:
        recorder.clear()
        sites.up()
        assert sites.selected == "g"
        assert recorder == []

    def test_down_at_last_is_noop(self, recorder: list, sites: ListPager) -> None:
        sites.select_item("h")
        recorder.clear()
        sites.down()
        assert sites.selected == "h"
        assert recorder == []

    def test_navigation_follows_insertion_order(self, pager: ListPager) -> None:
        pager.add_item("z", "Zulu")
        pager.add_item("a", "Alpha")
        pager.add_item("m", "Mike")

        pager.down()
        assert pager.selected == "a"
        pager.down()
        assert pager.selected == "m"
        pager.up()
        assert pager.selected == "a"

    def test_navigation_on_empty_is_noop(self, pager: ListPager, recorder: list) -> None:
        pager.up()
        pager.down()
        assert pager.selected is None
        assert recorder == []

    def test_navigation_without_selection_is_noop(self, sites: ListPager) -> None:
        sites.remove_item("g")  # clears the selection
        sites.down()
        sites.up()
        assert sites.selected is None

    def test_selected_item_and_index(self, sites: ListPager) -> None:
        sites.select_item("c")
        assert sites.selected_item.label == "Cloudup"
        assert sites.selected_index == 2


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------


class TestHeaders:
    def test_headers_render_above_items(self, sites: ListPager, canvas: RecordingCanvas) -> None:
        sites.add_header("title", "Sites")
        sites.add_header("status", "")
        assert canvas.last_frame()[:3] == ["Sites", "", "> Google"]

    def test_update_header(self, sites: ListPager, canvas: RecordingCanvas) -> None:
        sites.select_item("y")
        sites.add_header("status", "")
        window = sites.window()

        sites.update_header("status", "Playing")

        assert canvas.last_frame()[0] == "Playing"
        assert sites.selected == "y"
        assert sites.window() == window

    def test_update_missing_header_raises(self, pager: ListPager) -> None:
        with pytest.raises(NotFoundError):
            pager.update_header("status", "Playing")

    def test_duplicate_header_rejected(self, pager: ListPager) -> None:
        pager.add_header("status", "")
        with pytest.raises(DuplicateIdError):
            pager.add_header("status", "again")

    def test_header_ids_independent_of_items(self, pager: ListPager) -> None:
        pager.add_item("x", "item")
        pager.add_header("x", "header")
        assert pager.get_item("x").label == "item"
        assert pager.get_header("x").label == "header"

    def test_headers_do_not_select(self, pager: ListPager, recorder: list) -> None:
        pager.add_header("status", "")
        assert pager.selected is None
        assert recorder == []


# ---------------------------------------------------------------------------
# Pagination and rendering
# ---------------------------------------------------------------------------


class TestPagination:
    def test_eleven_items_last_selected(self) -> None:
        pager, canvas = _pager(length=10)
        for letter in "ABCDEFGHIJK":
            pager.add_item(letter, letter)

        pager.select_item("K")

        assert pager.window() == (10, 11)
        assert [i.id for i in pager.visible_items()] == ["K"]
        assert canvas.last_frame() == ["> K"]

    def test_page_jumps_when_crossing_boundary(self) -> None:
        pager, canvas = _pager(length=3)
        for i in range(7):
            pager.add_item(i, f"row {i}")

        pager.down()
        pager.down()
        assert pager.window() == (0, 3)

        pager.down()
        assert pager.window() == (3, 6)
        assert canvas.last_frame() == ["> row 3", "  row 4", "  row 5"]

        pager.up()
        assert pager.window() == (0, 3)

    def test_window_empty_without_selection(self, pager: ListPager) -> None:
        assert pager.window() == (0, 0)
        assert pager.visible_items() == []

    def test_page_info(self) -> None:
        pager, _ = _pager(length=2)
        assert pager.page_info() == (0, 0)
        for i in range(5):
            pager.add_item(i, str(i))
        assert pager.page_info() == (1, 3)
        pager.select_item(4)
        assert pager.page_info() == (3, 3)


class TestDraw:
    def test_draw_call_sequence(
        self, canvas: RecordingCanvas, terminal_input: TerminalInput
    ) -> None:
        config = PagerConfig(x=6, y=8, marker="› ")
        pager = ListPager(config=config, canvas=canvas, input=terminal_input)
        pager.add_header("title", "Sites")
        pager.add_item("g", "Google")
        canvas.calls.clear()

        pager.add_item("y", "Yahoo")
        pager.draw()

        assert canvas.calls == [
            ("clear",),
            ("save",),
            ("translate", 6, 8),
            ("fill_text", "Sites", 0, 0),
            ("fill_text", "› Google", 0, 1),
            ("fill_text", "  Yahoo", 0, 2),
            ("restore",),
        ]

    def test_unselected_rows_padded_to_marker_width(self) -> None:
        pager, _ = _pager(marker="-->")
        pager.add_item("a", "A")
        pager.add_item("b", "B")
        assert pager.render_lines() == ["-->A", "   B"]

    def test_select_redraws(self, sites: ListPager, canvas: RecordingCanvas) -> None:
        sites.down()
        assert canvas.last_frame() == ["  Google", "> Yahoo", "  Cloudup", "  Github"]
