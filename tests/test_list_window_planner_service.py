from yolist.models.list_item import SourceItem
from yolist.models.position_store import PositionStore
from yolist.services.list_window_planner_service import (ListWindow,
                                                         ListWindowPlannerService,
                                                         direction_between)


def _build(heights, *, resolved_count=None):
    """Create items where the first `resolved_count` are laid out back to back."""
    store = PositionStore()
    items = []
    y = 0
    resolved_count = len(heights) if resolved_count is None else resolved_count
    for i, height in enumerate(heights):
        item = SourceItem(key=f"k{i}", payload={"key": f"k{i}"})
        store.ensure(item)
        if i < resolved_count:
            store.set(item, height=height, resolved=True, translate_y=y, bottom=y + height, index=i)
            y += height
        else:
            store.set(item, index=i)
        items.append(item)
    return store, items


def test_direction_between_treats_no_motion_as_down():
    assert direction_between(100, 100) == "down"
    assert direction_between(100, 150) == "down"
    assert direction_between(100, 50) == "up"


def test_non_infinite_window_is_whole_data_source():
    store, items = _build([50] * 30)
    service = ListWindowPlannerService(store)

    window = service.compute_window(
        offset=900, cached_start=7, direction="down", items=items, window_size=12, infinite=False,
    )

    assert window == ListWindow(0, 30)


def test_fixed_mode_finds_straddling_item():
    store, items = _build([50] * 100)
    service = ListWindowPlannerService(store)

    window = service.compute_window(
        offset=1020, cached_start=0, direction="down", items=items, window_size=12, fixed=True,
    )

    # 1020 lies inside item 20 (1000..1050)
    assert window.start_index == 20
    assert window.end_index == 32


def test_fixed_mode_applies_lookahead_and_clamps_at_zero():
    store, items = _build([50] * 100)
    service = ListWindowPlannerService(store)

    window = service.compute_window(
        offset=1020, cached_start=0, direction="down", items=items, window_size=12,
        lookahead=200, fixed=True,
    )
    assert window.start_index == 16

    window = service.compute_window(
        offset=10, cached_start=0, direction="down", items=items, window_size=12,
        lookahead=200, fixed=True,
    )
    assert window.start_index == 0


def test_window_is_pulled_back_to_stay_full_at_the_tail():
    store, items = _build([50] * 20)
    service = ListWindowPlannerService(store)

    window = service.compute_window(
        offset=950, cached_start=0, direction="down", items=items, window_size=12, fixed=True,
    )

    assert window == ListWindow(8, 20)
    assert len(window) == 12


def test_short_data_source_window_covers_everything():
    store, items = _build([50] * 5)
    service = ListWindowPlannerService(store)

    window = service.compute_window(
        offset=400, cached_start=3, direction="down", items=items, window_size=12,
    )

    assert window == ListWindow(0, 5)


def test_scan_down_starts_from_cached_index():
    store, items = _build([50] * 100)
    service = ListWindowPlannerService(store)
    visited = []
    original = service.is_border_item

    def spy(item, border_y):
        visited.append(item.key)
        return original(item, border_y)

    service.is_border_item = spy
    start = service.scan_start_index(border_y=1520, cached_start=29, direction="down", items=items)

    assert start == 30
    assert visited == ["k29", "k30"]


def test_scan_up_walks_backwards():
    store, items = _build([50] * 100)
    service = ListWindowPlannerService(store)

    start = service.scan_start_index(border_y=1220, cached_start=30, direction="up", items=items)

    assert start == 24


def test_unresolved_item_is_treated_as_border():
    store, items = _build([50] * 40, resolved_count=10)
    service = ListWindowPlannerService(store)

    start = service.scan_start_index(border_y=5000, cached_start=0, direction="down", items=items)

    assert start == 10
    assert service.is_border_item(items[25], 0) is True


def test_materialize_merges_positions_for_the_window_slice():
    store, items = _build([50] * 10)
    service = ListWindowPlannerService(store)

    entries = service.materialize(items, ListWindow(2, 5))

    assert [entry["key"] for entry in entries] == ["k2", "k3", "k4"]
    assert entries[0]["translate_y"] == 100
    assert entries[0]["bottom"] == 150
    assert entries[0]["resolved"] is True


def test_window_bounds_hold_for_every_offset():
    store, items = _build([37] * 50)
    service = ListWindowPlannerService(store)
    start = 0
    previous = 0
    for offset in list(range(0, 2200, 45)) + list(range(2200, -1, -60)):
        window = service.compute_window(
            offset=offset,
            cached_start=start,
            direction=direction_between(previous, offset),
            items=items,
            window_size=12,
            lookahead=30,
        )
        assert 0 <= window.start_index <= window.end_index <= len(items)
        assert len(window) == 12
        start, previous = window.start_index, offset
