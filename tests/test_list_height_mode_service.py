from yolist.models.list_item import SourceItem
from yolist.models.position_store import PositionStore
from yolist.services.list_height_mode_service import ListHeightModeService


def _items(*heights):
    return [
        SourceItem(key=str(i), payload={"key": str(i)} if h is None else {"key": str(i), "height": h})
        for i, h in enumerate(heights)
    ]


def test_all_declared_heights_is_fixed():
    service = ListHeightModeService(PositionStore())

    assert service.is_fixed(_items(10, 20, 30)) is True


def test_missing_height_is_progressive():
    service = ListHeightModeService(PositionStore())

    assert service.is_fixed(_items(10, None, 30)) is False


def test_global_item_height_forces_fixed():
    service = ListHeightModeService(PositionStore())

    assert service.is_fixed(_items(None, None), fixed_item_height=44) is True


def test_non_infinite_lists_are_always_fixed():
    service = ListHeightModeService(PositionStore())

    assert service.is_fixed(_items(None, None), infinite=False) is True


def test_measured_heights_count_as_known():
    store = PositionStore()
    items = _items(None, 20)
    store.ensure(items[0])
    store.set(items[0], height=12, resolved=True, translate_y=0, bottom=12)
    service = ListHeightModeService(store)

    assert service.is_fixed(items) is True
