import pytest

from trmap.core import ChangeNotifier, GridView
from trmap.errors import InvalidCellValue, InvalidDimensions, OutOfBounds


def make_view(width=3, height=2, offset=0, size=None):
    backing = bytearray(size if size is not None else offset + width * height)
    notifier = ChangeNotifier()
    return GridView(backing, offset, width, height, notifier), backing, notifier


def test_set_then_get_returns_value_for_every_cell():
    view, _, _ = make_view()
    for y in range(view.height):
        for x in range(view.width):
            view.set(x, y, x + 10 * y)
    for y in range(view.height):
        for x in range(view.width):
            assert view.get(x, y) == x + 10 * y


def test_writes_land_at_offset_with_row_stride():
    view, backing, _ = make_view(width=3, height=2, offset=4, size=12)
    view.set(2, 1, 7)
    assert view.stride == 3
    assert backing[4 + 1 * 3 + 2] == 7
    assert backing[:4] == bytearray(4)
    assert view.span == (4, 10)


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (3, 0), (0, 2), (3, 2), (100, 100)])
def test_out_of_bounds_raises_and_never_clamps(x, y):
    view, backing, notifier = make_view()
    with pytest.raises(OutOfBounds):
        view.get(x, y)
    with pytest.raises(OutOfBounds):
        view.set(x, y, 1)
    assert backing == bytearray(len(backing))
    assert notifier.revision == 0


def test_out_of_bounds_is_an_index_error():
    view, _, _ = make_view()
    with pytest.raises(IndexError):
        view.get(3, 0)


def test_set_notifies_once():
    view, _, notifier = make_view()
    calls = []
    notifier.subscribe(lambda: calls.append(1))
    view.set(1, 1, 5)
    assert calls == [1]


def test_fill_overwrites_every_cell_and_notifies_once():
    view, backing, notifier = make_view(width=2, height=2, offset=1, size=6)
    calls = []
    notifier.subscribe(lambda: calls.append(1))
    view.fill(9)
    assert all(view.get(x, y) == 9 for x in range(2) for y in range(2))
    assert backing[0] == 0 and backing[5] == 0
    assert calls == [1]


@pytest.mark.parametrize("value", [-1, 256, 1000])
def test_values_must_fit_in_a_byte(value):
    view, _, notifier = make_view()
    with pytest.raises(InvalidCellValue):
        view.set(0, 0, value)
    with pytest.raises(InvalidCellValue):
        view.fill(value)
    assert notifier.revision == 0


@pytest.mark.parametrize("value", [1.5, 1.9, 2.0, "a", "1", None])
def test_non_integer_values_are_rejected_not_coerced(value):
    view, backing, notifier = make_view()
    with pytest.raises(InvalidCellValue):
        view.set(0, 0, value)
    with pytest.raises(InvalidCellValue):
        view.fill(value)
    assert backing == bytearray(len(backing))
    assert notifier.revision == 0


def test_bool_values_are_stored_as_ints():
    view, _, _ = make_view()
    view.set(0, 0, True)
    assert view.get(0, 0) == 1


def test_map_type_rejects_floats(solid_map):
    with pytest.raises(InvalidCellValue):
        solid_map.set_type_at(0, 0, 1.9)
    assert solid_map.type_at(0, 0) == 0


def test_view_must_fit_inside_backing():
    with pytest.raises(InvalidDimensions):
        GridView(bytearray(5), 0, 3, 2)
    with pytest.raises(InvalidDimensions):
        GridView(bytearray(10), 6, 2, 3)
    with pytest.raises(InvalidDimensions):
        GridView(bytearray(10), 0, 0, 3)


def test_cells_iterates_row_major():
    view, _, _ = make_view(width=2, height=2)
    view.set(1, 0, 4)
    assert list(view.cells()) == [(0, 0, 0), (1, 0, 4), (0, 1, 0), (1, 1, 0)]
    assert view.to_bytes() == bytes([0, 4, 0, 0])
