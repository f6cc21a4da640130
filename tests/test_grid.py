import pytest

from neovide.grid import DEFAULT_CELL, CharacterGrid
from neovide.style import Colors, Style

SIZES = [(1, 1), (7, 3), (120, 40), (3, 250)]


def none_style():
    return Style(Colors(None, None, None))


def create_initialized_grid(lines):
    assert lines
    width = len(lines[0])
    assert all(len(line) == width for line in lines)
    grid = CharacterGrid((width, len(lines)))
    for row_nr, line in enumerate(lines):
        for col_nr, char in enumerate(line):
            grid.set_cell(col_nr, row_nr, (char, None))
    return grid


def set_grid_line_to_chars(grid, row, value):
    assert len(value) == grid.width
    for col_nr, char in enumerate(value):
        assert grid.set_cell(col_nr, row, (char, None))


def assert_all_cells_equal_to(grid, size, cell):
    width, height = size
    for x in range(width):
        for y in range(height):
            assert grid.get_cell(x, y) == cell


def assert_cell(grid, x, y, char):
    assert grid.get_cell(x, y) == (char, None)


@pytest.mark.parametrize("size", SIZES)
def test_new_constructs_grid(size):
    grid = CharacterGrid(size)
    assert grid.width == size[0]
    assert grid.height == size[1]
    assert_all_cells_equal_to(grid, size, DEFAULT_CELL)


@pytest.mark.parametrize("size", SIZES)
def test_get_cell_returns_expected_cell(size):
    grid = CharacterGrid(size)
    x, y = size[0] - 1, size[1] // 2
    grid.set_cell(x, y, ("foo", none_style()))
    assert grid.get_cell(x, y) == ("foo", none_style())


@pytest.mark.parametrize("size", SIZES)
def test_set_cell_modifies_grid(size):
    grid = CharacterGrid(size)
    x, y = size[0] // 2, size[1] - 1
    grid.set_cell(x, y, ("foo", none_style()))
    grid.set_cell(x, y, ("bar", none_style()))
    assert grid.get_cell(x, y) == ("bar", none_style())


def test_set_cell_outside_row_is_ignored():
    grid = CharacterGrid((3, 2))
    assert grid.set_cell(3, 0, ("x", None)) is False
    assert grid.set_cell(-1, 0, ("x", None)) is False
    assert grid.get_cell(3, 0) is None
    assert grid.row(0) == (DEFAULT_CELL,) * 3


def test_get_cell_row_out_of_range_raises():
    grid = CharacterGrid((3, 2))
    with pytest.raises(IndexError):
        grid.get_cell(0, 2)


@pytest.mark.parametrize("size", SIZES)
def test_set_all_characters_sets_all_cells(size):
    grid = CharacterGrid(size)
    cell = ("foo", none_style())
    grid.set_all_characters(cell)
    assert_all_cells_equal_to(grid, size, cell)


@pytest.mark.parametrize("size", SIZES)
def test_clear_empties_buffer(size):
    grid = CharacterGrid(size)
    grid.set_all_characters(("foo", none_style()))
    grid.clear()
    assert grid.width == size[0]
    assert grid.height == size[1]
    assert_all_cells_equal_to(grid, size, DEFAULT_CELL)


@pytest.mark.parametrize(
    "size,new_size",
    [((5, 5), (8, 9)), ((10, 4), (3, 2)), ((4, 10), (9, 3)), ((1, 1), (6, 6))],
)
def test_resize_keeps_overlap_and_resizes(size, new_size):
    grid = CharacterGrid(size)
    cell = ("foo", none_style())
    grid.set_all_characters(cell)
    grid.resize(new_size)
    width, height = new_size
    assert grid.width == width
    assert grid.height == height
    for x in range(min(size[0], width)):
        for y in range(min(size[1], height)):
            assert grid.get_cell(x, y) == cell
    for x in range(size[0], width):
        for y in range(size[1], height):
            assert grid.get_cell(x, y) == DEFAULT_CELL
    for y in range(height):
        assert len(grid.row(y)) == width


def test_row_out_of_range_is_none():
    grid = create_initialized_grid(["ab", "cd"])
    assert grid.row(1) == (("c", None), ("d", None))
    assert grid.row(2) is None


def test_scroll_down_moves_the_grid_correctly():
    grid = create_initialized_grid(["abcd", "efgh", "ijkl", "mnop"])
    assert grid.scroll_region(0, 4, 0, 4, 2, 0) is True
    assert_cell(grid, 0, 0, "i")
    assert_cell(grid, 3, 0, "l")
    assert_cell(grid, 0, 1, "m")


def test_scroll_up_moves_the_grid_correctly():
    grid = create_initialized_grid(["abcd", "efgh", "ijkl", "mnop"])
    grid.scroll_region(0, 4, 0, 4, -2, 0)
    assert_cell(grid, 0, 2, "a")
    assert_cell(grid, 0, 3, "e")
    assert_cell(grid, 3, 3, "h")


def test_partial_scroll_lines_down_moves_the_grid_correctly():
    grid = create_initialized_grid(["abcd", "efgh", "ijkl", "mnop"])
    assert grid.scroll_region(1, 3, 0, 4, 1, 0) is False
    assert_cell(grid, 0, 0, "a")
    assert_cell(grid, 0, 1, "i")
    assert_cell(grid, 3, 1, "l")
    assert_cell(grid, 0, 3, "m")


def test_partial_scroll_lines_up_moves_the_grid_correctly():
    grid = create_initialized_grid(["abcd", "efgh", "ijkl", "mnop"])
    grid.scroll_region(1, 3, 0, 4, -1, 0)
    assert_cell(grid, 0, 0, "a")
    assert_cell(grid, 0, 2, "e")
    assert_cell(grid, 3, 2, "h")
    assert_cell(grid, 0, 3, "m")


def test_scroll_left_moves_the_grid_correctly():
    grid = create_initialized_grid(["abcd", "efgh", "ijkl", "mnop"])
    grid.scroll_region(0, 4, 0, 4, 0, 1)
    assert_cell(grid, 0, 0, "b")
    assert_cell(grid, 2, 2, "l")


def test_scroll_right_moves_the_grid_correctly():
    grid = create_initialized_grid(["abcd", "efgh", "ijkl", "mnop"])
    grid.scroll_region(0, 4, 0, 4, 0, -3)
    assert_cell(grid, 3, 0, "a")
    assert_cell(grid, 3, 3, "m")


def test_scroll_inner_box_diagonally_moves_the_grid_correctly():
    grid = create_initialized_grid(["abcd", "efgh", "ijkl", "mnop"])
    grid.scroll_region(1, 3, 1, 3, 1, 1)
    assert_cell(grid, 0, 0, "a")
    assert_cell(grid, 1, 0, "b")
    assert_cell(grid, 0, 1, "e")
    assert_cell(grid, 1, 1, "k")
    assert_cell(grid, 3, 1, "h")
    assert_cell(grid, 0, 3, "m")


def test_scrolling_one_screen_down_works():
    grid = create_initialized_grid(["1", "2", "3", "4"])
    assert grid.scroll_region(0, 4, 0, 1, 4, 0) is True
    assert [grid.get_cell(0, y)[0] for y in range(4)] == ["1", "2", "3", "4"]
    for row, char in enumerate("5678"):
        set_grid_line_to_chars(grid, row, char)
    assert [grid.get_cell(0, y)[0] for y in range(4)] == ["5", "6", "7", "8"]


def test_scrolling_one_screen_up_works():
    grid = create_initialized_grid(["5", "6", "7", "8"])
    assert grid.scroll_region(0, 4, 0, 1, -4, 0) is True
    for row, char in enumerate("1234"):
        set_grid_line_to_chars(grid, row, char)
    assert [grid.get_cell(0, y)[0] for y in range(4)] == ["1", "2", "3", "4"]


def test_pure_scroll_by_one_rotates_rows():
    grid = create_initialized_grid(["1", "2", "3", "4"])
    grid.scroll_region(0, 4, 0, 1, 1, 0)
    assert [grid.get_cell(0, y)[0] for y in range(4)] == ["2", "3", "4", "1"]
    grid.scroll_region(0, 4, 0, 1, -1, 0)
    assert [grid.get_cell(0, y)[0] for y in range(4)] == ["1", "2", "3", "4"]