"""Decoding of Neovim ``redraw`` notifications into redraw events."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from .cursor import CursorMode, CursorShape
from .events import (
    BusyStart,
    BusyStop,
    Clear,
    CommandLineBlockAppend,
    CommandLineBlockHide,
    CommandLineBlockShow,
    CommandLineHide,
    CommandLinePosition,
    CommandLineShow,
    CommandLineSpecialCharacter,
    CursorGoto,
    DefaultColorsSet,
    Destroy,
    EditorMode,
    Flush,
    GridLine,
    GridLineCell,
    GuiOption,
    HighlightAttributesDefine,
    MessageClear,
    MessageHistoryShow,
    MessageKind,
    MessageRuler,
    MessageSetPosition,
    MessageShow,
    MessageShowCommand,
    MessageShowMode,
    ModeChange,
    ModeInfoSet,
    MouseOff,
    MouseOn,
    OptionSet,
    ParseError,
    RedrawEvent,
    Resize,
    Scroll,
    SetTitle,
    ShowIntro,
    StyledContent,
    Suspend,
    WindowAnchor,
    WindowClose,
    WindowExternalPosition,
    WindowFloatPosition,
    WindowHide,
    WindowPosition,
    WindowViewport,
)
from .style import Color, Colors, Style, UnderlineStyle

_log = logging.getLogger(__name__)

_U64_MAX = 2**64 - 1
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

_UNDERLINES = {
    "underline": UnderlineStyle.UNDERLINE,
    "undercurl": UnderlineStyle.UNDER_CURL,
    "underdotted": UnderlineStyle.UNDER_DOT,
    "underdot": UnderlineStyle.UNDER_DOT,
    "underdashed": UnderlineStyle.UNDER_DASH,
    "underdash": UnderlineStyle.UNDER_DASH,
    "underdouble": UnderlineStyle.UNDER_DOUBLE,
    "underlineline": UnderlineStyle.UNDER_DOUBLE,
}

_STYLE_FLAGS = ("reverse", "italic", "bold", "strikethrough")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _array(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ParseError("array", value)


def _map(value: Any) -> list[tuple[Any, Any]]:
    if isinstance(value, Mapping):
        return list(value.items())
    raise ParseError("map", value)


def _text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError:
            return "\ufffd"
    return None


def _string(value: Any) -> str:
    text = _text(value)
    if text is None:
        raise ParseError("string", value)
    return text


def _u64(value: Any) -> int:
    if _is_int(value) and 0 <= value <= _U64_MAX:
        return value
    raise ParseError("u64", value)


def _i64(value: Any) -> int:
    if _is_int(value) and _I64_MIN <= value <= _I64_MAX:
        return value
    raise ParseError("i64", value)


def _f64(value: Any) -> float:
    if isinstance(value, float) or _is_int(value):
        return float(value)
    raise ParseError("f64", value)


def _bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise ParseError("bool", value)


def _extract(values: list[Any], required: int) -> list[Any]:
    if required > len(values):
        raise ParseError("event", values)
    return values[:required]


def _extract_optional(
    values: list[Any], required: int, optional: int
) -> tuple[list[Any], list[Any | None]]:
    if required > len(values):
        raise ParseError("event", values)
    extra = values[required : required + optional]
    return values[:required], extra + [None] * (optional - len(extra))


def _optional(value: Any | None, parse: Callable[[Any], Any]) -> Any | None:
    return None if value is None else parse(value)


def unpack_color(packed_color: int) -> Color:
    """Turn Neovim's packed ``0xRRGGBB`` integer into an opaque colour."""
    packed = packed_color & 0xFFFFFFFF
    red = (packed & 0x00FF0000) >> 16
    green = (packed & 0xFF00) >> 8
    blue = packed & 0xFF
    return Color(red / 255.0, green / 255.0, blue / 255.0, 1.0)


def parse_style(style_map: Any) -> Style:
    """Build a style from an ``hl_attr_define`` attribute map."""
    style = Style(Colors())
    for raw_name, value in _map(style_map):
        name = _text(raw_name)
        if name is None:
            _log.debug("Invalid attribute format")
            continue
        if name in ("foreground", "background", "special") and _is_int(value):
            setattr(style.colors, name, unpack_color(_u64(value)))
        elif name in _STYLE_FLAGS and isinstance(value, bool):
            setattr(style, name, value)
        elif name == "blend" and _is_int(value):
            style.blend = _u64(value) & 0xFF
        elif name in _UNDERLINES and value is True:
            style.underline = _UNDERLINES[name]
        else:
            _log.debug("Ignored style attribute: %s", name)
    return style


def _parse_set_title(args: list[Any]) -> RedrawEvent:
    (title,) = _extract(args, 1)
    return SetTitle(title=_string(title))


def _parse_mode_info_set(args: list[Any]) -> RedrawEvent:
    _cursor_style_enabled, mode_info = _extract(args, 2)
    cursor_modes = []
    for info in _array(mode_info):
        mode = CursorMode()
        for name, value in _map(info):
            key = _string(name)
            if key == "cursor_shape":
                mode.shape = CursorShape.from_type_name(_string(value))
            elif key == "cell_percentage":
                mode.cell_percentage = _u64(value) / 100.0
            elif key == "blinkwait":
                mode.blinkwait = _u64(value)
            elif key == "blinkon":
                mode.blinkon = _u64(value)
            elif key == "blinkoff":
                mode.blinkoff = _u64(value)
            elif key == "attr_id":
                mode.style_id = _u64(value)
        cursor_modes.append(mode)
    return ModeInfoSet(cursor_modes=cursor_modes)


_OPTION_PARSERS: dict[str, Callable[[Any], Any]] = {
    "arabicshape": _bool,
    "ambiwidth": _string,
    "emoji": _bool,
    "guifont": _string,
    "guifontset": _string,
    "guifontwide": _string,
    "linespace": _i64,
    "pumblend": _u64,
    "showtabline": _u64,
    "termguicolors": _bool,
}


def _parse_option_set(args: list[Any]) -> RedrawEvent:
    raw_name, value = _extract(args, 2)
    name = _string(raw_name)
    parse = _OPTION_PARSERS.get(name)
    parsed = value if parse is None else parse(value)
    return OptionSet(gui_option=GuiOption(name, parsed))


def _parse_mode_change(args: list[Any]) -> RedrawEvent:
    mode, mode_index = _extract(args, 2)
    mode_name = _string(mode)
    return ModeChange(mode=EditorMode(mode_name), mode_index=_u64(mode_index))


def _parse_grid_resize(args: list[Any]) -> RedrawEvent:
    grid, width, height = _extract(args, 3)
    return Resize(grid=_u64(grid), width=_u64(width), height=_u64(height))


def _parse_default_colors(args: list[Any]) -> RedrawEvent:
    foreground, background, special, _term_fg, _term_bg = _extract(args, 5)
    return DefaultColorsSet(
        colors=Colors(
            foreground=unpack_color(_u64(foreground)),
            background=unpack_color(_u64(background)),
            special=unpack_color(_u64(special)),
        )
    )


def _parse_hl_attr_define(args: list[Any]) -> RedrawEvent:
    style_id, attributes, _terminal_attributes, _info = _extract(args, 4)
    style = parse_style(attributes)
    return HighlightAttributesDefine(id=_u64(style_id), style=style)


def _parse_grid_line_cell(value: Any) -> GridLineCell:
    contents = _array(value)
    if not contents:
        raise ParseError("event", contents)
    highlight_id = _u64(contents[1]) if len(contents) > 1 else None
    repeat = _u64(contents[2]) if len(contents) > 2 else None
    return GridLineCell(text=_string(contents[0]), highlight_id=highlight_id, repeat=repeat)


def _parse_grid_line(args: list[Any]) -> RedrawEvent:
    grid, row, column_start, cells = _extract(args, 4)
    return GridLine(
        grid=_u64(grid),
        row=_u64(row),
        column_start=_u64(column_start),
        cells=[_parse_grid_line_cell(cell) for cell in _array(cells)],
    )


def _parse_grid_clear(args: list[Any]) -> RedrawEvent:
    (grid,) = _extract(args, 1)
    return Clear(grid=_u64(grid))


def _parse_grid_destroy(args: list[Any]) -> RedrawEvent:
    (grid,) = _extract(args, 1)
    return Destroy(grid=_u64(grid))


def _non_negative(value: int, field_name: str) -> int:
    if value < 0:
        _log.warning("Negative cursor %s received from Neovim %d", field_name, value)
        return 0
    return value


def _parse_grid_cursor_goto(args: list[Any]) -> RedrawEvent:
    grid, row, column = _extract(args, 3)
    grid_id = _u64(grid)
    return CursorGoto(
        grid=grid_id,
        row=_non_negative(_i64(row), "row"),
        column=_non_negative(_i64(column), "column"),
    )


def _parse_grid_scroll(args: list[Any]) -> RedrawEvent:
    grid, top, bottom, left, right, rows, columns = _extract(args, 7)
    return Scroll(
        grid=_u64(grid),
        top=_u64(top),
        bottom=_u64(bottom),
        left=_u64(left),
        right=_u64(right),
        rows=_i64(rows),
        columns=_i64(columns),
    )


def _parse_win_pos(args: list[Any]) -> RedrawEvent:
    grid, _window, start_row, start_column, width, height = _extract(args, 6)
    return WindowPosition(
        grid=_u64(grid),
        start_row=_u64(start_row),
        start_column=_u64(start_column),
        width=_u64(width),
        height=_u64(height),
    )


def _parse_window_anchor(value: Any) -> WindowAnchor:
    text = _string(value)
    try:
        return WindowAnchor(text)
    except ValueError:
        raise ParseError("window anchor", text) from None


def _parse_win_float_pos(args: list[Any]) -> RedrawEvent:
    required, (sort_order,) = _extract_optional(args, 7, 1)
    grid, _window, anchor, anchor_grid, anchor_row, anchor_column, focusable = required
    return WindowFloatPosition(
        grid=_u64(grid),
        anchor=_parse_window_anchor(anchor),
        anchor_grid=_u64(anchor_grid),
        anchor_row=_f64(anchor_row),
        anchor_column=_f64(anchor_column),
        focusable=_bool(focusable),
        sort_order=_optional(sort_order, _u64),
    )


def _parse_win_external_pos(args: list[Any]) -> RedrawEvent:
    grid, _window = _extract(args, 2)
    return WindowExternalPosition(grid=_u64(grid))


def _parse_win_hide(args: list[Any]) -> RedrawEvent:
    (grid,) = _extract(args, 1)
    return WindowHide(grid=_u64(grid))


def _parse_win_close(args: list[Any]) -> RedrawEvent:
    (grid,) = _extract(args, 1)
    return WindowClose(grid=_u64(grid))


def _parse_msg_set_pos(args: list[Any]) -> RedrawEvent:
    grid, row, scrolled, separator_character = _extract(args, 4)
    return MessageSetPosition(
        grid=_u64(grid),
        row=_u64(row),
        scrolled=_bool(scrolled),
        separator_character=_string(separator_character),
    )


def _parse_win_viewport(args: list[Any]) -> RedrawEvent:
    required, (line_count, scroll_delta) = _extract_optional(args, 6, 2)
    grid, _window, top_line, bottom_line, current_line, current_column = required
    return WindowViewport(
        grid=_u64(grid),
        top_line=_f64(top_line),
        bottom_line=_f64(bottom_line),
        current_line=_f64(current_line),
        current_column=_f64(current_column),
        line_count=_optional(line_count, _f64),
        scroll_delta=_optional(scroll_delta, _f64),
    )


def _parse_styled_content(line: Any) -> StyledContent:
    content = []
    for chunk in _array(line):
        style_id, text = _extract(_array(chunk), 2)
        content.append((_u64(style_id), _string(text)))
    return content


def _parse_cmdline_show(args: list[Any]) -> RedrawEvent:
    content, position, first_character, prompt, indent, level = _extract(args, 6)
    return CommandLineShow(
        content=_parse_styled_content(content),
        position=_u64(position),
        first_character=_string(first_character),
        prompt=_string(prompt),
        indent=_u64(indent),
        level=_u64(level),
    )


def _parse_cmdline_pos(args: list[Any]) -> RedrawEvent:
    position, level = _extract(args, 2)
    return CommandLinePosition(position=_u64(position), level=_u64(level))


def _parse_cmdline_special_char(args: list[Any]) -> RedrawEvent:
    character, shift, level = _extract(args, 3)
    return CommandLineSpecialCharacter(
        character=_string(character), shift=_bool(shift), level=_u64(level)
    )


def _parse_cmdline_block_show(args: list[Any]) -> RedrawEvent:
    (lines,) = _extract(args, 1)
    return CommandLineBlockShow(lines=[_parse_styled_content(line) for line in _array(lines)])


def _parse_cmdline_block_append(args: list[Any]) -> RedrawEvent:
    (line,) = _extract(args, 1)
    return CommandLineBlockAppend(line=_parse_styled_content(line))


def _parse_msg_show(args: list[Any]) -> RedrawEvent:
    kind, content, replace_last = _extract(args, 3)
    return MessageShow(
        kind=MessageKind.parse(_string(kind)),
        content=_parse_styled_content(content),
        replace_last=_bool(replace_last),
    )


def _parse_msg_showmode(args: list[Any]) -> RedrawEvent:
    (content,) = _extract(args, 1)
    return MessageShowMode(content=_parse_styled_content(content))


def _parse_msg_showcmd(args: list[Any]) -> RedrawEvent:
    (content,) = _extract(args, 1)
    return MessageShowCommand(content=_parse_styled_content(content))


def _parse_msg_ruler(args: list[Any]) -> RedrawEvent:
    (content,) = _extract(args, 1)
    return MessageRuler(content=_parse_styled_content(content))


def _parse_msg_history_entry(entry: Any) -> tuple[MessageKind, StyledContent]:
    kind, content = _extract(_array(entry), 2)
    return (MessageKind.parse(_string(kind)), _parse_styled_content(content))


def _parse_msg_history_show(args: list[Any]) -> RedrawEvent:
    (entries,) = _extract(args, 1)
    return MessageHistoryShow(
        entries=[_parse_msg_history_entry(entry) for entry in _array(entries)]
    )


def _parse_msg_intro(args: list[Any]) -> RedrawEvent:
    (lines,) = _extract(args, 1)
    return ShowIntro(message=[_string(line) for line in _array(lines)])


_PARSERS: dict[str, Callable[[list[Any]], RedrawEvent]] = {
    "set_title": _parse_set_title,
    "mode_info_set": _parse_mode_info_set,
    "option_set": _parse_option_set,
    "mode_change": _parse_mode_change,
    "mouse_on": lambda _: MouseOn(),
    "mouse_off": lambda _: MouseOff(),
    "busy_start": lambda _: BusyStart(),
    "busy_stop": lambda _: BusyStop(),
    "flush": lambda _: Flush(),
    "grid_resize": _parse_grid_resize,
    "default_colors_set": _parse_default_colors,
    "hl_attr_define": _parse_hl_attr_define,
    "grid_line": _parse_grid_line,
    "grid_clear": _parse_grid_clear,
    "grid_destroy": _parse_grid_destroy,
    "grid_cursor_goto": _parse_grid_cursor_goto,
    "grid_scroll": _parse_grid_scroll,
    "win_pos": _parse_win_pos,
    "win_float_pos": _parse_win_float_pos,
    "win_external_pos": _parse_win_external_pos,
    "win_hide": _parse_win_hide,
    "win_close": _parse_win_close,
    "msg_set_pos": _parse_msg_set_pos,
    "win_viewport": _parse_win_viewport,
    "cmdline_show": _parse_cmdline_show,
    "cmdline_pos": _parse_cmdline_pos,
    "cmdline_special_char": _parse_cmdline_special_char,
    "cmdline_hide": lambda _: CommandLineHide(),
    "cmdline_block_show": _parse_cmdline_block_show,
    "cmdline_block_append": _parse_cmdline_block_append,
    "cmdline_block_hide": lambda _: CommandLineBlockHide(),
    "msg_show": _parse_msg_show,
    "msg_clear": lambda _: MessageClear(),
    "msg_showmode": _parse_msg_showmode,
    "msg_showcmd": _parse_msg_showcmd,
    "msg_ruler": _parse_msg_ruler,
    "msg_history_show": _parse_msg_history_show,
    "msg_intro": _parse_msg_intro,
    "suspend": lambda _: Suspend(),
}


def parse_redraw_event(event_value: Any) -> list[RedrawEvent]:
    """Parse one ``[name, args...]`` batch of a redraw notification.

    Events with unknown names (and ``set_icon``) are skipped.
    """
    contents = _array(event_value)
    if not contents:
        raise ParseError("event", contents)
    event_name = _string(contents[0])
    parser = _PARSERS.get(event_name)

    parsed_events: list[RedrawEvent] = []
    for event in contents[1:]:
        parameters = _array(event)
        if parser is None:
            continue
        try:
            parsed_events.append(parser(parameters))
        except ParseError as error:
            raise ParseError(
                "event", f"for event '{event_name}' - {parameters!r} - {error}"
            ) from error
    return parsed_events