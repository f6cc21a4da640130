# neovide

The editor-side core of a graphical front end for Neovim, in plain Python
with no third-party dependencies.

It turns the `redraw` notifications that Neovim sends to an attached UI into
typed events, keeps the character grids, windows, styles and cursor state
those events describe, and batches the resulting draw commands for a
renderer to consume. It also parses the front end's command line and finds
Neovim and builds the argument list that starts it with `--embed`.

## What is inside

| Module | Purpose |
| --- | --- |
| `neovide.dimensions` | `Dimensions`, a `<width>x<height>` size with parsing, clamping and arithmetic |
| `neovide.frame` | `Frame`, the window decoration choice (`full` and `none`; on macOS also `transparent` and `buttonless`) |
| `neovide.cmd_line` | `build_parser`, `parse_command_line`, `handle_command_line_arguments`, `CmdLineSettings`, `GeometryArgs`, `CmdLineError` |
| `neovide.style` | `Color`, `Colors`, `Style`, `UnderlineStyle` |
| `neovide.grid` | `CharacterGrid`, a grid of cells with region scrolling |
| `neovide.cursor` | `Cursor`, `CursorMode`, `CursorShape` |
| `neovide.events` | The `RedrawEvent` classes, `GuiOption`, `WindowAnchor`, `MessageKind`, `EditorMode`, `ParseError` |
| `neovide.redraw_parser` | `parse_redraw_event`, `parse_style`, `unpack_color` |
| `neovide.event_aggregator` | `EventAggregator`, a hub with one queue per event type, and `LoggingSender` |
| `neovide.draw_commands` | Draw command classes and `DrawCommandBatcher` |
| `neovide.window` | `Window`, one Neovim grid and the draw commands it emits |
| `neovide.nvim_command` | `create_nvim_command` and the helpers that locate Neovim |
| `neovide.editor` | `Editor`, which applies redraw events, and `start_editor` |

## Examples

Sizes are given as `<width>x<height>`:

```python
from neovide.dimensions import Dimensions

size = Dimensions.parse("42x24")
print(size)          # 42x24
```

Text in another shape, or a zero width or height, raises `ValueError`.

Command-line arguments are parsed against an explicit environment, so
variables such as `NEOVIDE_FRAME` or `NEOVIM_BIN` can be supplied without
touching `os.environ` (passing `None` reads `os.environ`):

```python
from neovide.cmd_line import handle_command_line_arguments

settings = handle_command_line_arguments(["neovide", "a.txt", "--", "--clean"], {})
print(settings.neovim_args)   # ['-p', 'a.txt', '--clean']
```

Files given on the command line are opened in tabs (`-p`) unless
`--no-tabs` is passed; everything after `--` goes to Neovim untouched.
`parse_command_line` does the same parsing without folding the files into
`neovim_args`. Bad arguments raise `CmdLineError`.

A `redraw` batch from Neovim is a list whose first item is the event name
and whose remaining items are argument lists, one per occurrence:

```python
from neovide.redraw_parser import parse_redraw_event

events = parse_redraw_event(["grid_resize", [1, 80, 24]])
print(events)   # [Resize(grid=1, width=80, height=24)]
```

Malformed input raises `neovide.events.ParseError`; unknown event names and
`set_icon` are skipped.

Feeding events to an `Editor` produces lists of draw commands on the
aggregator it was given:

```python
from neovide.editor import Editor, NeovimRedrawEvent
from neovide.event_aggregator import EventAggregator
from neovide.events import Flush, Resize

hub = EventAggregator()
batches = hub.register_event(list)
editor = Editor(hub)
editor.handle_editor_command(NeovimRedrawEvent(Resize(grid=1, width=80, height=24)))
editor.handle_editor_command(NeovimRedrawEvent(Flush()))
batch = batches.get_nowait()   # window position and cursor update commands
```

Requests for the application window (`TitleChanged`, `SetMouseEnabled`,
`ListAvailableFonts`, `Minimize`) are sent to the same aggregator and can be
received by registering `neovide.editor.WindowCommand`. `start_editor` runs
an editor on a daemon thread that reads `EditorCommand`s from the aggregator.

`create_nvim_command(settings)` returns the argument list for an embedded
Neovim. It takes the binary from `settings.neovim_bin` or searches for
`nvim`, runs it once with `-v` to check that it answers as Neovim, and raises
`NeovimNotFoundError` if it cannot find one.

## What this package does not do

It has no renderer and opens no window: draw commands are only collected
and handed over. It does not start Neovim or speak msgpack-RPC to it; the
caller spawns the process from the returned argument list and decodes the
notifications before passing them to `parse_redraw_event`. There is no
command to run, no clipboard handling and no syncing of `g:neovide_*`
settings.

## Running the tests

The test suite uses pytest and is declared in the `test` extra:

```
pip install -e .[test]
pytest
```