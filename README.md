# pcbgcode

Building blocks for turning printed circuit board data into G-code for a CNC
mill. The package provides:

- `pcbgcode.units`: conversion between microns, millimetres, mils, inches and
  internal board units (`convert`, `conv_to_units`, `internal_scalar`), the
  wire-gauge drill tables (`drill_size_inches`, `drill_size_mm`,
  `drill_number`) and tolerance checks (`close`, `close2`, `close3`);
- `pcbgcode.settings`: frozen dataclasses holding the G-code templates
  (`GcodeFormats`), board generation defaults (`PcbDefaults`), output options
  and file-name templates (`GcodeOptions`), machine heights and feeds
  (`MachineSettings`) and user-supplied snippets (`UserGcode`), grouped in
  `Settings`; `release_settings()` and `safe_settings()` give the two stock
  configurations;
- `pcbgcode.gcode_writer`: `GcodeWriter`, which writes moves, drill cycles,
  file headings and user snippets to a text stream and skips moves to the
  position the machine is already at;
- `pcbgcode.drill`: `DrillRack`, `read_rack_file` and `find_rack_file` for
  matching requested hole sizes to the drills in stock;
- `pcbgcode.filename_subs`: `FilenameSubstituter`, which expands
  `$BOARD_PATH`, `$BOARD_NAME`, `$SIDE`, `$FILE`, `$EXT` and similar variables
  in output file names, and `filename_subs_help()`;
- `pcbgcode.nonvolatile`: `NonVolatileStore`, a persistent `name=value` file;
- `pcbgcode.calculator`: `Calculator`, a small calculator with memory and
  degree/radian modes;
- `pcbgcode.common`: the `Units`, `Side` and `Phase` enums, `phase_name`,
  profile handling (`Profile`, `read_profile`, `write_profile`,
  `program_is_setup`) and `find_install_path`;
- `pcbgcode.library`: `to_output_units`, `get_mode`, `scale_x`, `scale_y`,
  `my_strtol`, `file_exists`, `get_os` and the `GcodeError` exception;
- `pcbgcode.strings`, `pcbgcode.stack` and `pcbgcode.fileutil`: string,
  stack and file-copy helpers.

## Installation

```
pip install .
```

Install the test requirements with `pip install ".[test]"`.

## Example

```python
import io

from pcbgcode.common import Side, Units
from pcbgcode.gcode_writer import GcodeWriter
from pcbgcode.settings import safe_settings
from pcbgcode.units import conv_to_units, convert, internal_scalar

settings = safe_settings()
stream = io.StringIO()
writer = GcodeWriter(settings, side=Side.TOP, stream=stream)

writer.begin_gcode()
writer.rxy(0.5, 0.25)
writer.fzr(-0.007, 10.0)
writer.end_gcode()
print(stream.getvalue())

scalar = internal_scalar(6)
hole = conv_to_units("0.8mm", scalar)
print(convert(hole, Units.INTERNALS, Units.INCHES, scalar))
```

Without a stream, `GcodeWriter` writes to an in-memory buffer whose contents
are available as `writer.text`.

### Drill racks

A rack file is tab-separated text whose first non-comment line is a header
naming the columns `tool`, `drill_size`, `minimum` and `maximum`; lines
starting with `#` are skipped. Sizes may carry a unit suffix (`in`, `mm`,
`ml` for mils, `mc` for microns, `#` for wire gauge).

```python
from pcbgcode.drill import read_rack_file

rack = read_rack_file("board.drl")
size = rack.drill_for(hole)
tool = rack.tool_number_for(hole, 1)
print(rack.messages)  # holes that had no matching drill
```

`read_rack_file` raises `GcodeError` when the file defines no drills.

### File names

```python
from pcbgcode.common import Phase, Side
from pcbgcode.filename_subs import FilenameSubstituter

names = FilenameSubstituter(settings.options, board_name="/home/me/boards/timer.brd")
print(names.filename(Side.TOP, Phase.TOP_DRILL))
```

### Persistent values

```python
from pcbgcode.nonvolatile import NonVolatileStore

store = NonVolatileStore("storage.nv")
store.set("last_board", "timer")
print(store.get("last_board", "none"))
```

### Calculator

```python
from pcbgcode.calculator import Calculator, Operation

calc = Calculator()
calc.calc("2", Operation.ENTER)
calc.calc("3", Operation.ADD)
print(calc.result)  # 5.000000
```

## What the package does not do

It has no command-line program and no dialogs. It does not read board design
files or compute isolation outlines itself: callers supply coordinates, hole
sizes and board names, and the package turns them into G-code text, file
names and drill choices.

## Running the tests

```
pytest
```