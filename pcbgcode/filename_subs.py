"""Variable substitution in output file names."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence

from pcbgcode.common import Phase, Side
from pcbgcode.settings import GcodeOptions
from pcbgcode.strings import key_value_record, remove_last_slash, substitute

_ETCH_PHASES = (
    Phase.TOP_OUT_GEN,
    Phase.TOP_OUT_WRITE,
    Phase.BOTTOM_OUT_GEN,
    Phase.BOTTOM_OUT_WRITE,
)
_DRILL_PHASES = (Phase.TOP_DRILL, Phase.BOTTOM_DRILL)

_HELP_VARIABLES = (
    ("$PROJECT_PATH[n]", "Project directories from the Control Panel, counted from zero."),
    ("$ULP_PATH[n]", "User Language Program directories, counted the same way."),
    ("$CAM_PATH[n]", "CAM job directories, counted the same way."),
    ("$BOARD_PATH", "Directory that holds the board file."),
    ("$BOARD_NAME", "Board file name without its .brd extension."),
    ("$BOARD_FILE_PATH", "Directory and board file name without the .brd extension."),
    ("$SIDE", "Side being written: 'top' or 'bot' unless changed."),
    ("$FILE", "Kind of file being written: 'etch', 'drill', 'mill' or 'text' unless changed."),
    ("$EXT", "Extension chosen on the GCode Options tab."),
)

_HELP_BOARD = "/home/user/boards/timer.brd"
_HELP_BASE = "$BOARD_PATH/$BOARD_NAME"
_HELP_EXAMPLES = (
    ("Etching", ".$SIDE.$FILE.$EXT", "/home/user/boards/timer.top.etch.tap"),
    ("Drill", ".$SIDE.$FILE.$EXT", "/home/user/boards/timer.top.drill.tap"),
    (
        "Mill",
        "/jobs/$BOARD_NAME.$SIDE.$FILE.tap",
        "/home/user/boards/timer/jobs/timer.top.mill.tap",
    ),
    ("Text", ".$SIDE.$FILE.nc", "/home/user/boards/timer.top.text.nc"),
)


def _board_dir(board_name: str) -> str:
    return remove_last_slash(board_name.rpartition("/")[0] + "/") if "/" in board_name else ""


def _html_table(rows: Iterable[tuple[str, str]]) -> str:
    cells = "".join(f"<tr><td>{left}</td><td>{right}</td></tr>" for left, right in rows)
    return f"<table>{cells}</table>"


class FilenameSubstituter:
    """Expands ``$BOARD_PATH``, ``$SIDE``, ``$FILE`` and friends in file names."""

    def __init__(
        self,
        options: GcodeOptions,
        board_name: str,
        install_path: str = "",
        project_paths: Sequence[str] = (),
        ulp_paths: Sequence[str] = (),
        cam_paths: Sequence[str] = (),
    ) -> None:
        self.options = options
        self.board_name = board_name
        self.install_path = install_path
        self.project_paths = list(project_paths)
        self.ulp_paths = list(ulp_paths)
        self.cam_paths = list(cam_paths)

    def _file_kind(self, phase: int) -> str:
        opts = self.options
        if phase in _ETCH_PHASES:
            return opts.etch_file_name
        if phase in _DRILL_PHASES:
            return opts.drill_file_name
        if phase == Phase.MILL:
            return opts.mill_file_name
        if phase == Phase.TEXT:
            return opts.text_file_name
        return "invalid"

    def _path_records(self) -> Iterable[str]:
        for i, project in enumerate(self.project_paths):
            if not project:
                return
            ulp = self.ulp_paths[i] if i < len(self.ulp_paths) else ""
            cam = self.cam_paths[i] if i < len(self.cam_paths) else ""
            for name, path in (("PROJECT_PATH", project), ("ULP_PATH", ulp), ("CAM_PATH", cam)):
                yield key_value_record(f"${name}[{i}]", remove_last_slash(path))

    def substitutions(self, side: int, phase: int) -> str:
        """The replacement table for ``side`` and ``phase``."""
        opts = self.options
        side_name = opts.top_file_name if Side(side) is Side.TOP else opts.bot_file_name
        stem = os.path.splitext(self.board_name)[0]
        fixed = {
            "$PATH": remove_last_slash(self.install_path),
            "$BOARD_PATH": _board_dir(self.board_name),
            "$BOARD_NAME": os.path.splitext(self.board_name.rpartition("/")[2])[0],
            "$BOARD_FILE_PATH": stem,
            "$SIDE": side_name,
            "$FILE": self._file_kind(phase),
            "$EXT": opts.default_extension,
        }
        records = list(self._path_records())
        records.extend(key_value_record(key, value) for key, value in fixed.items())
        return "".join(records)

    def substitute(self, text: str, side: int, phase: int) -> str:
        """Expand the variables in ``text``; raises ValueError for the invalid phase."""
        if phase == Phase.INVALID:
            raise ValueError("cannot substitute file names for the invalid phase")
        return substitute(text, self.substitutions(side, phase))

    def filename(self, side: int, phase: int) -> str:
        """The full output file name for ``side`` and ``phase``."""
        opts = self.options
        if Side(side) is Side.TOP:
            names = {
                Phase.TOP_OUT_GEN: opts.filename_top_etch_file,
                Phase.TOP_OUT_WRITE: opts.filename_top_etch_file,
                Phase.TOP_DRILL: opts.filename_top_drill_file,
                Phase.MILL: opts.filename_top_mill_file,
                Phase.TEXT: opts.filename_top_text_file,
            }
        else:
            names = {
                Phase.BOTTOM_OUT_GEN: opts.filename_bot_etch_file,
                Phase.BOTTOM_OUT_WRITE: opts.filename_bot_etch_file,
                Phase.BOTTOM_DRILL: opts.filename_bot_drill_file,
                Phase.MILL: opts.filename_bot_mill_file,
                Phase.TEXT: opts.filename_bot_text_file,
            }
        name = names.get(phase, "")
        return substitute(opts.filename_base + name, self.substitutions(side, phase))


def filename_subs_help() -> str:
    """HTML help describing the file name variables."""
    patterns = _html_table((f"{label}:", f"<b>{pattern}</b>") for label, pattern, _ in _HELP_EXAMPLES)
    results = _html_table((f"{label}:", f"<b>{result}</b>") for label, _, result in _HELP_EXAMPLES)
    return "".join(
        (
            "<h2>Filename Variables</h2>",
            _html_table(_HELP_VARIABLES),
            "<i>Paths never end with a /.</i><br/>",
            "For example, with the board<br/>",
            f"{_HELP_BOARD}<br/>",
            f"a filename base of <b>{_HELP_BASE}</b><br/>",
            "and these top side patterns",
            patterns,
            "the files written are:<br/>",
            results,
        )
    )