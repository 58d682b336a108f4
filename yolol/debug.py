from __future__ import annotations

from typing import Optional, TextIO, Union

# A path to open, an already open stream, or None for stdout
DebugTarget = Union[str, TextIO, None]


class DebugLog:
    """Verbosity-gated trace output shared by the parser and interpreter.

    Messages at or below `level` are written to `debug_file` when one is
    given, otherwise printed. A path is opened (and closed again by
    `close`); an open stream is written to but left open, so several
    components can trace into one file. Level 0 is silent and opens no
    file.
    """
    def __init__(self, level: int = 0, debug_file: DebugTarget = None):
        self.level = level
        self.owns_fp = False
        self.fp: Optional[TextIO] = None
        if level > 0 and isinstance(debug_file, str):
            self.fp = open(debug_file, 'w', encoding='utf-8')
            self.owns_fp = True
        elif level > 0 and debug_file is not None:
            self.fp = debug_file

    def __call__(self, msg: str, level: int = 1):
        if self.level < level:
            return
        if self.fp:
            self.fp.write(msg + '\n')
            self.fp.flush()
        else:
            print(msg)

    def close(self):
        if self.fp and self.owns_fp:
            self.fp.close()
        self.fp = None
