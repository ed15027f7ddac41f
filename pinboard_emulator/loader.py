"""
Pinboard Emulator - Program Loader

Program text, one pinboard position per line:

    # sum two keyed numbers
    [1]            start of pinboard slot 1 (slot 1 is assumed until a header)
    K 0 0
    K 0 1
    R 0 0
    + 0 1
    P
    .              unwired position

'#' starts a comment, blank lines are skipped. All parse errors are
collected with their line numbers and raised together in one LoadError,
unless fail_fast is set.
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .cpu.decoder import Instruction, ParseError, parse_instruction
from .pinboard import DEFAULT_POSITIONS, Pinboard

log = logging.getLogger(__name__)

MAX_SLOT = 8
UNWIRED = '.'
_HEADER = re.compile(r'^\[\s*(\S*)\s*\]$')


class LoadError(Exception):
    """Raised when program text cannot be turned into pinboards."""

    def __init__(self, errors: List[Tuple[int, Exception]]):
        self.errors = errors
        lines = [f"Line {num}: {err}" for num, err in errors]
        super().__init__("Program errors:\n" + "\n".join(lines))


def _strip_comment(line: str) -> str:
    return line.split('#', 1)[0].strip()


def load_program(text: str, capacity: int = DEFAULT_POSITIONS,
                 fail_fast: bool = False) -> Dict[int, Pinboard]:
    """Parse program text into {slot: Pinboard}."""
    boards: Dict[int, List[Optional[Instruction]]] = {}
    errors: List[Tuple[int, Exception]] = []
    slot = 1

    def error(line_num: int, err: Exception):
        if fail_fast:
            raise LoadError([(line_num, err)])
        errors.append((line_num, err))

    for line_num, raw in enumerate(text.splitlines(), start=1):
        line = _strip_comment(raw)
        if not line:
            continue

        header = _HEADER.match(line)
        if header:
            token = header.group(1)
            if not token.isdigit() or not 1 <= int(token) <= MAX_SLOT:
                error(line_num, ValueError(f"Pinboard header must be [1]-[{MAX_SLOT}], got {line!r}"))
                continue
            slot = int(token)
            if slot in boards:
                error(line_num, ValueError(f"Pinboard {slot} defined twice"))
            boards[slot] = []
            continue

        positions = boards.setdefault(slot, [])
        if len(positions) >= capacity:
            error(line_num, ValueError(f"Pinboard {slot} is full ({capacity} positions)"))
            continue
        if line == UNWIRED:
            positions.append(None)
            continue
        try:
            positions.append(parse_instruction(line))
        except ParseError as e:
            positions.append(None)
            error(line_num, e)

    if errors:
        raise LoadError(errors)

    result = {s: Pinboard(p, capacity) for s, p in sorted(boards.items())}
    log.debug("Loaded %d pinboard(s): %s", len(result),
              ", ".join(f"{s}:{b.last_position + 1}" for s, b in result.items()))
    return result


def load_file(path: Union[str, Path], capacity: int = DEFAULT_POSITIONS,
              fail_fast: bool = False) -> Dict[int, Pinboard]:
    text = Path(path).read_text(encoding='utf-8')
    return load_program(text, capacity=capacity, fail_fast=fail_fast)
