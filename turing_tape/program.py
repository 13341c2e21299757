"""Parser for the plain-text Turing machine program format.

A program file looks like this::

    3
    ab
    abB
    0
    1
    0 a 0 a R
    0 B 1 B N

Line 1 is the size of the tape alphabet, lines 2 and 3 the input and tape
alphabets, line 4 the start state and line 5 the halting state. Every
remaining line is one transition::

    state symbol next_state next_symbol direction

with ``direction`` one of ``L``, ``R`` or ``N``.
"""

import logging
from pathlib import Path
from typing import NamedTuple, Optional, Union

from .errors import MalformedDeltaLine, MalformedProgram
from .machine import Machine
from .tape import Direction

logger = logging.getLogger(__name__)

HEADER_LINES = 5


class Action(NamedTuple):
    next_state: int
    next_symbol: str
    direction: Direction


DeltaTable = dict[tuple[int, str], Action]


def _parse_state(token: str) -> int:
    # int() would also accept "+3", " 3" and "3_000"
    if not token.isascii() or not token.isdigit():
        raise ValueError(f"{token!r} is not an unsigned integer")
    return int(token)


def _parse_symbol(token: str) -> str:
    if len(token) != 1:
        raise ValueError(f"{token!r} is not a single character")
    return token


def parse_delta_line(
    line: str, line_number: Optional[int] = None
) -> tuple[tuple[int, str], Action]:
    """Parse one transition line into its table key and action.

    >>> parse_delta_line("0 a 1 b R")
    ((0, 'a'), Action(next_state=1, next_symbol='b', direction=<Direction.R: 1>))
    """
    tokens = line.split()
    if len(tokens) != 5:
        raise MalformedDeltaLine(
            line, f"expected 5 tokens, found {len(tokens)}", line_number
        )

    state, symbol, next_state, next_symbol, direction = tokens
    try:
        key = (_parse_state(state), _parse_symbol(symbol))
        action = Action(
            _parse_state(next_state),
            _parse_symbol(next_symbol),
            Direction.parse(direction),
        )
    except ValueError as error:
        raise MalformedDeltaLine(line, str(error), line_number) from error

    return key, action


class Program:
    def __init__(
        self,
        start_state: int,
        end_state: int,
        delta: DeltaTable,
        alphabet_size: int = 0,
        input_alphabet: str = "",
        tape_alphabet: str = "",
    ):
        self.start_state = start_state
        self.end_state = end_state
        self.delta = delta
        # Alphabets are informational only, the machine never checks them
        self.alphabet_size = alphabet_size
        self.input_alphabet = input_alphabet
        self.tape_alphabet = tape_alphabet

    @classmethod
    def from_text(cls, program_text: str) -> "Program":
        """Parse a program from its text representation.

        Blank lines and lines starting with ``#`` among the transitions are
        ignored. A transition for a (state, symbol) pair that is already
        mapped is rejected, since the machine must stay deterministic.
        """
        lines = program_text.splitlines()
        if len(lines) < HEADER_LINES:
            raise MalformedProgram(
                f"Program needs {HEADER_LINES} header lines, found {len(lines)}"
            )

        def header_int(index, name):
            try:
                return _parse_state(lines[index].strip())
            except ValueError as error:
                raise MalformedProgram(
                    f"Line {index + 1} ({name}): {error}"
                ) from error

        alphabet_size = header_int(0, "alphabet size")
        start_state = header_int(3, "start state")
        end_state = header_int(4, "halting state")

        delta: DeltaTable = {}
        for line_number, line in enumerate(lines[HEADER_LINES:], start=HEADER_LINES + 1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            key, action = parse_delta_line(line, line_number)
            if key in delta:
                raise MalformedDeltaLine(
                    line,
                    f"state {key[0]} reading {key[1]!r} is already mapped",
                    line_number,
                )
            delta[key] = action

        logger.info(
            "Parsed program with %d transitions, start %d, halt %d",
            len(delta),
            start_state,
            end_state,
        )
        return cls(
            start_state,
            end_state,
            delta,
            alphabet_size=alphabet_size,
            input_alphabet=lines[1].strip(),
            tape_alphabet=lines[2].strip(),
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Program":
        return cls.from_text(Path(path).read_text(encoding="utf-8"))

    def machine(self) -> Machine:
        """Create a fresh machine for one run of this program."""
        return Machine.from_program(self)

    def __repr__(self):
        return (
            f"Program(start_state={self.start_state}, end_state={self.end_state}, "
            f"transitions={len(self.delta)})"
        )
