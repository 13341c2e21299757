"""Unbounded single-track tape with a read/write head.

The tape is a doubly linked chain of :class:`Cell` objects. It grows one
blank cell at a time when the head walks off either end, and it drops blank
cells at the ends as soon as the head has left them, so only the visited
extent (plus the blank the head may be standing on) is ever kept alive.

>>> tape = Tape.from_word("ab")
>>> tape.move_head(Direction.R)
>>> tape.write("x")
>>> tape.move_head(Direction.R)
>>> [symbol for symbol, _ in tape]
['a', 'x', 'B']
>>> tape.move_head(Direction.L)
>>> str(tape)
'ax'
"""

import logging
from enum import IntEnum

BLANK = "B"

logger = logging.getLogger(__name__)


class Direction(IntEnum):
    L = -1
    N = 0
    R = 1

    @classmethod
    def parse(cls, token):
        """Parse a direction token, which must be exactly 'L', 'R' or 'N'."""
        if token not in ("L", "R", "N"):
            raise ValueError(f"Invalid direction {token!r}, must be 'L', 'R' or 'N'")
        return cls[token]


class Cell:
    __slots__ = ("symbol", "left", "right")

    def __init__(self, symbol=BLANK):
        self.symbol = symbol
        self.left = None
        self.right = None

    @staticmethod
    def link(left_cell, right_cell):
        """Make ``right_cell`` the right neighbor of ``left_cell`` and vice versa."""
        left_cell.right = right_cell
        right_cell.left = left_cell

    def __repr__(self):
        left = self.left.symbol if self.left is not None else None
        right = self.right.symbol if self.right is not None else None
        return f"Cell({self.symbol!r}, left={left!r}, right={right!r})"


def _check_symbol(symbol):
    if not isinstance(symbol, str) or len(symbol) != 1:
        raise ValueError(f"Tape symbols must be single characters, got {symbol!r}")


class Tape:
    def __init__(self, word=""):
        first = last = None
        for char in word:
            cell = Cell(char)
            if first is None:
                first = cell
            else:
                Cell.link(last, cell)
            last = cell

        if first is None:  # empty word
            first = last = Cell(BLANK)

        self._first = first
        self._last = last
        self._head = first
        # Absolute positions, 0 is the first character of the input word
        self._first_position = 0
        self._last_position = max(len(word) - 1, 0)
        self._position = 0

    @classmethod
    def from_word(cls, word):
        """Build a tape holding ``word`` with the head on its first character.

        An empty word gives a tape made of a single blank cell.
        """
        return cls(word)

    @property
    def first(self):
        return self._first

    @property
    def last(self):
        return self._last

    @property
    def head(self):
        return self._head

    @property
    def position(self):
        """Head position relative to the first character of the input word."""
        return self._position

    @property
    def first_position(self):
        """Position of the leftmost live cell, on the same scale as ``position``."""
        return self._first_position

    def read(self):
        return self._head.symbol

    def write(self, symbol):
        _check_symbol(symbol)
        self._head.symbol = symbol

    def move_head(self, direction):
        """Move the head one cell, growing the tape with a blank where needed.

        Cleanup runs as part of every actual move, so callers never see a
        pruneable blank at either end.
        """
        if direction == Direction.N:
            return

        if direction == Direction.R:
            neighbor = self._head.right
            if neighbor is None:
                neighbor = Cell(BLANK)
                Cell.link(self._head, neighbor)
                self._last = neighbor
                self._last_position += 1
                logger.debug("Extended tape to the right at %d", self._last_position)
        elif direction == Direction.L:
            neighbor = self._head.left
            if neighbor is None:
                neighbor = Cell(BLANK)
                Cell.link(neighbor, self._head)
                self._first = neighbor
                self._first_position -= 1
                logger.debug("Extended tape to the left at %d", self._first_position)
        else:
            raise ValueError(f"Invalid direction: {direction!r}")

        self._head = neighbor
        self._position += direction
        self.cleanup()

    def cleanup(self):
        """Detach blank boundary cells the head is not standing on.

        Afterwards ``first`` is either the head or holds a non-blank symbol,
        and likewise for ``last``. Calling it again without moving changes
        nothing.

        Blank cells are dropped one at a time rather than snapping ``first``
        or ``last`` straight to the head, so a word with a literal ``B`` in
        it keeps the non-blank cells that lie beyond that blank.
        """
        while self._first is not self._head and self._first.symbol == BLANK:
            dropped = self._first
            self._first = dropped.right
            self._first.left = None
            dropped.right = None
            self._first_position += 1
            logger.debug("Dropped blank cell at %d", self._first_position - 1)

        while self._last is not self._head and self._last.symbol == BLANK:
            dropped = self._last
            self._last = dropped.left
            self._last.right = None
            dropped.left = None
            self._last_position -= 1
            logger.debug("Dropped blank cell at %d", self._last_position + 1)

    def __iter__(self):
        """Yield ``(symbol, is_head)`` for each live cell, left to right."""
        cell = self._first
        while cell is not None:
            yield cell.symbol, cell is self._head
            if cell is self._last:
                break
            cell = cell.right

    def __len__(self):
        return self._last_position - self._first_position + 1

    def __str__(self):
        return "".join(symbol for symbol, _ in self)

    def __repr__(self):
        return f"Tape({str(self)!r}, position={self._position})"

    def count_nonblanks(self):
        """Count the live cells holding something other than a blank"""
        return sum(1 for symbol, _ in self if symbol != BLANK)
