"""Deterministic single-tape Turing machine."""

import logging
import sys
from dataclasses import dataclass
from enum import Enum

from .errors import StepLimitExceeded, UnmappedTransition
from .tape import BLANK, Direction, Tape

logger = logging.getLogger(__name__)


class StepResult(Enum):
    CONTINUE = "continue"
    HALTED = "halted"
    UNMAPPED = "unmapped"


@dataclass(frozen=True)
class Configuration:
    """Instantaneous description of a machine: state, live tape cells and head.

    >>> str(Configuration(state=0, cells=("a", "b"), head=1))
    '...Ba[0]bB...'
    """

    state: int
    cells: tuple
    head: int
    first_position: int = 0
    step: int = 0

    @property
    def head_position(self):
        return self.first_position + self.head

    def __str__(self):
        # The outer blanks are always printed, even if the boundary cell is blank itself
        parts = ["...", BLANK]
        for index, symbol in enumerate(self.cells):
            if index == self.head:
                parts.append(f"[{self.state}]")
            parts.append(symbol)
        parts.append(BLANK)
        parts.append("...")
        return "".join(parts)


class Machine:
    def __init__(self, start_state, end_state, delta):
        self.state = start_state
        self.end_state = end_state
        self.delta = delta
        self.tape = None
        self.step_count = 0

    @classmethod
    def from_program(cls, program):
        return cls(program.start_state, program.end_state, program.delta)

    def start(self, word):
        """Put ``word`` on a fresh tape. A machine can only be started once."""
        if self.tape is not None:
            raise RuntimeError("Machine has already run; create a new Machine per run")
        self.tape = Tape.from_word(word)
        logger.info("Starting in state %d on %r", self.state, word)

    def _require_tape(self):
        if self.tape is None:
            raise RuntimeError("Machine has not been started; call start(word) first")
        return self.tape

    def is_halted(self):
        return self.state == self.end_state

    def step(self):
        """Apply one transition.

        Returns ``StepResult.UNMAPPED`` without changing anything when the
        current (state, symbol) pair has no transition.
        """
        tape = self._require_tape()
        if self.is_halted():
            return StepResult.HALTED

        symbol = tape.read()
        action = self.delta.get((self.state, symbol))
        if action is None:
            return StepResult.UNMAPPED

        next_state, next_symbol, direction = action
        direction = Direction(direction)
        logger.debug(
            "Step %d: (%d, %r) -> (%d, %r, %s)",
            self.step_count + 1,
            self.state,
            symbol,
            next_state,
            next_symbol,
            direction.name,
        )
        tape.write(next_symbol)
        self.state = next_state
        tape.move_head(direction)
        self.step_count += 1

        return StepResult.HALTED if self.is_halted() else StepResult.CONTINUE

    def configuration(self):
        tape = self._require_tape()
        cells = []
        head = 0
        for index, (symbol, is_head) in enumerate(tape):
            cells.append(symbol)
            if is_head:
                head = index
        return Configuration(
            state=self.state,
            cells=tuple(cells),
            head=head,
            first_position=tape.first_position,
            step=self.step_count,
        )

    def run(self, word, out=None, max_steps=None, trace=True, on_configuration=None):
        """Run on ``word`` until the halting state, writing one line per configuration.

        Raises ``UnmappedTransition`` right after printing the configuration
        that has no transition, and ``StepLimitExceeded`` if ``max_steps`` is
        given and the machine is still running after that many steps.
        ``on_configuration`` is called with every configuration that is
        printed (or would be, when ``trace`` is off).
        Returns the halting configuration.
        """
        if out is None:
            out = sys.stdout

        def emit(configuration):
            if trace:
                print(configuration, file=out)
            if on_configuration is not None:
                on_configuration(configuration)

        self.start(word)

        while not self.is_halted():
            emit(self.configuration())
            if max_steps is not None and self.step_count >= max_steps:
                raise StepLimitExceeded(max_steps)
            if self.step() is StepResult.UNMAPPED:
                raise UnmappedTransition(self.state, self.tape.read())

        final = self.configuration()
        emit(final)
        logger.info("Halted in state %d after %d steps", self.state, self.step_count)
        return final

    def __iter__(self):
        return self

    def __next__(self):
        if self.is_halted():
            raise StopIteration
        if self.step() is StepResult.UNMAPPED:
            raise UnmappedTransition(self.state, self.tape.read())
        return self.configuration()

    def count_nonblanks(self):
        """Count the non-blank cells on the tape"""
        return self._require_tape().count_nonblanks()
