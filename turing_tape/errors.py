"""Errors raised while loading or running a Turing machine program.

None of these are recoverable. A malformed program is rejected before any
step runs, and a run stops at the first unmapped transition or when its
step limit is used up.
"""


class TuringMachineError(Exception):
    """Base class for all turing_tape errors."""


class MalformedProgram(TuringMachineError, ValueError):
    """The program text does not follow the expected file layout."""


class MalformedDeltaLine(MalformedProgram):
    """A transition line is not ``state symbol next_state next_symbol direction``."""

    def __init__(self, line, reason, line_number=None):
        self.line = line
        self.reason = reason
        self.line_number = line_number
        where = f"line {line_number}" if line_number is not None else "delta line"
        super().__init__(f"Malformed {where} {line!r}: {reason}")


class UnmappedTransition(TuringMachineError, LookupError):
    """The transition table has no entry for the current (state, symbol) pair."""

    def __init__(self, state, symbol):
        self.state = state
        self.symbol = symbol
        super().__init__(
            f"The machine reached a configuration it was not programmed for: "
            f"no transition for state {state} reading {symbol!r}"
        )


class StepLimitExceeded(TuringMachineError):
    """The machine did not halt within the allowed number of steps."""

    def __init__(self, steps):
        self.steps = steps
        super().__init__(f"Machine did not halt within {steps:,} steps")
