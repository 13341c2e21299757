"""Turing Tape - deterministic single-tape Turing machine simulator.

Core (always available):
    - Tape: unbounded doubly linked tape that grows on demand and drops
      unused blank cells at its ends
    - Machine: runs a transition table against a tape, one step at a time
      or to the halting state, printing each configuration
    - Program: parser for the plain-text program format

Frame utilities (need Pillow and matplotlib):
    - space_time_image: draw a run as a space-time diagram
    - create_frame: resize a diagram and add a caption

Interactive notebook support:
    - LiveVisualizer: IPython display with live updates
    - visualize_live: Convenience function for quick visualization
"""

from .errors import (
    MalformedDeltaLine,
    MalformedProgram,
    StepLimitExceeded,
    TuringMachineError,
    UnmappedTransition,
)
from .machine import Configuration, Machine, StepResult
from .program import Action, DeltaTable, Program, parse_delta_line
from .tape import BLANK, Cell, Direction, Tape

# Import frame utilities (available when Pillow and matplotlib are installed)
try:
    from .frames import create_frame, resize_image, space_time_image
except ImportError:
    # frames.py requires Pillow and matplotlib
    space_time_image = None
    resize_image = None
    create_frame = None

# Import interactive utilities (notebook support)
try:
    from .interactive import (
        LiveVisualizer,
        visualize_live,
    )
except ImportError:
    # interactive.py requires IPython (notebook extra)
    LiveVisualizer = None
    visualize_live = None

__version__ = "0.1.0"

__all__ = [
    # Core
    "BLANK",
    "Cell",
    "Direction",
    "Tape",
    "Action",
    "DeltaTable",
    "Program",
    "parse_delta_line",
    "Configuration",
    "Machine",
    "StepResult",
    # Errors
    "TuringMachineError",
    "MalformedProgram",
    "MalformedDeltaLine",
    "UnmappedTransition",
    "StepLimitExceeded",
    # Frame utilities
    "space_time_image",
    "resize_image",
    "create_frame",
    # Interactive utilities (if IPython available)
    "LiveVisualizer",
    "visualize_live",
]
