"""Interactive trace display for Jupyter notebooks.

This module steps a machine and redraws its current configuration in place,
instead of printing one line per step, so long runs can be watched (and
interrupted) from a notebook cell.
"""

from typing import Optional
import time

try:
    from IPython.display import Pretty, clear_output, display
except ImportError as e:
    raise ImportError(
        "IPython is required for interactive display. "
        "Install with: pip install turing-tape[notebook]"
    ) from e

from .errors import UnmappedTransition
from .machine import StepResult


class LiveVisualizer:
    """Live-updating configuration display for Turing machines in notebooks.

    The machine is stepped until it halts, reaches ``early_stop`` steps,
    hits an unmapped transition, or the user interrupts with Ctrl+C.

    Example::

        from turing_tape import Program
        from turing_tape.interactive import LiveVisualizer

        machine = Program.from_file("add.tm").machine()
        machine.start("11_111")
        LiveVisualizer().run(machine, early_stop=10_000, caption="Unary adder")
    """

    def __init__(self):
        self._frames_shown = 0

    @property
    def frames_shown(self) -> int:
        return self._frames_shown

    def run(
        self,
        machine,  # started Machine instance
        early_stop: Optional[int] = None,
        update_interval: float = 0.0,  # Min seconds between display updates
        caption: str = "",
        show_stats: bool = True,
    ) -> StepResult:
        """Run the machine with live updates.

        Args:
            machine: Machine that has already been started with ``start(word)``
            early_stop: Optional maximum step count to stop at
            update_interval: Minimum seconds between display updates (0 = every step)
            caption: Optional caption text to display
            show_stats: Whether to show step count statistics

        Returns:
            The last step result, ``StepResult.CONTINUE`` when stopped early

        Raises:
            UnmappedTransition: the machine reached a pair with no transition;
                the configuration that exposed it is displayed first
        """
        last_update = time.time()
        self._update_display(machine, caption, show_stats)

        result = StepResult.HALTED if machine.is_halted() else StepResult.CONTINUE
        try:
            while result is StepResult.CONTINUE:
                if early_stop is not None and machine.step_count >= early_stop:
                    if show_stats:
                        print(f"\n✓ Reached early_stop at step {machine.step_count:,}")
                    break

                result = machine.step()
                if result is StepResult.UNMAPPED:
                    self._update_display(machine, caption, show_stats)
                    raise UnmappedTransition(machine.state, machine.tape.read())

                now = time.time()
                if now - last_update >= update_interval or result is StepResult.HALTED:
                    self._update_display(machine, caption, show_stats)
                    last_update = now

            if result is StepResult.HALTED and show_stats:
                print(f"\n✓ Halted at step {machine.step_count:,}")

        except KeyboardInterrupt:
            # Graceful stop on Ctrl+C - show final configuration
            self._update_display(machine, caption, show_stats)
            if show_stats:
                print(f"\n⏹ Stopped by user at step {machine.step_count:,}")

        return result

    def _update_display(self, machine, caption: str, show_stats: bool) -> None:
        """Update the display with the current configuration."""
        clear_output(wait=True)

        if show_stats:
            status = " [HALTED]" if machine.is_halted() else ""
            nonblanks = machine.count_nonblanks()
            if caption:
                print(f"Step {machine.step_count:,} | Nonblanks: {nonblanks:,} | {caption}{status}")
            else:
                print(f"Step {machine.step_count:,} | Nonblanks: {nonblanks:,}{status}")

        display(Pretty(str(machine.configuration())))
        self._frames_shown += 1


def visualize_live(
    machine,
    early_stop: Optional[int] = None,
    update_interval: float = 0.0,
    caption: str = "",
    show_stats: bool = True,
) -> StepResult:
    """Convenience function for live display.

    Example::

        from turing_tape.interactive import visualize_live

        machine.start("0110")
        visualize_live(machine, early_stop=1_000, caption="Binary increment")
    """
    viz = LiveVisualizer()
    return viz.run(machine, early_stop, update_interval, caption, show_stats)
