"""Demo script showing the single-step API.

The machine itself has no step limit. This script bounds it from the
outside, taking periodic snapshots, and can be interrupted with Ctrl+C.
"""

from pathlib import Path

from turing_tape import Program, StepResult

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


def main():
    print("Loading the unary adder...")
    machine = Program.from_file(EXAMPLES / "unary_add.tm").machine()
    machine.start("1" * 40 + "0" + "1" * 25)

    step_budget = 1_000
    snapshot_interval = 10
    print(f"Running for at most {step_budget:,} steps with periodic snapshots...")
    print("(Press Ctrl+C to stop early)\n")

    result = StepResult.CONTINUE
    try:
        while result is StepResult.CONTINUE and machine.step_count < step_budget:
            result = machine.step()

            if machine.step_count % snapshot_interval == 0:
                print(f"✓ Step {machine.step_count:,}: "
                      f"Nonblanks={machine.count_nonblanks():,}, "
                      f"Head at {machine.tape.position}")

        print(f"\n✓ Final state at step {machine.step_count:,}:")
        print(f"  - Result: {result.value}")
        print(f"  - Nonblanks: {machine.count_nonblanks():,}")
        print(f"  - Halted: {machine.is_halted()}")
        print(f"  - {machine.configuration()}")

    except KeyboardInterrupt:
        print(f"\n⏹ Interrupted at step {machine.step_count:,}:")
        print(f"  - Nonblanks: {machine.count_nonblanks():,}")


if __name__ == "__main__":
    main()
