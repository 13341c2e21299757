"""Quick demo: run the bundled example programs and print their traces."""

from pathlib import Path

from turing_tape import Program

EXAMPLES = Path(__file__).resolve().parent / "examples"

runs = [
    ("unary_add.tm", "11011"),
    ("binary_increment.tm", "1011"),
    ("binary_increment.tm", "111"),
]

for file_name, word in runs:
    program = Program.from_file(EXAMPLES / file_name)
    print(f"\n{file_name} on {word!r}:")
    machine = program.machine()
    final = machine.run(word)
    print(f"  halted after {machine.step_count} steps with tape {''.join(final.cells)!r}")

print("\n✅ Done!")
