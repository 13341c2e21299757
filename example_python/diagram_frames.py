"""Save a growing space-time diagram of a run as a numbered series of frames.

Each frame shows the run up to a later step, so flipping through them (or
joining them into a movie) shows the tape being written.

Example usage:
    python example_python/diagram_frames.py
"""

import time
from pathlib import Path

from turing_tape import Program, create_frame, space_time_image

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


def create_sequential_subdir(top_dir: Path) -> tuple[Path, int]:
    """Create a new numeric subdirectory under top_dir.

    Finds the highest numbered directory and creates the next one.
    Returns the new path and the number.

    Example:
        If top_dir contains [1, 2, 5], creates directory 6.
    """
    top_dir.mkdir(parents=True, exist_ok=True)

    max_num = 0
    for entry in top_dir.iterdir():
        if entry.is_dir() and entry.name.isdigit():
            max_num = max(max_num, int(entry.name))

    new_dir_num = max_num + 1
    new_dir_path = top_dir / str(new_dir_num)
    new_dir_path.mkdir(parents=True, exist_ok=True)

    return new_dir_path, new_dir_num


def main():
    """Generate diagram frames for a Turing machine run."""
    start_time = time.time()

    program_name = "binary_increment"
    word = "1011011111"
    resolution = (640, 360)
    frame_count = 10
    caption = f"+1 on {word}"

    output_dir, run_id = create_sequential_subdir(Path("output") / program_name)
    print(f"Output directory: {output_dir}")
    print(f"Run ID: {run_id}")

    machine = Program.from_file(EXAMPLES / f"{program_name}.tm").machine()
    configurations = []
    machine.run(word, trace=False, on_configuration=configurations.append)
    print(f"Run halted after {machine.step_count:,} steps")

    frame_steps = sorted({
        round(index * (len(configurations) - 1) / (frame_count - 1))
        for index in range(frame_count)
    })
    print(f"Frame steps: {frame_steps}")

    for frame_index, step_index in enumerate(frame_steps):
        image = space_time_image(configurations[: step_index + 1], cell_size=16)
        frame = create_frame(image, caption, step_index, resolution)

        frame_path = output_dir / f"{program_name}_{run_id}_{frame_index:04d}.png"
        frame.save(frame_path)
        print(f"Frame {frame_index:04d}, Step {step_index:,}")

    elapsed = time.time() - start_time
    print(f"\nCompleted {len(frame_steps)} frames in {elapsed:.1f}s")
    print(f"Output saved to: {output_dir.absolute()}")


if __name__ == "__main__":
    main()
