"""Command line entry point: run a program file on a word and print the trace."""

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import load_config, validate_config
from .errors import MalformedProgram, StepLimitExceeded, UnmappedTransition
from .frames import create_frame, space_time_image
from .program import Program

logger = logging.getLogger(__name__)

console = Console(stderr=True, soft_wrap=True)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="turing-tape",
        description="Run a deterministic single-tape Turing machine and print each configuration.",
    )
    parser.add_argument("file", help="program file (.tm)")
    parser.add_argument("word", help="input word; use '' for the empty word")
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument("--max-steps", type=int, help="give up after this many steps")
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="do not print the configurations"
    )
    parser.add_argument("--diagram", help="write a space-time diagram PNG to this path")
    parser.add_argument("--caption", help="caption drawn on the diagram")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="log more (-vv for every step)"
    )
    return parser


def configure_logging(level):
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _error(message):
    console.print(f"[red]Error:[/red] {escape(str(message))}")


def _apply_arguments(config, args):
    if args.max_steps is not None:
        config["max_steps"] = args.max_steps
    if args.quiet:
        config["trace"] = False
    if args.diagram is not None:
        config["diagram"] = args.diagram
    if args.caption is not None:
        config["caption"] = args.caption
    if args.verbose == 1:
        config["log_level"] = "INFO"
    elif args.verbose > 1:
        config["log_level"] = "DEBUG"
    validate_config(config)
    return config


def _write_diagram(configurations, config, steps):
    image = space_time_image(configurations, cell_size=config["cell_size"])
    if config["caption"]:
        image = create_frame(image, config["caption"], steps, image.size)
    image.save(config["diagram"])
    logger.info("Wrote space-time diagram to %s", config["diagram"])


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        config = _apply_arguments(load_config(args.config), args)
    except (OSError, ValueError, TypeError) as error:
        _error(error)
        return 1

    configure_logging(config["log_level"].upper())

    try:
        program = Program.from_file(args.file)
    except MalformedProgram as error:
        _error(error)
        return 1
    except (OSError, UnicodeDecodeError) as error:
        _error(f"Could not read {args.file}: {error}")
        return 1

    machine = program.machine()
    configurations = [] if config["diagram"] else None

    try:
        machine.run(
            args.word,
            max_steps=config["max_steps"],
            trace=config["trace"],
            on_configuration=configurations.append if configurations is not None else None,
        )
    except (UnmappedTransition, StepLimitExceeded, ValueError) as error:
        sys.stdout.flush()
        _error(error)
        return 1

    if configurations is not None:
        try:
            _write_diagram(configurations, config, machine.step_count)
        except (OSError, ValueError) as error:
            _error(f"Could not write diagram: {error}")
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
