"""Render entry point: run a CFRS program and export the result.

Pipeline:
    1. Validate the job (YAML file and/or CLI arguments → RenderJobV1)
    2. Create the buffer filled with the background colour
    3. Step the executor to completion, sampling a frame on pauses when
       the output is an animation
    4. Write the still image (PNG, JPEG, ...) or the looping GIF
    5. Optionally write a YAML run summary

A program that fails (unmatched ``]``) is reported and nothing is
exported.

Refactored architecture:
    - render_main(job) → dict
        * Callable function (used by tests and library callers)
        * Returns: {output_path, steps, frames, final_position, summary_path}
    - CLI entry point: main(argv) → exit code

CLI:
    cfrs out.png "[[[[[[CFRFRS]]]]]]"
    cfrs --width 64 --height 64 -b white --interval 40 out.gif "[[[[[[[FSR]]]]]]]"
    cfrs --job configs/jobs/spiral.yaml
    cfrs --job configs/jobs/spiral.yaml --width 512 other.gif

Exit codes:
    0  success
    1  program or export failure
    2  invalid job / arguments
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from cfrs.canvas.buffer import PixelBuffer
from cfrs.export.animation import FrameSampler, save_gif_animation
from cfrs.export.image import buffer_to_rgb, save_image
from cfrs.interpreter.errors import EndOfCommands, ExecutionError
from cfrs.interpreter.executor import CommandExecutor
from cfrs.utils import fs, logging_config, validators

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2


def render_main(job: validators.RenderJobV1) -> Dict[str, Any]:
    """Execute *job* and write its output.

    Parameters
    ----------
    job : validators.RenderJobV1
        Validated render job.

    Returns
    -------
    Dict[str, Any]
        Results dict with:
            - output_path: str
            - steps: int (transitions executed)
            - frames: int (animation frames written, 0 for stills)
            - final_position: tuple[int, int]
            - summary_path: Optional[str]

    Raises
    ------
    UnmatchedCloseBracket
        The program is malformed; no file is written.
    RuntimeError
        The output could not be written.
    """
    logger.info(
        "Rendering %dx%d (%s background) to %s",
        job.width, job.height, job.background, job.output,
    )

    buffer = PixelBuffer(job.width, job.height, fill=job.background)
    executor = CommandExecutor(job.commands, buffer)
    sampler = FrameSampler(job.interval_ms) if job.animated else None

    steps = 0
    while True:
        try:
            pause, buf = executor.step()
        except EndOfCommands:
            break
        steps += 1
        if pause and sampler is not None:
            sampler.on_pause(buf)

    logger.info("Executed %d steps, painter at %s", steps, executor.position())

    frame_count = 0
    if sampler is not None:
        frames = sampler.frames
        if not frames:
            logger.warning(
                "No frames sampled (program has too few S pauses for %d ms interval); "
                "writing the final canvas as a single frame",
                job.interval_ms,
            )
            frames = [buffer_to_rgb(buffer)]
        save_gif_animation(frames, job.output, job.interval_ms)
        frame_count = len(frames)
    else:
        save_image(buffer, job.output)

    summary_path = None
    if job.summary is not None:
        fs.atomic_yaml_dump(
            {
                'job': validators.job_to_dict(job),
                'steps': steps,
                'frames': frame_count,
                'final_position': list(executor.position()),
            },
            job.summary,
        )
        summary_path = str(job.summary)
        logger.info("Wrote run summary to %s", summary_path)

    return {
        'output_path': str(job.output),
        'steps': steps,
        'frames': frame_count,
        'final_position': executor.position(),
        'summary_path': summary_path,
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cfrs",
        description="Run a CFRS drawing program and save the canvas as an image or GIF",
    )
    parser.add_argument(
        "output",
        nargs="?",
        help="Output path; .gif writes an animation, anything else a still image",
    )
    parser.add_argument(
        "command",
        nargs="?",
        help="Program text, e.g. '[[[[CFRS]]]]'",
    )
    parser.add_argument("--width", type=int, help="Canvas width in pixels (default 256)")
    parser.add_argument("--height", type=int, help="Canvas height in pixels (default 256)")
    parser.add_argument(
        "-b", "--background",
        help="Background colour name (default black)",
    )
    parser.add_argument(
        "--interval",
        type=int,
        help="Virtual milliseconds between animation frames (default 100)",
    )
    parser.add_argument(
        "--job",
        help=(
            "YAML render job; explicit arguments override its values. "
            "Relative output and summary paths in the job resolve against "
            "the current directory, not the job file's directory"
        ),
    )
    parser.add_argument(
        "--summary",
        help="Write a YAML run summary to this path",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    parser.add_argument("--log-file", help="Also log to this file")
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit JSON log lines",
    )
    return parser


# CLI dest → RenderJobV1 field
_ARG_FIELDS = {
    'output': 'output',
    'command': 'commands',
    'width': 'width',
    'height': 'height',
    'background': 'background',
    'interval': 'interval_ms',
    'summary': 'summary',
}


def job_from_args(args: argparse.Namespace) -> validators.RenderJobV1:
    """Merge the optional job file with explicit CLI arguments.

    Relative paths inside the job file are kept as written, so they resolve
    against the current working directory.

    Raises
    ------
    ConfigError
        If the merged job is invalid.
    FileNotFoundError
        If --job points at a missing file.
    """
    data: Dict[str, Any] = {}
    if args.job:
        data.update(validators.load_job_data(args.job))

    for dest, field in _ARG_FIELDS.items():
        value = getattr(args, dest)
        if value is not None:
            data[field] = value

    return validators.build_job(data)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging_config.setup_logging(
        log_level=args.log_level,
        log_file=args.log_file,
        json=args.log_json,
        quiet_libs=["PIL"],
        context={"app": "cfrs"},
    )
    logging_config.install_excepthook()

    try:
        job = job_from_args(args)
    except (validators.ConfigError, FileNotFoundError) as e:
        logger.error("%s", e)
        return EXIT_CONFIG

    logging_config.push_context(output=job.output.name)
    try:
        result = render_main(job)
    except ExecutionError as e:
        logger.error("Program failed (%s): %s", e.kind.name, e)
        return EXIT_FAILURE
    except RuntimeError as e:
        logger.error("Export failed: %s", e)
        return EXIT_FAILURE
    finally:
        logging_config.pop_context(keys=["output"])

    print(f"Wrote {result['output_path']} ({result['steps']} steps, {result['frames']} frames)")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
