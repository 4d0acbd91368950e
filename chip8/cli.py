#!/usr/bin/env python3
"""Command-line entry point for the CHIP-8 interpreter."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
import sys
from typing import List, Optional, Tuple

from .config import MachineConfig
from .display.renderers import ImageRenderer, NullRenderer, TerminalRenderer
from .emulator import Chip8Emulator
from .inputs import HeadlessInput, ScriptedInput
from .scheduler import ExitReason, Scheduler

logger = logging.getLogger("chip8")

KEY_HOLD_SECS = 0.1


def _parse_press(raw: str) -> Tuple[float, int]:
    """Parse ``KEY@SECONDS`` (hex key) into ``(seconds, key)``."""
    try:
        key_text, _, at_text = raw.partition("@")
        key = int(key_text, 16)
        at = float(at_text) if at_text else 0.0
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid key press spec: {raw!r}")
    if not 0 <= key <= 0xF:
        raise argparse.ArgumentTypeError(f"Key out of range: {raw!r}")
    return at, key


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CHIP-8 interpreter")
    parser.add_argument("rom", type=Path, help="Raw program image")
    parser.add_argument("--config", type=Path, help="JSON machine configuration")
    parser.add_argument(
        "--headless", action="store_true", help="Run without a window"
    )
    parser.add_argument(
        "--seconds",
        type=float,
        default=None,
        help="Quit after this many seconds (default: 5 when headless)",
    )
    parser.add_argument("--cpu-hz", type=int, help="Instruction rate")
    parser.add_argument("--scale", type=int, help="Window pixel scale")
    parser.add_argument("--seed", type=int, help="Random generator seed")
    parser.add_argument(
        "--terminal", action="store_true", help="Headless: print frames as text"
    )
    parser.add_argument(
        "--save-frame", type=Path, help="Save the final frame as a PNG"
    )
    parser.add_argument(
        "--press",
        type=_parse_press,
        action="append",
        default=[],
        metavar="KEY@SECS",
        help="Headless: press hex KEY at SECS (repeatable)",
    )
    parser.add_argument(
        "--disasm", action="store_true", help="Print a listing and exit"
    )
    parser.add_argument(
        "--trace", action="store_true", help="Log every executed instruction"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase log level"
    )
    parser.add_argument(
        "--shift-uses-vy",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="8xy6/8xyE shift Vy into Vx",
    )
    parser.add_argument(
        "--memory-increments-index",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Fx55/Fx65 advance I",
    )
    parser.add_argument(
        "--wrap-sprites",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Wrap sprites at the right edge instead of clipping",
    )
    parser.add_argument(
        "--logic-resets-flag",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="8xy1/8xy2/8xy3 clear VF",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> MachineConfig:
    config = MachineConfig.load(args.config) if args.config else MachineConfig()
    config = MachineConfig.from_env(config)

    quirk_overrides = {
        name: getattr(args, name)
        for name in (
            "shift_uses_vy",
            "memory_increments_index",
            "wrap_sprites",
            "logic_resets_flag",
        )
        if getattr(args, name) is not None
    }
    overrides = {
        name: getattr(args, name)
        for name in ("cpu_hz", "scale", "seed")
        if getattr(args, name) is not None
    }
    if args.trace:
        overrides["trace"] = True
    return replace(
        config, quirks=replace(config.quirks, **quirk_overrides), **overrides
    )


def _configure_logging(verbosity: int, trace: bool) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2 or trace:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose, args.trace)

    try:
        config = resolve_config(args)
    except (OSError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    emulator = Chip8Emulator(config)
    try:
        emulator.load_rom_file(args.rom)
    except (OSError, ValueError) as exc:
        logger.error("Failed to read file %s: %s", args.rom, exc)
        return 2

    if args.disasm:
        for line in emulator.disassemble_rom():
            print(line)
        return 0

    frontend = None
    image_renderer: Optional[ImageRenderer] = None
    if args.headless:
        seconds = 5.0 if args.seconds is None else args.seconds
        if args.press:
            events = []
            for at, key in args.press:
                events.append((at, key, True))
                events.append((at + KEY_HOLD_SECS, key, False))
            input_source = ScriptedInput(events, seconds=seconds)
        else:
            input_source = HeadlessInput(seconds)
        if args.terminal:
            renderer = TerminalRenderer()
        elif args.save_frame:
            renderer = image_renderer = ImageRenderer()
        else:
            renderer = NullRenderer()
    else:
        from .frontend import PygameFrontend

        frontend = PygameFrontend(scale=config.scale)
        renderer = input_source = frontend

    scheduler = Scheduler(
        engine=emulator,
        renderer=renderer,
        input_source=input_source,
        cpu_hz=config.cpu_hz,
        timer_hz=config.timer_hz,
        render_hz=config.render_hz,
    )
    try:
        summary = scheduler.run()
    finally:
        if frontend is not None:
            frontend.close()

    if args.save_frame:
        if image_renderer is None:
            image_renderer = ImageRenderer()
        if image_renderer.last_image is None:
            image_renderer.present(emulator.framebuffer)
        path = image_renderer.save(args.save_frame)
        logger.info("Saved frame to %s", path)

    logger.info(
        "Executed %d instructions, %d frames in %.2fs",
        summary.instructions,
        summary.frames,
        summary.elapsed,
    )
    return 1 if summary.reason is ExitReason.FAULT else 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
