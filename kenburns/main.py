# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import argparse
import logging

from .config import Config
from .media.images import Image
from .media.sources import Location
from .presentation.state import PresentationState
from .presentation.timing import get_us
from .streaming import RendezvousChannel, start_source_worker
from .utils.metrics import FrameCounter


def setup_logging(config, override_level=None):
    """Configure logging based on config settings."""
    # Determine log level from override, config, or default
    log_level_str = override_level.lower() if override_level else config.get("log.level").lower()

    # Map string levels to logging constants
    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "warn": logging.WARNING,  # alias
        "error": logging.ERROR,
        "critical": logging.CRITICAL,
    }

    log_level = level_map.get(log_level_str, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] [%(name)s] %(message)s",  # Level first, then logger name
        handlers=[logging.StreamHandler()],
        force=True,  # Reset any existing configuration
    )


def parse_size(value: str) -> tuple[int, int]:
    """Parse WIDTHxHEIGHT."""
    try:
        w, h = (int(v) for v in value.lower().split("x", 1))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {value!r}")
    if w <= 0 or h <= 0:
        raise argparse.ArgumentTypeError(f"size must be positive, got {value!r}")
    return w, h


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ken Burns slideshow over files, directories, URLs and feeds")
    parser.add_argument("roots", nargs="+", help="Local paths, directories or HTTP(S) URLs (images or RSS/Atom feeds)")
    parser.add_argument("--config", default=None, help="Path to YAML/TOML/JSON config file")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "warn", "error", "critical"],
        type=str.lower,
        help="Set logging level (overrides config file)",
    )
    parser.add_argument("--windowed", action="store_true", help="Open a window instead of going fullscreen")
    parser.add_argument("--size", type=parse_size, default=None, help="Window size as WIDTHxHEIGHT")
    parser.add_argument("--headless", action="store_true", help="Run without a display")
    return parser


def create_renderer(args, config):
    width, height = args.size or (config.get("display.width"), config.get("display.height"))
    if args.headless:
        from .render.headless import HeadlessRenderer

        return HeadlessRenderer(width, height)

    from .render.pygame_renderer import PygameRenderer

    return PygameRenderer(
        width,
        height,
        fullscreen=config.get("display.fullscreen") and not args.windowed,
        title=config.get("display.title"),
    )


def run_presentation(renderer, state: PresentationState, fps: int, frame_counter: FrameCounter | None = None) -> None:
    """Foreground loop: poll input, advance the slots, draw. Never waits on the walker."""
    while renderer.poll_events() and state.update():
        now = get_us()
        renderer.render(state, now)
        if frame_counter is not None:
            frame_counter.tick(now)
        renderer.tick(fps)


def main(argv=None):
    """Main entry point for the slideshow."""
    args = build_parser().parse_args(argv)

    # Load configuration
    config = Config()
    config.load(args.config)

    # Setup logging
    setup_logging(config, override_level=args.log_level)
    logger = logging.getLogger("main")
    logger.debug(f"loaded config: {config.get()}")

    roots = [Location.parse(root) for root in args.roots]
    channel: RendezvousChannel[Image] = RendezvousChannel()
    start_source_worker(roots, channel)

    state = PresentationState(
        channel.try_receive,
        show_duration=config.get("presentation.show_duration_us"),
        transition_duration=config.get("presentation.transition_duration_us"),
        zoom_amount=config.get("presentation.zoom_amount"),
    )
    frame_counter = None
    if config.get("log.frame_counter"):
        frame_counter = FrameCounter(config.get("log.rate_ms") * 1000, get_us())

    renderer = create_renderer(args, config)
    try:
        run_presentation(renderer, state, config.get("display.fps"), frame_counter)
    finally:
        renderer.close()
        logger.info(f"shown {state.created} pictures, {state.rotations} rotations")


def run():
    """Entry point for setuptools console scripts."""
    try:
        main()
    except KeyboardInterrupt:
        logging.getLogger("main").info("Shutting down...")


if __name__ == "__main__":
    run()
