"""
Main entry point for reeldraw.

Commands:
    spin        Draw one winner (headless, or in the pygame window with --simulator)
    simulate    Run many draws and print observed vs expected shares
"""

from pathlib import Path
from typing import Optional, Sequence
import argparse
import asyncio
import logging
import sys

from reeldraw.config.prizes import PrizeFileError, load_prizes
from reeldraw.config.settings import Settings, get_settings
from reeldraw.draw.prize import Prize, PrizePool

logger = logging.getLogger(__name__)

DEFAULT_PRIZES: PrizePool = (
    Prize("Grand prize", 1),
    Prize("Gift card", 9),
    Prize("Sticker", 40),
    Prize("Try again", 50),
)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def resolve_prizes(settings: Settings, path: Optional[Path] = None) -> PrizePool:
    """Prizes from ``path``, then ``settings.prizes_file``, then the built-in pool."""
    source = path or settings.prizes_file
    if source is None:
        logger.info("No prize file configured, using built-in prizes")
        return DEFAULT_PRIZES
    return load_prizes(source)


async def run_headless(settings: Settings, prizes: PrizePool, names: Sequence[str]) -> bool:
    """Spin once against an in-memory surface."""
    from reeldraw.session.slot import Slot
    from reeldraw.surface.memory import MemorySurface
    from reeldraw.surface.registry import SurfaceRegistry

    registry = SurfaceRegistry()
    surface = MemorySurface(
        item_height=settings.reel.item_height,
        frame_ms=settings.reel.frame_ms,
    )
    registry.bind(settings.reel_container_selector, surface)

    slot = Slot.from_settings(settings, prizes, registry)
    slot.names = names

    won = await slot.spin()
    if won:
        print(surface.texts[-1])
    return won


async def run_simulator(settings: Settings, prizes: PrizePool, names: Sequence[str]) -> bool:
    """Open the pygame reel window; SPACE spins."""
    from reeldraw.session.slot import Slot
    from reeldraw.simulator.window import ReelWindow
    from reeldraw.surface.registry import SurfaceRegistry

    tasks: set[asyncio.Task] = set()

    def request_spin() -> None:
        if slot.is_spinning:
            logger.info("Spin already running")
            return
        task = asyncio.get_running_loop().create_task(slot.spin())
        tasks.add(task)
        task.add_done_callback(tasks.discard)

    window = ReelWindow(
        config=settings.simulator,
        on_spin_request=request_spin,
        status=lambda: f"State: {slot.state.name}",
        item_height=settings.reel.item_height,
        frame_ms=settings.reel.frame_ms,
    )
    registry = SurfaceRegistry()
    registry.bind(settings.reel_container_selector, window)

    slot = Slot.from_settings(settings, prizes, registry)
    slot.names = names

    await window.run()

    for task in tasks:
        task.cancel()
    if tasks:
        await asyncio.gather(*tasks, return_exceptions=True)
    return True


def run_simulate(prizes: PrizePool, draws: int, seed: Optional[int]) -> None:
    """Print a frequency table for ``draws`` selections."""
    from reeldraw.analysis.frequency import simulate_draws

    report = simulate_draws(prizes, draws=draws, seed=seed)
    width = max([len(prize.name) for prize in prizes] + [5])
    print(f"{'prize':<{width}}  {'count':>8}  {'observed':>8}  {'expected':>8}")
    for name, count, observed, expected in report.rows():
        print(f"{name:<{width}}  {count:>8}  {observed:>8.4f}  {expected:>8.4f}")
    if report.misses:
        print(f"no selection: {report.misses}")
    print(f"max deviation: {report.max_deviation:.4f}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="reeldraw", description="Weighted prize reel")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--prizes", type=Path, help="JSON prize file")

    commands = parser.add_subparsers(dest="command", required=True)

    spin = commands.add_parser("spin", help="Draw one winner")
    spin.add_argument(
        "--name",
        dest="names",
        action="append",
        help="Candidate name (repeatable)",
    )
    spin.add_argument("--simulator", action="store_true", help="Open the pygame reel window")

    simulate = commands.add_parser("simulate", help="Check draw frequencies")
    simulate.add_argument("--draws", type=int, default=100_000)
    simulate.add_argument("--seed", type=int, default=None)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(args.debug or settings.debug)

    try:
        prizes = resolve_prizes(settings, args.prizes)

        if args.command == "simulate":
            run_simulate(prizes, args.draws, args.seed)
            return

        names = args.names or ["Player"]
        if args.simulator or settings.is_simulator:
            logger.info("Running in simulator mode")
            won = asyncio.run(run_simulator(settings, prizes, names))
        else:
            won = asyncio.run(run_headless(settings, prizes, names))

    except PrizeFileError as e:
        logger.error(str(e))
        sys.exit(2)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return

    if not won:
        sys.exit(1)


if __name__ == "__main__":
    main()
