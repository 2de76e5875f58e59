"""Entry point for ``python -m formicarium``.

Loads the YAML config (falling back to defaults), builds the simulation
engine and either opens a Pygame window to watch the ants forage or
runs headless until all the food is home.
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys

from formicarium.simulation.config import SimulationConfig
from formicarium.simulation.engine import SimulationEngine
from formicarium.ui.pygame_client import PygameRenderer

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Parse CLI args, create engine, launch renderer or headless run."""
    parser = argparse.ArgumentParser(
        prog="formicarium",
        description="Formicarium - ant colony foraging simulator",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a window until all food is collected",
    )
    parser.add_argument(
        "--max-generations",
        type=int,
        default=150_000,
        help="Generation cap for headless runs (default: 150000)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig.load(args.config)
    engine = SimulationEngine(config=config)

    if args.headless:
        completed = engine.run_until_over(args.max_generations)
        return 0 if completed else 1

    logger.info("Running render loop")
    renderer = PygameRenderer(
        engine=engine,
        cell_size=config.tile_side,
        ticks_per_second=config.fps,
    )
    renderer.run(fps=args.fps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
