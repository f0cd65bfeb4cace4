"""
Command line entry point.

    python -m threebody run --preset figure_eight --steps 20000
    python -m threebody serve --port 8000
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from typing import List, Optional

from .config import DEFAULT_REPORT_EVERY, SimulationConfig
from .errors import InvalidConfiguration
from .forces import GravityModel
from .integrators import INTEGRATORS
from .presets import PRESETS, build_preset

logger = logging.getLogger("threebody")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="threebody", description=__doc__.splitlines()[1])
    parser.add_argument(
        "--log-level",
        default=os.getenv("THREEBODY_LOG_LEVEL", "INFO"),
        help="logging level (default: %(default)s)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    run = commands.add_parser("run", help="precompute a preset and report progress")
    run.add_argument("--preset", choices=sorted(PRESETS), default="figure_eight")
    run.add_argument("--steps", type=int)
    run.add_argument("--dt", type=float)
    run.add_argument("--g", type=float, dest="gravitational_constant")
    run.add_argument("--epsilon", type=float)
    run.add_argument("--integrator", choices=sorted(INTEGRATORS))
    run.add_argument("--report-every", type=int, default=DEFAULT_REPORT_EVERY)

    serve = commands.add_parser("serve", help="serve trajectories over HTTP")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser


def _run(args: argparse.Namespace) -> int:
    config = SimulationConfig.from_env(
        steps=args.steps,
        dt=args.dt,
        gravitational_constant=args.gravitational_constant,
        epsilon=args.epsilon,
        integrator=args.integrator,
        report_every=args.report_every,
    )
    initial = build_preset(args.preset, config.gravitational_constant)

    start = time.perf_counter()
    trajectory = config.run(initial)
    elapsed_ms = (time.perf_counter() - start) * 1000.0

    energies = trajectory.energies(GravityModel(config.gravitational_constant, config.epsilon))
    drift = abs(energies[-1] - energies[0]) / abs(energies[0]) if energies[0] else 0.0
    logger.info(
        "%s: %d frames (requested %d) in %.1f ms, relative energy drift %.3e",
        initial.name,
        len(trajectory),
        trajectory.requested_steps + 1,
        elapsed_ms,
        drift,
    )
    return 0


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("threebody.api:app", host=args.host, port=args.port)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        if args.command == "serve":
            return _serve(args)
        return _run(args)
    except InvalidConfiguration as exc:
        logger.error("invalid configuration: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
