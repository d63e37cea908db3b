"""Plan a route and drive it in the flat-ground sandbox.

Builds either a circular arc or a straight (optionally ending in a dodge),
wraps it in a FollowRoute behavior and ticks a BehaviorRunner against
GroundSandbox until the route finishes or the time limit is hit.

Usage:
    uv run python scripts/drive_route.py arc --radius 1000 --angle 90 --speed 500
    uv run python scripts/drive_route.py straight --distance 4000 --speed 1400
    uv run python scripts/drive_route.py straight --distance 4000 --no-dodge
"""

from __future__ import annotations

import argparse
import logging
import math
import sys

from dotenv import load_dotenv

load_dotenv()

from arena_pilot.behavior import BehaviorRunner, NullBehavior, Priority  # noqa: E402
from arena_pilot.config import load_settings  # noqa: E402
from arena_pilot.geometry import Vec2  # noqa: E402
from arena_pilot.routing import (  # noqa: E402
    CarState,
    FollowRoute,
    SegmentInfeasible,
    SegmentPlan,
    SimpleArc,
    StraightPlanner,
)
from arena_pilot.sandbox import GroundSandbox  # noqa: E402

# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


def _plan_arc(sandbox: GroundSandbox, args: argparse.Namespace) -> SegmentPlan:
    start = CarState.from_car(sandbox.snapshot().cars[0])
    end_loc = Vec2(args.radius, 0.0).rotate(math.radians(args.angle))
    return SimpleArc.from_state(start, Vec2(), end_loc)


def _plan_straight(sandbox: GroundSandbox, args: argparse.Namespace, tables) -> SegmentPlan:
    start = CarState.from_car(sandbox.snapshot().cars[0])
    planner = StraightPlanner(Vec2(args.distance, 0.0), tables=tables)
    return planner.allow_dodging(not args.no_dodge)(start)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main() -> None:
    ap = argparse.ArgumentParser(description="Drive a planned route in the sandbox")
    sub = ap.add_subparsers(dest="kind", required=True)

    arc = sub.add_parser("arc", help="Counter-clockwise arc around the origin")
    arc.add_argument("--radius", type=float, default=1000.0)
    arc.add_argument("--angle", type=float, default=90.0, help="Sweep in degrees")
    arc.add_argument("--speed", type=float, default=500.0)

    straight = sub.add_parser("straight", help="Straight drive along +x")
    straight.add_argument("--distance", type=float, default=4000.0)
    straight.add_argument("--speed", type=float, default=0.0)
    straight.add_argument("--no-dodge", action="store_true")

    ap.add_argument("--boost", type=float, default=100.0)
    ap.add_argument("--limit", type=float, default=10.0, help="Seconds before giving up")
    args = ap.parse_args()

    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    tables = settings.tables()

    if args.kind == "arc":
        sandbox = GroundSandbox(
            loc=Vec2(args.radius, 0.0),
            yaw=math.pi / 2.0,
            speed=args.speed,
            boost=args.boost,
            tables=tables,
            tick_rate=settings.tick_rate,
        )
    else:
        sandbox = GroundSandbox(
            speed=args.speed, boost=args.boost, tables=tables, tick_rate=settings.tick_rate
        )

    try:
        plan = _plan_arc(sandbox, args) if args.kind == "arc" else _plan_straight(sandbox, args, tables)
    except SegmentInfeasible as exc:
        print(f"× No feasible plan: {exc}")
        sys.exit(1)

    print(f"Plan      : {plan.name}")
    print(f"Predicted : {plan.duration():.3f} s")

    runner = BehaviorRunner(NullBehavior, max_tail_calls=settings.max_tail_calls)
    runner.offer(FollowRoute(plan, Priority.STRIKE))
    result = sandbox.drive(
        runner, args.limit, until=lambda _snap: isinstance(runner.active, NullBehavior)
    )

    end = plan.end().loc.to_2d()
    miss = (sandbox.loc - end).norm()
    status = "✓ finished" if result.stopped_early else "× timed out"
    print(f"{status} after {result.elapsed:.3f} s ({len(result.inputs)} ticks)")
    print(f"End miss  : {miss:.1f} uu, speed {sandbox.speed:.0f} uu/s, boost {sandbox.boost:.1f}")


if __name__ == "__main__":
    main()
