#!/usr/bin/env python
"""
Command-line interface for the occupancy and goal engine

Usage:
    python cli.py area --input scene.json
    python cli.py occupancy --input scene.json --output occupancy.json
    python cli.py goals --input scene.json
    python cli.py metrics --input scene.json
"""

import os
import sys
import json
import argparse

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from loguru import logger
from pydantic import ValidationError

from plantwin import PlanningEngine
from plantwin.scene import load_scene, save_result, to_jsonable


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def _load(args):
    """Load the scene and build an engine for it, or None after logging why not"""
    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return None, None

    try:
        scene = load_scene(args.input)
        engine = PlanningEngine(scene.category_catalog(), scene.goal_catalog())
    except (ValidationError, ValueError) as e:
        logger.error(f"Invalid scene {args.input}: {e}")
        return None, None

    return scene, engine


def _emit(result, args):
    if args.output:
        save_result(result, args.output)
    else:
        print(json.dumps(to_jsonable(result), indent=2, ensure_ascii=False))


def cmd_area(args):
    """Area and volume of the boundary and every region"""
    setup_logging(args.verbose)
    scene, engine = _load(args)
    if scene is None:
        return 1

    result = {"boundary": engine.compute_area_volume(scene.boundary)}
    result["regions"] = [
        {"id": region.id, "category": region.category, **engine.compute_area_volume(region).model_dump()}
        for region in scene.candidates
    ]
    _emit(result, args)
    return 0


def cmd_occupancy(args):
    """Occupied area per category within the boundary"""
    setup_logging(args.verbose)
    scene, engine = _load(args)
    if scene is None:
        return 1

    breakdown = engine.compute_occupancy(scene.boundary, scene.candidates, max_workers=args.workers)

    logger.info(f"✓ Boundary area: {breakdown.boundary_area:.1f} m²")
    logger.info(f"  Occupied: {breakdown.occupied_area:.1f} m² ({breakdown.occupied_percent:.1f}%)")
    for category_id, entry in breakdown.per_category.items():
        logger.info(f"  {category_id}: {entry.area:.1f} m² ({entry.percent:.1f}%), headcount {entry.headcount:.1f}")

    _emit(breakdown, args)
    return 0


def cmd_goals(args):
    """Check the scene's goals (or the standard goals)"""
    setup_logging(args.verbose)
    scene, engine = _load(args)
    if scene is None:
        return 1

    results = engine.check_goals(scene.boundary, scene.candidates, max_workers=args.workers)

    for result in results:
        mark = "✓" if result.achieved else "✗"
        logger.info(
            f"  {mark} {result.description or result.goal_id}: "
            f"{result.current_value:.1f} ({result.comparison} {result.target_value:.1f})"
        )

    _emit(results, args)
    if args.strict and not all(r.achieved for r in results):
        return 2
    return 0


def cmd_metrics(args):
    """Cost, income, headcount and livability per region"""
    setup_logging(args.verbose)
    scene, engine = _load(args)
    if scene is None:
        return 1

    rows = []
    totals = {"cost": 0.0, "income": 0.0, "headcount": 0.0}
    for i, region in enumerate(scene.candidates, 1):
        metrics = engine.region_metrics(region)
        rows.append({"id": region.id or f"region_{i:03d}", "category": region.category, **metrics.model_dump()})
        for key in totals:
            totals[key] += getattr(metrics, key)

    logger.info(
        f"Totals: cost €{totals['cost']:,.2f}, income €{totals['income']:,.2f}, "
        f"headcount {totals['headcount']:.1f}"
    )
    _emit({"regions": rows, "totals": totals}, args)
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Land-use occupancy and planning goal checks for a drawn scene",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli.py occupancy --input scene.json
  python cli.py goals --input scene.json --strict
  python cli.py metrics --input scene.json --output metrics.json
        """
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    def add_common(sub):
        sub.add_argument("--input", "-i", required=True, help="Scene JSON file")
        sub.add_argument("--output", "-o", help="Output JSON file (prints to stdout if not specified)")

    area_parser = subparsers.add_parser("area", help="Area and volume of each region")
    add_common(area_parser)

    occ_parser = subparsers.add_parser("occupancy", help="Occupancy breakdown per category")
    add_common(occ_parser)
    occ_parser.add_argument("--workers", "-w", type=int, default=None, help="Worker threads for aggregation")

    goals_parser = subparsers.add_parser("goals", help="Check planning goals")
    add_common(goals_parser)
    goals_parser.add_argument("--workers", "-w", type=int, default=None, help="Worker threads for aggregation")
    goals_parser.add_argument("--strict", action="store_true", help="Exit with code 2 if any goal is not achieved")

    metrics_parser = subparsers.add_parser("metrics", help="Cost, income and headcount per region")
    add_common(metrics_parser)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "area": cmd_area,
        "occupancy": cmd_occupancy,
        "goals": cmd_goals,
        "metrics": cmd_metrics,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
