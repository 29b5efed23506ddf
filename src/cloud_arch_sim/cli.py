"""cli.py

命令行入口
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

import yaml
from pydantic import ValidationError

from .comparator import RANK_KEYS, ScenarioFailedError, rank_results, run_all_scenarios
from .config import ExperimentConfig
from .report import format_finished_table, format_summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cloud-arch-sim",
        description="Compare VM, container and serverless deployments under the same diurnal workload.",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to an experiment YAML config file")
    parser.add_argument("--details", action="store_true", help="Print the finished task table of every scenario")
    parser.add_argument("--rank-by", choices=RANK_KEYS, default=None, help="Also print the scenarios ranked by a metric")
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="WARNING",
        help="Logging level",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = ExperimentConfig.from_yaml(args.config) if args.config else ExperimentConfig()
    except (OSError, yaml.YAMLError, ValidationError) as exc:
        print(f"Invalid experiment config {args.config}: {exc}", file=sys.stderr)
        return 1

    print("=== Cloud Architecture Comparison ===")

    try:
        outcomes = run_all_scenarios(config)
    except ScenarioFailedError as exc:
        print(f"Comparison aborted: scenario {exc.scenario} failed: {exc.cause}", file=sys.stderr)
        return 1

    if args.details:
        for run, _ in outcomes:
            print(f"\nFinished tasks for scenario: {run.profile.name}")
            print(format_finished_table(run.finished_records))

    results = [result for _, result in outcomes]

    print("\n=== Summary ===")
    print(format_summary(results))

    if args.rank_by:
        print(f"\n=== Ranked by {args.rank_by} ===")
        print(format_summary(rank_results(results, args.rank_by)))

    return 0


if __name__ == "__main__":
    sys.exit(main())
