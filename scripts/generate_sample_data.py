#!/usr/bin/env python3
"""Generate a sample debt plan for manual validation.

Creates a handful of synthetic debts for one user, regenerates their
installment schedules against a simulated payment history, projects the
standard vs accelerated payoff and writes everything as JSON files.
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from paydone.config import PaydoneConfig
from paydone.engine.simulator import LoanSimulator
from paydone.logging import setup_logging
from paydone.models.enums import LoanType, PayoffStrategy, ProjectionMode
from paydone.models.simulation import SimulationInput
from paydone.scenarios import DebtPlanScenario
from paydone.sinks import ConsoleSink, JsonFileSink

logger = logging.getLogger("generate_sample_data")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a sample paydone debt plan")
    parser.add_argument("--debts", type=int, default=4, help="Number of debts (default: 4)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: $SEED)")
    parser.add_argument(
        "--income", type=float, default=25_000_000, help="Monthly income (default: 25,000,000)"
    )
    parser.add_argument(
        "--extra", type=float, default=2_000_000, help="Extra monthly payment (default: 2,000,000)"
    )
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in PayoffStrategy],
        default=PayoffStrategy.AVALANCHE.value,
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in ProjectionMode],
        default=ProjectionMode.LUMP_SUM.value,
    )
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        default=None,
        help="Reference day as YYYY-MM-DD (default: today)",
    )
    parser.add_argument("--output-dir", type=Path, default=None, help="Directory for JSON files")
    parser.add_argument("--console", action="store_true", help="Also print records to stdout")
    parser.add_argument(
        "--log-format", choices=["standard", "json"], default="standard", help="Log format"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Generate and export a sample debt plan."""
    args = parse_args(argv)
    config = PaydoneConfig.from_env()
    setup_logging(config.log_level, args.log_format)

    output_dir = args.output_dir or config.output.json_output_dir
    sinks: list = [JsonFileSink(output_dir, pretty=config.output.pretty_json)]
    if args.console:
        sinks.append(ConsoleSink(pretty=True, max_records=5))

    scenario = DebtPlanScenario(
        num_debts=args.debts,
        monthly_income=args.income,
        extra_monthly_payment=args.extra,
        strategy=args.strategy,
        mode=args.mode,
        seed=args.seed,
        today=args.today,
        config=config,
    )
    scenario.generate()
    scenario.export(sinks)

    what_if = LoanSimulator(config.fees).simulate(
        SimulationInput(
            asset_price=500_000_000,
            down_payment_percent=20,
            interest_rate=8.5,
            tenor_years=15,
            loan_type=LoanType.KPR,
        )
    )
    for sink in sinks:
        sink.write_batch("simulation_schedule", what_if.schedule)
        sink.write_batch("simulation_costs", [what_if.upfront_costs])
        sink.close()

    for key, value in scenario.get_summary().items():
        logger.info("%-34s %s", key, value)


if __name__ == "__main__":
    main()
