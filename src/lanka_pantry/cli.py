"""
Lanka Pantry - Command Line Interface
=====================================

Usage:
    lanka-pantry budget --district Colombo --family-size 4 --income 100000
    lanka-pantry report --district Kandy --family-size 3 --income 85000 --month 6
    lanka-pantry predict --snapshot household.json --export
    lanka-pantry districts
    lanka-pantry inflation --item rice_samba --months 6
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from . import __version__
from .config import Config, DEFAULT_CONFIG
from .exceptions import PantryError
from .services.analytics_engine import BudgetAnalyticsEngine
from .services.data_loader import ReferenceDataLoader
from .services.need_projector import PredictionPipeline, shopping_list
from .services.output_generator import OutputGenerator
from .services.prediction_engine import PredictionEngine
from .utils.logger import get_logger, set_package_level

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='lanka-pantry',
        description='Pantry predictions and food budgets for Sri Lankan households',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--config', type=str, default=None, help='JSON file with config overrides')
    parser.add_argument('--output-dir', type=str, default=None, help='Directory for exported files')
    parser.add_argument(
        '--log-level', type=str, default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: from config)',
    )
    parser.add_argument('--catalog', type=str, default=None, help='Catalog CSV or JSON replacing the built-in one')
    parser.add_argument('--budget-data', type=str, default=None, help='Economic dataset JSON replacing the built-in one')

    sub = parser.add_subparsers(dest='command')

    for name, help_text in (('budget', 'Monthly food budget'), ('report', 'Budget plus forecasts and advice')):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument('--district', required=True)
        cmd.add_argument('--family-size', type=int, required=True)
        cmd.add_argument('--income', type=float, required=True, help='Monthly household income (Rs.)')
        cmd.add_argument('--diet', default='mixed', help='Diet key (default: mixed)')
        cmd.add_argument('--json', action='store_true', help='Print JSON instead of a summary')
        cmd.add_argument('--export', action='store_true', help='Write CSV/JSON files to the output directory')
        if name == 'report':
            cmd.add_argument('--month', type=int, default=None, help='Current month 1-12 (default: today)')

    predict = sub.add_parser('predict', help='Monthly needs and shopping list for a household snapshot')
    predict.add_argument('--snapshot', required=True, help='Household snapshot JSON')
    predict.add_argument('--json', action='store_true', help='Print JSON instead of a summary')
    predict.add_argument('--export', action='store_true', help='Write CSV/JSON files to the output directory')

    sub.add_parser('districts', help='List known districts')

    inflation = sub.add_parser('inflation', help='Compound price inflation projection')
    inflation.add_argument('--item', default=None, help='Named item, e.g. rice_samba, chicken, fish')
    inflation.add_argument('--months', type=int, default=None)
    inflation.add_argument('--price', type=float, default=None, help='Starting price (overrides --item)')
    inflation.add_argument('--json', action='store_true', help='Print JSON instead of a table')

    return parser


def _load_config(args: argparse.Namespace) -> Config:
    if args.log_level:
        set_package_level(getattr(logging, args.log_level))
    config = Config.from_json(args.config) if args.config else DEFAULT_CONFIG
    level_name = (args.log_level or config.logging.level).upper()
    set_package_level(getattr(logging, level_name, logging.INFO), config.logging.log_file)
    return config


def _print_json(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, default=str, ensure_ascii=False))


def _print_budget(report) -> None:
    print("=" * 60)
    print(f"MONTHLY FOOD BUDGET - {report.district} ({report.sector})")
    print("=" * 60)
    print(f"Family size: {report.family_size}   Diet: {report.diet_type}")
    print(f"Income quintile: {report.quintile} (Q{report.quintile_number})")
    print()
    for category, total in report.category_totals().items():
        print(f"  {category:<18} Rs. {total:>10,}")
    print("-" * 60)
    print(f"  {'Food only':<18} Rs. {report.totals.food_only:>10,}")
    print(f"  {'With utilities':<18} Rs. {report.totals.with_utilities:>10,}")
    print(f"  {'Per person':<18} Rs. {report.totals.per_capita:>10,}")
    print(f"  Share of income: {report.totals.percentage_of_income}%")
    print()
    print(f"[{report.recommendation.status.upper()}] {report.recommendation.message}")
    for suggestion in report.recommendation.suggestions:
        print(f"  - {suggestion}")


def _cmd_budget(args, engine: BudgetAnalyticsEngine, exporter_factory) -> None:
    report = engine.calculator.calculate_monthly_budget(args.family_size, args.district, args.income, args.diet)
    if args.json:
        _print_json(report.to_dict())
    else:
        _print_budget(report)
    if args.export:
        exported = exporter_factory().export_budget_report(report)
        print(f"\nExported: {', '.join(exported.values())}")


def _cmd_report(args, engine: BudgetAnalyticsEngine, exporter_factory) -> None:
    report = engine.generate_complete_report(args.family_size, args.district, args.income, args.diet, args.month)
    if args.json:
        _print_json(report.to_dict())
    else:
        _print_budget(report.budget)
        print()
        outlook = report.seasonal_savings
        print(f"{outlook.month_name}: vegetables {outlook.vegetables_change:+g}% ({outlook.vegetables_advice}), "
              f"fish {outlook.fish_change:+g}% ({outlook.fish_advice})")
        for prediction in report.predictions:
            print(f"  {prediction.month_name:<10} Rs. {prediction.predicted_expense:>10,} ({prediction.change_percent:+g}%)")
        sufficiency = report.sufficiency
        print(f"\nSufficiency: {sufficiency.status} ({sufficiency.current_percentage}% of income)")
        for suggestion in sufficiency.suggestions:
            print(f"  - {suggestion.text} [{suggestion.estimated_savings}]")
    if args.export:
        exported = exporter_factory().export_complete_report(report)
        print(f"\nExported: {', '.join(exported.values())}")


def _cmd_predict(args, loader: ReferenceDataLoader, reference, config: Config, exporter_factory) -> None:
    snapshot = loader.load_snapshot(args.snapshot)
    summary = PredictionPipeline(config).run(
        reference.catalog,
        snapshot.inventory,
        snapshot.history,
        snapshot.family,
        manual_targets=snapshot.manual_targets,
        as_of=snapshot.as_of,
        allowed_items=snapshot.allowed_items,
    )
    if args.json:
        _print_json(summary.to_dict())
    else:
        to_buy = shopping_list(summary)
        print("=" * 60)
        print(f"SHOPPING LIST - {len(to_buy)} of {len(summary.records)} items")
        print("=" * 60)
        for record in to_buy:
            print(f"  {record.item_name:<28} {record.shortfall_quantity:>8g} {record.unit:<4} Rs. {record.shortfall_value:>10,.2f}")
        print("-" * 60)
        print(f"Monthly need: Rs. {summary.total_monthly_need_value:,.2f}")
        print(f"Daily usage:  Rs. {summary.total_daily_usage_value:,.2f}")
    if args.export:
        exported = exporter_factory().export_predictions(summary)
        print(f"\nExported: {', '.join(exported.values())}")


def _cmd_inflation(args, engine: PredictionEngine) -> None:
    projection = engine.predict_price_inflation(args.item, args.months, args.price)
    if args.json:
        _print_json(projection.to_dict())
        return
    print(f"{projection.item}: Rs. {projection.current_price:,.2f} today")
    for point in projection.predictions:
        print(f"  +{point.month:<2} months  Rs. {point.price:>8,}  (+{point.increase_percent}%)")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_ERROR

    try:
        config = _load_config(args)
        loader = ReferenceDataLoader()
        reference = loader.load_reference(args.catalog, args.budget_data)
        engine = BudgetAnalyticsEngine(reference, config)

        def exporter_factory() -> OutputGenerator:
            return OutputGenerator(args.output_dir, config)

        if args.command == 'budget':
            _cmd_budget(args, engine, exporter_factory)
        elif args.command == 'report':
            _cmd_report(args, engine, exporter_factory)
        elif args.command == 'predict':
            _cmd_predict(args, loader, reference, config, exporter_factory)
        elif args.command == 'districts':
            for name in engine.get_all_districts():
                print(name)
        elif args.command == 'inflation':
            _cmd_inflation(args, engine.predictor)
    except PantryError as exc:
        logger.error(f"{args.command} failed: {exc}")
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
