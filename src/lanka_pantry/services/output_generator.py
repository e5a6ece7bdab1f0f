"""
Output Generator Service
=========================
Exports prediction runs and budget reports to CSV and JSON.

Output Structure:
outputs/
├── predictions/
│   ├── predictions_all_items.csv
│   ├── shopping_list.csv
│   └── prediction_summary.json
├── budgets/
│   ├── budget_line_items.csv
│   └── budget_report.json
└── reports/
    └── complete_report.json
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import pandas as pd

from ..config import Config, DEFAULT_CONFIG
from ..models.budget import BudgetReport
from ..models.predictions import PredictionSummary
from ..utils.logger import get_logger
from .analytics_engine import CompleteReport
from .need_projector import predictions_to_dataframe, shopping_list

logger = get_logger(__name__)

PREDICTIONS_SUBDIR = 'predictions'
BUDGETS_SUBDIR = 'budgets'
REPORTS_SUBDIR = 'reports'


def budget_to_dataframe(report: BudgetReport) -> pd.DataFrame:
    """Flatten a budget report into one row per line item."""
    rows = []
    for category, breakdown in report.breakdown.items():
        for item in breakdown.items:
            row = item.to_dict()
            row['category'] = category
            rows.append(row)

    columns = ['category', 'name', 'quantity', 'unit', 'price', 'cost', 'note']
    return pd.DataFrame(rows, columns=columns)


class OutputGenerator:
    """
    Write results to an output directory.

    Usage
    -----
    >>> generator = OutputGenerator(output_dir="./outputs")
    >>> generator.export_budget_report(report)
    {'budget_json': 'outputs/budgets/budget_report.json', ...}
    """

    def __init__(
        self,
        output_dir: Optional[Union[str, Path]] = None,
        config: Optional[Config] = None
    ):
        self.config = (config or DEFAULT_CONFIG).output
        self.output_dir = Path(output_dir) if output_dir else Path(self.config.output_dir)

        self._create_directories()

        logger.info(f"OutputGenerator initialized: output_dir={self.output_dir}")

    def _create_directories(self) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        for subdir in (PREDICTIONS_SUBDIR, BUDGETS_SUBDIR, REPORTS_SUBDIR):
            (self.output_dir / subdir).mkdir(exist_ok=True)

    def _write_json(self, payload: Dict[str, Any], path: Path) -> str:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=self.config.json_indent, default=str, ensure_ascii=False)
        return str(path)

    def _write_csv(self, df: pd.DataFrame, path: Path) -> str:
        df.to_csv(path, index=False, encoding='utf-8', float_format=self.config.csv_float_format)
        return str(path)

    def export_predictions(self, summary: PredictionSummary) -> Dict[str, str]:
        """
        Export a prediction run.

        Parameters
        ----------
        summary : PredictionSummary
            Output of the prediction pipeline

        Returns
        -------
        Dict[str, str]
            Mapping of output type to file path
        """
        folder = self.output_dir / PREDICTIONS_SUBDIR
        exported = {}

        exported['predictions_csv'] = self._write_csv(
            predictions_to_dataframe(summary), folder / 'predictions_all_items.csv'
        )

        to_buy = shopping_list(summary)
        if to_buy:
            df = pd.DataFrame([
                {
                    'item_name': r.item_name,
                    'quantity': r.shortfall_quantity,
                    'unit': r.unit,
                    'estimated_cost': r.shortfall_value,
                }
                for r in to_buy
            ])
            exported['shopping_list_csv'] = self._write_csv(df, folder / 'shopping_list.csv')

        payload = {
            'generated_at': datetime.now().isoformat(),
            'items_predicted': len(summary.records),
            'items_to_buy': len(to_buy),
            'total_monthly_need_value': summary.total_monthly_need_value,
            'total_daily_usage_value': summary.total_daily_usage_value,
            'skipped_history_items': summary.skipped_history_items,
            'excluded_items': summary.excluded_items,
        }
        exported['summary_json'] = self._write_json(payload, folder / 'prediction_summary.json')

        logger.info(f"Exported predictions: {len(exported)} files written")
        return exported

    def export_budget_report(self, report: BudgetReport) -> Dict[str, str]:
        """Write the full report as JSON and the line items as CSV."""
        folder = self.output_dir / BUDGETS_SUBDIR
        exported = {
            'budget_json': self._write_json(report.to_dict(), folder / 'budget_report.json'),
            'line_items_csv': self._write_csv(budget_to_dataframe(report), folder / 'budget_line_items.csv'),
        }
        logger.info(f"Exported budget report for {report.district} to {folder}")
        return exported

    def export_complete_report(self, report: CompleteReport) -> Dict[str, str]:
        exported = self.export_budget_report(report.budget)
        path = self.output_dir / REPORTS_SUBDIR / 'complete_report.json'
        exported['complete_report_json'] = self._write_json(report.to_dict(), path)
        logger.info(f"Exported complete report to {path}")
        return exported
