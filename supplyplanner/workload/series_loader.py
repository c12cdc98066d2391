"""Load demand series and order records from files."""

import csv
import json
from pathlib import Path
from typing import Any, Dict, List

from ..core.numeric import sanitize, sanitize_count
from ..models.demand import DemandObservation
from ..utils.io import validate_demand_observation, validate_order_record
from ..utils.logger import setup_logger
from .demand_series import retain_positive


class SeriesLoader:
    """Load demand data from JSON or CSV files.

    Supports:
    - Pre-aggregated demand series (one record per period)
    - Raw order records (aggregated later by ``demand_series``)
    """

    def __init__(self, path: str):
        """Initialize series loader.

        Args:
            path: Path to a .json or .csv file
        """
        self.path = Path(path)
        self.logger = setup_logger(self.__class__.__name__)

        if not self.path.exists():
            raise FileNotFoundError(f"Series file not found: {path}")

    def load_observations(self) -> List[DemandObservation]:
        """Load a demand series.

        Returns:
            Observations in file order, without zero-demand periods
        """
        records = self._read_records(key='series')
        for record in records:
            validate_demand_observation(record)

        series = retain_positive(self._to_observation(record) for record in records)
        self.logger.info(f"Loaded {len(series)} demand periods from {self.path.name}")
        return series

    def load_orders(self) -> List[Dict[str, Any]]:
        """Load raw order records.

        Returns:
            List of order dictionaries
        """
        records = self._read_records(key='orders')
        for record in records:
            validate_order_record(record)

        self.logger.info(f"Loaded {len(records)} orders from {self.path.name}")
        return records

    def _read_records(self, key: str) -> List[Dict[str, Any]]:
        suffix = self.path.suffix.lower()

        if suffix == '.json':
            return self._load_json(key)
        elif suffix == '.csv':
            return self._load_csv()
        else:
            raise ValueError(f"Unsupported series format: {suffix}")

    def _load_json(self, key: str) -> List[Dict[str, Any]]:
        with open(self.path, 'r') as f:
            data = json.load(f)

        # Accept either a bare list or an object wrapping it
        if isinstance(data, dict):
            data = data.get(key, [])
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of records in {self.path}")
        return data

    def _load_csv(self) -> List[Dict[str, Any]]:
        with open(self.path, 'r', newline='') as f:
            return [dict(row) for row in csv.DictReader(f)]

    @staticmethod
    def _to_observation(record: Dict[str, Any]) -> DemandObservation:
        return DemandObservation(
            period=str(record.get('period') or '').strip(),
            order_count=sanitize_count(record.get('order_count', record.get('orders'))),
            item_count=sanitize_count(record.get('item_count', record.get('items'))),
            revenue=sanitize(record.get('revenue')),
        )
