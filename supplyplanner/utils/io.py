# supplyplanner/utils/io.py
"""
IO helpers & JSON schema validation helpers for demand observations and order records.
"""
import json
from typing import Dict, Any
from pathlib import Path

from jsonschema import validate, ValidationError

NUMERIC_FIELD = {"type": ["number", "string", "null"]}

# JSON Schemas
DEMAND_OBSERVATION_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "DemandObservation",
    "type": "object",
    "required": ["period"],
    "properties": {
        "period": {"type": "string"},
        "order_count": NUMERIC_FIELD,
        "orders": NUMERIC_FIELD,
        "item_count": NUMERIC_FIELD,
        "items": NUMERIC_FIELD,
        "revenue": NUMERIC_FIELD
    },
    "additionalProperties": True
}

ORDER_RECORD_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "OrderRecord",
    "type": "object",
    "anyOf": [
        {"required": ["order_date"]},
        {"required": ["OrderDate"]},
        {"required": ["created_at"]},
        {"required": ["CreatedAt"]}
    ],
    "properties": {
        "total": NUMERIC_FIELD,
        "Total": NUMERIC_FIELD,
        "item_count": NUMERIC_FIELD,
        "ItemCount": NUMERIC_FIELD
    },
    "additionalProperties": True
}


def validate_demand_observation(obj: Dict[str, Any]) -> bool:
    """Validate a demand observation record against schema."""
    try:
        validate(obj, DEMAND_OBSERVATION_SCHEMA)
        return True
    except ValidationError as e:
        raise ValueError(f"DemandObservation validation error: {e.message}")


def validate_order_record(obj: Dict[str, Any]) -> bool:
    """Validate an order record against schema."""
    try:
        validate(obj, ORDER_RECORD_SCHEMA)
        return True
    except ValidationError as e:
        raise ValueError(f"OrderRecord validation error: {e.message}")


def save_json(obj: Any, file_path: str, indent: int = 2):
    """Save object as JSON."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        json.dump(obj, f, indent=indent)


def load_json(file_path: str) -> Any:
    """Load JSON file."""
    with open(file_path, 'r') as f:
        return json.load(f)
