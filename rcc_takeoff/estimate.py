"""
Quick Estimate
A free-standing "parameter x 1.1" estimate with a saved-record contract.

This is separate from the quantity engine: nothing in the takeoff
pipeline calls it.
"""

import json
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


ESTIMATE_FACTOR = 1.1


def estimate_quantity(parameter: str) -> Optional[float]:
    """Parameter times ESTIMATE_FACTOR; None for an empty parameter."""
    if not parameter:
        return None
    try:
        value = float(parameter)
    except ValueError:
        raise ValueError(f"Parameter must be numeric (got {parameter!r})")
    return value * ESTIMATE_FACTOR


def calculate_estimate(parameter: str, group: str, breakdown: str) -> str:
    """
    Render the estimate text block.

    Raises:
        ValueError: non-numeric parameter
    """
    quantity = estimate_quantity(parameter)
    return (
        f"Group: {group}\n"
        f"Breakdown: {breakdown}\n"
        f"Parameter: {parameter}\n"
        f"Estimated Quantity: {'-' if quantity is None else quantity}"
    )


class EstimateRecord(BaseModel):
    """A saved estimate."""
    group: str
    breakdown: str
    parameter: str
    estimated_quantity: Optional[float] = None
    date: str = Field(default_factory=lambda: datetime.now().isoformat())

    @classmethod
    def from_parameter(cls, parameter: str, group: str, breakdown: str) -> "EstimateRecord":
        return cls(
            group=group,
            breakdown=breakdown,
            parameter=parameter,
            estimated_quantity=estimate_quantity(parameter)
        )


class EstimateStore:
    """
    Append-only estimate collection in a JSON file.

    The file holds a list of records, each with an "id" added on save.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        with open(self.path) as f:
            return json.load(f)

    def save(self, record: EstimateRecord) -> Dict[str, Any]:
        """Store a record and return {"success": True, "id": ...}."""
        records = self._read()
        record_id = str(uuid.uuid4())
        records.append({'id': record_id, **record.model_dump()})

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(records, f, indent=2)

        logger.info(f"Saved estimate {record_id} to {self.path}")
        return {'success': True, 'id': record_id}

    def list(self) -> List[Dict[str, Any]]:
        """All stored records, oldest first."""
        return self._read()
