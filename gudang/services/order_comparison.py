"""Order vs. incoming goods comparison.

Each order is matched against the incoming-goods records by product, resi
number, quantity and date (within a tolerance of a few days). The best
available match is reported together with the fields that disagree, so a
view can flag orders whose goods never arrived or arrived differently.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from gudang.config import settings

COMPARED_FIELDS = ("product_name", "resi_number", "quantity", "date")

_SECONDS_PER_DAY = 24 * 60 * 60


class MatchType(str, Enum):
    EXACT = "exact"
    PRODUCT_RESI = "product_resi"
    PRODUCT_ONLY = "product_only"
    NONE = "none"


_STATUS_LABELS = {
    MatchType.EXACT: "Exact Match",
    MatchType.PRODUCT_RESI: "Product+Resi Match",
    MatchType.PRODUCT_ONLY: "Product Only Match",
    MatchType.NONE: "No Match",
}


def status_label(match_type: MatchType) -> str:
    return _STATUS_LABELS[match_type]


@dataclass
class OrderComparison:
    order: Mapping[str, Any]
    match_type: MatchType
    closest_match: Optional[Mapping[str, Any]] = None
    field_mismatches: Dict[str, bool] = field(
        default_factory=lambda: {name: False for name in COMPARED_FIELDS}
    )

    @property
    def has_match(self) -> bool:
        return self.match_type is MatchType.EXACT

    @property
    def matching_incoming(self) -> Optional[Mapping[str, Any]]:
        return self.closest_match if self.has_match else None

    @property
    def status(self) -> str:
        return status_label(self.match_type)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.order,
            "hasMatch": self.has_match,
            "matchingIncoming": self.matching_incoming,
            "closestMatch": self.closest_match,
            "fieldMismatches": dict(self.field_mismatches),
            "matchType": self.match_type.value,
        }


def _parse_date(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _parse_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return None


def _same_quantity(left: Any, right: Any) -> bool:
    left_qty = _parse_int(left)
    return left_qty is not None and left_qty == _parse_int(right)


def within_tolerance(first: Any, second: Any, tolerance_days: int) -> bool:
    """True when both dates parse and lie at most ``tolerance_days`` apart (rounded up)."""
    first_date = _parse_date(first)
    second_date = _parse_date(second)
    if first_date is None or second_date is None:
        return False
    diff_seconds = abs((second_date - first_date).total_seconds())
    return math.ceil(diff_seconds / _SECONDS_PER_DAY) <= tolerance_days


def _compare_one(
    order: Mapping[str, Any],
    incoming: Sequence[Mapping[str, Any]],
    tolerance_days: int,
) -> OrderComparison:
    same_product = [
        record
        for record in incoming
        if record.get("product_name") == order.get("product_name")
        and within_tolerance(record.get("date"), order.get("date"), tolerance_days)
    ]
    same_product_resi = [
        record for record in same_product if record.get("resi_number") == order.get("resi_number")
    ]
    exact = [
        record
        for record in same_product_resi
        if _same_quantity(record.get("quantity"), order.get("quantity"))
    ]

    if exact:
        return OrderComparison(order=order, match_type=MatchType.EXACT, closest_match=exact[0])

    if same_product_resi:
        closest = same_product_resi[0]
        comparison = OrderComparison(
            order=order, match_type=MatchType.PRODUCT_RESI, closest_match=closest
        )
        comparison.field_mismatches["quantity"] = not _same_quantity(
            closest.get("quantity"), order.get("quantity")
        )
        return comparison

    if same_product:
        closest = same_product[0]
        comparison = OrderComparison(
            order=order, match_type=MatchType.PRODUCT_ONLY, closest_match=closest
        )
        comparison.field_mismatches["resi_number"] = (
            closest.get("resi_number") != order.get("resi_number")
        )
        comparison.field_mismatches["quantity"] = not _same_quantity(
            closest.get("quantity"), order.get("quantity")
        )
        return comparison

    return OrderComparison(
        order=order,
        match_type=MatchType.NONE,
        field_mismatches={name: True for name in COMPARED_FIELDS},
    )


def compare_orders(
    orders: Sequence[Mapping[str, Any]],
    incoming: Any,
    tolerance_days: Optional[int] = None,
) -> List[OrderComparison]:
    if tolerance_days is None:
        tolerance_days = settings.COMPARISON_TOLERANCE_DAYS
    if not isinstance(incoming, (list, tuple)):
        incoming = []
    records = [record for record in incoming if isinstance(record, Mapping)]
    return [_compare_one(order, records, tolerance_days) for order in orders]
