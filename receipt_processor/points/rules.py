import logging
import math
import re
from datetime import datetime
from typing import List, Optional

from receipt_processor.model.ReceiptItemModel import ReceiptItem
from receipt_processor.model.ReceiptModel import Receipt

log = logging.getLogger(__name__)

# Plain decimal literals only: no whitespace, underscores or inf/nan
AMOUNT_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
TIME_PATTERN = re.compile(r"[0-9]{1,2}:[0-9]{2}")

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

# Flat bonus for totals above this amount, independent of the receipt contents.
POLICY_TOTAL_THRESHOLD = 10.00


def parse_amount(value: str, field: str) -> Optional[float]:
    """Parse a decimal string, returning None (and logging) when it is unusable."""
    if not AMOUNT_PATTERN.fullmatch(value):
        log.warning("Error parsing %s: %r is not a number", field, value)
        return None
    amount = float(value)
    if not math.isfinite(amount):
        log.warning("Error parsing %s: %r is out of range", field, value)
        return None
    return amount


def parse_timestamp(value: str, pattern, fmt: str, field: str) -> Optional[datetime]:
    if pattern.fullmatch(value):
        try:
            return datetime.strptime(value, fmt)
        except ValueError as e:
            log.warning("Error parsing %s %r: %s", field, value, e)
            return None
    log.warning("Error parsing %s %r: expected %s", field, value, fmt)
    return None


def retailer_points(retailer: str) -> int:
    # ASCII only; str.isalnum() alone would also count letters like "é"
    return sum(1 for ch in retailer if ch.isascii() and ch.isalnum())


def round_total_points(total: Optional[float]) -> int:
    if total is not None and math.fmod(total, 1.0) == 0:
        return 50
    return 0


def quarter_total_points(total: Optional[float]) -> int:
    if total is not None and math.fmod(total, 0.25) == 0:
        return 25
    return 0


def item_pair_points(items: List[ReceiptItem]) -> int:
    return (len(items) // 2) * 5


def description_points(item: ReceiptItem) -> int:
    """
    Points for a single item: ceil(price * 0.2) when the trimmed description
    length is a multiple of 3. Blank descriptions have length 0 and qualify.
    """
    description = item.short_description.strip()
    if len(description.encode("utf-8")) % 3 != 0:
        return 0
    price = parse_amount(item.price, "item price")
    if price is None:
        return 0
    return math.ceil(price * 0.2)


def total_policy_points(total: Optional[float]) -> int:
    if total is not None and total > POLICY_TOTAL_THRESHOLD:
        return 5
    return 0


def odd_day_points(purchase_date: str) -> int:
    parsed = parse_timestamp(purchase_date, DATE_PATTERN, DATE_FORMAT, "purchaseDate")
    if parsed is None:
        return 0
    return 6 if parsed.day % 2 != 0 else 0


def afternoon_points(purchase_time: str) -> int:
    # 2:00pm inclusive to 4:00pm exclusive
    parsed = parse_timestamp(purchase_time, TIME_PATTERN, TIME_FORMAT, "purchaseTime")
    if parsed is None:
        return 0
    return 10 if 14 <= parsed.hour < 16 else 0


def calculate_points(receipt: Receipt) -> int:
    """
    Score a receipt. Fields that fail to parse are logged and contribute
    nothing; the computation itself never fails.
    """
    total = parse_amount(receipt.total, "total")

    points = retailer_points(receipt.retailer)
    points += round_total_points(total)
    points += quarter_total_points(total)
    points += item_pair_points(receipt.items)
    points += sum(description_points(item) for item in receipt.items)
    points += total_policy_points(total)
    points += odd_day_points(receipt.purchase_date)
    points += afternoon_points(receipt.purchase_time)
    return points
