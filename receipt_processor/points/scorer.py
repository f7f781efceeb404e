import logging
import math
import re
from datetime import date, time
from decimal import Decimal
from fractions import Fraction
from typing import Callable, Dict, Optional, Tuple

from receipt_processor.model.ReceiptModel import Receipt

logger = logging.getLogger(__name__)

AMOUNT_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)
DATE_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)
TIME_PATTERN = re.compile(r"(\d{1,2}):(\d{2})", re.ASCII)

DESCRIPTION_MULTIPLIER = Fraction(1, 5)

AFTERNOON_START = 14 * 60
AFTERNOON_END = 16 * 60

# decimal exponent range of a double
MAX_AMOUNT_EXPONENT = 308


def parse_amount(text: str) -> Optional[Decimal]:
    if not AMOUNT_PATTERN.fullmatch(text):
        logger.debug("Unparseable amount %r", text)
        return None
    amount = Decimal(text)
    if amount and abs(amount.adjusted()) > MAX_AMOUNT_EXPONENT:
        logger.debug("Out of range amount %r", text)
        return None
    return amount


def parse_purchase_date(text: str) -> Optional[date]:
    match = DATE_PATTERN.fullmatch(text)
    if not match:
        logger.debug("Unparseable purchase date %r", text)
        return None
    year, month, day = (int(group) for group in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        logger.debug("Invalid calendar date %r", text)
        return None


def parse_purchase_time(text: str) -> Optional[time]:
    match = TIME_PATTERN.fullmatch(text)
    if not match:
        logger.debug("Unparseable purchase time %r", text)
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        logger.debug("Invalid clock time %r", text)
        return None
    return time(hour, minute)


def retailer_points(receipt: Receipt) -> int:
    # isdecimal() is the Nd category; isdigit() would also accept superscripts
    return sum(1 for char in receipt.retailer if char.isalpha() or char.isdecimal())


def round_dollar_points(receipt: Receipt) -> int:
    total = parse_amount(receipt.total)
    if total is None:
        return 0
    _, denominator = total.as_integer_ratio()
    return 50 if denominator == 1 else 0


def quarter_multiple_points(receipt: Receipt) -> int:
    total = parse_amount(receipt.total)
    if total is None:
        return 0
    # exact ratio, so no decimal context precision limit applies
    numerator, denominator = total.as_integer_ratio()
    return 25 if (4 * numerator) % denominator == 0 else 0


def item_pair_points(receipt: Receipt) -> int:
    return (len(receipt.items) // 2) * 5


def description_points(receipt: Receipt) -> int:
    points = 0
    for item in receipt.items:
        # UTF-8 byte length, not character count
        description = item.short_description.strip()
        if len(description.encode("utf-8")) % 3 != 0:
            continue
        price = parse_amount(item.price)
        if price is None:
            continue
        points += math.ceil(Fraction(price) * DESCRIPTION_MULTIPLIER)
    return points


def odd_day_points(receipt: Receipt) -> int:
    purchase_date = parse_purchase_date(receipt.purchase_date)
    if purchase_date is not None and purchase_date.day % 2 == 1:
        return 6
    return 0


def afternoon_points(receipt: Receipt) -> int:
    purchase_time = parse_purchase_time(receipt.purchase_time)
    if purchase_time is None:
        return 0
    minutes = purchase_time.hour * 60 + purchase_time.minute
    if AFTERNOON_START <= minutes < AFTERNOON_END:
        return 10
    return 0


RULES: Tuple[Tuple[str, Callable[[Receipt], int]], ...] = (
    ("retailer", retailer_points),
    ("round_dollar", round_dollar_points),
    ("quarter_multiple", quarter_multiple_points),
    ("item_pairs", item_pair_points),
    ("descriptions", description_points),
    ("odd_day", odd_day_points),
    ("afternoon", afternoon_points),
)


def score_breakdown(receipt: Receipt) -> Dict[str, int]:
    """Points contributed by each rule, keyed by rule name."""
    return {name: rule(receipt) for name, rule in RULES}


def score_receipt(receipt: Receipt) -> int:
    """Total loyalty points for a receipt.

    Rules are independent and additive. A field that fails to parse only
    zeroes the rules that read it; scoring itself never raises.
    """
    breakdown = score_breakdown(receipt)
    logger.debug("Points breakdown for %r: %s", receipt.retailer, breakdown)
    return sum(breakdown.values())
