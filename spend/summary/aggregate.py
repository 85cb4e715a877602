import logging
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Optional, Sequence

from spend.norm import usable_price
from spend.types import OrderRecord, SummaryResult

LOG = logging.getLogger(__name__)

CENT = Decimal("0.01")


def get_total_spend(orders: Sequence[OrderRecord]) -> Decimal:
    """
    Sum every usable ``Order Price`` and round once, at the end, to cents.

    An export whose first row carries no ``Order Price`` is taken as not being
    an order export at all, and the total is 0. Zero-priced rows are dropped
    together with unparseable ones, so a genuinely free order is
    indistinguishable from bad data.
    """
    if not orders or not orders[0].order_price:
        return Decimal("0.00")
    total = Decimal("0")
    try:
        for order in orders:
            price = usable_price(order.order_price)
            if price is not None:
                total += price
        return total.quantize(CENT, rounding=ROUND_HALF_EVEN)
    except ArithmeticError:
        LOG.warning("Order prices out of range, reporting zero spend")
        return Decimal("0.00")


def get_first_order(orders: Sequence[OrderRecord]) -> Optional[str]:
    # Exports list orders newest first, so the earliest order is the last
    # row that has an Order Time.
    times = [order.order_time for order in orders if order.order_time]
    if not times:
        return None
    return times[-1]


def summarize(orders: Sequence[OrderRecord]) -> SummaryResult:
    return SummaryResult(
        total_spend=get_total_spend(orders),
        first_order_time=get_first_order(orders),
    )
