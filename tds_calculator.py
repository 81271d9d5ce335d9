# tds_calculator.py

import math
import numbers
import logging
from decimal import Decimal, ROUND_HALF_UP

from exceptions import InvalidAmountError, InvalidRateError

logger = logging.getLogger(__name__)

DEFAULT_TDS_PERCENT = 2

_CENTS = Decimal("0.01")


def _is_real_number(value):
    return (isinstance(value, numbers.Real) and not isinstance(value, bool)
            and math.isfinite(value))


def round_to_paise(value):
    """
    Rounds half away from zero at two decimals, working on the exact binary
    value of the float (so 1.005 -> 1.0, because it is stored as 1.00499...).
    """
    return float(Decimal(float(value)).quantize(_CENTS, rounding=ROUND_HALF_UP))


def calculate_tds(net_amount, tds_percent=DEFAULT_TDS_PERCENT):
    """
    Calculates the gross amount and TDS deducted from a given net amount.

    Args:
        net_amount: amount received after TDS was deducted, must be > 0
        tds_percent: TDS percentage in [0, 100), default 2

    Returns:
        dict: {"gross": ..., "tds": ...}, both rounded to 2 decimals

    Example:
        calculate_tds(9800)      # {'gross': 10000.0, 'tds': 200.0}
        calculate_tds(9000, 10)  # {'gross': 10000.0, 'tds': 1000.0}
    """
    if not _is_real_number(net_amount) or net_amount <= 0:
        raise InvalidAmountError(net_amount)
    if not _is_real_number(tds_percent) or tds_percent < 0 or tds_percent >= 100:
        raise InvalidRateError(tds_percent)

    gross = net_amount / (1 - tds_percent / 100)
    tds = gross - net_amount

    result = {
        "gross": round_to_paise(gross),
        "tds": round_to_paise(tds),
    }
    logger.debug(f"TDS @ {tds_percent}% on net {net_amount}: {result}")
    return result


if __name__ == "__main__":
    print(calculate_tds(9800))  # {'gross': 10000.0, 'tds': 200.0}
    print(calculate_tds(9000, 10))  # {'gross': 10000.0, 'tds': 1000.0}
