# gst_calculator.py
"""
GST split for a supplier/buyer pair.

Inter-state supplies carry IGST at the full rate. Intra-state supplies split
the rate evenly into CGST + SGST, and intra-UT supplies in territories
without a legislature split it into CGST + UGST.
"""
import logging
import numbers

from exceptions import InvalidAmountError, InvalidRateError, UnsupportedLocationError
from gst_verifier import get_state_from_gstin
from state_codes import is_indian_location, is_ugst_territory, normalize_state_name

logger = logging.getLogger(__name__)

DEFAULT_GST_RATE = 18

INTRA_UT = "CGST + UGST (Intra-UT)"
INTRA_STATE = "CGST + SGST (Intra-State)"
INTER_STATE = "IGST (Inter-State)"

OUTPUT_GST = "Output GST"
INPUT_GST = "Input GST"


def _to_number(value, error_cls, field):
    """Accept ints/floats as-is and numeric strings; reject bools and anything else."""
    if isinstance(value, bool):
        raise error_cls(value, f"{field} must be a number")
    if isinstance(value, numbers.Real):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise error_cls(value, f"{field} must be a number")


def calculate_gst(supplier_state, buyer_state, amount, rate=DEFAULT_GST_RATE):
    """
    Splits GST on `amount` at `rate` percent between IGST, CGST, SGST and UGST.

    Both locations must be Indian states/UTs (names are normalised first, so
    'tamil  nadu' and 'Tamil Nadu' are the same place). No rounding is applied
    and neither amount nor rate is range-checked.

    Returns a dict with keys: type, Taxable_value, GST_rate, IGST, CGST, SGST,
    UGST, Total_GST, Gross_amount.
    """
    supplier = normalize_state_name(supplier_state)
    buyer = normalize_state_name(buyer_state)
    if not is_indian_location(supplier) or not is_indian_location(buyer):
        raise UnsupportedLocationError(supplier, buyer)

    value = _to_number(amount, InvalidAmountError, "amount")
    gst_rate = _to_number(rate, InvalidRateError, "rate")

    igst = cgst = sgst = ugst = 0
    if supplier == buyer:
        if is_ugst_territory(supplier):
            gst_type = INTRA_UT
            cgst = ugst = value * gst_rate / 200
        else:
            gst_type = INTRA_STATE
            cgst = sgst = value * gst_rate / 200
    else:
        gst_type = INTER_STATE
        igst = value * gst_rate / 100

    total = igst + cgst + sgst + ugst
    logger.debug(f"{supplier} -> {buyer}: {gst_type} on {value} @ {gst_rate}% = {total}")

    return {
        "type": gst_type,
        "Taxable_value": value,
        "GST_rate": gst_rate,
        "IGST": igst,
        "CGST": cgst,
        "SGST": sgst,
        "UGST": ugst,
        "Total_GST": total,
        "Gross_amount": value + total,
    }


def calculate_gst_from_gstin(supplier_gstin, buyer_gstin, amount, rate=DEFAULT_GST_RATE, i_am_supplier=True):
    """
    Same split as calculate_gst, with both locations read from GSTINs.

    GST_type is "Output GST" when the caller is the supplier (tax collected)
    and "Input GST" when the caller is the buyer (credit to claim).
    """
    supplier_state = get_state_from_gstin(supplier_gstin)
    buyer_state = get_state_from_gstin(buyer_gstin)

    result = calculate_gst(supplier_state, buyer_state, amount, rate)
    result["GST_type"] = OUTPUT_GST if i_am_supplier else INPUT_GST
    return result


if __name__ == "__main__":
    print(calculate_gst_from_gstin("33ABCDE1234F1Z5", "04ABCDE5678K1Z1", 1500))  # Tamil Nadu -> Chandigarh
    print(calculate_gst_from_gstin("04ABCDE5678K1Z1", "33ABCDE1234F1Z5", 1500, i_am_supplier=False))
