import re
import logging

from exceptions import InvalidFormatError, UnknownStateCodeError
from state_codes import GST_STATE_CODES

logger = logging.getLogger(__name__)

GSTIN_PATTERN = re.compile(r"[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]")
GSTIN_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# -------------------------
# GSTIN structure & checksum
# -------------------------

def is_valid_gstin(gstin, verify_checksum=False):
    """
    Validates GSTIN structure:
    - 15 characters total
    - First 2: State Code (digits)
    - Next 10: PAN (5 letters + 4 digits + 1 letter)
    - Next 1: Entity code (1-9 or a letter)
    - 14th character: Always 'Z'
    - 15th character: Checksum (alphanumeric)

    Case-sensitive and untrimmed: ' 07ABCDE1234F1Z5' and lowercase input fail.
    The check digit is only verified when `verify_checksum` is set.
    """
    if not isinstance(gstin, str) or not GSTIN_PATTERN.fullmatch(gstin):
        return False
    if verify_checksum:
        return gstin[-1] == compute_gstin_check_digit(gstin[:14])
    return True

def compute_gstin_check_digit(gstin_without_check):
    """
    Check character for the first 14 characters of a GSTIN
    (base-36 Luhn variant used by the GST network).
    """
    if (not isinstance(gstin_without_check, str) or len(gstin_without_check) != 14
            or any(ch not in GSTIN_CHARSET for ch in gstin_without_check)):
        raise InvalidFormatError(gstin_without_check, "Check digit needs 14 characters of 0-9/A-Z.")

    total = 0
    factor = 1
    for ch in gstin_without_check:
        product = GSTIN_CHARSET.index(ch) * factor
        total += product // 36 + product % 36
        factor = 2 if factor == 1 else 1
    return GSTIN_CHARSET[(36 - total % 36) % 36]

def has_valid_check_digit(gstin):
    return is_valid_gstin(gstin, verify_checksum=True)

# -------------------------
# State resolution
# -------------------------

def get_state_from_gstin(gstin):
    """
    Resolves the state/UT name encoded in the first two digits of a GSTIN.

    Raises InvalidFormatError for empty, non-string or malformed input and
    UnknownStateCodeError when the code has no entry ("00", "39".."99").
    """
    if not gstin or not isinstance(gstin, str) or not is_valid_gstin(gstin):
        raise InvalidFormatError(gstin)

    code = gstin[:2]
    state = GST_STATE_CODES.get(code)
    if not state:
        raise UnknownStateCodeError(code, gstin)

    logger.debug(f"GSTIN {gstin} -> {state} ({code})")
    return state

def get_state_code_from_gstin(gstin):
    """Two-digit state code of a structurally valid GSTIN, else None."""
    if not is_valid_gstin(gstin):
        return None
    return gstin[:2]

# -------------------------
# PAN helpers
# -------------------------

def extract_pan_from_gstin(gstin):
    """
    Extracts the PAN (10 characters) from a valid 15-character GSTIN.
    """
    if not is_valid_gstin(gstin):
        return None
    return gstin[2:12]

def match_pan_with_invoice(pan_from_gstin, invoice_pan):
    """
    Checks if the PAN extracted from GSTIN matches the PAN from invoice.
    Comparison is case-insensitive and whitespace-trimmed.
    """
    if not pan_from_gstin or not invoice_pan:
        return False
    return pan_from_gstin.strip().upper() == invoice_pan.strip().upper()
