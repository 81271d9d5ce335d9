# state_codes.py

import re

from exceptions import InvalidInputError

# Format: GSTIN state code -> state/UT name
GST_STATE_CODES = {
    "01": "Jammu and Kashmir",
    "02": "Himachal Pradesh",
    "03": "Punjab",
    "04": "Chandigarh",
    "05": "Uttarakhand",
    "06": "Haryana",
    "07": "Delhi",
    "08": "Rajasthan",
    "09": "Uttar Pradesh",
    "10": "Bihar",
    "11": "Sikkim",
    "12": "Arunachal Pradesh",
    "13": "Nagaland",
    "14": "Manipur",
    "15": "Mizoram",
    "16": "Tripura",
    "17": "Meghalaya",
    "18": "Assam",
    "19": "West Bengal",
    "20": "Jharkhand",
    "21": "Odisha",
    "22": "Chhattisgarh",
    "23": "Madhya Pradesh",
    "24": "Gujarat",
    "25": "Daman and Diu",
    "26": "Dadra and Nagar Haveli and Daman and Diu",
    "27": "Maharashtra",
    "28": "Andhra Pradesh",  # pre-2019 code, still on older registrations
    "29": "Karnataka",
    "30": "Goa",
    "31": "Lakshadweep",
    "32": "Kerala",
    "33": "Tamil Nadu",
    "34": "Puducherry",
    "35": "Andaman and Nicobar Islands",
    "36": "Telangana",
    "37": "Andhra Pradesh",
    "38": "Ladakh",
}

# Union territories without a legislature: UGST replaces SGST on intra-UT supplies
UT_WITH_UGST = frozenset({
    "Andaman and Nicobar Islands",
    "Lakshadweep",
    "Dadra and Nagar Haveli and Daman and Diu",
    "Chandigarh",
    "Ladakh",
})

INDIAN_STATES_AND_UTS = frozenset(GST_STATE_CODES.values())

_WHITESPACE = re.compile(r"\s+")


def _normalize_once(name):
    cleaned = _WHITESPACE.sub(" ", name.lower().replace("&", "and")).strip()
    return " ".join(word[:1].upper() + word[1:] for word in cleaned.split(" "))


def normalize_state_name(name):
    """
    Canonical form used for every state/UT comparison:
    lowercase, '&' -> 'and', whitespace collapsed and trimmed,
    first letter of each word upper-cased.

        >>> normalize_state_name("  jammu &  KASHMIR ")
        'Jammu And Kashmir'

    Some letters upper-case to more than one character ('ß' -> 'SS'), so the
    pass is repeated until the result stops changing.
    """
    if not isinstance(name, str):
        raise InvalidInputError(name)
    current = _normalize_once(name)
    while True:
        following = _normalize_once(current)
        if following == current:
            return current
        current = following


_NORMALIZED_NAMES = frozenset(normalize_state_name(n) for n in INDIAN_STATES_AND_UTS)
_NORMALIZED_UGST = frozenset(normalize_state_name(n) for n in UT_WITH_UGST)


def is_indian_location(name):
    """True if `name` is one of the recognised Indian states/UTs."""
    if not isinstance(name, str):
        return False
    return normalize_state_name(name) in _NORMALIZED_NAMES


def is_ugst_territory(name):
    """True if intra-territory supplies in `name` levy UGST instead of SGST."""
    if not isinstance(name, str):
        return False
    return normalize_state_name(name) in _NORMALIZED_UGST


def get_state_name(state_code):
    """
    Returns the state/UT name for a two-digit GSTIN state code, or None.
    """
    return GST_STATE_CODES.get(str(state_code).strip())


def get_state_codes(state_name):
    """
    Returns every state code that maps to the given name (sorted).
    Andhra Pradesh has two.
    """
    if not is_indian_location(state_name):
        return []
    wanted = normalize_state_name(state_name)
    return sorted(code for code, name in GST_STATE_CODES.items() if normalize_state_name(name) == wanted)
