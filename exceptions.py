# exceptions.py
"""
Typed errors raised by the GST / TDS calculators.

Every class has a `code` attribute so callers (and the register processor)
can record the failure without parsing messages:

    TaxCalculationError (base, a ValueError)
    |
    +-- InvalidInputError          INVALID_INPUT
    +-- InvalidFormatError         INVALID_FORMAT
    +-- UnknownStateCodeError      UNKNOWN_JURISDICTION_CODE
    +-- UnsupportedLocationError   UNSUPPORTED_LOCATION
    +-- InvalidAmountError         INVALID_AMOUNT
    +-- InvalidRateError           INVALID_RATE
    +-- MissingValueError          MISSING_VALUE  (register rows only)
"""


class TaxCalculationError(ValueError):
    """Base exception for every calculator error."""

    code: str = "TAX_CALCULATION_ERROR"


class InvalidInputError(TaxCalculationError):
    """A state/UT name was not a string."""

    code: str = "INVALID_INPUT"

    def __init__(self, value, field: str = "name"):
        self.value = value
        self.field = field
        super().__init__(f"{field} must be a string, got {type(value).__name__}")


class InvalidFormatError(TaxCalculationError):
    """GSTIN missing, not a string, or not matching the GSTIN structure."""

    code: str = "INVALID_FORMAT"

    def __init__(self, gstin, message: str = "Invalid GSTIN provided."):
        self.gstin = gstin
        super().__init__(message)


class UnknownStateCodeError(TaxCalculationError):
    """Structurally valid GSTIN whose leading two digits map to no state/UT."""

    code: str = "UNKNOWN_JURISDICTION_CODE"

    def __init__(self, state_code: str, gstin: str):
        self.state_code = state_code
        self.gstin = gstin
        super().__init__(f"Unknown state code: {state_code} from GSTIN: {gstin}")


class UnsupportedLocationError(TaxCalculationError):
    """Supplier or buyer location is not a recognised Indian state/UT."""

    code: str = "UNSUPPORTED_LOCATION"

    def __init__(self, supplier_state: str, buyer_state: str):
        self.supplier_state = supplier_state
        self.buyer_state = buyer_state
        super().__init__("Only Indian locations are supported. No import/export.")


class InvalidAmountError(TaxCalculationError):
    code: str = "INVALID_AMOUNT"

    def __init__(self, amount, message: str = "net_amount must be a positive number"):
        self.amount = amount
        super().__init__(message)


class InvalidRateError(TaxCalculationError):
    code: str = "INVALID_RATE"

    def __init__(self, rate, message: str = "tds_percent must be a number between 0 and 100"):
        self.rate = rate
        super().__init__(message)


class MissingValueError(TaxCalculationError):
    """A register row has no value in a required column."""

    code: str = "MISSING_VALUE"

    def __init__(self, column: str):
        self.column = column
        super().__init__(f"{column} is empty")
