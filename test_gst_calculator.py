import pytest

from exceptions import (
    InvalidAmountError,
    InvalidFormatError,
    InvalidInputError,
    InvalidRateError,
    UnknownStateCodeError,
    UnsupportedLocationError,
)
from gst_calculator import (
    INPUT_GST,
    INTER_STATE,
    INTRA_STATE,
    INTRA_UT,
    OUTPUT_GST,
    calculate_gst,
    calculate_gst_from_gstin,
)
from state_codes import INDIAN_STATES_AND_UTS, UT_WITH_UGST

AMOUNTS = [0, 1, 999.99, 1500, 250000.5]
RATES = [0, 0.25, 5, 12, 18, 28]


def assert_totals(result):
    assert result["Total_GST"] == result["IGST"] + result["CGST"] + result["SGST"] + result["UGST"]
    assert result["Gross_amount"] == result["Taxable_value"] + result["Total_GST"]


def test_tamil_nadu_to_chandigarh_is_inter_state():
    result = calculate_gst_from_gstin("33ABCDE1234F1Z5", "04ABCDE5678K1Z1", 1500)
    assert result == {
        "type": INTER_STATE,
        "Taxable_value": 1500,
        "GST_rate": 18,
        "IGST": 270,
        "CGST": 0,
        "SGST": 0,
        "UGST": 0,
        "Total_GST": 270,
        "Gross_amount": 1770,
        "GST_type": OUTPUT_GST,
    }


def test_buyer_side_only_changes_the_label():
    output = calculate_gst_from_gstin("33ABCDE1234F1Z5", "04ABCDE5678K1Z1", 1500)
    inward = calculate_gst_from_gstin("33ABCDE1234F1Z5", "04ABCDE5678K1Z1", 1500, i_am_supplier=False)
    assert inward["GST_type"] == INPUT_GST
    output.pop("GST_type")
    inward.pop("GST_type")
    assert output == inward


def test_delhi_intra_state():
    result = calculate_gst("Delhi", "Delhi", 1000, 18)
    assert result["type"] == INTRA_STATE
    assert (result["CGST"], result["SGST"], result["IGST"], result["UGST"]) == (90, 90, 0, 0)
    assert result["Total_GST"] == 180
    assert result["Gross_amount"] == 1180


def test_ladakh_intra_ut():
    result = calculate_gst("Ladakh", "Ladakh", 1000, 18)
    assert result["type"] == INTRA_UT
    assert (result["CGST"], result["UGST"], result["SGST"], result["IGST"]) == (90, 90, 0, 0)


def test_default_rate_is_18():
    assert calculate_gst("Goa", "Kerala", 100)["GST_rate"] == 18


def test_names_are_normalised_before_comparison():
    result = calculate_gst("  tamil   NADU", "Tamil Nadu", 1000, 12)
    assert result["type"] == INTRA_STATE
    assert calculate_gst("andaman & nicobar islands", "Andaman and Nicobar Islands", 100)["type"] == INTRA_UT


def test_puducherry_has_a_legislature_so_levies_sgst():
    assert calculate_gst("Puducherry", "Puducherry", 100)["type"] == INTRA_STATE


def test_andhra_pradesh_codes_are_the_same_state():
    result = calculate_gst_from_gstin("28ABCDE1234F1Z5", "37ABCDE1234F1Z5", 1000)
    assert result["type"] == INTRA_STATE


@pytest.mark.parametrize("state", sorted(INDIAN_STATES_AND_UTS - UT_WITH_UGST))
@pytest.mark.parametrize("amount", AMOUNTS)
def test_intra_state_split(state, amount):
    for rate in RATES:
        result = calculate_gst(state, state, amount, rate)
        half = amount * rate / 200
        assert result["CGST"] == result["SGST"] == half
        assert result["IGST"] == result["UGST"] == 0
        assert result["Total_GST"] == pytest.approx(amount * rate / 100)
        assert_totals(result)


@pytest.mark.parametrize("territory", sorted(UT_WITH_UGST))
@pytest.mark.parametrize("amount", AMOUNTS)
def test_intra_ut_split(territory, amount):
    for rate in RATES:
        result = calculate_gst(territory, territory, amount, rate)
        half = amount * rate / 200
        assert result["CGST"] == result["UGST"] == half
        assert result["SGST"] == result["IGST"] == 0
        assert_totals(result)


@pytest.mark.parametrize("supplier, buyer", [
    ("Tamil Nadu", "Karnataka"),
    ("Delhi", "Haryana"),
    ("Ladakh", "Chandigarh"),
    ("Daman and Diu", "Dadra and Nagar Haveli and Daman and Diu"),
    ("Maharashtra", "Lakshadweep"),
])
@pytest.mark.parametrize("amount", AMOUNTS)
def test_inter_state_split(supplier, buyer, amount):
    for rate in RATES:
        result = calculate_gst(supplier, buyer, amount, rate)
        assert result["type"] == INTER_STATE
        assert result["IGST"] == amount * rate / 100
        assert result["CGST"] == result["SGST"] == result["UGST"] == 0
        assert_totals(result)


def test_regimes_are_mutually_exclusive():
    for supplier, buyer in [("Delhi", "Delhi"), ("Ladakh", "Ladakh"), ("Delhi", "Goa")]:
        result = calculate_gst(supplier, buyer, 1000)
        populated = {k for k in ("IGST", "CGST", "SGST", "UGST") if result[k]}
        assert populated in ({"IGST"}, {"CGST", "SGST"}, {"CGST", "UGST"})


def test_amount_and_rate_are_not_range_checked():
    negative = calculate_gst("Delhi", "Goa", -1000, 18)
    assert negative["IGST"] == -180
    assert negative["Gross_amount"] == -1180
    assert calculate_gst("Delhi", "Goa", 100, 150)["IGST"] == 150


def test_no_rounding_is_applied():
    result = calculate_gst("Delhi", "Delhi", 0.1, 18)
    assert result["CGST"] == 0.1 * 18 / 200


def test_numeric_strings_are_accepted():
    result = calculate_gst("Delhi", "Goa", "1500", "18")
    assert result["Taxable_value"] == 1500.0
    assert result["IGST"] == 270.0


@pytest.mark.parametrize("amount", ["abc", None, True, [100]])
def test_non_numeric_amount(amount):
    with pytest.raises(InvalidAmountError):
        calculate_gst("Delhi", "Goa", amount)


@pytest.mark.parametrize("rate", ["high", None, False])
def test_non_numeric_rate(rate):
    with pytest.raises(InvalidRateError):
        calculate_gst("Delhi", "Goa", 100, rate)


@pytest.mark.parametrize("supplier, buyer", [
    ("Dubai", "Delhi"),
    ("Delhi", "London"),
])
def test_foreign_locations_are_rejected(supplier, buyer):
    with pytest.raises(UnsupportedLocationError) as exc:
        calculate_gst(supplier, buyer, 100)
    assert exc.value.code == "UNSUPPORTED_LOCATION"
    assert str(exc.value) == "Only Indian locations are supported. No import/export."


def test_location_is_checked_before_amount():
    with pytest.raises(UnsupportedLocationError):
        calculate_gst("Dubai", "Delhi", "abc")
    with pytest.raises(UnsupportedLocationError):
        calculate_gst("Delhi", "London", 100, "high")


def test_non_string_location():
    with pytest.raises(InvalidInputError):
        calculate_gst(None, "Delhi", 100)


@pytest.mark.parametrize("supplier, buyer", [
    ("33abcde1234f1z5", "04ABCDE5678K1Z1"),
    ("33ABCDE1234F1Z5", "04ABCDE5678K1Z"),
    ("33ABCDE1234F1Z5", None),
])
def test_gstin_format_errors_propagate(supplier, buyer):
    with pytest.raises(InvalidFormatError):
        calculate_gst_from_gstin(supplier, buyer, 100)


def test_unknown_state_code_propagates():
    with pytest.raises(UnknownStateCodeError):
        calculate_gst_from_gstin("33ABCDE1234F1Z5", "39ABCDE5678K1Z1", 100)


def test_dadra_nagar_haveli_daman_diu_levies_ugst():
    result = calculate_gst_from_gstin("26ABCDE1234F1Z5", "26ABCDE5678K1Z1", 1000)
    assert result["type"] == INTRA_UT
    assert result["CGST"] == result["UGST"] == 90
    assert result["SGST"] == result["IGST"] == 0
