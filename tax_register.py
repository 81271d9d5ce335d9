import io
import os
import logging

import chardet
import numpy as np
import pandas as pd

from exceptions import MissingValueError, TaxCalculationError
from gst_calculator import DEFAULT_GST_RATE, calculate_gst, calculate_gst_from_gstin
from tds_calculator import DEFAULT_TDS_PERCENT, calculate_tds

logger = logging.getLogger(__name__)

GST_COLUMNS = ["GST_Regime", "GST_Type", "IGST", "CGST", "SGST", "UGST", "Total_GST", "Gross_amount"]
TDS_COLUMNS = ["Gross", "TDS"]
STATUS_COLUMNS = ["Status", "Error_Code", "Issues"]

VALID = "VALID"
INVALID = "INVALID"


def read_register(file_path):
    """Load an invoice or payment register from .xlsx, .csv or .tsv"""
    lower = file_path.lower()
    if lower.endswith(".xlsx"):
        return pd.read_excel(file_path, engine="openpyxl")

    if lower.endswith((".csv", ".tsv")):
        with open(file_path, "rb") as f:
            raw = f.read()
        enc = chardet.detect(raw or b"").get("encoding") or "utf-8"
        sep = "\t" if lower.endswith(".tsv") else ","
        logger.debug(f"Reading {os.path.basename(file_path)} as {enc}, sep={sep!r}")
        return pd.read_csv(io.StringIO(raw.decode(enc, errors="replace")), sep=sep)

    raise ValueError(f"Unsupported register format: {os.path.basename(file_path)}")


def _is_blank(value):
    if value is None:
        return True
    if isinstance(value, float) and np.isnan(value):
        return True
    return isinstance(value, str) and value.strip() == ""


def _require_columns(df, required):
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required column(s): {missing}")


def _invalid_row(err, columns):
    row = {col: np.nan for col in columns}
    row.update({"Status": INVALID, "Error_Code": err.code, "Issues": str(err)})
    return row


def compute_gst_register(df, default_rate=DEFAULT_GST_RATE, i_am_supplier=True):
    """
    Adds the GST split to every row of an invoice register.

    Locations come from SupplierGSTIN/BuyerGSTIN when both columns exist,
    otherwise from SupplierState/BuyerState. TaxableValue is required,
    GSTRate is optional (blank cells use `default_rate`).

    Rows that fail are kept, marked INVALID with the error code and message.
    """
    use_gstin = "SupplierGSTIN" in df.columns and "BuyerGSTIN" in df.columns
    if use_gstin:
        _require_columns(df, ["SupplierGSTIN", "BuyerGSTIN", "TaxableValue"])
    else:
        _require_columns(df, ["SupplierState", "BuyerState", "TaxableValue"])

    out_columns = GST_COLUMNS + STATUS_COLUMNS
    rows = []
    for idx, row in df.iterrows():
        rate = row.get("GSTRate", default_rate)
        if _is_blank(rate):
            rate = default_rate
        try:
            amount = row["TaxableValue"]
            if _is_blank(amount):
                raise MissingValueError("TaxableValue")
            if use_gstin:
                result = calculate_gst_from_gstin(
                    row["SupplierGSTIN"], row["BuyerGSTIN"], amount, rate, i_am_supplier
                )
                gst_type = result["GST_type"]
            else:
                result = calculate_gst(row["SupplierState"], row["BuyerState"], amount, rate)
                gst_type = ""
        except TaxCalculationError as e:
            logger.debug(f"Row {idx}: {e.code} - {e}")
            rows.append(_invalid_row(e, out_columns))
            continue

        rows.append({
            "GST_Regime": result["type"],
            "GST_Type": gst_type,
            "IGST": result["IGST"],
            "CGST": result["CGST"],
            "SGST": result["SGST"],
            "UGST": result["UGST"],
            "Total_GST": result["Total_GST"],
            "Gross_amount": result["Gross_amount"],
            "Status": VALID,
            "Error_Code": "",
            "Issues": "",
        })

    result_df = _attach(df, rows, out_columns)
    invalid = int((result_df["Status"] == INVALID).sum())
    logger.info(f"GST register processed: {len(result_df)} rows, {invalid} invalid")
    return result_df


def compute_tds_register(df, default_percent=DEFAULT_TDS_PERCENT):
    """
    Grosses up every NetAmount in a payment register.
    TDSPercent is optional; blank cells use `default_percent`.
    """
    _require_columns(df, ["NetAmount"])

    out_columns = TDS_COLUMNS + STATUS_COLUMNS
    rows = []
    for idx, row in df.iterrows():
        percent = row.get("TDSPercent", default_percent)
        if _is_blank(percent):
            percent = default_percent
        try:
            result = calculate_tds(row["NetAmount"], percent)
        except TaxCalculationError as e:
            logger.debug(f"Row {idx}: {e.code} - {e}")
            rows.append(_invalid_row(e, out_columns))
            continue
        rows.append({
            "Gross": result["gross"],
            "TDS": result["tds"],
            "Status": VALID,
            "Error_Code": "",
            "Issues": "",
        })

    result_df = _attach(df, rows, out_columns)
    invalid = int((result_df["Status"] == INVALID).sum())
    logger.info(f"TDS register processed: {len(result_df)} rows, {invalid} invalid")
    return result_df


def _attach(df, rows, columns):
    computed = pd.DataFrame(rows, columns=columns, index=df.index)
    base = df.drop(columns=[c for c in columns if c in df.columns])
    return pd.concat([base, computed], axis=1)


def get_register_summary(df):
    """
    Row counts by status and regime, and totals over VALID rows.
    Works on the output of compute_gst_register or compute_tds_register.
    """
    if df is None or df.empty:
        return {"total_rows": 0, "valid_rows": 0, "invalid_rows": 0}

    valid = df[df["Status"] == VALID]
    summary = {
        "total_rows": len(df),
        "valid_rows": len(valid),
        "invalid_rows": int((df["Status"] == INVALID).sum()),
    }

    if "GST_Regime" in df.columns:
        summary["by_regime"] = {str(k): int(v) for k, v in valid["GST_Regime"].value_counts().items()}
        if "TaxableValue" in df.columns:
            summary["total_taxable_value"] = float(pd.to_numeric(valid["TaxableValue"], errors="coerce").sum())
        for col in ["IGST", "CGST", "SGST", "UGST", "Total_GST", "Gross_amount"]:
            summary[f"total_{col.lower()}"] = float(valid[col].astype(float).sum())

    if "TDS" in df.columns:
        summary["total_net_amount"] = float(pd.to_numeric(valid["NetAmount"], errors="coerce").sum())
        summary["total_gross"] = float(valid["Gross"].astype(float).sum())
        summary["total_tds"] = float(valid["TDS"].astype(float).sum())

    if summary["invalid_rows"]:
        codes = df.loc[df["Status"] == INVALID, "Error_Code"].value_counts()
        summary["errors_by_code"] = {str(k): int(v) for k, v in codes.items()}

    return summary
