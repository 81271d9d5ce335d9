# reporter.py

import os
import logging
from datetime import datetime

import pandas as pd
from openpyxl import load_workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from gst_calculator import INTER_STATE, INTRA_STATE, INTRA_UT
from tax_register import INVALID, get_register_summary

logger = logging.getLogger(__name__)

REGIME_SHEETS = {
    INTER_STATE: "INTER_STATE",
    INTRA_STATE: "INTRA_STATE",
    INTRA_UT: "INTRA_UT",
}

COLOR_MAP = {
    "INTER_STATE": "DDEBF7",  # Light Blue
    "INTRA_STATE": "C6EFCE",  # Light Green
    "INTRA_UT": "FFEB9C",     # Light Orange
    "VALID": "C6EFCE",
    "INVALID": "FFC7CE",      # Light Red
    "SUMMARY": "D9E1F2",
}

GST_TOTAL_LABELS = {
    "total_taxable_value": "Total Taxable Value",
    "total_igst": "Total IGST",
    "total_cgst": "Total CGST",
    "total_sgst": "Total SGST",
    "total_ugst": "Total UGST",
    "total_total_gst": "Total GST",
    "total_gross_amount": "Total Gross Amount",
}

HEADER_FILL = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF")
THIN_BORDER = Border(
    left=Side(style="thin"), right=Side(style="thin"),
    top=Side(style="thin"), bottom=Side(style="thin")
)


def _summary_rows(summary):
    """Flatten the register summary into (Metric, Value) rows with section headers."""
    rows = [
        ("=== REPORT OVERVIEW ===", ""),
        ("Report Generated", datetime.now().strftime("%Y-%m-%d %H:%M:%S")),
        ("Total Rows", summary.get("total_rows", 0)),
        ("Valid Rows", summary.get("valid_rows", 0)),
        ("Invalid Rows", summary.get("invalid_rows", 0)),
    ]

    if "by_regime" in summary:
        rows.append(("=== GST BY REGIME ===", ""))
        rows.extend((regime, count) for regime, count in summary["by_regime"].items())
        rows.append(("=== GST TOTALS ===", ""))
        for key, label in GST_TOTAL_LABELS.items():
            if key in summary:
                rows.append((label, f"₹{summary[key]:,.2f}"))

    if "total_tds" in summary:
        rows.append(("=== TDS TOTALS ===", ""))
        rows.append(("Total Net Amount", f"₹{summary['total_net_amount']:,.2f}"))
        rows.append(("Total Gross", f"₹{summary['total_gross']:,.2f}"))
        rows.append(("Total TDS", f"₹{summary['total_tds']:,.2f}"))

    if "errors_by_code" in summary:
        rows.append(("=== ERRORS ===", ""))
        rows.extend((code, count) for code, count in summary["errors_by_code"].items())

    return rows


def save_tax_report(df, output_dir="reports", report_name="GSTRegister"):
    """
    Writes a processed register (compute_gst_register / compute_tds_register
    output) to a formatted Excel workbook. Returns the file path, or None for
    an empty frame.
    """
    if df is None or df.empty:
        logger.warning("⚠️ No rows to write in tax report.")
        return None

    os.makedirs(output_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
    filepath = os.path.join(output_dir, f"{report_name}_{timestamp}.xlsx")

    summary = get_register_summary(df)
    summary_df = pd.DataFrame(_summary_rows(summary), columns=["Metric", "Value"])

    logger.info(f"📊 Creating tax report with {len(df)} rows")
    with pd.ExcelWriter(filepath, engine="openpyxl") as writer:
        summary_df.to_excel(writer, sheet_name="SUMMARY", index=False)

        if "GST_Regime" in df.columns:
            for regime, sheet_name in REGIME_SHEETS.items():
                part = df[df["GST_Regime"] == regime]
                if not part.empty:
                    part.to_excel(writer, sheet_name=sheet_name, index=False)

        invalid_df = df[df["Status"] == INVALID]
        if not invalid_df.empty:
            invalid_df.to_excel(writer, sheet_name="INVALID", index=False)

        df.to_excel(writer, sheet_name="ALL_DATA", index=False)

    format_excel_report(filepath)
    logger.info(f"✅ Tax report saved: {filepath}")
    return filepath


def format_excel_report(filepath):
    """Header styling, borders, filters and status colours for every sheet"""
    wb = load_workbook(filepath)
    for sheet_name in wb.sheetnames:
        ws = wb[sheet_name]
        if sheet_name == "SUMMARY":
            format_summary_sheet(ws)
        else:
            format_data_sheet(ws, sheet_name)
    wb.save(filepath)


def format_summary_sheet(ws):
    summary_fill = PatternFill(start_color=COLOR_MAP["SUMMARY"], end_color=COLOR_MAP["SUMMARY"], fill_type="solid")

    for row in ws.iter_rows():
        for cell in row:
            if cell.value and str(cell.value).startswith("==="):
                cell.font = Font(bold=True, size=14, color="FFFFFF")
                cell.fill = HEADER_FILL
                cell.alignment = Alignment(horizontal="center")
            elif cell.column == 1:
                cell.font = Font(bold=True)
                cell.fill = summary_fill
            else:
                cell.fill = summary_fill

    _autosize(ws, limit=50)


def format_data_sheet(ws, sheet_name):
    if ws.max_row <= 1:
        return

    ws.freeze_panes = "A2"
    ws.auto_filter.ref = ws.dimensions

    headers = [cell.value for cell in ws[1]]
    status_col = headers.index("Status") + 1 if "Status" in headers else None
    sheet_fill = COLOR_MAP.get(sheet_name)

    for row_num, row in enumerate(ws.iter_rows(), 1):
        if row_num == 1:
            for cell in row:
                cell.font = HEADER_FONT
                cell.fill = HEADER_FILL
                cell.alignment = Alignment(horizontal="center", vertical="center")
                cell.border = THIN_BORDER
            continue

        # ALL_DATA is coloured per row from its Status cell
        color = sheet_fill
        if color is None and status_col:
            color = COLOR_MAP.get(str(row[status_col - 1].value), "FFFFFF")
        fill = PatternFill(start_color=color or "FFFFFF", end_color=color or "FFFFFF", fill_type="solid")
        for cell in row:
            cell.fill = fill
            cell.border = THIN_BORDER

    _autosize(ws, limit=30)


def _autosize(ws, limit):
    for column in ws.columns:
        max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
        ws.column_dimensions[get_column_letter(column[0].column)].width = min(max_length + 2, limit)
