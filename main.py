#!/usr/bin/env python3
"""
GST / TDS calculator - console entry point

Single calculations print JSON; `register` processes a whole invoice or
payment register and writes a formatted Excel report.
"""
import os
import sys
import json
import logging
import argparse
from datetime import datetime
from pathlib import Path
from dataclasses import dataclass, field

from exceptions import TaxCalculationError
from gst_calculator import DEFAULT_GST_RATE, calculate_gst, calculate_gst_from_gstin
from reporter import save_tax_report
from tax_register import compute_gst_register, compute_tds_register, get_register_summary, read_register
from tds_calculator import DEFAULT_TDS_PERCENT, calculate_tds

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_TAX_ERROR = 2


def _env_number(name, default, problems):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        problems.append(f"{name}={raw!r} is not a number - using {default}")
        return default


# Configuration with safe environment variable handling
@dataclass
class Config:
    """Runtime configuration read from the environment"""
    REPORTS_DIR: str = field(default_factory=lambda: os.getenv("TAX_REPORTS_DIR", "reports"))
    LOGS_DIR: str = field(default_factory=lambda: os.getenv("TAX_LOGS_DIR", "logs"))
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("TAX_LOG_LEVEL", "INFO").upper())
    WRITE_LOG_FILES: bool = field(
        default_factory=lambda: os.getenv("TAX_WRITE_LOG_FILES", "true").lower() == "true"
    )
    DEFAULT_GST_RATE: float = None
    DEFAULT_TDS_PERCENT: float = None

    def __post_init__(self):
        """Fill numeric defaults from the environment and report bad values"""
        problems = []
        if self.DEFAULT_GST_RATE is None:
            self.DEFAULT_GST_RATE = _env_number("DEFAULT_GST_RATE", DEFAULT_GST_RATE, problems)
        if self.DEFAULT_TDS_PERCENT is None:
            self.DEFAULT_TDS_PERCENT = _env_number("DEFAULT_TDS_PERCENT", DEFAULT_TDS_PERCENT, problems)
        if not isinstance(logging.getLevelName(self.LOG_LEVEL), int):
            problems.append(f"TAX_LOG_LEVEL={self.LOG_LEVEL!r} is not a log level - using INFO")
            self.LOG_LEVEL = "INFO"

        logger = logging.getLogger(__name__)
        for problem in problems:
            logger.warning(problem)


class LogManager:
    """Console logging plus optional daily log and error files"""

    def __init__(self, config: Config):
        self.config = config
        self.setup_logging()

    def setup_logging(self):
        detailed_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
        )
        simple_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s'
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)
        root_logger.handlers.clear()

        # stdout carries the JSON results
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(self.config.LOG_LEVEL)
        console_handler.setFormatter(simple_formatter)
        root_logger.addHandler(console_handler)

        if self.config.WRITE_LOG_FILES:
            log_dir = Path(self.config.LOGS_DIR)
            log_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now().strftime('%Y%m%d')

            file_handler = logging.FileHandler(log_dir / f"gst_tds_{stamp}.log", encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(detailed_formatter)
            root_logger.addHandler(file_handler)

            error_handler = logging.FileHandler(log_dir / f"errors_{stamp}.log", encoding='utf-8')
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(detailed_formatter)
            root_logger.addHandler(error_handler)

        self.logger = logging.getLogger(__name__)
        self.logger.debug("Logging initialised")


def build_parser(config: Config):
    parser = argparse.ArgumentParser(description="Indian GST split and TDS gross-up calculator")
    sub = parser.add_subparsers(dest="command", required=True)

    gst = sub.add_parser("gst", help="GST split from supplier/buyer state names")
    gst.add_argument("supplier_state")
    gst.add_argument("buyer_state")
    gst.add_argument("amount", type=float)
    gst.add_argument("--rate", type=float, default=config.DEFAULT_GST_RATE, help="GST rate in percent")

    gstin = sub.add_parser("gstin", help="GST split from supplier/buyer GSTINs")
    gstin.add_argument("supplier_gstin")
    gstin.add_argument("buyer_gstin")
    gstin.add_argument("amount", type=float)
    gstin.add_argument("--rate", type=float, default=config.DEFAULT_GST_RATE, help="GST rate in percent")
    gstin.add_argument("--input", action="store_true", help="I am the buyer (Input GST)")

    tds = sub.add_parser("tds", help="Gross up a net amount received after TDS")
    tds.add_argument("net_amount", type=float)
    tds.add_argument("--percent", type=float, default=config.DEFAULT_TDS_PERCENT, help="TDS percent")

    register = sub.add_parser("register", help="Process an invoice/payment register file")
    register.add_argument("path", help=".xlsx, .csv or .tsv register")
    register.add_argument("--kind", choices=["gst", "tds"], default="gst")
    register.add_argument("--input", action="store_true", help="I am the buyer (Input GST)")
    register.add_argument("--output-dir", default=config.REPORTS_DIR)

    return parser


def run_register(args, config: Config, logger):
    df = read_register(args.path)
    logger.info(f"Loaded {len(df)} rows from {args.path}")

    if args.kind == "tds":
        processed = compute_tds_register(df, default_percent=config.DEFAULT_TDS_PERCENT)
        report_name = "TDSRegister"
    else:
        processed = compute_gst_register(
            df, default_rate=config.DEFAULT_GST_RATE, i_am_supplier=not args.input
        )
        report_name = "GSTRegister"

    summary = get_register_summary(processed)
    summary["report"] = save_tax_report(processed, output_dir=args.output_dir, report_name=report_name)
    return summary


def main(argv=None):
    config = Config()
    LogManager(config)
    logger = logging.getLogger(__name__)

    args = build_parser(config).parse_args(argv)

    try:
        if args.command == "gst":
            result = calculate_gst(args.supplier_state, args.buyer_state, args.amount, args.rate)
        elif args.command == "gstin":
            result = calculate_gst_from_gstin(
                args.supplier_gstin, args.buyer_gstin, args.amount, args.rate, i_am_supplier=not args.input
            )
        elif args.command == "tds":
            result = calculate_tds(args.net_amount, args.percent)
        else:
            result = run_register(args, config, logger)
    except TaxCalculationError as e:
        logger.error(f"{e.code}: {e}")
        print(f"{e.code}: {e}", file=sys.stderr)
        return EXIT_TAX_ERROR
    except (OSError, ValueError) as e:
        logger.error(f"❌ {args.command} failed: {e}")
        return EXIT_FAILED

    print(json.dumps(result, indent=2, ensure_ascii=False, default=str))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
