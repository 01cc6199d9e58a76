from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .calculator import PayrollCalculator
from .codec import dump_result, from_json
from .config import get_settings
from .logging import configure_logging
from .models import PaystubData
from .options import Margins, RenderOptions
from .pipeline import generate
from .renderer import Renderer
from .tax_tables import TaxTableRepository
from .validation import validate_paystub


def read_data(path: str) -> PaystubData:
    if path == "-":
        return from_json(sys.stdin.read())
    return from_json(Path(path).read_text(encoding="utf-8"))


def build_calculator(version: str | None) -> PayrollCalculator:
    settings = get_settings()
    return PayrollCalculator.from_repository(TaxTableRepository(), version or settings.tax_table_version)


def run_calculate(args: argparse.Namespace) -> int:
    data = read_data(args.input)
    calculator = build_calculator(args.tax_table)
    result = calculator.compute(data.earnings, data.tax, data.deductions, data.personal.state)
    print(json.dumps({"result": dump_result(result), "errors": validate_paystub(data)}, indent=2))
    return 0


def run_validate(args: argparse.Namespace) -> int:
    errors = validate_paystub(read_data(args.input))
    for error in errors:
        print(error)
    if not errors:
        print("OK")
    return 1 if errors else 0


def run_render(args: argparse.Namespace) -> int:
    settings = get_settings()
    data = read_data(args.input)
    options = RenderOptions(
        watermark=args.watermark,
        page_format=args.format or settings.page_format,
        margins=Margins.uniform(settings.margin),
    )
    result = generate(data, options, calculator=build_calculator(args.tax_table), renderer=Renderer(settings=settings))

    # the fallback is HTML, never write it under a .pdf name
    output_path = Path(args.output).with_suffix(f".{result.kind}")
    output_path.write_bytes(result.content)
    print(f"Pay stub exported to {output_path}")
    return 0


def list_tables(_: argparse.Namespace) -> int:
    for version in TaxTableRepository().available_versions():
        print(version)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pay stub calculator and generator")
    parser.add_argument("--log-level", default=None, help="Override PAYSTUB_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    calc_cmd = subparsers.add_parser("calculate", help="Compute payroll figures for a pay stub JSON file")
    calc_cmd.add_argument("input", help="Pay stub JSON file, or - for stdin")
    calc_cmd.add_argument("--tax-table", help="Tax table version")
    calc_cmd.set_defaults(func=run_calculate)

    validate_cmd = subparsers.add_parser("validate", help="Check a pay stub JSON file for input errors")
    validate_cmd.add_argument("input", help="Pay stub JSON file, or - for stdin")
    validate_cmd.set_defaults(func=run_validate)

    render_cmd = subparsers.add_parser("render", help="Render a pay stub to PDF (HTML on fallback)")
    render_cmd.add_argument("input", help="Pay stub JSON file, or - for stdin")
    render_cmd.add_argument("--output", required=True, help="Output file; the extension follows the result")
    render_cmd.add_argument("--watermark", action="store_true", help="Stamp the preview watermark")
    render_cmd.add_argument("--format", choices=["Letter", "A4"])
    render_cmd.add_argument("--tax-table", help="Tax table version")
    render_cmd.set_defaults(func=run_render)

    tables_cmd = subparsers.add_parser("tax-tables", help="List available tax table versions")
    tables_cmd.set_defaults(func=list_tables)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level or get_settings().log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
