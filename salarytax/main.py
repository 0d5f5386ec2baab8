from __future__ import annotations

import argparse
import logging
import os
from decimal import Decimal, InvalidOperation
from typing import Any, Literal, Sequence

from rich.console import Console
from rich.table import Table

from salarytax.config import get_settings
from salarytax.core.engine import compute_or_default, default_input
from salarytax.core.models import ComputationInput, ComputationResult
from salarytax.core.period import period_view
from salarytax.share import encode_state, restore_state
from salarytax.tax.dispatch import UnknownRegimeError, get_regime, list_regimes

logger = logging.getLogger("salarytax")

ColorPreference = Literal["auto", "always", "never"]

_TRUE_WORDS = {"true", "yes", "on", "y"}
_FALSE_WORDS = {"false", "no", "off", "n"}


def _resolve_color_preference(pref: ColorPreference) -> ColorPreference:
    if pref == "auto" and os.getenv("NO_COLOR"):
        return "never"
    return pref


def _get_console(pref: ColorPreference) -> Console | None:
    resolved = _resolve_color_preference(pref)
    if resolved == "never":
        return None
    return Console(force_terminal=resolved == "always")


def _console_print(console: Console | None, message: str) -> None:
    if console is not None:
        console.print(message)
    else:
        print(message)


def _print_rows(console: Console | None, title: str, columns: list[str], rows: Sequence[Sequence[str]]) -> None:
    if console is not None:
        table = Table(title=title, expand=False)
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*row)
        console.print(table)
        return
    print(f"\n{title}:")
    for row in rows:
        print("  " + " | ".join(row))


def format_money(value: Decimal, currency: str) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{currency}{abs(value):,.2f}"


def format_rate(value: Decimal) -> str:
    return f"{value * 100:.1f}%"


def _coerce_param_value(raw: str) -> Any:
    text = raw.strip()
    lower = text.lower()
    if lower in _TRUE_WORDS:
        return True
    if lower in _FALSE_WORDS:
        return False
    try:
        return Decimal(text.replace(",", ""))
    except InvalidOperation:
        return text


def parse_params(pairs: Sequence[str] | None) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for pair in pairs or ():
        key, sep, value = pair.partition("=")
        key = key.strip().replace("-", "_")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got '{pair}'")
        params[key] = _coerce_param_value(value)
    return params


def _build_input(args: argparse.Namespace, console: Console | None) -> ComputationInput:
    settings = get_settings()
    base = restore_state(args.state, default_input(settings.default_regime))

    regime_id = (args.regime or base.regime_id).strip().lower()
    if regime_id != base.regime_id:
        try:
            base = default_input(regime_id, base.gross_amount, base.period)
        except UnknownRegimeError:
            _console_print(
                console,
                f"Unknown regime '{regime_id}'; using {settings.default_regime} instead.",
            )
            base = default_input(settings.default_regime, base.gross_amount, base.period)

    update: dict[str, Any] = {}
    if args.gross is not None:
        update["gross_amount"] = args.gross
    if args.period is not None:
        update["period"] = args.period
    if args.standard_deduction is not None:
        update["standard_deduction"] = args.standard_deduction
    if args.other_deductions is not None:
        update["other_deductions"] = args.other_deductions
    if args.params:
        update["regime_params"] = {**base.regime_params, **args.params}
    if not update:
        return base
    return ComputationInput.model_validate({**base.model_dump(), **update})


def _print_summary(result: ComputationResult, label: str, console: Console | None) -> None:
    cur = result.currency
    rows = [
        ("Gross", format_money(result.gross_annual, cur)),
        ("Deductions", format_money(result.deductions, cur)),
        ("Taxable income", format_money(result.taxable_base, cur)),
        ("Income tax", format_money(result.band_tax, cur)),
    ]
    rows.extend((extra.label, format_money(extra.amount, cur)) for extra in result.extras)
    rows.extend(
        [
            ("Total tax", format_money(result.total_tax, cur)),
            ("Net take-home", format_money(result.net_annual, cur)),
            ("Effective rate", format_rate(result.effective_rate)),
            ("Marginal rate", format_rate(result.marginal_rate)),
        ]
    )
    _print_rows(console, f"Summary ({label})", ["Metric", "Value"], rows)

    if not result.slices:
        _console_print(console, "No taxable income in current setup.")
        return
    band_rows = [
        (
            f"Band {index} @ {s.rate * 100:.0f}%",
            format_money(s.amount, cur),
            format_money(s.tax, cur),
        )
        for index, s in enumerate(result.slices, start=1)
    ]
    _print_rows(console, "Tax band breakdown", ["Band", "Income", "Tax"], band_rows)


def _run_compute(args: argparse.Namespace, console: Console | None) -> None:
    in_ = _build_input(args, console)
    result, fell_back = compute_or_default(in_)
    if fell_back:
        _console_print(console, f"Unknown regime '{in_.regime_id}'; showing {result.regime_id} instead.")
    regime = get_regime(result.regime_id)
    display_period = args.display_period or in_.period
    _print_summary(period_view(result, display_period), f"{regime.label}, {display_period}", console)
    if regime.notes:
        _console_print(console, regime.notes)


def _run_regimes(console: Console | None) -> None:
    rows = [(r.id, r.label, r.currency, r.notes or "") for r in list_regimes()]
    _print_rows(console, "Supported regimes", ["Id", "Label", "Currency", "Notes"], rows)


def _run_bands(args: argparse.Namespace, console: Console | None) -> None:
    regime = get_regime(args.regime or get_settings().default_regime)
    rows = []
    lower = Decimal("0")
    for band in regime.bands(args.params):
        upper = "no limit" if band.unbounded else format_money(band.up_to, regime.currency)
        rows.append((format_money(lower, regime.currency), upper, format_rate(band.rate)))
        if not band.unbounded:
            lower = band.up_to
    _print_rows(console, f"{regime.label} bands", ["From", "Up to", "Rate"], rows)


def _run_share(args: argparse.Namespace, console: Console | None) -> None:
    in_ = _build_input(args, console)
    print(encode_state(in_))


def _run_serve(args: argparse.Namespace) -> None:
    import uvicorn

    uvicorn.run("salarytax.api.http:app", host=args.host, port=args.port, log_level=args.log_level.lower())


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


def _decimal_arg(text: str) -> Decimal:
    try:
        return Decimal(text.replace(",", "").strip())
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"'{text}' is not a number") from exc


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="salarytax",
        description="Salary tax and take-home pay calculator (India, US, UK). Rates are illustrative.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="compute",
        choices=["compute", "regimes", "bands", "share", "serve"],
        help="Action to perform.",
    )
    parser.add_argument("--regime", help="Regime id, e.g. india-new, india-old, us, uk.")
    parser.add_argument("--gross", type=_decimal_arg, help="Gross salary for the input period.")
    parser.add_argument("--period", choices=["annual", "monthly"], help="Period of --gross.")
    parser.add_argument("--display-period", choices=["annual", "monthly"], help="Period used for output.")
    parser.add_argument("--standard-deduction", type=_decimal_arg)
    parser.add_argument("--other-deductions", type=_decimal_arg)
    parser.add_argument(
        "--param",
        dest="param_pairs",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Regime parameter, e.g. filing=married or personal_allowance=15000. Repeatable.",
    )
    parser.add_argument("--state", help="Shared state string to restore before applying options.")
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output preference (default: auto).",
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_const",
        const="never",
        help="Alias for --color never.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Bind address for serve.")
    parser.add_argument("--port", type=int, default=8000, help="Port for serve.")
    args = parser.parse_args(argv)
    try:
        args.params = parse_params(args.param_pairs)
    except ValueError as exc:
        parser.error(str(exc))
    return args


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    _configure_logging(args.log_level)
    console = _get_console(args.color)
    if args.command == "regimes":
        _run_regimes(console)
        return
    if args.command == "bands":
        try:
            _run_bands(args, console)
        except UnknownRegimeError as exc:
            raise SystemExit(f"error: {exc.args[0]}") from exc
        return
    if args.command == "share":
        _run_share(args, console)
        return
    if args.command == "serve":
        _run_serve(args)
        return
    _run_compute(args, console)


if __name__ == "__main__":
    main()
