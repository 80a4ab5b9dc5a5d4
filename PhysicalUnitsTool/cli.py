"""
Minimal CLI for the unit engine (no GUI).

Usage examples:
  python -m PhysicalUnitsTool.cli convert --value "1 V" --to mV
  python -m PhysicalUnitsTool.cli convert --input readings.txt --to kHz
  python -m PhysicalUnitsTool.cli autorange --value "0.0045 mV" --policy PREFER_1_10 --candidates mV V kV
  python -m PhysicalUnitsTool.cli units --property VOLTAGE
  python -m PhysicalUnitsTool.cli check

Commands:
  - convert: re-express one quantity (or a file of quantities) in another unit
  - autorange: pick the best display unit under a policy
  - units: list the unit catalog
  - check: verify catalog tables and anchors; exits non-zero on inconsistency
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List
import csv
import os

from . import api
from . import io as IO
from . import settings as CFG
from .anchors import ANCHORS
from . import formulas as F
from .autorange import AutoRangePolicy
from .errors import InternalInconsistencyError, UnitsError
from .units import check_catalog


def _read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _fail_on_drift() -> None:
    guarded = {
        "ZERO_CELSIUS_K": F.ZERO_CELSIUS_K,
        "FAHRENHEIT_SLOPE": F.FAHRENHEIT_SLOPE,
        "ZERO_FAHRENHEIT_F": F.ZERO_FAHRENHEIT_F,
        "DBM_REF_W": F.DBM_REF_W,
    }
    mismatches: List[str] = []
    for k, runtime in guarded.items():
        if float(ANCHORS[k]) != float(runtime):
            mismatches.append(f"{k}: anchors={ANCHORS[k]!r} vs runtime={runtime!r}")
    if mismatches:
        raise SystemExit("Anchor drift detected (anchors vs runtime):\n" + "\n".join(" - "+m for m in mismatches))


def _write_output(obj: Any, path: str | None) -> None:
    if not path:
        json.dump(obj, sys.stdout, ensure_ascii=False)
        sys.stdout.write("\n")
        return
    ext = os.path.splitext(path)[1].lower()
    if ext == ".json":
        with open(path, "w", encoding="utf-8") as f:
            json.dump(obj, f, ensure_ascii=False)
    elif ext == ".csv":
        # list-of-dicts -> one row per dict; dict-of-lists (catalog) -> concatenated; a single dict -> one row
        if isinstance(obj, list):
            rows = obj
        elif isinstance(obj, dict) and obj and all(isinstance(v, list) for v in obj.values()):
            rows = [r for v in obj.values() for r in v]
        elif isinstance(obj, dict) and obj and all(isinstance(v, dict) for v in obj.values()):
            rows = [{"name": k, **v} for k, v in obj.items()]
        else:
            rows = [obj]
        keys: List[str] = []
        for r in rows:
            for k in r.keys():
                if k not in keys and not isinstance(r[k], (list, dict)):
                    keys.append(k)
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(keys)
            for r in rows:
                w.writerow([r.get(k, "") for k in keys])
    else:
        raise SystemExit(f"Unsupported output extension: {ext} (use .json or .csv)")


def _values_from_args(args: argparse.Namespace):
    if args.input:
        return IO.parse_quantity_lines(_read_text(args.input))
    if args.value is None:
        raise SystemExit("one of --value or --input is required")
    return [IO.parse_quantity(args.value)]


def cmd_convert(args: argparse.Namespace) -> int:
    values = _values_from_args(args)
    out = [
        api.convert_quantity({"magnitude": v.magnitude, "from_unit": v.unit, "to_unit": args.to})
        for v in values
    ]
    _write_output(out[0] if args.value is not None and not args.input else out, args.output)
    return 0


def cmd_autorange(args: argparse.Namespace) -> int:
    values = _values_from_args(args)
    out: List[Dict[str, Any]] = []
    for v in values:
        inputs: Dict[str, Any] = {
            "magnitude": v.magnitude,
            "from_unit": v.unit,
            "policy": args.policy or CFG.DEFAULT_POLICY,
            "strict_property": args.strict if args.strict is not None else CFG.STRICT_PROPERTY,
            "round_magnitude": args.round if args.round is not None else CFG.ROUND_MAGNITUDE,
            "include_scores": args.scores,
        }
        if args.candidates is not None:
            inputs["candidates"] = args.candidates
        out.append(api.auto_range_quantity(inputs))
    _write_output(out[0] if args.value is not None and not args.input else out, args.output)
    return 0


def cmd_units(args: argparse.Namespace) -> int:
    if args.properties:
        _write_output(api.list_properties(), args.output)
    else:
        _write_output(api.list_units(args.property), args.output)
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    _fail_on_drift()
    try:
        summary = check_catalog()
    except InternalInconsistencyError as e:
        sys.stderr.write(f"Catalog inconsistency: {e}\n")
        return 2
    _write_output({"status": "ok", **summary}, args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="PhysicalUnitsTool.cli", description="Unit conversion and auto-range CLI (no GUI)")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Logging level for diagnostics on stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_conv = sub.add_parser("convert", help="Convert a quantity to another unit")
    p_conv.add_argument("--value", required=False, help='Quantity, e.g. "4.5 mV"')
    p_conv.add_argument("--input", required=False, help="Text file with one quantity per line")
    p_conv.add_argument("--to", required=True, help="Target unit symbol, e.g. kHz")
    p_conv.add_argument("--output", required=False, help="Output file (.json or .csv)")
    p_conv.set_defaults(func=cmd_convert)

    p_ar = sub.add_parser("autorange", help="Pick the best display unit for a quantity")
    p_ar.add_argument("--value", required=False, help='Quantity, e.g. "0.0045 mV"')
    p_ar.add_argument("--input", required=False, help="Text file with one quantity per line")
    p_ar.add_argument("--policy", choices=list(AutoRangePolicy.__members__), default=None)
    p_ar.add_argument("--candidates", nargs="*", default=None,
                      help="Candidate unit symbols (default: the prefix units of the value's property, no dBm/C/F)")
    p_ar.add_argument("--strict", action=argparse.BooleanOptionalAction, default=None,
                      help="Only consider candidates of the value's base property (--no-strict allows s -> Hz)")
    p_ar.add_argument("--round", action=argparse.BooleanOptionalAction, default=None,
                      help="Round magnitudes to significant digits before scoring")
    p_ar.add_argument("--scores", action="store_true", help="Include per-candidate scores in output")
    p_ar.add_argument("--output", required=False, help="Output file (.json or .csv)")
    p_ar.set_defaults(func=cmd_autorange)

    p_units = sub.add_parser("units", help="List the unit catalog")
    p_units.add_argument("--property", required=False, help="Base property name, e.g. VOLTAGE")
    p_units.add_argument("--properties", action="store_true", help="List base properties instead of units")
    p_units.add_argument("--output", required=False, help="Output file (.json or .csv)")
    p_units.set_defaults(func=cmd_units)

    p_check = sub.add_parser("check", help="Verify catalog tables and anchor constants")
    p_check.add_argument("--output", required=False, help="Output file (.json or .csv)")
    p_check.set_defaults(func=cmd_check)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    try:
        return args.func(args)
    except (UnitsError, ValueError) as e:
        raise SystemExit(f"error: {e}") from e


if __name__ == "__main__":
    raise SystemExit(main())
