import argparse
import json
import logging
import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor

from engine_factory import ALL_RULES, build_engine
from pointless_config import load_config
from unit_loader import LoadUnitError, load_unit_file

logger = logging.getLogger("pointless")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_DIAGNOSTICS = 3

SUGGESTIONS = {
    "pointer-return": "Return the struct by value; callers that need a pointer can still take its address.",
    "pointer-receiver": "Declare the method on the value type; the receiver is copied and never written.",
    "pointer-sequence-return": "Return a slice of values so elements are stored contiguously.",
    "pointer-sequence-variable": "Store values in the slice instead of pointers to separately allocated structs.",
}


def _round_ms(value):
    return round(max(0.0, float(value)), 3)


def _positive_int(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def _rule_item(diagnostic):
    category = diagnostic.category.value
    return {
        "severity": "warning",
        "source": "rule",
        "file": diagnostic.file,
        "line": diagnostic.line,
        "column": diagnostic.column,
        "category": category,
        "message": diagnostic.message,
        "suggestion": SUGGESTIONS.get(category),
    }


def _front_end_items(unit):
    return [
        {
            "severity": "error",
            "source": "front-end",
            "file": unit.file,
            "line": error.line or None,
            "column": error.column or None,
            "category": None,
            "message": error.message,
            "suggestion": "Fix the type errors and regenerate the unit dump.",
        }
        for error in unit.errors
    ]


def _limited_analysis_item(unit, first_error_line=None):
    return {
        "severity": "warning",
        "source": "runtime",
        "file": unit.file,
        "line": first_error_line if isinstance(first_error_line, int) else None,
        "column": None,
        "category": None,
        "message": (
            "Rule-based checks were skipped because the front end reported errors. "
            "Fix them first, then run analysis again."
        ),
        "suggestion": "Resolve type-check errors first; the pointer checks need fully resolved types.",
    }


def _summary(items):
    out = {"error": 0, "warning": 0, "info": 0}
    by_category = {}
    for item in items:
        sev = item.get("severity", "info")
        if sev not in out:
            sev = "info"
        out[sev] += 1

        category = item.get("category")
        if category:
            by_category[category] = by_category.get(category, 0) + 1

    out["total"] = out["error"] + out["warning"] + out["info"]
    out["by_category"] = by_category
    return out


def _sort_items(items):
    severity_rank = {"error": 0, "warning": 1, "info": 2}
    return sorted(
        items,
        key=lambda i: (
            i.get("line") if isinstance(i.get("line"), int) else 10**9,
            i.get("column") if isinstance(i.get("column"), int) else 0,
            severity_rank.get(i.get("severity", "info"), 3),
        ),
    )


def _timing_ms(load_ms, analysis_ms):
    return {
        "load": _round_ms(load_ms),
        "analysis": _round_ms(analysis_ms),
        "total": _round_ms(load_ms + analysis_ms),
    }


def analyze_file(filename, engine):
    """
    Loads one unit dump and runs the engine over it. Returns a result
    record; load failures are reported in the record, never raised.
    """
    display_name = os.path.basename(filename)

    load_start = time.perf_counter()
    try:
        unit = load_unit_file(filename)
    except LoadUnitError as exc:
        load_ms = (time.perf_counter() - load_start) * 1000.0
        message = f"Failed to load {display_name}: {exc}"
        return {
            "file": display_name,
            "path": os.path.realpath(filename),
            "ok": False,
            "error": message,
            "items": [
                {
                    "severity": "error",
                    "source": "runtime",
                    "file": filename,
                    "line": None,
                    "column": None,
                    "category": None,
                    "message": message,
                    "suggestion": "Check that the file exists and was written by the front end.",
                }
            ],
            "summary": {"error": 1, "warning": 0, "info": 0, "total": 1, "by_category": {}},
            "timing_ms": _timing_ms(load_ms, 0.0),
            "diagnostics": 0,
        }
    load_ms = (time.perf_counter() - load_start) * 1000.0

    # Excluded files are skipped entirely, front-end errors included.
    front_end_items = [] if engine.exclusions.should_exclude(unit.file) else _front_end_items(unit)
    rule_items = []
    analysis_ms = 0.0
    if not front_end_items:
        analysis_start = time.perf_counter()
        rule_items = [_rule_item(d) for d in engine.run(unit)]
        analysis_ms = (time.perf_counter() - analysis_start) * 1000.0

    items = list(front_end_items) + rule_items
    if front_end_items:
        error_lines = [item.get("line") for item in front_end_items]
        first_error_line = min((ln for ln in error_lines if isinstance(ln, int)), default=None)
        items.append(_limited_analysis_item(unit, first_error_line))

    items = _sort_items(items)
    return {
        "file": unit.file,
        "path": os.path.realpath(filename),
        "ok": not front_end_items,
        "error": None if not front_end_items else "front end reported errors",
        "items": items,
        "summary": _summary(items),
        "timing_ms": _timing_ms(load_ms, analysis_ms),
        "diagnostics": len(rule_items),
    }


def build_parser():
    parser = argparse.ArgumentParser(
        prog="pointless",
        description="suggests using value types instead of pointers for small structs",
        epilog=(
            "Configuration: create .pointless.yaml in your project root:\n"
            "    threshold: 1024  # bytes\n"
            "    exclude:\n"
            "      - \"*_test.go\"\n"
            "      - \"vendor/**\""
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("dumps", nargs="+", metavar="DUMP", help="unit dump files written by the front end")
    parser.add_argument("--threshold", type=_positive_int, help="size threshold in bytes (default: 1024)")
    parser.add_argument("--config", help="configuration file (default: search for .pointless.yaml)")
    parser.add_argument("--rules", help="comma-separated rules to run: " + ", ".join(ALL_RULES))
    parser.add_argument("--jobs", type=_positive_int, default=1, help="units to analyze in parallel")
    parser.add_argument("--text", action="store_true", help="print text instead of JSON")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    return parser


def _print_text(results):
    for idx, result in enumerate(results):
        if len(results) > 1:
            print(f"=== {result['file']} ===")

        for item in result["items"]:
            location = item.get("file") or result["file"]
            if isinstance(item.get("line"), int):
                location += f":{item['line']}"
                if isinstance(item.get("column"), int):
                    location += f":{item['column']}"
            prefix = "" if item.get("source") == "rule" else f"[{item['severity'].upper()}] "
            print(f"{location}: {prefix}{item.get('message', '').strip()}")

        timing = result["timing_ms"]
        print(f"[timing] load: {timing['load']} ms, analysis: {timing['analysis']} ms, total: {timing['total']} ms.")

        if idx < len(results) - 1:
            print()


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    enabled_rules = None
    if args.rules is not None:
        enabled_rules = [r.strip().lower() for r in args.rules.split(",") if r.strip()]
        unknown = sorted({r for r in enabled_rules if r not in ALL_RULES})
        if unknown:
            error = f"Unknown rule(s): {', '.join(unknown)}. Valid rules: {', '.join(ALL_RULES)}."
            if args.text:
                print(error)
            else:
                print(json.dumps({"ok": False, "error": error}))
            return EXIT_FAILURE

    # Config is loaded once here and is read-only for every unit analysis.
    config, warning = load_config(args.config)
    if warning:
        logger.warning("failed to load config: %s", warning)
    if args.threshold is not None:
        config = config.with_threshold(args.threshold)

    engine = build_engine(config, enabled_rules)
    selected_rules = [rule.name for rule in engine.rules]

    overall_start = time.perf_counter()
    if args.jobs > 1 and len(args.dumps) > 1:
        with ThreadPoolExecutor(max_workers=args.jobs) as pool:
            results = list(pool.map(lambda f: analyze_file(f, engine), args.dumps))
    else:
        results = [analyze_file(f, engine) for f in args.dumps]

    if args.text:
        _print_text(results)
    else:
        total_ms = _round_ms((time.perf_counter() - overall_start) * 1000.0)
        print(
            json.dumps(
                {
                    "ok": all(result["ok"] for result in results),
                    "results": results,
                    "timing_ms": {"total": total_ms},
                    "rules": selected_rules,
                    "threshold": config.threshold,
                }
            )
        )

    if not all(result["ok"] for result in results):
        return EXIT_FAILURE
    if any(result["diagnostics"] for result in results):
        return EXIT_DIAGNOSTICS
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
