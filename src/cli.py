"""CLI for computing project IRR and managing the local project store.

Usage:
    python -m src.cli irr project.json
    python -m src.cli npv project.json --rate 0.08
    python -m src.cli list
    python -m src.cli show <project-id>
    python -m src.cli export <project-id> > project.json
    python -m src.cli import project.json
"""

import argparse
import logging
import sys
from pathlib import Path

from src.config import settings
from src.data.storage import ProjectNotFoundError, ProjectStore, StorageError
from src.engine.calculator import compute_project_irr
from src.engine.errors import InvalidRateError
from src.engine.npv import evaluate_npv
from src.engine.periods import build_cash_flow_series
from src.models.records import ProjectRecord
from src.models.results import IRRResult
from src.models.validation import ProjectValidationError, to_project, validate_project


def _pct(v) -> str:
    """Format a decimal/float as a percentage string."""
    return f"{float(v) * 100:.2f}%"


def _dollar(v) -> str:
    return f"${float(v):,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def print_series(series: list[float]) -> None:
    print("  Cash flows:")
    for period, cf in enumerate(series):
        print(f"    [{period:>4}]  {_dollar(cf):>16}")


def print_result(name: str, series: list[float], result: IRRResult) -> None:
    _header(f"IRR: {name}")
    print_series(series)
    print()
    if result.succeeded:
        print(f"  IRR:              {_pct(result.irr)} per period")
        print(f"  NPV at IRR:       {result.npv:.6f}")
    else:
        print("  IRR:              N/A")
    if result.diagnostic is not None:
        d = result.diagnostic
        print(f"  [{d.severity.value.upper():>7}]  {d.kind.value}: {d.message}")
    print()


def print_project_list(records: list[ProjectRecord]) -> None:
    _header("Projects")
    if not records:
        print("  (none)")
    for r in records:
        irr = _pct(r.calculated_irr) if r.calculated_irr is not None else "Not calculated"
        print(f"  {r.id}  {r.name:<30}  IRR: {irr}")
    print()


def _load_record(path: str) -> ProjectRecord:
    return ProjectStore.import_project(Path(path).read_bytes())


def _fail(message: str) -> int:
    print(f"error: {message}", file=sys.stderr)
    return 1


def cmd_irr(args, store: ProjectStore) -> int:
    record = _load_record(args.file)
    project = to_project(record)
    series = build_cash_flow_series(
        project.initial_investment, project.cash_flows, project.sale_proceeds
    )
    result = compute_project_irr(
        project,
        initial_guess=args.guess,
        max_iterations=settings.irr_max_iterations,
        precision=settings.irr_precision,
    )
    print_result(record.name or args.file, series, result)
    return 0 if result.succeeded else 2


def cmd_npv(args, store: ProjectStore) -> int:
    project = to_project(_load_record(args.file))
    series = build_cash_flow_series(
        project.initial_investment, project.cash_flows, project.sale_proceeds
    )
    print(f"NPV at {_pct(args.rate)}: {_dollar(evaluate_npv(series, args.rate))}")
    return 0


def cmd_list(args, store: ProjectStore) -> int:
    print_project_list(store.list_all())
    return 0


def cmd_show(args, store: ProjectStore) -> int:
    record = store.get(args.project_id)
    if record is None:
        return _fail(f"Project with ID {args.project_id} not found")
    print(record.model_dump_json(by_alias=True, indent=2))
    return 0


def cmd_export(args, store: ProjectStore) -> int:
    print(store.export_project(args.project_id))
    return 0


def cmd_import(args, store: ProjectStore) -> int:
    record = _load_record(args.file)
    result = validate_project(record)
    if not result.is_valid:
        raise ProjectValidationError(result.errors)
    saved = store.save(record)
    print(f"Imported {saved.name} ({saved.id})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Property investment IRR calculator")
    parser.add_argument("--db", default=settings.database_path, help="SQLite database path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("irr", help="Compute IRR for a project JSON file")
    p.add_argument("file")
    p.add_argument("--guess", type=float, default=settings.irr_initial_guess, help="Initial IRR guess")
    p.set_defaults(func=cmd_irr)

    p = sub.add_parser("npv", help="Compute NPV for a project JSON file at a given rate")
    p.add_argument("file")
    p.add_argument("--rate", type=float, required=True, help="Discount rate per period, e.g. 0.08")
    p.set_defaults(func=cmd_npv)

    p = sub.add_parser("list", help="List stored projects")
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("show", help="Print a stored project")
    p.add_argument("project_id")
    p.set_defaults(func=cmd_show)

    p = sub.add_parser("export", help="Export a stored project as JSON")
    p.add_argument("project_id")
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("import", help="Import a project JSON file into the store")
    p.add_argument("file")
    p.set_defaults(func=cmd_import)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else settings.log_level)

    try:
        store = ProjectStore(db_path=args.db)
        return args.func(args, store)
    except ProjectValidationError as e:
        for err in e.errors:
            print(f"  {err.field}: {err.message}", file=sys.stderr)
        return _fail("project is invalid")
    except (StorageError, ProjectNotFoundError, InvalidRateError, OSError) as e:
        return _fail(str(e))
    except OverflowError:
        return _fail("result is out of floating point range")


if __name__ == "__main__":
    sys.exit(main())
