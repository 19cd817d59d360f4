import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__
from .compatibility import calculate_compatibility
from .database import SqlRepository
from .env import get_settings, load_env
from .logger import get_logger
from .models import CompatibilityLevel, CompatibilityResult, JobStatus
from .ranking import filter_by_level, rank_jobs_for_candidate, summarize_levels
from .repository import JsonStoreRepository, WritableRepository
from .schema import VALIDATORS

KINDS = {
    "candidate": "candidates",
    "company": "companies",
    "job": "jobs",
}


def ingest_record(kind: str, data: Dict[str, Any], repository: WritableRepository) -> Dict[str, Any]:
    collection = KINDS[kind]
    errors = VALIDATORS[collection](data)
    if errors:
        # Report, don't crash
        return {"id": None, "status": "validation_error", "errors": errors}
    return repository.save(collection, data)


def open_repository(args: argparse.Namespace) -> WritableRepository:
    if args.db:
        return SqlRepository(Path(args.db))
    return JsonStoreRepository(Path(args.store))


def _read_json(path_str: str) -> Any:
    input_path = Path(path_str)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise SystemExit(f"Invalid JSON in {input_path}: {e}")


def _records(payload: Any) -> List[Dict[str, Any]]:
    records = payload if isinstance(payload, list) else [payload]
    if not all(isinstance(r, dict) for r in records):
        raise SystemExit("Input must be a JSON object or a list of objects")
    return records


def _print_result(position: int, result: CompatibilityResult, breakdown: bool = False) -> None:
    company = result.company.name if result.company and result.company.name else "Unknown company"
    print(f"{position}. [{result.compatibility_score:3d}] {result.compatibility_level.value:<6} "
          f"{result.job.title} - {company} (id {result.job_id})")
    for reason in result.reasons:
        print(f"     - {reason}")
    if breakdown:
        for name, value in result.breakdown.items():
            print(f"     {name:<10} {value:6.2f}")


def cmd_ingest(args: argparse.Namespace) -> None:
    repository = open_repository(args)
    counts = {"new": 0, "updated": 0, "no-change": 0, "validation_error": 0}
    for data in _records(_read_json(args.input)):
        outcome = ingest_record(args.kind, data, repository)
        status = outcome["status"]
        counts[status] += 1
        if status == "validation_error":
            print(f"[validation_error] {', '.join(outcome['errors'])}")
            continue
        print(f"[{status}] {outcome['id']}")
    print(" ".join(f"{k}={v}" for k, v in counts.items()))


def cmd_validate(args: argparse.Namespace) -> None:
    validator = VALIDATORS[KINDS[args.kind]]
    invalid = False
    for i, data in enumerate(_records(_read_json(args.input)), 1):
        errors = validator(data)
        if errors:
            invalid = True
            print(f"Record {i} invalid:")
            for e in errors:
                print(f" - {e}")
    if invalid:
        raise SystemExit(2)
    print("Valid")


def cmd_rank(args: argparse.Namespace) -> None:
    repository = open_repository(args)
    results = rank_jobs_for_candidate(repository, args.cpf)
    level = CompatibilityLevel(args.level) if args.level else None
    results = filter_by_level(results, level)
    summary = summarize_levels(results)
    if args.limit is not None:
        results = results[:args.limit]

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))
        return

    if not results:
        print("No compatible jobs found.")
        return
    print(f"{summary['total']} jobs: High={summary['High']} Medium={summary['Medium']} Low={summary['Low']}\n")
    for position, result in enumerate(results, 1):
        _print_result(position, result)


def cmd_score(args: argparse.Namespace) -> None:
    repository = open_repository(args)
    candidate = repository.get_candidate_profile(args.cpf)
    if candidate is None:
        raise SystemExit(f"Candidate not found: {args.cpf}")
    job = repository.get_job_posting(args.job)
    if job is None:
        raise SystemExit(f"Job not found: {args.job}")
    company = repository.get_company_profile(job.company_cnpj) if job.company_cnpj else None
    result = calculate_compatibility(candidate, job, company)
    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return
    _print_result(1, result, breakdown=True)


def cmd_list(args: argparse.Namespace) -> None:
    repository = open_repository(args)
    if args.company:
        jobs = (repository.get_active_jobs_by_company(args.company) if args.active
                else repository.get_jobs_by_company(args.company))
    else:
        jobs = repository.get_active_job_postings() if args.active else repository.get_all_job_postings()
    if not jobs:
        print("No jobs in store.")
        return
    print(f"Found {len(jobs)} jobs:\n")
    for job in jobs:
        print(f"ID: {job.id}")
        print(f"  Title: {job.title}")
        print(f"  Area: {job.area}")
        print(f"  Company: {job.company_cnpj}")
        print(f"  City: {job.city}")
        print(f"  Work model: {job.work_model.value if job.work_model else '-'}")
        print(f"  Status: {job.status.value}")
        print()


def cmd_set_status(args: argparse.Namespace) -> None:
    repository = open_repository(args)
    if not repository.update_job_status(args.job, JobStatus(args.status)):
        raise SystemExit(f"Job not found: {args.job}")
    print(f"Job {args.job}: {args.status}")


def build_parser(store_default: str = "data/store.json", db_default: Optional[str] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jobmatch", description="Candidate-job compatibility ranking")
    parser.add_argument("--version", action="store_true", help="Show version")

    backend = argparse.ArgumentParser(add_help=False)
    backend.add_argument("--store", default=store_default, help=f"Path to JSON store (default: {store_default})")
    backend.add_argument("--db", default=db_default, help="Path to SQLite database (overrides --store)")

    subparsers = parser.add_subparsers(dest="command")
    ing = subparsers.add_parser("ingest", parents=[backend], help="Validate and store candidate/company/job JSON")
    ing.add_argument("--kind", required=True, choices=sorted(KINDS), help="Record kind")
    ing.add_argument("--input", required=True, help="Path to a JSON object or list of objects")
    ing.set_defaults(func=cmd_ingest)

    val = subparsers.add_parser("validate", help="Validate candidate/company/job JSON")
    val.add_argument("--kind", required=True, choices=sorted(KINDS), help="Record kind")
    val.add_argument("--input", required=True, help="Path to a JSON object or list of objects")
    val.set_defaults(func=cmd_validate)

    rnk = subparsers.add_parser("rank", parents=[backend], help="Rank active jobs for a candidate")
    rnk.add_argument("--cpf", required=True, help="Candidate CPF")
    rnk.add_argument("--level", choices=[level.value for level in CompatibilityLevel], help="Only this level")
    rnk.add_argument("--limit", type=int, help="Show at most N jobs")
    rnk.add_argument("--json", action="store_true", help="Print results as JSON")
    rnk.set_defaults(func=cmd_rank)

    scr = subparsers.add_parser("score", parents=[backend], help="Score one job for a candidate")
    scr.add_argument("--cpf", required=True, help="Candidate CPF")
    scr.add_argument("--job", required=True, help="Job id")
    scr.add_argument("--json", action="store_true", help="Print result as JSON")
    scr.set_defaults(func=cmd_score)

    lst = subparsers.add_parser("list", parents=[backend], help="List stored jobs")
    lst.add_argument("--company", help="Only jobs of this CNPJ")
    lst.add_argument("--active", action="store_true", help="Only active jobs")
    lst.set_defaults(func=cmd_list)

    sts = subparsers.add_parser("set-status", parents=[backend], help="Change a job's status")
    sts.add_argument("--job", required=True, help="Job id")
    sts.add_argument("--status", required=True, choices=[s.value for s in JobStatus], help="New status")
    sts.set_defaults(func=cmd_set_status)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    load_env()
    settings = get_settings()
    get_logger(level=settings.log_level, log_dir=settings.log_dir)

    parser = build_parser(
        store_default=str(settings.store_path),
        db_default=str(settings.db_path) if settings.db_path else None,
    )
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
