"""
Rank active job postings for a candidate.

Resolves everything through an injected JobBoardRepository and scores each
active posting with calculate_compatibility.
"""

from typing import Dict, Iterable, List, Optional

from .compatibility import calculate_compatibility
from .logger import StructuredLogger, get_logger
from .models import CompatibilityLevel, CompatibilityResult
from .normalize import clean_document_id
from .repository import JobBoardRepository


def rank_jobs_for_candidate(
    repository: JobBoardRepository,
    candidate_cpf: str,
    logger: Optional[StructuredLogger] = None,
) -> List[CompatibilityResult]:
    """
    Score every active job posting for a candidate, best first.

    Args:
        repository: Data-access collaborator
        candidate_cpf: Candidate CPF (formatting characters are ignored)
        logger: Logger to report to (default: global logger)

    Returns:
        Results sorted by compatibility_score descending; ties keep the
        repository's enumeration order. Empty when the candidate is unknown.
    """
    logger = logger or get_logger()
    cpf = clean_document_id(candidate_cpf)
    logger.record_ranking()

    candidate = repository.get_candidate_profile(cpf)
    if candidate is None:
        logger.record_missing_candidate()
        logger.warning("Candidate profile not found", cpf=cpf)
        return []

    jobs = [job for job in repository.get_active_job_postings() if job.is_active]

    results = []
    companies = {}
    for job in jobs:
        cnpj = clean_document_id(job.company_cnpj)
        if cnpj not in companies:
            companies[cnpj] = repository.get_company_profile(cnpj) if cnpj else None
        result = calculate_compatibility(candidate, job, companies[cnpj])
        logger.record_score(result.compatibility_level.value)
        results.append(result)

    # sorted() is stable, so equal scores keep repository order
    ranked = sorted(results, key=lambda r: r.compatibility_score, reverse=True)
    logger.info("Ranked jobs for candidate", cpf=cpf, jobs=len(ranked))
    return ranked


def filter_by_level(
    results: Iterable[CompatibilityResult],
    level: Optional[CompatibilityLevel] = None,
) -> List[CompatibilityResult]:
    if level is None:
        return list(results)
    return [r for r in results if r.compatibility_level is level]


def summarize_levels(results: Iterable[CompatibilityResult]) -> Dict[str, int]:
    summary = {"total": 0}
    summary.update({level.value: 0 for level in CompatibilityLevel})
    for r in results:
        summary["total"] += 1
        summary[r.compatibility_level.value] += 1
    return summary
