"""
Candidate-job compatibility scoring (v1).

Responsibilities:
- Compute five weighted sub-scores (skills, area, experience, location,
  education) and sum them into a 0-100 score.
- Emit up to three human-readable reasons in the fixed factor order.

Non-Responsibilities:
- No storage access.
- No ranking across jobs.

Invariant:
Given identical inputs, this module always returns the same score,
level and reasons. Inputs are never mutated.
"""

import math
from typing import Callable, Dict, List, Optional, Tuple

from .config import (
    AREA_RELATED_SCORE,
    EXPERIENCE_POINTS_PER_ENTRY,
    EXPERIENCE_REASON_MIN_COUNT,
    FACTOR_ORDER,
    LEVEL_THRESHOLDS,
    LOCATION_SAME_STATE_SCORE,
    MAX_REASONS,
    SKILLS_REASON_THRESHOLD,
    WEIGHTS,
)
from .keywords import extract_keywords, jaccard_similarity
from .models import (
    CandidateProfile,
    CompanyProfile,
    CompatibilityLevel,
    CompatibilityResult,
    JobPosting,
    WorkModel,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (84.5 -> 85)."""
    return int(math.floor(value + 0.5))


def compatibility_level(score: float) -> CompatibilityLevel:
    """Map a score to High (>= 70), Medium (>= 40) or Low."""
    if score >= LEVEL_THRESHOLDS["High"]:
        return CompatibilityLevel.HIGH
    if score >= LEVEL_THRESHOLDS["Medium"]:
        return CompatibilityLevel.MEDIUM
    return CompatibilityLevel.LOW


# --- Skills ---

def job_keywords(job: JobPosting) -> List[str]:
    return extract_keywords(f"{job.requirements or ''} {job.description or ''}")


def skills_similarity(candidate: CandidateProfile, job: JobPosting) -> float:
    return jaccard_similarity(candidate.skills.combined, job_keywords(job))


def skills_score(candidate: CandidateProfile, job: JobPosting, company: Optional[CompanyProfile] = None) -> float:
    return skills_similarity(candidate, job) * WEIGHTS["skills"]


def skills_reason(candidate: CandidateProfile, job: JobPosting, company: Optional[CompanyProfile] = None) -> Optional[str]:
    similarity = skills_similarity(candidate, job)
    if similarity > SKILLS_REASON_THRESHOLD:
        return f"{round_half_up(similarity * 100)}% skill compatibility"
    return None


# --- Professional area ---

def area_score(candidate: CandidateProfile, job: JobPosting, company: Optional[CompanyProfile] = None) -> float:
    """
    Substring overlap (either direction) between any experience title and the
    job title or area scores the full weight; an exact match between the job
    area and the first experience title scores AREA_RELATED_SCORE.
    """
    if not candidate.experiences:
        return 0
    titles = [exp.title.lower() for exp in candidate.experiences]
    job_title = job.title.lower()
    job_area = job.area.lower()

    if any(
        job_area in title or title in job_area or job_title in title or title in job_title
        for title in titles
    ):
        return WEIGHTS["area"]
    if job.area == candidate.experiences[0].title:
        return AREA_RELATED_SCORE
    return 0


def area_reason(candidate: CandidateProfile, job: JobPosting, company: Optional[CompanyProfile] = None) -> Optional[str]:
    score = area_score(candidate, job, company)
    if score == WEIGHTS["area"]:
        return f"Experience in the {job.area} area"
    if score == AREA_RELATED_SCORE:
        return "Area related to your experience"
    return None


# --- Experience depth ---

def experience_score(candidate: CandidateProfile, job: JobPosting, company: Optional[CompanyProfile] = None) -> float:
    return min(WEIGHTS["experience"], len(candidate.experiences) * EXPERIENCE_POINTS_PER_ENTRY)


def experience_reason(candidate: CandidateProfile, job: JobPosting, company: Optional[CompanyProfile] = None) -> Optional[str]:
    count = len(candidate.experiences)
    if count >= EXPERIENCE_REASON_MIN_COUNT:
        return f"{count} professional experiences on record"
    return None


# --- Location ---

def location_match(candidate: CandidateProfile, job: JobPosting, company: Optional[CompanyProfile] = None) -> Optional[str]:
    """Return "remote", "city", "state" or None."""
    if job.work_model is WorkModel.REMOTE:
        return "remote"
    candidate_city = candidate.personal.city.lower()
    job_city = job.city.lower()
    # Cities must both be known before state is considered
    if not candidate_city or not job_city:
        return None
    if job_city in candidate_city or candidate_city in job_city:
        return "city"
    candidate_state = candidate.personal.state.lower()
    company_state = company.state.lower() if company else ""
    if candidate_state and company_state and candidate_state == company_state:
        return "state"
    return None


_LOCATION_SCORES = {
    "remote": WEIGHTS["location"],
    "city": WEIGHTS["location"],
    "state": LOCATION_SAME_STATE_SCORE,
}

_LOCATION_REASONS = {
    "remote": "Remote work available",
    "city": "Compatible location",
    "state": "Same state",
}


def location_score(candidate: CandidateProfile, job: JobPosting, company: Optional[CompanyProfile] = None) -> float:
    return _LOCATION_SCORES.get(location_match(candidate, job, company), 0)


def location_reason(candidate: CandidateProfile, job: JobPosting, company: Optional[CompanyProfile] = None) -> Optional[str]:
    return _LOCATION_REASONS.get(location_match(candidate, job, company))


# --- Education ---

def education_score(candidate: CandidateProfile, job: JobPosting, company: Optional[CompanyProfile] = None) -> float:
    if candidate.education or candidate.courses:
        return WEIGHTS["education"]
    return 0


def education_reason(candidate: CandidateProfile, job: JobPosting, company: Optional[CompanyProfile] = None) -> Optional[str]:
    if education_score(candidate, job, company):
        return "Academic background on record"
    return None


Factor = Tuple[Callable[..., float], Callable[..., Optional[str]]]

FACTORS: Dict[str, Factor] = {
    "skills": (skills_score, skills_reason),
    "area": (area_score, area_reason),
    "experience": (experience_score, experience_reason),
    "location": (location_score, location_reason),
    "education": (education_score, education_reason),
}


def calculate_compatibility(
    candidate: CandidateProfile,
    job: JobPosting,
    company: Optional[CompanyProfile] = None,
) -> CompatibilityResult:
    """
    Score one job posting for one candidate.

    Args:
        candidate: Candidate profile
        job: Job posting
        company: Company that owns the posting, if known

    Returns:
        CompatibilityResult with the rounded total, its level, up to
        MAX_REASONS reasons and the per-factor breakdown
    """
    breakdown: Dict[str, float] = {}
    reasons = []

    for name in FACTOR_ORDER:
        score_fn, reason_fn = FACTORS[name]
        breakdown[name] = min(WEIGHTS[name], max(0, score_fn(candidate, job, company)))
        reason = reason_fn(candidate, job, company)
        if reason:
            reasons.append(reason)

    score = round_half_up(sum(breakdown.values()))

    return CompatibilityResult(
        job_id=job.id,
        compatibility_score=score,
        compatibility_level=compatibility_level(score),
        reasons=reasons[:MAX_REASONS],
        job=job,
        company=company,
        breakdown=breakdown,
    )
