"""
Data-access layer for the compatibility scorer.

Responsibilities:
- Resolve candidate profiles, job postings and company profiles by key.
- Persist raw camelCase records (JSON store or in-memory).

Non-Responsibilities:
- No scoring.
- No validation (callers validate before saving).

Invariant:
Repositories must not encode domain decisions. Enumeration order of job
postings is insertion order and is preserved by every backend.
"""

import time
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .models import CandidateProfile, CompanyProfile, JobPosting, JobStatus
from .normalize import clean_document_id
from .storage import load_store, save_store, upsert_record


def now_iso() -> str:
    return datetime.now().isoformat()


def new_job_id() -> str:
    return str(int(time.time() * 1000))


def record_key(collection: str, data: Dict[str, Any]) -> str:
    """Storage key of a raw record: digit-only CPF/CNPJ, or the job id."""
    if collection == "candidates":
        return clean_document_id((data.get("personal") or {}).get("cpf"))
    if collection == "companies":
        return clean_document_id(data.get("cnpj"))
    return str(data.get("id") or "")


def stamp(record: Dict[str, Any]) -> Dict[str, Any]:
    now = now_iso()
    return {**record, "createdAt": record.get("createdAt") or now, "updatedAt": now}


def apply_status(record: Dict[str, Any], status: JobStatus) -> Dict[str, Any]:
    updated = {**record, "status": status.value, "updatedAt": now_iso()}
    if status is JobStatus.CLOSED:
        updated["closedAt"] = updated["updatedAt"]
    return updated


class JobBoardRepository(ABC):
    """Read interface the ranking operation depends on."""

    @abstractmethod
    def get_candidate_profile(self, cpf: str) -> Optional[CandidateProfile]:
        ...

    @abstractmethod
    def get_all_job_postings(self) -> List[JobPosting]:
        ...

    @abstractmethod
    def get_company_profile(self, cnpj: str) -> Optional[CompanyProfile]:
        ...

    def get_active_job_postings(self) -> List[JobPosting]:
        return [job for job in self.get_all_job_postings() if job.is_active]

    def get_jobs_by_company(self, cnpj: str) -> List[JobPosting]:
        key = clean_document_id(cnpj)
        return [job for job in self.get_all_job_postings() if clean_document_id(job.company_cnpj) == key]

    def get_active_jobs_by_company(self, cnpj: str) -> List[JobPosting]:
        return [job for job in self.get_jobs_by_company(cnpj) if job.is_active]

    def get_job_posting(self, job_id: str) -> Optional[JobPosting]:
        for job in self.get_all_job_postings():
            if job.id == job_id:
                return job
        return None


class WritableRepository(JobBoardRepository):
    """Repository that also stores raw records."""

    @abstractmethod
    def save_candidate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    def save_company(self, data: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    def save_job(self, data: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    def update_job_status(self, job_id: str, status: JobStatus) -> bool:
        ...

    @abstractmethod
    def delete_job(self, job_id: str) -> bool:
        ...

    def save(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        savers = {
            "candidates": self.save_candidate,
            "companies": self.save_company,
            "jobs": self.save_job,
        }
        if collection not in savers:
            raise ValueError(f"Unknown collection: {collection}")
        return savers[collection](data)


class InMemoryRepository(JobBoardRepository):
    """Dict-backed repository holding already-built models."""

    def __init__(
        self,
        candidates: Optional[Iterable[CandidateProfile]] = None,
        jobs: Optional[Iterable[JobPosting]] = None,
        companies: Optional[Iterable[CompanyProfile]] = None,
    ):
        self.candidates: Dict[str, CandidateProfile] = {}
        self.jobs: List[JobPosting] = []
        self.companies: Dict[str, CompanyProfile] = {}
        for candidate in candidates or []:
            self.add_candidate(candidate)
        for job in jobs or []:
            self.add_job(job)
        for company in companies or []:
            self.add_company(company)

    def add_candidate(self, candidate: CandidateProfile) -> None:
        self.candidates[clean_document_id(candidate.cpf)] = candidate

    def add_job(self, job: JobPosting) -> None:
        self.jobs.append(job)

    def add_company(self, company: CompanyProfile) -> None:
        self.companies[clean_document_id(company.cnpj)] = company

    def get_candidate_profile(self, cpf: str) -> Optional[CandidateProfile]:
        return self.candidates.get(clean_document_id(cpf))

    def get_all_job_postings(self) -> List[JobPosting]:
        return list(self.jobs)

    def get_company_profile(self, cnpj: str) -> Optional[CompanyProfile]:
        return self.companies.get(clean_document_id(cnpj))


class JsonStoreRepository(WritableRepository):
    """Repository over the JSON key-value store file (see storage.py)."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        return load_store(self.path)

    def _upsert(self, collection: str, data: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        key = record_key(collection, data)
        store = self._load()
        result = upsert_record(store, collection, key, stamp(data))
        save_store(self.path, store)
        return key, result

    def get_candidate_profile(self, cpf: str) -> Optional[CandidateProfile]:
        record = self._load()["candidates"].get(clean_document_id(cpf))
        return CandidateProfile.from_dict(record) if record else None

    def get_all_job_postings(self) -> List[JobPosting]:
        return [JobPosting.from_dict(record) for record in self._load()["jobs"].values()]

    def get_company_profile(self, cnpj: str) -> Optional[CompanyProfile]:
        record = self._load()["companies"].get(clean_document_id(cnpj))
        return CompanyProfile.from_dict(record) if record else None

    def save_candidate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        key, result = self._upsert("candidates", data)
        return {"id": key, **result}

    def save_company(self, data: Dict[str, Any]) -> Dict[str, Any]:
        key, result = self._upsert("companies", data)
        return {"id": key, **result}

    def save_job(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if not data.get("id"):
            data = {**data, "id": new_job_id()}
        key, result = self._upsert("jobs", data)
        return {"id": key, **result}

    def update_job_status(self, job_id: str, status: JobStatus) -> bool:
        store = self._load()
        record = store["jobs"].get(job_id)
        if record is None:
            return False
        store["jobs"][job_id] = apply_status(record, status)
        save_store(self.path, store)
        return True

    def delete_job(self, job_id: str) -> bool:
        store = self._load()
        if job_id not in store["jobs"]:
            return False
        del store["jobs"][job_id]
        save_store(self.path, store)
        return True
