"""
Database schema and connection management.

Uses SQLite with SQLAlchemy. Each table keeps the raw camelCase record in a
JSON column plus the key columns used for lookups and ordering.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column, DateTime, Integer, String, create_engine, func
from sqlalchemy.orm import declarative_base, sessionmaker

from .models import CandidateProfile, CompanyProfile, JobPosting, JobStatus
from .normalize import clean_document_id
from .repository import WritableRepository, apply_status, new_job_id, record_key, stamp
from .storage import TIMESTAMP_FIELDS, diff_dict

Base = declarative_base()


class CandidateRecord(Base):
    """Candidate profile, keyed by digit-only CPF."""

    __tablename__ = "candidates"

    cpf = Column(String, primary_key=True)
    full_name = Column(String, nullable=False, default="")
    data = Column(JSON, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


class CompanyRecord(Base):
    """Company profile, keyed by digit-only CNPJ."""

    __tablename__ = "companies"

    cnpj = Column(String, primary_key=True)
    name = Column(String, nullable=False, default="")
    state = Column(String, nullable=False, default="")
    data = Column(JSON, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


class JobRecord(Base):
    """Job posting; ``position`` preserves insertion order."""

    __tablename__ = "jobs"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False, index=True)
    company_cnpj = Column(String, nullable=False, default="", index=True)
    title = Column(String, nullable=False)
    status = Column(String, nullable=False, default=JobStatus.ACTIVE.value, index=True)
    data = Column(JSON, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


def parse_timestamp(ts_str: Optional[str]) -> datetime:
    """Parse ISO timestamp string, handle missing timestamps."""
    if not ts_str:
        return datetime.now()
    try:
        return datetime.fromisoformat(ts_str)
    except (ValueError, TypeError):
        return datetime.now()


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()


def _columns(collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
    if collection == "candidates":
        return {"full_name": (record.get("personal") or {}).get("fullName") or ""}
    if collection == "companies":
        return {"name": record.get("name") or "", "state": record.get("state") or ""}
    return {
        "company_cnpj": clean_document_id(record.get("companyCnpj")),
        "title": record.get("title") or "",
        "status": record.get("status") or JobStatus.ACTIVE.value,
    }


_KEY_COLUMNS = {
    "candidates": "cpf",
    "companies": "cnpj",
    "jobs": "id",
}

_MODELS = {
    "candidates": CandidateRecord,
    "companies": CompanyRecord,
    "jobs": JobRecord,
}


class SqlRepository(WritableRepository):
    """Repository backed by the SQLite schema above."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        init_database(self.db_path)

    def _get_data(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        session = get_session(self.db_path)
        try:
            row = session.get(_MODELS[collection], key)
            return dict(row.data) if row else None
        finally:
            session.close()

    def _upsert(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        model = _MODELS[collection]
        key = record_key(collection, data)
        record = stamp(data)
        session = get_session(self.db_path)
        try:
            row = session.get(model, key)
            if row is None:
                extra = {}
                if model is JobRecord:
                    extra["position"] = (session.query(func.max(JobRecord.position)).scalar() or 0) + 1
                row = model(
                    data=record,
                    created_at=parse_timestamp(record["createdAt"]),
                    updated_at=parse_timestamp(record["updatedAt"]),
                    **extra,
                    **{_KEY_COLUMNS[collection]: key},
                    **_columns(collection, record),
                )
                session.add(row)
                result = {"status": "new"}
            else:
                changes = diff_dict(row.data, record, ignore=TIMESTAMP_FIELDS)
                if changes:
                    row.data = {**record, "createdAt": row.data.get("createdAt") or record["createdAt"]}
                    for name, value in _columns(collection, record).items():
                        setattr(row, name, value)
                    result = {"status": "updated", "changed": sorted(changes)}
                else:
                    result = {"status": "no-change"}
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
        return {"id": key, **result}

    def get_candidate_profile(self, cpf: str) -> Optional[CandidateProfile]:
        data = self._get_data("candidates", clean_document_id(cpf))
        return CandidateProfile.from_dict(data) if data else None

    def get_company_profile(self, cnpj: str) -> Optional[CompanyProfile]:
        data = self._get_data("companies", clean_document_id(cnpj))
        return CompanyProfile.from_dict(data) if data else None

    def get_all_job_postings(self) -> List[JobPosting]:
        session = get_session(self.db_path)
        try:
            rows = session.query(JobRecord).order_by(JobRecord.position).all()
            return [JobPosting.from_dict(row.data) for row in rows]
        finally:
            session.close()

    def get_active_job_postings(self) -> List[JobPosting]:
        session = get_session(self.db_path)
        try:
            rows = (
                session.query(JobRecord)
                .filter_by(status=JobStatus.ACTIVE.value)
                .order_by(JobRecord.position)
                .all()
            )
            return [JobPosting.from_dict(row.data) for row in rows]
        finally:
            session.close()

    def save_candidate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._upsert("candidates", data)

    def save_company(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._upsert("companies", data)

    def save_job(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if not data.get("id"):
            data = {**data, "id": new_job_id()}
        return self._upsert("jobs", data)

    def update_job_status(self, job_id: str, status: JobStatus) -> bool:
        session = get_session(self.db_path)
        try:
            row = session.get(JobRecord, job_id)
            if row is None:
                return False
            row.data = apply_status(dict(row.data), status)
            row.status = status.value
            session.commit()
            return True
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def delete_job(self, job_id: str) -> bool:
        session = get_session(self.db_path)
        try:
            row = session.get(JobRecord, job_id)
            if row is None:
                return False
            session.delete(row)
            session.commit()
            return True
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
