"""
Domain models for candidates, companies, job postings and compatibility results.

Records are stored as camelCase JSON in the key-value store; every model
builds from that shape with ``from_dict`` and writes it back with ``to_dict``.
Missing keys fall back to empty values.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .normalize import normalize_work_model


class WorkModel(str, Enum):
    REMOTE = "Remoto"
    HYBRID = "Híbrido"
    ON_SITE = "Presencial"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["WorkModel"]:
        label = normalize_work_model(value)
        return cls(label) if label else None


class JobStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    PAUSED = "paused"


class CompatibilityLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


def _str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _opt_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) and value else None


def _str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


def _dict_list(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


@dataclass(frozen=True)
class PersonalData:
    cpf: str = ""
    full_name: str = ""
    email: str = ""
    city: str = ""
    state: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersonalData":
        return cls(
            cpf=_str(data, "cpf"),
            full_name=_str(data, "fullName"),
            email=_str(data, "email"),
            city=_str(data, "city"),
            state=_str(data, "state"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cpf": self.cpf,
            "fullName": self.full_name,
            "email": self.email,
            "city": self.city,
            "state": self.state,
        }


@dataclass(frozen=True)
class Experience:
    title: str
    company: str = ""
    start_date: str = ""
    end_date: Optional[str] = None
    is_current: bool = False
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Experience":
        return cls(
            title=_str(data, "title"),
            company=_str(data, "company"),
            start_date=_str(data, "startDate"),
            end_date=_opt_str(data, "endDate"),
            is_current=bool(data.get("isCurrent", False)),
            description=_str(data, "description"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "company": self.company,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "isCurrent": self.is_current,
            "description": self.description,
        }


@dataclass(frozen=True)
class Education:
    degree: str
    institution: str = ""
    completion_year: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Education":
        return cls(
            degree=_str(data, "degree"),
            institution=_str(data, "institution"),
            completion_year=_str(data, "completionYear"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "degree": self.degree,
            "institution": self.institution,
            "completionYear": self.completion_year,
        }


@dataclass(frozen=True)
class Course:
    name: str
    institution: str = ""
    hours: int = 0
    year: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Course":
        hours = data.get("hours")
        return cls(
            name=_str(data, "name"),
            institution=_str(data, "institution"),
            hours=hours if isinstance(hours, int) else 0,
            year=_str(data, "year"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "institution": self.institution,
            "hours": self.hours,
            "year": self.year,
        }


@dataclass(frozen=True)
class Skills:
    technical: List[str] = field(default_factory=list)
    soft: List[str] = field(default_factory=list)

    @property
    def combined(self) -> List[str]:
        return list(self.technical) + list(self.soft)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Skills":
        return cls(
            technical=_str_list(data.get("technical")),
            soft=_str_list(data.get("soft")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"technical": list(self.technical), "soft": list(self.soft)}


@dataclass(frozen=True)
class CandidateProfile:
    personal: PersonalData = field(default_factory=PersonalData)
    experiences: List[Experience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    courses: List[Course] = field(default_factory=list)
    skills: Skills = field(default_factory=Skills)

    @property
    def cpf(self) -> str:
        return self.personal.cpf

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CandidateProfile":
        personal = data.get("personal")
        skills = data.get("skills")
        return cls(
            personal=PersonalData.from_dict(personal if isinstance(personal, dict) else {}),
            experiences=[Experience.from_dict(e) for e in _dict_list(data.get("experiences"))],
            education=[Education.from_dict(e) for e in _dict_list(data.get("education"))],
            courses=[Course.from_dict(c) for c in _dict_list(data.get("courses"))],
            skills=Skills.from_dict(skills if isinstance(skills, dict) else {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "personal": self.personal.to_dict(),
            "experiences": [e.to_dict() for e in self.experiences],
            "education": [e.to_dict() for e in self.education],
            "courses": [c.to_dict() for c in self.courses],
            "skills": self.skills.to_dict(),
        }


@dataclass(frozen=True)
class CompanyProfile:
    cnpj: str
    name: str = ""
    city: str = ""
    state: str = ""
    industry: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompanyProfile":
        return cls(
            cnpj=_str(data, "cnpj"),
            name=_str(data, "name"),
            city=_str(data, "city"),
            state=_str(data, "state"),
            industry=_str(data, "industry"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cnpj": self.cnpj,
            "name": self.name,
            "city": self.city,
            "state": self.state,
            "industry": self.industry,
        }


@dataclass(frozen=True)
class JobPosting:
    id: str
    title: str
    area: str = ""
    description: str = ""
    requirements: str = ""
    work_model: Optional[WorkModel] = None
    city: str = ""
    status: JobStatus = JobStatus.ACTIVE
    company_cnpj: str = ""
    contract_type: str = ""
    salary: str = ""
    vacancies: int = 1
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    closed_at: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status is JobStatus.ACTIVE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobPosting":
        try:
            status = JobStatus(data.get("status", JobStatus.ACTIVE.value))
        except ValueError:
            status = JobStatus.CLOSED
        vacancies = data.get("vacancies")
        return cls(
            id=str(data.get("id", "")),
            title=_str(data, "title"),
            area=_str(data, "area"),
            description=_str(data, "description"),
            requirements=_str(data, "requirements"),
            work_model=WorkModel.parse(data.get("workModel")),
            city=_str(data, "city"),
            status=status,
            company_cnpj=_str(data, "companyCnpj"),
            contract_type=_str(data, "contractType"),
            salary=_str(data, "salary"),
            vacancies=vacancies if isinstance(vacancies, int) else 1,
            created_at=_opt_str(data, "createdAt"),
            updated_at=_opt_str(data, "updatedAt"),
            closed_at=_opt_str(data, "closedAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "companyCnpj": self.company_cnpj,
            "title": self.title,
            "area": self.area,
            "contractType": self.contract_type,
            "workModel": self.work_model.value if self.work_model else None,
            "city": self.city,
            "salary": self.salary,
            "vacancies": self.vacancies,
            "description": self.description,
            "requirements": self.requirements,
            "status": self.status.value,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "closedAt": self.closed_at,
        }


@dataclass
class CompatibilityResult:
    job_id: str
    compatibility_score: int
    compatibility_level: CompatibilityLevel
    reasons: List[str]
    job: JobPosting
    company: Optional[CompanyProfile] = None
    breakdown: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jobId": self.job_id,
            "compatibilityScore": self.compatibility_score,
            "compatibilityLevel": self.compatibility_level.value,
            "reasons": list(self.reasons),
            "breakdown": dict(self.breakdown),
            "job": self.job.to_dict(),
            "company": self.company.to_dict() if self.company else None,
        }
