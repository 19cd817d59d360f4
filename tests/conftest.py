"""
Pytest configuration and shared fixtures.
"""

import pytest
import json
from pathlib import Path
from typing import Dict, Any

from jobmatch.logger import get_logger, reset_logger
from jobmatch.models import (
    CandidateProfile,
    CompanyProfile,
    Course,
    Education,
    Experience,
    JobPosting,
    PersonalData,
    Skills,
    WorkModel,
)


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Route the global logger to a temp dir without console output."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


def make_candidate(
    skills=(),
    soft=(),
    titles=(),
    education=0,
    courses=0,
    city="",
    state="",
    cpf="123.456.789-01",
) -> CandidateProfile:
    return CandidateProfile(
        personal=PersonalData(cpf=cpf, full_name="Ana Souza", city=city, state=state),
        experiences=[Experience(title=t) for t in titles],
        education=[Education(degree=f"Degree {i}") for i in range(education)],
        courses=[Course(name=f"Course {i}") for i in range(courses)],
        skills=Skills(technical=list(skills), soft=list(soft)),
    )


def make_job(
    job_id="1",
    title="Analista",
    area="Administração",
    requirements="",
    description="",
    work_model=WorkModel.ON_SITE,
    city="",
    company_cnpj="",
    **kwargs,
) -> JobPosting:
    return JobPosting(
        id=job_id,
        title=title,
        area=area,
        requirements=requirements,
        description=description,
        work_model=work_model,
        city=city,
        company_cnpj=company_cnpj,
        **kwargs,
    )


@pytest.fixture
def candidate_record() -> Dict[str, Any]:
    """Valid candidate record as stored in the key-value store."""
    return {
        "personal": {
            "cpf": "123.456.789-01",
            "fullName": "Ana Souza",
            "email": "ana@example.com",
            "city": "São Paulo",
            "state": "SP",
        },
        "experiences": [
            {"title": "Desenvolvedora Frontend", "company": "Acme", "startDate": "2020-01", "isCurrent": True},
        ],
        "education": [
            {"degree": "Ciência da Computação", "institution": "USP", "completionYear": "2019"},
        ],
        "courses": [],
        "skills": {"technical": ["javascript", "react"], "soft": ["comunicação"]},
    }


@pytest.fixture
def company_record() -> Dict[str, Any]:
    """Valid company record."""
    return {
        "cnpj": "12.345.678/0001-90",
        "name": "Acme Tecnologia",
        "city": "Campinas",
        "state": "SP",
        "industry": "Software",
    }


@pytest.fixture
def job_record() -> Dict[str, Any]:
    """Valid job record."""
    return {
        "id": "1700000000000",
        "companyCnpj": "12345678000190",
        "title": "Desenvolvedor Frontend",
        "area": "Tecnologia",
        "contractType": "CLT",
        "workModel": "Presencial",
        "city": "São Paulo",
        "salary": "R$ 8.000",
        "vacancies": 2,
        "description": "Procuramos desenvolvedor javascript react para o time",
        "requirements": "",
        "status": "active",
    }


@pytest.fixture
def populated_store(tmp_path, candidate_record, company_record, job_record) -> Path:
    """Create a JSON store with one candidate, one company and three jobs."""
    store_file = tmp_path / "store.json"
    closed = {**job_record, "id": "2", "title": "Vaga encerrada", "status": "closed"}
    remote = {**job_record, "id": "3", "title": "Designer", "area": "Design",
              "workModel": "Remoto", "description": "Figma e prototipação"}
    data = {
        "candidates": {"12345678901": candidate_record},
        "companies": {"12345678000190": company_record},
        "jobs": {
            job_record["id"]: job_record,
            "2": closed,
            "3": remote,
        },
    }
    store_file.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return store_file


@pytest.fixture
def company() -> CompanyProfile:
    return CompanyProfile(cnpj="12345678000190", name="Acme Tecnologia", state="SP")
