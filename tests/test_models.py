"""
Tests for domain models built from stored records.
"""

import pytest

from jobmatch.models import (
    CandidateProfile,
    CompanyProfile,
    CompatibilityLevel,
    CompatibilityResult,
    JobPosting,
    JobStatus,
    WorkModel,
)


class TestCandidateProfile:
    """Test candidate records."""

    def test_from_record(self, candidate_record):
        candidate = CandidateProfile.from_dict(candidate_record)

        assert candidate.cpf == "123.456.789-01"
        assert candidate.personal.city == "São Paulo"
        assert [e.title for e in candidate.experiences] == ["Desenvolvedora Frontend"]
        assert candidate.experiences[0].is_current is True
        assert candidate.education[0].institution == "USP"
        assert candidate.courses == []
        assert candidate.skills.combined == ["javascript", "react", "comunicação"]

    def test_empty_record(self):
        """Missing keys fall back to empty values."""
        candidate = CandidateProfile.from_dict({})
        assert candidate.cpf == ""
        assert candidate.experiences == []
        assert candidate.skills.combined == []

    def test_wrong_types_are_ignored(self):
        candidate = CandidateProfile.from_dict({
            "personal": "nope",
            "experiences": [{"title": "Dev"}, "junk"],
            "skills": {"technical": ["python", 3], "soft": None},
        })
        assert [e.title for e in candidate.experiences] == ["Dev"]
        assert candidate.skills.technical == ["python"]
        assert candidate.skills.soft == []

    def test_to_dict_round_trip(self, candidate_record):
        candidate = CandidateProfile.from_dict(candidate_record)
        assert CandidateProfile.from_dict(candidate.to_dict()) == candidate

    def test_frozen(self, candidate_record):
        candidate = CandidateProfile.from_dict(candidate_record)
        with pytest.raises(AttributeError):
            candidate.personal = None


class TestJobPosting:
    """Test job records."""

    def test_from_record(self, job_record):
        job = JobPosting.from_dict(job_record)
        assert job.id == "1700000000000"
        assert job.work_model is WorkModel.ON_SITE
        assert job.status is JobStatus.ACTIVE
        assert job.is_active
        assert job.vacancies == 2

    @pytest.mark.parametrize("label,model", [
        ("Remoto", WorkModel.REMOTE),
        ("remote", WorkModel.REMOTE),
        ("Híbrido", WorkModel.HYBRID),
        ("Hybrid", WorkModel.HYBRID),
        ("On-site", WorkModel.ON_SITE),
        ("Presencial", WorkModel.ON_SITE),
        ("whatever", None),
        (None, None),
    ])
    def test_work_model_labels(self, label, model):
        assert JobPosting.from_dict({"id": "1", "workModel": label}).work_model is model

    def test_unknown_status_is_not_active(self):
        job = JobPosting.from_dict({"id": "1", "status": "archived"})
        assert not job.is_active

    def test_missing_status_defaults_active(self):
        assert JobPosting.from_dict({"id": "1"}).is_active

    def test_numeric_id_becomes_string(self):
        assert JobPosting.from_dict({"id": 17}).id == "17"

    def test_to_dict_uses_stored_labels(self, job_record):
        data = JobPosting.from_dict({**job_record, "workModel": "remote"}).to_dict()
        assert data["workModel"] == "Remoto"
        assert data["status"] == "active"


class TestCompatibilityResult:
    def test_to_dict(self, job_record, company_record):
        job = JobPosting.from_dict(job_record)
        company = CompanyProfile.from_dict(company_record)
        result = CompatibilityResult(
            job_id=job.id,
            compatibility_score=55,
            compatibility_level=CompatibilityLevel.MEDIUM,
            reasons=["Same state"],
            job=job,
            company=company,
            breakdown={"location": 7},
        )

        data = result.to_dict()

        assert data["jobId"] == "1700000000000"
        assert data["compatibilityLevel"] == "Medium"
        assert data["company"]["name"] == "Acme Tecnologia"
        assert data["job"]["title"] == job.title

    def test_to_dict_without_company(self, job_record):
        job = JobPosting.from_dict(job_record)
        result = CompatibilityResult(job.id, 0, CompatibilityLevel.LOW, [], job)
        assert result.to_dict()["company"] is None
