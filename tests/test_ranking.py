"""
Tests for ranking active jobs for a candidate.
"""

from conftest import make_candidate, make_job
from jobmatch.models import CompanyProfile, CompatibilityLevel, JobStatus, WorkModel
from jobmatch.ranking import filter_by_level, rank_jobs_for_candidate, summarize_levels
from jobmatch.repository import InMemoryRepository

CPF = "12345678901"


def _job_scoring(score_id: str, **kwargs):
    """Jobs whose score for the fixture candidate is known in advance.

    Every job gets 5 (experience) + 5 (education) from the candidate.
    """
    # 30 = 20 skills (2 of 4 keywords) + 10
    if score_id == "30":
        return make_job(job_id="j30", title="Auditor", area="Tributário",
                        requirements="contabilidade fiscal auditoria tributos", **kwargs)
    # 85 = 40 skills + 25 area + 10 remote + 10
    if score_id == "85":
        return make_job(job_id="j85", title="Contador", area="Contabilidade",
                        requirements="contabilidade fiscal", work_model=WorkModel.REMOTE, **kwargs)
    # 60 = 40 skills + 10 remote + 10
    if score_id == "60":
        return make_job(job_id="j60", title="Engenheiro", area="Obras",
                        requirements="contabilidade fiscal", work_model=WorkModel.REMOTE, **kwargs)
    raise ValueError(score_id)


def _candidate():
    return make_candidate(cpf=CPF, skills=["contabilidade", "fiscal"], titles=["Contador"], education=1)


class TestRankJobsForCandidate:
    """Test rank_jobs_for_candidate against an in-memory repository."""

    def test_orders_by_score_descending(self):
        repo = InMemoryRepository(
            candidates=[_candidate()],
            jobs=[_job_scoring("30"), _job_scoring("85"), _job_scoring("60")],
        )

        results = rank_jobs_for_candidate(repo, CPF)

        assert [r.compatibility_score for r in results] == [85, 60, 30]
        assert [r.job_id for r in results] == ["j85", "j60", "j30"]

    def test_absent_candidate_returns_empty(self, quiet_logger):
        repo = InMemoryRepository(jobs=[make_job()])

        assert rank_jobs_for_candidate(repo, "00000000000") == []
        assert quiet_logger.metrics["candidates_missing"] == 1

    def test_formatted_cpf_is_cleaned(self):
        repo = InMemoryRepository(candidates=[_candidate()], jobs=[_job_scoring("30")])
        results = rank_jobs_for_candidate(repo, "123.456.789-01")
        assert len(results) == 1

    def test_only_active_jobs(self):
        repo = InMemoryRepository(
            candidates=[_candidate()],
            jobs=[
                make_job(job_id="a", status=JobStatus.ACTIVE),
                make_job(job_id="c", status=JobStatus.CLOSED),
                make_job(job_id="p", status=JobStatus.PAUSED),
            ],
        )
        results = rank_jobs_for_candidate(repo, CPF)
        assert [r.job_id for r in results] == ["a"]

    def test_ties_keep_repository_order(self):
        jobs = [make_job(job_id=str(i)) for i in range(5)]
        repo = InMemoryRepository(candidates=[_candidate()], jobs=jobs)

        results = rank_jobs_for_candidate(repo, CPF)

        assert len({r.compatibility_score for r in results}) == 1
        assert [r.job_id for r in results] == ["0", "1", "2", "3", "4"]

    def test_resolves_company(self):
        company = CompanyProfile(cnpj="12.345.678/0001-90", name="Acme", state="SP")
        candidate = make_candidate(cpf=CPF, city="Santos", state="SP")
        job = make_job(city="São Paulo", company_cnpj="12345678000190")
        repo = InMemoryRepository(candidates=[candidate], jobs=[job], companies=[company])

        [result] = rank_jobs_for_candidate(repo, CPF)

        assert result.company == company
        assert result.breakdown["location"] == 7

    def test_missing_company_is_none(self):
        job = make_job(company_cnpj="99999999000199")
        repo = InMemoryRepository(candidates=[_candidate()], jobs=[job])
        [result] = rank_jobs_for_candidate(repo, CPF)
        assert result.company is None

    def test_records_metrics(self, quiet_logger):
        repo = InMemoryRepository(
            candidates=[_candidate()],
            jobs=[_job_scoring("30"), _job_scoring("85")],
        )
        rank_jobs_for_candidate(repo, CPF)

        metrics = quiet_logger.get_metrics()
        assert metrics["rankings_run"] == 1
        assert metrics["jobs_scored"] == 2
        assert metrics["levels"] == {"Low": 1, "High": 1}


class TestLevelHelpers:
    """Test level filtering and summary counts."""

    def _results(self):
        repo = InMemoryRepository(
            candidates=[_candidate()],
            jobs=[_job_scoring("30"), _job_scoring("85"), _job_scoring("60")],
        )
        return rank_jobs_for_candidate(repo, CPF)

    def test_filter_by_level(self):
        results = self._results()
        high = filter_by_level(results, CompatibilityLevel.HIGH)
        assert [r.compatibility_score for r in high] == [85]

    def test_filter_none_keeps_all(self):
        results = self._results()
        assert filter_by_level(results, None) == results

    def test_summarize_levels(self):
        assert summarize_levels(self._results()) == {"total": 3, "High": 1, "Medium": 1, "Low": 1}

    def test_summarize_empty(self):
        assert summarize_levels([]) == {"total": 0, "High": 0, "Medium": 0, "Low": 0}
