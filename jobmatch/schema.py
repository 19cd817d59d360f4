from typing import Any, Dict, List

from .models import JobStatus
from .normalize import normalize_work_model, validate_cnpj, validate_cpf

CANDIDATE_PERSONAL_REQUIRED = ["cpf", "fullName"]
CANDIDATE_PERSONAL_OPTIONAL = ["email", "city", "state"]
CANDIDATE_LIST_FIELDS = ["experiences", "education", "courses"]

COMPANY_REQUIRED = ["cnpj", "name"]
COMPANY_OPTIONAL = ["city", "state", "industry"]

JOB_REQUIRED = ["title", "area", "workModel"]
JOB_OPTIONAL = ["id", "companyCnpj", "city", "description", "requirements", "contractType", "salary"]

VALID_STATUSES = [s.value for s in JobStatus]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _check_fields(data: Dict[str, Any], required: List[str], optional: List[str], prefix: str = "") -> List[str]:
    errors: List[str] = []
    for f in required:
        if f not in data:
            errors.append(f"Missing required field: {prefix}{f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{prefix}{f}' must be a non-empty string")
    # Optional strings: if present, must be strings (empty allowed)
    for f in optional:
        if f in data and data[f] is not None and not isinstance(data[f], str):
            errors.append(f"Field '{prefix}{f}' must be a string if provided")
    return errors


def validate_candidate(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    personal = data.get("personal")
    if not isinstance(personal, dict):
        return ["Missing required field: personal"]

    errors = _check_fields(personal, CANDIDATE_PERSONAL_REQUIRED, CANDIDATE_PERSONAL_OPTIONAL, "personal.")
    if _is_non_empty_str(personal.get("cpf")) and not validate_cpf(personal["cpf"]):
        errors.append("Field 'personal.cpf' must have 11 digits")

    for f in CANDIDATE_LIST_FIELDS:
        if f in data and not isinstance(data[f], list):
            errors.append(f"Field '{f}' must be a list if provided")

    for i, exp in enumerate(data.get("experiences") or []):
        if not isinstance(exp, dict) or not _is_non_empty_str(exp.get("title")):
            errors.append(f"Experience #{i + 1} must have a non-empty title")

    skills = data.get("skills")
    if skills is not None:
        if not isinstance(skills, dict):
            errors.append("Field 'skills' must be an object if provided")
        else:
            for kind in ("technical", "soft"):
                values = skills.get(kind, [])
                if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                    errors.append(f"Field 'skills.{kind}' must be a list of strings")

    return errors


def validate_company(data: Dict[str, Any]) -> List[str]:
    errors = _check_fields(data, COMPANY_REQUIRED, COMPANY_OPTIONAL)
    if _is_non_empty_str(data.get("cnpj")) and not validate_cnpj(data["cnpj"]):
        errors.append("Field 'cnpj' must have 14 digits")
    return errors


def validate_job(data: Dict[str, Any]) -> List[str]:
    errors = _check_fields(data, JOB_REQUIRED, JOB_OPTIONAL)

    if _is_non_empty_str(data.get("workModel")) and normalize_work_model(data["workModel"]) is None:
        errors.append("Field 'workModel' must be one of: Remoto, Híbrido, Presencial")

    status = data.get("status")
    if status is not None and status not in VALID_STATUSES:
        errors.append(f"Field 'status' must be one of: {', '.join(VALID_STATUSES)}")

    if _is_non_empty_str(data.get("companyCnpj")) and not validate_cnpj(data["companyCnpj"]):
        errors.append("Field 'companyCnpj' must have 14 digits")

    vacancies = data.get("vacancies")
    if vacancies is not None and (
        not isinstance(vacancies, int) or isinstance(vacancies, bool) or vacancies < 0
    ):
        errors.append("Field 'vacancies' must be a non-negative integer")

    return errors


VALIDATORS = {
    "candidates": validate_candidate,
    "companies": validate_company,
    "jobs": validate_job,
}
