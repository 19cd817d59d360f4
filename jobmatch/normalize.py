import re
from typing import Optional


def normalize_text(s: Optional[str]) -> str:
    return " ".join((s or "").strip().lower().split())


def clean_document_id(value: Optional[str]) -> str:
    """Keep only the digits of a CPF/CNPJ (record keys are digit-only)."""
    return re.sub(r"\D", "", value or "")


def validate_cpf(cpf: str) -> bool:
    return len(clean_document_id(cpf)) == 11


def validate_cnpj(cnpj: str) -> bool:
    return len(clean_document_id(cnpj)) == 14


def format_cpf(cpf: str) -> str:
    digits = clean_document_id(cpf)
    return re.sub(r"^(\d{3})(\d{3})(\d{3})(\d{2})$", r"\1.\2.\3-\4", digits)


def format_cnpj(cnpj: str) -> str:
    digits = clean_document_id(cnpj)
    return re.sub(r"^(\d{2})(\d{3})(\d{3})(\d{4})(\d{2})$", r"\1.\2.\3/\4-\5", digits)


REMOTE_SYNS = {"remoto", "remote", "fully remote", "100% remoto"}
HYBRID_SYNS = {"híbrido", "hibrido", "hybrid"}
ONSITE_SYNS = {"presencial", "on-site", "onsite", "on site"}


def normalize_work_model(value: Optional[str]) -> Optional[str]:
    """Map a work model label to its stored form ("Remoto", "Híbrido", "Presencial")."""
    model = normalize_text(value)
    if model in REMOTE_SYNS:
        return "Remoto"
    if model in HYBRID_SYNS:
        return "Híbrido"
    if model in ONSITE_SYNS:
        return "Presencial"
    return None
