# utils_cep.py
from __future__ import annotations

import asyncio
import logging
import os
import re
from pathlib import Path

import requests

from cep_core import CepRecord

logger = logging.getLogger(__name__)

CEP_RE = re.compile(r"[0-9]{5}-?[0-9]{3}")
CEP_MAX_LENGTH = 9
FORMAT_MSG = "Formato inválido. Use 12345-678"


# =============================================================================
# Configuração (env > st.secrets > default)
# =============================================================================
SECRETS_FILES = (
    Path.cwd() / ".streamlit" / "secrets.toml",
    Path.home() / ".streamlit" / "secrets.toml",
)


def _get_streamlit_secrets():
    # sem secrets.toml o Streamlit mostra erro na página ao acessar st.secrets
    if not any(p.exists() for p in SECRETS_FILES):
        return {}
    import streamlit as st
    return st.secrets


def _setting(name: str, default: str) -> str:
    val = os.getenv(name)
    if val:
        return val
    sec = _get_streamlit_secrets()
    if name in sec:
        return str(sec[name])
    return default


VIACEP_URL: str = _setting("VIACEP_URL", "https://viacep.com.br/ws").rstrip("/")
VIACEP_TIMEOUT: float = float(_setting("VIACEP_TIMEOUT", "10"))


# =============================================================================
# Erros
# =============================================================================
class CepError(Exception):
    """Base dos erros do fluxo de inclusão; a mensagem vai direto ao usuário."""


class CepFormatError(CepError, ValueError):
    def __init__(self, raw: str = ""):
        super().__init__(FORMAT_MSG)
        self.raw = raw


class CepLookupError(CepError):
    pass


class CepUnreachable(CepLookupError):
    def __init__(self, detail: str = ""):
        super().__init__("Erro ao buscar o CEP")
        self.detail = detail


class CepNotFound(CepLookupError):
    def __init__(self, cep: str = ""):
        super().__init__("CEP não encontrado")
        self.cep = cep


# =============================================================================
# Validação / normalização
# =============================================================================
def is_valid_cep(raw: str) -> bool:
    return bool(CEP_RE.fullmatch(raw or ""))


def validate_cep(raw: str) -> str:
    """Aceita NNNNN-NNN ou NNNNNNNN e devolve os 8 dígitos, sem separador."""
    if not is_valid_cep(raw):
        raise CepFormatError(raw)
    return raw.replace("-", "")


def cep_mask(cep: str) -> str:
    s = ''.join(filter(str.isdigit, cep or ""))
    if len(s) == 8:
        return f"{s[0:5]}-{s[5:8]}"
    return cep


# =============================================================================
# Consulta ViaCEP
# =============================================================================
def busca_cep(cep: str, session: requests.Session | None = None) -> CepRecord:
    url = f"{VIACEP_URL}/{cep}/json/"
    http = session or requests
    try:
        r = http.get(url, timeout=VIACEP_TIMEOUT)
    except requests.RequestException as e:
        logger.warning("ViaCEP indisponível para %s: %s", cep, e)
        raise CepUnreachable(str(e)) from e

    if not r.ok:
        logger.warning("ViaCEP respondeu %s para %s", r.status_code, cep)
        raise CepUnreachable(f"HTTP {r.status_code}")
    try:
        j = r.json()
    except ValueError as e:
        logger.warning("Resposta inválida do ViaCEP para %s", cep)
        raise CepUnreachable("resposta não é JSON") from e

    if j.get("erro"):
        logger.warning("CEP %s não encontrado", cep)
        raise CepNotFound(cep)

    rec = CepRecord(
        code=j.get("cep") or cep_mask(cep),
        street=j.get("logradouro") or "",
        city=j.get("localidade") or "",
    )
    logger.info("CEP %s resolvido: %s", cep, rec.line())
    return rec


async def resolve_cep(cep: str, session: requests.Session | None = None) -> CepRecord:
    # requests é bloqueante; a espera fica numa thread
    return await asyncio.to_thread(busca_cep, cep, session)
