# cep_core.py
# -*- coding: utf-8 -*-
"""
Estado da sessão do ordenador de CEPs e as operações sobre a lista.

Tudo aqui é puro: cada operação recebe um CepSession e devolve outro, sem
tocar em st.session_state (quem faz isso é session_helpers).
"""
from __future__ import annotations

import locale
import logging
from dataclasses import dataclass, field, replace

logger = logging.getLogger(__name__)

EXPORT_FILE_NAME = "ceps_ordenados.txt"


@dataclass(frozen=True)
class CepRecord:
    code: str
    street: str = ""
    city: str = ""

    def __post_init__(self):
        if self.street is None:
            object.__setattr__(self, "street", "")

    def line(self) -> str:
        return f"{self.code} - {self.street}, {self.city}"


@dataclass(frozen=True)
class ExportFile:
    data: bytes
    file_name: str = EXPORT_FILE_NAME
    mime: str = "text/plain"


@dataclass(frozen=True)
class CepSession:
    records: tuple[CepRecord, ...] = field(default_factory=tuple)
    pending: str = ""

    @property
    def total(self) -> int:
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records


def with_pending(session: CepSession, text: str) -> CepSession:
    return replace(session, pending=text or "")


def add(session: CepSession, record: CepRecord) -> CepSession:
    """Inclui no fim da lista. Só deve ser chamado após a consulta dar certo."""
    logger.debug("add %s (total=%d)", record.code, session.total + 1)
    return replace(session, records=session.records + (record,), pending="")


def remove_at(session: CepSession, index: int) -> CepSession:
    if not 0 <= index < session.total:
        raise IndexError(f"índice {index} fora da lista ({session.total} itens)")
    recs = session.records
    logger.debug("remove_at %d (%s)", index, recs[index].code)
    return replace(session, records=recs[:index] + recs[index + 1:])


def clear_all(session: CepSession) -> CepSession:
    logger.debug("clear_all (%d itens)", session.total)
    return CepSession()


def sort(session: CepSession) -> CepSession:
    """
    Ordena por `code` (crescente, estável), pelo LC_COLLATE do processo.
    Sem setlocale vale o locale C, ou seja, a ordem dos code points.
    O código é comparado como veio da consulta, com o hífen.
    """
    ordered = sorted(session.records, key=lambda r: locale.strxfrm(r.code))
    return replace(session, records=tuple(ordered))


def export_text(session: CepSession) -> tuple[CepSession, ExportFile]:
    """
    Ordena e gera o arquivo texto, uma linha "<cep> - <rua>, <cidade>" por CEP.
    A lista ordenada passa a ser o novo estado da sessão.
    """
    ordered = sort(session)
    text = "\n".join(r.line() for r in ordered.records)
    return ordered, ExportFile(data=text.encode("utf-8"))
