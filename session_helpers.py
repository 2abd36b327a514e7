# session_helpers.py
from __future__ import annotations

import asyncio
import logging
from typing import MutableMapping, NamedTuple

import streamlit as st

import cep_core
import utils_cep
from cep_core import CepSession

logger = logging.getLogger(__name__)

STATE_KEY = "cep_session"
INPUT_KEY = "cep_input"
NOTICE_KEY = "cep_notice"


class Notice(NamedTuple):
    level: str  # success | error
    message: str


def _state(state):
    return st.session_state if state is None else state


def get_session(state: MutableMapping | None = None) -> CepSession:
    state = _state(state)
    if STATE_KEY not in state:
        state[STATE_KEY] = CepSession()
    return state[STATE_KEY]


def _store(state: MutableMapping, session: CepSession):
    state[STATE_KEY] = session
    # só em callbacks: o Streamlit não deixa alterar o widget depois de desenhado
    state[INPUT_KEY] = session.pending


def _notify(state: MutableMapping, level: str, message: str):
    state[NOTICE_KEY] = Notice(level, message)


def pop_notice(state: MutableMapping | None = None) -> Notice | None:
    return _state(state).pop(NOTICE_KEY, None)


# ---------- Eventos da página ----------
def on_input_change(state: MutableMapping | None = None):
    state = _state(state)
    text = state.get(INPUT_KEY, "") or ""
    state[STATE_KEY] = cep_core.with_pending(get_session(state), text)


def on_submit_add(state: MutableMapping | None = None, http=None):
    state = _state(state)
    raw = (state.get(INPUT_KEY) or get_session(state).pending or "").strip()
    if not raw:
        return
    try:
        cep = utils_cep.validate_cep(raw)
        rec = asyncio.run(utils_cep.resolve_cep(cep, http))
    except utils_cep.CepError as e:
        logger.info("CEP %r não incluído: %s", raw, e)
        _notify(state, "error", str(e))
        return
    # relê o estado: outra inclusão pode ter terminado durante a consulta
    _store(state, cep_core.add(get_session(state), rec))
    _notify(state, "success", f"Incluído: {rec.line()}")


def on_sort(state: MutableMapping | None = None):
    state = _state(state)
    state[STATE_KEY] = cep_core.sort(get_session(state))


def on_remove(index: int, state: MutableMapping | None = None):
    state = _state(state)
    state[STATE_KEY] = cep_core.remove_at(get_session(state), index)


def on_clear_all(state: MutableMapping | None = None):
    state = _state(state)
    _store(state, cep_core.clear_all(get_session(state)))
    _notify(state, "success", "Todos os CEP's foram excluídos!")


def export_file(state: MutableMapping | None = None) -> cep_core.ExportFile:
    """Arquivo que o botão de download entrega (a lista já ordenada)."""
    return cep_core.export_text(get_session(state))[1]


def on_export(state: MutableMapping | None = None):
    state = _state(state)
    session, _ = cep_core.export_text(get_session(state))
    state[STATE_KEY] = session
