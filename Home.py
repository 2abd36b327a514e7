# Home.py
import datetime
import logging
import os

import streamlit as st

from session_helpers import (
    INPUT_KEY,
    export_file,
    get_session,
    on_clear_all,
    on_export,
    on_input_change,
    on_remove,
    on_sort,
    on_submit_add,
    pop_notice,
)
from utils_cep import CEP_MAX_LENGTH

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.set_page_config(page_title="Ordenador de CEP's", layout="centered")

PLACEHOLDER = "Digite um CEP - Formato: 12345-678"
VERSION = "1.0"

session = get_session()

# ---------- Cabeçalho ----------
st.title("📮 Ordenador de CEP's")
st.write('Insira os CEP\'s e clique em "Ordenar" para colocar em ordem.')

notice = pop_notice()
if notice and notice.level == "success":
    st.success(notice.message)
elif notice:
    st.error(notice.message)

# ---------- Entrada ----------
st.subheader("Digite os CEPs que deseja ordenar")
st.text_input(
    "CEP",
    key=INPUT_KEY,
    max_chars=CEP_MAX_LENGTH,
    placeholder=PLACEHOLDER,
    help="Formato: 12345-678",
    on_change=on_input_change,
)

c1, c2 = st.columns(2)
with c1:
    st.button("Enviar", key="btn_add", type="primary", on_click=on_submit_add)
with c2:
    st.button("Ordenar", key="btn_sort", on_click=on_sort, disabled=session.is_empty)

st.divider()

# ---------- Lista ----------
st.subheader("Relação Ordenada de CEP's")
for i, rec in enumerate(session.records):
    lc, rc = st.columns([5, 1])
    lc.write(rec.line())
    rc.button("Excluir", key=f"btn_del_{i}", on_click=on_remove, args=(i,))

if not session.is_empty:
    st.markdown(f"**Total de CEP's inseridos:** {session.total}")

f = export_file()
s1, s2 = st.columns(2)
with s1:
    st.download_button(
        "Salvar",
        f.data,
        file_name=f.file_name,
        mime=f.mime,
        key="btn_save",
        on_click=on_export,
    )
with s2:
    st.button("Excluir Tudo", key="btn_clear", on_click=on_clear_all)

st.subheader("Boa entrega!")

st.divider()
st.caption(
    f"Desenvolvido por: Gláudia Almeida - Data: {datetime.date.today():%d/%m/%Y} - v. {VERSION}"
)
