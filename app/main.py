import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import asyncio
from datetime import datetime

import streamlit as st

from kindlog.config import DATE_INPUT_FORMAT, setup_logging
from kindlog.domain import Mood, RecordForm, RecordKind
from kindlog.services import RecordService
from kindlog.transforms import MOOD_ICONS, TYPE_LABELS, rows_frame

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

st.set_page_config(page_title="Kindness Log", layout="wide")

if "service" not in st.session_state:
    setup_logging()
    st.session_state.service = RecordService()
    st.session_state.pending_form = None
    asyncio.run(st.session_state.service.load())

service: RecordService = st.session_state.service


def apply_form(form: RecordForm) -> None:
    st.session_state.form_type = form.type or None
    st.session_state.form_date = datetime.strptime(form.date, DATE_INPUT_FORMAT).date()
    st.session_state.form_content = form.content
    st.session_state.form_mood = form.mood or None
    st.session_state.form_reaction = form.reaction


def read_form() -> RecordForm:
    d = st.session_state.form_date
    return RecordForm(
        type=st.session_state.form_type or "",
        date=d.strftime(DATE_INPUT_FORMAT) if d else "",
        content=st.session_state.form_content or "",
        mood=st.session_state.form_mood or "",
        reaction=st.session_state.form_reaction or "",
    )


def begin_submit() -> None:
    form = read_form()
    if not (form.type and form.date and form.content and form.mood):
        st.session_state.form_warning = "Please fill in type, date, what happened and mood."
        return
    st.session_state.form_warning = None
    st.session_state.pending_form = form


def reload_records() -> None:
    asyncio.run(service.load())


def offer_download(file_name: str, data: bytes) -> None:
    st.download_button(
        f"⬇ Download {file_name}",
        data,
        file_name=file_name,
        mime=XLSX_MIME,
        key="download_export",
    )


if "next_form" in st.session_state:
    apply_form(st.session_state.pop("next_form"))
elif "form_date" not in st.session_state:
    apply_form(RecordForm.blank())

pending = st.session_state.pending_form

st.title("💝 Our Kindness Log")

left, right = st.columns([2, 3])

with left:
    st.subheader("✍️ New record")
    with st.form("record_form"):
        st.selectbox(
            "Type",
            options=[k.value for k in RecordKind],
            index=None,
            format_func=lambda v: TYPE_LABELS[RecordKind(v)],
            key="form_type",
        )
        st.date_input("Date", key="form_date")
        st.text_area("What happened?", key="form_content")
        st.selectbox(
            "Mood",
            options=[m.value for m in Mood],
            index=None,
            format_func=lambda v: f"{MOOD_ICONS[Mood(v)]} {v}",
            key="form_mood",
        )
        st.text_input("Reaction (optional)", key="form_reaction")
        st.form_submit_button(
            "Saving..." if pending is not None else "Save record",
            disabled=pending is not None,
            on_click=begin_submit,
        )
    if st.session_state.get("form_warning"):
        st.warning(st.session_state.form_warning)

    st.subheader("📊 Moods")
    chart = service.chart.handle
    if chart is not None and chart.active:
        st.plotly_chart(chart.figure, use_container_width=True)

with right:
    head, refresh_col, export_col = st.columns([3, 1, 1])
    with head:
        st.subheader("📜 Records")
    with refresh_col:
        st.button("🔄 Refresh", on_click=reload_records)
    with export_col:
        export_clicked = st.button("📥 Export")

    if export_clicked:
        service.export(offer_download)

    if service.load_error:
        st.error(service.load_error)
    elif service.rows:
        st.dataframe(rows_frame(service.rows), hide_index=True, use_container_width=True)
    else:
        st.info("No records yet.")

if pending is not None:
    try:
        with st.spinner("Saving..."):
            st.session_state.next_form = asyncio.run(service.submit(pending))
    finally:
        st.session_state.pending_form = None
    st.rerun()

for notice in service.drain_notices():
    icon = {"success": "✅", "warning": "⚠️", "error": "❌"}.get(notice.get("level"), "ℹ️")
    st.toast(notice["notice"], icon=icon)
