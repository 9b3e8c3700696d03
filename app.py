# app.py
# -----------------------------------------------
# 💰 알바 근무 기록 (Streamlit)
# -----------------------------------------------
# Requires: streamlit, sqlmodel, pandas, reportlab, psycopg2-binary (Postgres only)
# Three tabs: dashboard, calendar of records, settings.

import logging
from datetime import date, datetime, time, timedelta

import streamlit as st

import config
from domain import Settings, ShiftFields, ShiftRecord
from exceptions import DomainError, NotFound, ValidationError
from report import monthly_statement_pdf
from repository import SettingsRepository, ShiftRepository
from services import ShiftLedger
from utils import (
    format_currency,
    format_hours,
    month_grid,
    next_payday,
    shift_month,
    shifts_to_dataframe,
    weekday_label,
)
from validators import MAX_BREAK_MINUTES, validate_shift_fields

st.set_page_config(page_title=config.APP_TITLE, page_icon="💰", layout="centered")
config.configure_logging()
logger = logging.getLogger("app")


@st.cache_resource
def get_repos(url: str):
    logger.info("Opening shift store at %s", url.rsplit("@", 1)[-1])
    shifts = ShiftRepository.from_url(url)
    return shifts, SettingsRepository(shifts.engine)


shift_repo, settings_repo = get_repos(config.DB_URL)
ledger = ShiftLedger(shift_repo)
settings = settings_repo.load(config.default_settings())
today = date.today()

st.title(f"💰 {config.APP_TITLE}")

# =========================
# State helpers
# =========================
def _flash_success_if_any():
    msg = st.session_state.pop("_flash_success", None)
    if msg:
        st.success(msg)


def _reset_form_if_requested(prefix: str):
    if st.session_state.get("_reset_form") == prefix:
        for k in [k for k in st.session_state if str(k).startswith(f"{prefix}_")]:
            st.session_state.pop(k, None)
        st.session_state.pop("_reset_form", None)


def _time_text(r: ShiftRecord) -> str:
    return f"{r.start_time:%H:%M} ~ {r.end_time:%H:%M}"


# =========================
# Shift form (add / edit)
# =========================
def shift_form(prefix: str, existing: ShiftRecord | None = None):
    """Renders the form; on save writes through the ledger and reruns."""
    _reset_form_if_requested(prefix)
    if existing is None:
        base = ShiftFields.prefilled(
            settings,
            work_date=today,
            start_time=datetime.combine(today, time(9, 0)),
            end_time=datetime.combine(today, time(18, 0)),
            break_minutes=60,
        )
    else:
        base = existing.to_fields()

    work_date = st.date_input("근무일", value=base.work_date, key=f"{prefix}_date")
    c1, c2 = st.columns(2)
    start_t = c1.time_input("출근", value=base.start_time.time(), step=600, key=f"{prefix}_start")
    end_t = c2.time_input("퇴근", value=base.end_time.time(), step=600, key=f"{prefix}_end")
    overnight = st.checkbox(
        "다음 날 퇴근", value=base.end_time.date() > base.start_time.date(), key=f"{prefix}_overnight"
    )
    break_min = st.number_input(
        "휴게시간 (분)", min_value=0, max_value=MAX_BREAK_MINUTES, step=10,
        value=int(base.break_minutes), key=f"{prefix}_break",
    )
    wage = st.number_input("시급 (원)", min_value=0, step=10, value=int(base.hourly_wage), key=f"{prefix}_wage")
    memo = st.text_input("메모 (선택)", value=base.memo or "", key=f"{prefix}_memo")

    end_date = work_date + timedelta(days=1) if overnight else work_date
    fields = ShiftFields(
        work_date=work_date,
        start_time=datetime.combine(work_date, start_t),
        end_time=datetime.combine(end_date, end_t),
        break_minutes=float(break_min),
        hourly_wage=int(wage),
        memo=memo.strip() or None,
    )

    try:
        validate_shift_fields(fields)
        can_save = True
        p1, p2 = st.columns(2)
        p1.metric("근무시간", format_hours(fields.worked_hours))
        p2.metric("예상 일급", format_currency(fields.daily_pay))
    except ValidationError as e:
        can_save = False
        st.caption(f":red[{e}]")

    if st.button("저장", key=f"{prefix}_save", disabled=not can_save, use_container_width=True):
        try:
            if existing is None:
                record = ledger.create(fields)
                st.session_state["_reset_form"] = prefix
            else:
                record = ledger.update(existing.id, fields)
                st.session_state.pop("editing_id", None)
        except DomainError as e:
            st.error(str(e))
        else:
            st.session_state["_flash_success"] = (
                f"저장됨 {record.work_date:%m/%d}: {format_hours(record.worked_hours)} · "
                f"{format_currency(record.daily_pay)}"
            )
            st.rerun()


def shift_card(r: ShiftRecord, show_date: bool = True):
    with st.container(border=True):
        left, right = st.columns([3, 2])
        if show_date:
            left.markdown(f"**{r.work_date:%m/%d} ({weekday_label(r.work_date)})**")
        left.caption(_time_text(r))
        right.markdown(f"**{format_hours(r.worked_hours)}**")
        right.caption(format_currency(r.daily_pay))
        if r.memo:
            st.caption(r.memo)


_flash_success_if_any()
tab_dash, tab_records, tab_settings = st.tabs(["🏠 대시보드", "📋 근무기록", "⚙️ 설정"])

# =========================
# 🏠 Dashboard
# =========================
with tab_dash:
    summary = ledger.month_summary(today.year, today.month)
    c1, c2 = st.columns(2)
    c1.metric("총 근무일수", f"{summary.count}일")
    c2.metric("총 근무시간", format_hours(summary.total_hours))
    st.metric("이번 달 예상 월급", format_currency(summary.total_pay))

    payday = next_payday(today, settings.payday_day_of_month)
    st.caption(f"다음 급여일: {payday:%Y-%m-%d} (D-{(payday - today).days})")

    with st.expander("➕ 근무 추가"):
        shift_form("add")

    st.subheader("최근 근무 기록")
    recent = ledger.recent(5)
    if not recent:
        st.info("근무 기록이 없습니다. '근무 추가'로 첫 근무를 기록해보세요.")
    for r in recent:
        shift_card(r)

# =========================
# 📋 Records (calendar)
# =========================
with tab_records:
    if "view_month" not in st.session_state:
        st.session_state["view_month"] = (today.year, today.month)
    year, month = st.session_state["view_month"]

    def _move_month(delta: int):
        st.session_state["view_month"] = shift_month(year, month, delta)
        st.session_state.pop("selected_day", None)
        st.session_state.pop("editing_id", None)
        st.session_state.pop("confirm_delete", None)

    nav_l, nav_c, nav_r = st.columns([1, 4, 1])
    nav_l.button("◀", key="prev_month", on_click=_move_month, args=(-1,))
    nav_c.markdown(f"<h4 style='text-align:center'>{year}년 {month}월</h4>", unsafe_allow_html=True)
    nav_r.button("▶", key="next_month", on_click=_move_month, args=(1,))

    records = list(ledger.month(year, month))
    month_total = ledger.aggregate(records)
    by_day = ledger.group_by_calendar_day(records)

    s1, s2, s3 = st.columns(3)
    s1.metric("근무일", month_total.count)
    s2.metric("시간", f"{month_total.total_hours:.1f}")
    s3.metric("급여", format_currency(month_total.total_pay))

    # Sunday-first grid
    header = st.columns(7)
    for i, label in enumerate(["일", "월", "화", "수", "목", "금", "토"]):
        color = "red" if i == 0 else ("blue" if i == 6 else "gray")
        header[i].markdown(f":{color}[**{label}**]")

    selected_day = st.session_state.get("selected_day")
    for week in month_grid(year, month):
        cols = st.columns(7)
        for i, day in enumerate(week):
            if day == 0:
                continue
            day_logs = by_day.get(day)
            label = str(day)
            if day_logs:
                label += f" · {ledger.aggregate(day_logs).total_hours:.1f}h"
            if cols[i].button(
                label,
                key=f"day_{year}_{month}_{day}",
                type="primary" if day == selected_day else "secondary",
                use_container_width=True,
            ):
                st.session_state["selected_day"] = None if day == selected_day else day
                st.session_state.pop("confirm_delete", None)
                st.rerun()

    if selected_day:
        sel_date = date(year, month, selected_day)
        st.markdown(f"**{sel_date:%m월 %d일} ({weekday_label(sel_date)})**")
        day_logs = by_day.get(selected_day, [])
        if not day_logs:
            st.caption("근무 기록 없음")
        for r in day_logs:
            shift_card(r, show_date=False)
            b1, b2, _ = st.columns([1, 1, 4])
            if b1.button("✏️ 수정", key=f"edit_{r.id}"):
                st.session_state["editing_id"] = r.id
                st.rerun()
            if b2.button("🗑️ 삭제", key=f"del_{r.id}"):
                st.session_state["confirm_delete"] = r.id
                st.rerun()
            if st.session_state.get("confirm_delete") == r.id:
                st.warning("이 근무 기록을 삭제하시겠습니까?")
                y1, y2, _ = st.columns([1, 1, 4])
                if y1.button("삭제", key=f"confirm_del_{r.id}", type="primary"):
                    ledger.delete(r.id)
                    st.session_state.pop("confirm_delete", None)
                    if len(day_logs) <= 1:
                        st.session_state.pop("selected_day", None)
                    st.rerun()
                if y2.button("취소", key=f"cancel_del_{r.id}"):
                    st.session_state.pop("confirm_delete", None)
                    st.rerun()

    editing_id = st.session_state.get("editing_id")
    if editing_id:
        try:
            editing = ledger.get(editing_id)
        except NotFound:
            st.warning("수정할 근무 기록을 찾을 수 없습니다.")
            st.session_state.pop("editing_id", None)
        else:
            with st.expander("✏️ 근무 수정", expanded=True):
                shift_form(f"edit_{editing.id}", editing)
                if st.button("취소", key="cancel_edit"):
                    st.session_state.pop("editing_id", None)
                    st.rerun()

    if records:
        with st.expander("표로 보기"):
            st.dataframe(
                shifts_to_dataframe(records).drop(columns=["ID"]),
                hide_index=True,
                use_container_width=True,
            )
        st.download_button(
            "⬇️ 월간 명세서 PDF",
            data=monthly_statement_pdf(year, month, records, month_total),
            file_name=f"statement_{year:04d}-{month:02d}.pdf",
            mime="application/pdf",
            use_container_width=True,
        )

# =========================
# ⚙️ Settings
# =========================
with tab_settings:
    with st.form("settings_form"):
        wage_in = st.number_input("기본 시급 (원)", min_value=0, step=10, value=settings.default_hourly_wage)
        st.caption("새 근무 기록 추가 시 기본값으로 사용됩니다")
        payday_in = st.selectbox(
            "급여일",
            options=list(range(1, 32)),
            index=settings.payday_day_of_month - 1,
            format_func=lambda d: f"{d}일",
        )
        if st.form_submit_button("저장"):
            try:
                settings_repo.save(Settings(default_hourly_wage=int(wage_in), payday_day_of_month=int(payday_in)))
            except ValidationError as e:
                st.error(str(e))
            else:
                st.session_state["_flash_success"] = "설정을 저장했습니다."
                st.rerun()
    st.caption(f"버전 {config.APP_VERSION}")
