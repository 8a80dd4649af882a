import logging
from contextlib import contextmanager
from datetime import date
from typing import Optional

import altair as alt
import pandas as pd
import streamlit as st

from core.auth import current_user_email, is_authenticated, login, logout
from core.charts import statistics_chart
from core.config import settings
from core.dates import format_date_range_label
from core.errors import ConfigurationMissingError
from core.filters import ALL_SOURCES
from core.settings_store import SheetSettings, load_sheet_settings, save_sheet_settings
from core.sorting import SortState
from core.state import DashboardState

alt.data_transformers.disable_max_rows()
logging.basicConfig(level=settings.log_level)

# Presentation only: labels and icons never enter the core types.
COLUMN_LABELS = {
    "customer_name": "고객명",
    "design": "디자인",
    "order_date": "주문일자",
    "pickup_date": "픽업일자",
    "flavor": "맛선택",
    "base": "시트",
    "size": "사이즈",
    "cream": "크림",
    "request_notes": "요청사항",
    "special_notes": "특이사항",
    "source": "주문경로",
}
TABLE_COLUMNS = ["customer_name", "design", "order_date", "pickup_date", "flavor", "request_notes", "special_notes"]
STAT_LABELS = {"design": "디자인", "flavor": "맛선택", "size": "사이즈", "base": "시트", "cream": "크림"}
STAT_ICONS = {"design": "🎨", "flavor": "🍰", "size": "📏", "base": "🥞", "cream": "🧁"}
SORT_ARROWS = {"asc": " ▲", "desc": " ▼", "default": ""}


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-header {display: flex;justify-content: space-between;align-items: center;margin-bottom: 8px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;}
        .card-actions {font-size: 0.9rem;color: #6b7280;}
        .range-label {color: #374151;font-size: 0.95rem;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str, actions: Optional[str] = None):
    container = st.container()
    container.markdown(
        f"""
        <div class="card">
          <div class="card-header">
            <div class="card-title">{title}</div>
            <div class="card-actions">{actions or ""}</div>
          </div>
        """,
        unsafe_allow_html=True,
    )
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def get_dashboard_state() -> DashboardState:
    if "dashboard_state" not in st.session_state:
        st.session_state["dashboard_state"] = DashboardState()
    return st.session_state["dashboard_state"]


def show_pending_error(state: DashboardState):
    error = state.consume_error()
    if error:
        st.toast(f"오류 발생: {error}", icon="⚠️")
        st.error(error)


def display_value(value: object) -> str:
    text = "" if value is None else str(value)
    return text if text.strip() else "-"


# ---------- Pages ----------
def render_login_page():
    st.title("🎂 케이크 주문 관리")
    with st.form("login"):
        email = st.text_input("아이디")
        password = st.text_input("비밀번호", type="password")
        submitted = st.form_submit_button("로그인")
    if submitted:
        if login(st.session_state, email, password):
            st.rerun()
        else:
            st.error("아이디 또는 비밀번호가 올바르지 않습니다.")


def render_settings_form():
    current = load_sheet_settings(st.session_state)
    with st.expander("Google Sheets 설정", expanded=bool(st.session_state.pop("_open_settings", False))):
        with st.form("sheet_settings"):
            api_key = st.text_input("API Key", value=current.api_key, type="password")
            sheet_id = st.text_input("Sheet ID", value=current.sheet_id)
            sheet_name = st.text_input("Sheet Name", value=current.sheet_name)
            saved = st.form_submit_button("저장")
        st.caption("시트는 '링크가 있는 모든 사용자'에게 보기 권한으로 공유되어 있어야 합니다.")
    if saved:
        try:
            save_sheet_settings(st.session_state, SheetSettings(api_key=api_key, sheet_id=sheet_id, sheet_name=sheet_name))
            st.toast("Google Sheets 설정이 저장되었습니다.", icon="✅")
        except ConfigurationMissingError as exc:
            st.error(f"{exc.message} (누락: {', '.join(exc.fields)})")


def render_calendar_card(state: DashboardState):
    with card("📅 조회 기간 선택"):
        current = state.filters.date_range
        default = (current.start, current.end) if current.start else ()
        picked = st.date_input("조회 기간", value=default, format="YYYY.MM.DD")
        start: Optional[date] = None
        end: Optional[date] = None
        if isinstance(picked, (tuple, list)):
            start = picked[0] if len(picked) > 0 else None
            end = picked[1] if len(picked) > 1 else None
        elif isinstance(picked, date):
            start = picked
        if (start, end) != (current.start, current.end):
            state.set_date_range(start, end)
        st.markdown(f"<div class='range-label'>{format_date_range_label(start, end)}</div>", unsafe_allow_html=True)

        label = "조회 중..." if state.is_loading else "주문 조회"
        if st.button(label, disabled=state.is_loading, type="primary"):
            try:
                with st.spinner("주문 데이터를 불러오는 중..."):
                    loaded = state.fetch_orders(load_sheet_settings(st.session_state))
            except ConfigurationMissingError as exc:
                st.toast(exc.message, icon="⚠️")
                st.session_state["_open_settings"] = True
                st.rerun()
            else:
                if loaded:
                    st.toast("주문 데이터를 성공적으로 불러왔습니다.", icon="✅")


def render_sort_headers(state: DashboardState):
    cols = st.columns(len(TABLE_COLUMNS))
    sort: SortState = state.sort
    for col, field in zip(cols, TABLE_COLUMNS):
        arrow = SORT_ARROWS[sort.direction] if sort.column == field else ""
        if col.button(f"{COLUMN_LABELS[field]}{arrow}", key=f"sort_{field}", use_container_width=True):
            state.toggle_sort(field)
            st.rerun()


def render_orders_table(state: DashboardState):
    with card("📋 주문 내역"):
        c1, c2 = st.columns([3, 2])
        search = c1.text_input("고객명 검색", value=state.filters.customer_search, placeholder="고객명 검색")
        if search != state.filters.customer_search:
            state.set_customer_search(search)
        sources = [ALL_SOURCES] + state.view.order_sources
        current_source = state.filters.order_source if state.filters.order_source in sources else ALL_SOURCES
        source = c2.selectbox("주문경로", options=sources, index=sources.index(current_source))
        if source != state.filters.order_source:
            state.set_order_source(source)

        render_sort_headers(state)
        rows = state.view.rows
        if rows.empty:
            st.info("조회된 주문이 없습니다.")
        else:
            display = pd.DataFrame(
                {
                    COLUMN_LABELS["customer_name"]: rows["customer_name"],
                    COLUMN_LABELS["design"]: rows["design"],
                    COLUMN_LABELS["order_date"]: rows["order_date"],
                    COLUMN_LABELS["pickup_date"]: rows["pickup_date"],
                    "맛/시트/사이즈": rows["flavor"] + "/" + rows["base"] + "/" + rows["size"],
                    COLUMN_LABELS["request_notes"]: rows["request_notes"].map(display_value),
                    COLUMN_LABELS["special_notes"]: rows["special_notes"].map(display_value),
                }
            )
            st.dataframe(display, use_container_width=True, hide_index=True)
            render_order_detail(rows)
        st.markdown(f"총 **{state.view.total}개**의 주문")


def render_order_detail(rows: pd.DataFrame):
    labels = {idx: f"{row.customer_name} · {row.pickup_date} · {row.design}" for idx, row in rows.iterrows()}
    with st.expander("주문 상세 보기"):
        chosen = st.selectbox("주문 선택", options=list(labels.keys()), format_func=labels.get)
        if chosen is None:
            return
        order = rows.loc[chosen]
        detail = pd.DataFrame(
            {"항목": [COLUMN_LABELS[c] for c in COLUMN_LABELS], "내용": [display_value(order[c]) for c in COLUMN_LABELS]}
        )
        st.dataframe(detail, use_container_width=True, hide_index=True)


def render_statistics(state: DashboardState):
    cols = st.columns(len(STAT_LABELS))
    for col, (category, label) in zip(cols, STAT_LABELS.items()):
        items = state.view.statistics.get(category, [])
        with col:
            with card(f"{STAT_ICONS[category]} {label}별 통계"):
                if not items:
                    st.caption("데이터가 없습니다")
                    continue
                for item in items:
                    st.progress(item.percentage / 100, text=f"{item.name} · {item.count}건")
                st.altair_chart(statistics_chart(items, label), use_container_width=True)


# ---------- UI setup ----------
st.set_page_config(page_title="케이크 주문 관리", layout="wide")
inject_base_styles()

if not is_authenticated(st.session_state):
    render_login_page()
    st.stop()

state = get_dashboard_state()
with st.sidebar:
    st.markdown(f"**{current_user_email(st.session_state)}** 님")
    if st.button("로그아웃"):
        logout(st.session_state)
        st.session_state.pop("dashboard_state", None)
        st.rerun()
    st.markdown("---")
    render_settings_form()

st.title("🎂 케이크 주문 관리")
render_calendar_card(state)
show_pending_error(state)
render_orders_table(state)
render_statistics(state)
