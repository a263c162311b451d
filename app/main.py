"""
Streamlit Frontend for Daybook

This is the interface the shop owner uses every day.

DESIGN PRINCIPLES:
1. Today's entries first - adding income/expense is one form away
2. Every number on screen comes from the analytics core
3. Clear error messages next to the field that caused them
4. Storage trouble shows an empty view, never a stack trace
"""

import asyncio
from datetime import date
from decimal import Decimal
from typing import Optional

import pandas as pd
import streamlit as st

from daybook.analytics import CSV_FILENAME
from daybook.analytics.export import CSV_MIME_TYPE
from daybook.models import MonthlyReport, RankedEntry, Summary, Transaction, TransactionType
from daybook.orchestrator import BookkeepingService, create_app_components
from daybook.services.storage import NotFoundError, StorageError
from daybook.validation import TransactionValidationError


# Page configuration
st.set_page_config(
    page_title="Daybook",
    page_icon="📒",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for the summary cards
st.markdown("""
<style>
    .income-text { color: #10B981; font-weight: bold; }
    .expense-text { color: #EF4444; font-weight: bold; }
    .profit-text { color: #3B82F6; font-weight: bold; }
    .card {
        padding: 16px;
        border-radius: 10px;
        background-color: #f8f9fa;
        margin: 6px 0;
    }
</style>
""", unsafe_allow_html=True)


MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_service() -> BookkeepingService:
    """Get or create the bookkeeping service (cached)."""
    try:
        return create_app_components()
    except Exception as e:
        st.error(f"Failed to initialize storage: {e}")
        return create_app_components(backend="memory")


def format_currency(amount: Decimal) -> str:
    symbol = get_service().settings.currency_symbol
    return f"{symbol} {amount:,.2f}"


def main():
    """Main application entry point."""
    service = get_service()

    st.sidebar.title("📒 Daybook")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📅 Today", "🔎 Daily View", "📈 Monthly Report", "🛠️ Admin", "⚙️ Settings"],
        index=0,
    )

    st.sidebar.markdown("---")
    st.sidebar.markdown(
        """
        **How to use:**
        1. Add each sale or payment on the Today page
        2. Check any past day in Daily View
        3. See the month's totals and top items in Monthly Report
        """
    )

    if page == "📅 Today":
        render_today_page(service)
    elif page == "🔎 Daily View":
        render_daily_page(service)
    elif page == "📈 Monthly Report":
        render_monthly_page(service)
    elif page == "🛠️ Admin":
        render_admin_page(service)
    elif page == "⚙️ Settings":
        render_settings_page(service)


# =============================================================================
# SHARED WIDGETS
# =============================================================================

def render_summary_cards(summary: Summary, suffix: str = ""):
    """Three cards: income, expense, profit."""
    col1, col2, col3 = st.columns(3)
    with col1:
        st.markdown(f"""
        <div class="card"><p>Total Income{suffix}</p>
        <p class="income-text">{format_currency(summary.income)}</p></div>
        """, unsafe_allow_html=True)
    with col2:
        st.markdown(f"""
        <div class="card"><p>Total Expense{suffix}</p>
        <p class="expense-text">{format_currency(summary.expense)}</p></div>
        """, unsafe_allow_html=True)
    with col3:
        st.markdown(f"""
        <div class="card"><p>Net Profit{suffix}</p>
        <p class="profit-text">{format_currency(summary.profit)}</p></div>
        """, unsafe_allow_html=True)


def render_entry_form(service: BookkeepingService, transaction_type: TransactionType, on_date: date):
    """Income or expense form. Shows field errors under the form."""
    label = "Income Source" if transaction_type == TransactionType.INCOME else "Expense Purpose"

    with st.form(f"{transaction_type.value}_form", clear_on_submit=True):
        st.markdown(f"### Add {transaction_type.label}")
        name = st.text_input(label)
        amount = st.number_input("Amount", min_value=0.0, step=0.01, format="%.2f")
        submitted = st.form_submit_button(f"Add {transaction_type.label}", type="primary")

    if submitted:
        try:
            run_async(service.record_transaction(
                name=name,
                amount=Decimal(str(amount)),
                transaction_type=transaction_type,
                on_date=on_date,
            ))
            st.success(f"{transaction_type.label} added.")
            st.rerun()
        except TransactionValidationError as e:
            for field, message in e.field_errors.items():
                st.error(f"{field.capitalize()}: {message}")
        except StorageError as e:
            st.error(f"Failed to save: {str(e)}")


def render_entry_list(service: BookkeepingService, title: str, entries: list[Transaction]):
    """Entries of one type with inline edit and delete."""
    st.markdown(f"#### {title}")
    if not entries:
        st.info("No entries yet.")
        return

    for txn in entries:
        col1, col2, col3, col4 = st.columns([4, 2, 2, 1])
        col1.write(txn.name)
        col2.write(format_currency(txn.amount))
        col3.write(txn.created_at.strftime("%H:%M") if txn.created_at else "N/A")
        if col4.button("🗑️", key=f"delete_{txn.id}", help="Delete"):
            try:
                run_async(service.delete_transaction(txn.id))
                st.rerun()
            except NotFoundError:
                st.warning("That entry was already deleted.")
            except StorageError as e:
                st.error(f"Failed to delete: {str(e)}")

        with st.expander(f"✏️ Edit {txn.name}"):
            new_name = st.text_input("Name", value=txn.name, key=f"name_{txn.id}")
            new_amount = st.number_input(
                "Amount",
                value=float(txn.amount),
                min_value=0.0,
                step=0.01,
                format="%.2f",
                key=f"amount_{txn.id}",
            )
            if st.button("Save", key=f"save_{txn.id}"):
                try:
                    run_async(service.edit_transaction(
                        txn.id,
                        name=new_name,
                        amount=Decimal(str(new_amount)),
                    ))
                    st.rerun()
                except TransactionValidationError as e:
                    for field, message in e.field_errors.items():
                        st.error(f"{field.capitalize()}: {message}")
                except NotFoundError:
                    st.warning("That entry no longer exists.")
                except StorageError as e:
                    st.error(f"Failed to save: {str(e)}")


def render_ranked(title: str, entries: list[RankedEntry]):
    st.markdown(f"#### {title}")
    if not entries:
        st.info("No data for this month.")
        return
    for entry in entries:
        st.markdown(f"**{entry.name}** - {format_currency(entry.amount)}")
        st.progress(min(float(entry.percentage) / 100, 1.0), text=f"{entry.percentage}%")


# =============================================================================
# PAGES
# =============================================================================

def render_today_page(service: BookkeepingService):
    """Today's summary, entry forms and entry lists."""
    today = date.today()
    st.title("📅 Today")
    st.markdown(today.strftime("%d %B %Y"))

    report = run_async(service.daily_report(today))
    render_summary_cards(report.summary)

    st.markdown("---")
    col1, col2 = st.columns(2)
    with col1:
        render_entry_form(service, TransactionType.INCOME, today)
        render_entry_list(service, "Today's Income", report.incomes)
    with col2:
        render_entry_form(service, TransactionType.EXPENSE, today)
        render_entry_list(service, "Today's Expenses", report.expenses)


def render_daily_page(service: BookkeepingService):
    """Any past day, read only."""
    st.title("🔎 Daily View")
    selected = st.date_input("Select date", value=date.today())

    report = run_async(service.daily_report(selected))
    render_summary_cards(report.summary)

    col1, col2 = st.columns(2)
    for column, title, entries in (
        (col1, "Income", report.incomes),
        (col2, "Expenses", report.expenses),
    ):
        with column:
            st.markdown(f"#### {title}")
            if entries:
                st.dataframe(
                    pd.DataFrame([
                        {
                            "Name": txn.name,
                            "Amount": float(txn.amount),
                            "Time": txn.created_at.strftime("%H:%M") if txn.created_at else "N/A",
                        }
                        for txn in entries
                    ]),
                    hide_index=True,
                    use_container_width=True,
                )
            else:
                st.info(f"No {title.lower()} recorded for this day.")


def monthly_chart_frame(report: MonthlyReport) -> Optional[pd.DataFrame]:
    if not report.daily_breakdown:
        return None
    return pd.DataFrame(
        [
            {
                "Day": bucket.day,
                "Income": float(bucket.income),
                "Expense": float(bucket.expense),
                "Profit": float(bucket.profit),
            }
            for bucket in report.daily_breakdown
        ]
    ).set_index("Day")


def render_monthly_page(service: BookkeepingService):
    """Month/year picker, totals, per-day chart and top lists."""
    st.title("📈 Monthly Report")

    today = date.today()
    col1, col2 = st.columns(2)
    with col1:
        month = st.selectbox(
            "Month",
            options=list(range(1, 13)),
            index=today.month - 1,
            format_func=lambda m: MONTH_NAMES[m - 1],
        )
    with col2:
        years = list(range(today.year - 5, today.year + 6))
        year = st.selectbox("Year", options=years, index=years.index(today.year))

    report = run_async(service.monthly_report(month, year))
    render_summary_cards(report.summary)

    st.markdown("### Daily Breakdown")
    frame = monthly_chart_frame(report)
    if frame is None:
        st.info("No transactions recorded in this month.")
    else:
        st.bar_chart(frame, color=["#10B981", "#EF4444", "#3B82F6"])

    col1, col2 = st.columns(2)
    with col1:
        render_ranked("Top Income Sources", report.top_income)
    with col2:
        render_ranked("Top Expense Categories", report.top_expense)


def reset_admin_page():
    """A new date range starts again at its first page."""
    st.session_state.admin_page = 1


def render_admin_page(service: BookkeepingService):
    """Year overview, comparison chart, filtered paginated table and export."""
    st.title("🛠️ Admin Dashboard")

    if "admin_page" not in st.session_state:
        st.session_state.admin_page = 1

    col1, col2 = st.columns(2)
    with col1:
        start = st.date_input("Start Date", value=None, on_change=reset_admin_page)
    with col2:
        end = st.date_input("End Date", value=None, on_change=reset_admin_page)

    # Year to date overview
    yearly = run_async(service.yearly_report())
    st.markdown("### Financial Overview")
    render_summary_cards(yearly.summary, suffix=" (YTD)")
    st.metric("Profit Margin", f"{yearly.profit_margin:.1f}%")

    st.markdown("### Monthly Comparison")
    st.bar_chart(
        pd.DataFrame([
            {
                "Month": bucket.label,
                "Income": float(bucket.income),
                "Expense": float(bucket.expense),
                "Profit": float(bucket.profit),
            }
            for bucket in yearly.monthly_breakdown
        ]).set_index("Month"),
        color=["#10B981", "#EF4444", "#3B82F6"],
    )

    st.markdown("### All Transactions")
    page = run_async(service.admin_table(start, end, st.session_state.admin_page))
    if page.items:
        st.dataframe(
            pd.DataFrame([
                {
                    "Date": txn.date.isoformat(),
                    "Name": txn.name,
                    "Type": txn.type.label,
                    "Amount": float(txn.amount),
                }
                for txn in page.items
            ]),
            hide_index=True,
            use_container_width=True,
        )
    else:
        st.info("No transactions found for this range.")

    col1, col2, col3 = st.columns([1, 2, 1])
    with col1:
        if st.button("⬅️ Previous", disabled=not page.has_previous):
            st.session_state.admin_page -= 1
            st.rerun()
    with col2:
        st.markdown(f"Page {page.page_number} of {page.total_pages} ({page.total_items} rows)")
    with col3:
        if st.button("Next ➡️", disabled=not page.has_next):
            st.session_state.admin_page += 1
            st.rerun()

    st.download_button(
        "📥 Export CSV",
        data=run_async(service.export_csv(start, end)),
        file_name=CSV_FILENAME,
        mime=CSV_MIME_TYPE,
    )


def render_settings_page(service: BookkeepingService):
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Storage")
    st.markdown(f"**Backend:** `{type(service.storage).__name__}`")

    from daybook.config import validate_all_settings

    status = validate_all_settings()
    for name, key in (
        ("Application", "app"),
        ("Local File", "local_storage"),
        ("Google Sheets", "google_sheets"),
    ):
        if status.get(key, False):
            st.success(f"✅ {name} - Configured")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    st.markdown("---")
    st.markdown("### Sample Data")
    if st.button("🌱 Load sample entries"):
        created = run_async(service.seed_demo_data())
        st.success(f"Added {len(created)} sample entries.")

    st.markdown("### Recent Activity")
    events = service.audit_logger.recent_events[:20]
    if events:
        for event in events:
            st.markdown(f"- `{event.timestamp:%Y-%m-%d %H:%M}` {event.description}")
    else:
        st.info("Nothing recorded yet.")

    st.markdown("---")
    st.markdown(
        "To configure the application, create a `.env` file. "
        "See `.env.example` for the available variables."
    )


if __name__ == "__main__":
    main()
