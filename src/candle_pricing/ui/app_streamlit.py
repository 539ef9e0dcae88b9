"""
Streamlit UI for the Candle Price Calculator.

Features:
- Calculation breakdown with per-drop color price
- Candle name and image
- Copy text, printable report and text downloads
- Save to history, recall and clear
"""
import streamlit as st
import sys
from pathlib import Path
from datetime import datetime

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from candle_pricing.config.settings import get_settings
from candle_pricing.engine.formatting import breakdown_rows, format_currency, format_price_per_drop
from candle_pricing.engine.pricing_engine import price_per_color_drop
from candle_pricing.history.store import HistoryStore
from candle_pricing.logger import setup_file_logger
from candle_pricing.services.calculator_service import CalculatorSession


st.set_page_config(
    page_title="Candle Price Calculator",
    layout="wide",
)


@st.cache_resource
def get_settings_cached():
    """Get cached settings."""
    settings = get_settings()
    setup_file_logger(settings.log_dir, front_end="streamlit")
    return settings


@st.cache_resource
def get_history():
    """History store, loaded once per server process."""
    return HistoryStore.from_settings(get_settings_cached())


try:
    settings = get_settings_cached()
    history = get_history()
except Exception as e:
    st.error(f"System Error: {e}")
    st.stop()

symbol = settings.currency_symbol

if 'session' not in st.session_state:
    st.session_state.session = CalculatorSession(history, settings=settings)
session: CalculatorSession = st.session_state.session

# Widget keys mirror the input attributes
FIELDS = [
    ('jar_cost', f"Jar Price ({symbol})", None),
    ('wax_grams', "Wax (grams)", None),
    ('wick_cost', f"Wick Cost ({symbol})", None),
    ('fragrance_price_per_liter', f"Fragrance Price ({symbol} per Liter)", None),
    ('fragrance_grams', "Fragrance Added (grams)", None),
    ('color_drops', f"Color Drops ({format_price_per_drop(price_per_color_drop(), symbol)}/drop)",
     "149 for 100ml; ~20 drops per ml"),
]
PACKAGING = [
    ('packaging_box', f"Box ({symbol})"),
    ('packaging_sticker', f"Sticker ({symbol})"),
    ('packaging_ribbon', f"Ribbon ({symbol})"),
]


def _sync_widgets():
    """Push session values into widget state (after reset or recall)."""
    st.session_state.w_name = session.name
    for attr in [f[0] for f in FIELDS] + [p[0] for p in PACKAGING] + [
        'additional_charges', 'profit_percent', 'gst_percent'
    ]:
        st.session_state[f"w_{attr}"] = float(getattr(session.inputs, attr))
    st.session_state.w_apply_gst = session.inputs.apply_gst


if 'w_name' not in st.session_state or st.session_state.get('pending_sync'):
    _sync_widgets()
    st.session_state.pending_sync = False
    st.session_state.upload_nonce = st.session_state.get('upload_nonce', 0) + 1


# ============================================================================
# CUSTOM CSS & STYLING
# ============================================================================
st.markdown("""
    <style>
        .block-container {
            padding-top: 2rem;
            padding-bottom: 2rem;
        }
        h1 {
            font-family: 'Helvetica Neue', Helvetica, Arial, sans-serif;
            font-weight: 700;
        }
    </style>
""", unsafe_allow_html=True)

st.title("Candle Price Calculator")
st.caption(f"v1.0 | {datetime.now().strftime('%Y-%m-%d')}")

results_col, inputs_col = st.columns([1.2, 1], gap="large")


# ============================================================================
# RIGHT: INPUTS
# ============================================================================
with inputs_col:
    st.subheader("Enter Details")
    with st.container(border=True):
        session.name = st.text_input("Candle Name", key="w_name", placeholder="My Candle")

        upload = st.file_uploader(
            "Upload Image",
            type=["png", "jpg", "jpeg", "gif", "webp"],
            key=f"w_upload_{st.session_state.upload_nonce}",
        )
        if upload is not None:
            session.set_image(upload.getvalue(), upload.type or "image/png")

        values = {}
        for attr, label, hint in FIELDS:
            values[attr] = st.number_input(label, key=f"w_{attr}", step=1.0, help=hint)

        c1, c2, c3 = st.columns(3)
        for col, (attr, label) in zip((c1, c2, c3), PACKAGING):
            with col:
                values[attr] = st.number_input(label, key=f"w_{attr}", step=1.0)

        values['additional_charges'] = st.number_input(
            f"Additional Charges ({symbol})", key="w_additional_charges", step=1.0
        )
        values['profit_percent'] = st.number_input("Profit %", key="w_profit_percent", step=1.0)

        g1, g2 = st.columns([1, 1])
        with g1:
            values['apply_gst'] = st.checkbox("Apply GST", key="w_apply_gst")
        with g2:
            values['gst_percent'] = st.number_input(
                "GST %", key="w_gst_percent", step=1.0, disabled=not values['apply_gst']
            )

        session.update(**values)

        if st.button("Reset", use_container_width=True):
            session.reset()
            st.session_state.pending_sync = True
            st.rerun()


# ============================================================================
# LEFT: RESULTS
# ============================================================================
with results_col:
    result = session.result

    with st.container(border=True):
        if session.name:
            st.header(session.name)
        image_data = session.image_bytes()
        if image_data:
            st.image(image_data, width=240)

        st.subheader("Calculation Breakdown")
        for label, amount, strong in breakdown_rows(result, session.inputs, symbol):
            left, right = st.columns([3, 1])
            if strong:
                left.markdown(f"**{label}**")
                right.markdown(f"**{format_currency(amount, symbol)}**")
            else:
                left.write(label)
                right.write(format_currency(amount, symbol))

        st.divider()

        m1, m2 = st.columns(2)
        m1.metric("Selling Price", format_currency(result.selling_price, symbol))
        if session.inputs.apply_gst:
            m2.metric("Final Price", format_currency(result.final_price, symbol))

        with st.expander("📋 Copy Results"):
            st.caption("Use the copy icon on the block below.")
            st.code(session.results_text(), language=None)

        with st.expander("🔍 Calculation Trace"):
            st.text(result.get_trace_text())

        btn_col1, btn_col2, btn_col3 = st.columns(3)
        file_stem = (session.name or "candle").replace(" ", "_")
        with btn_col1:
            st.download_button(
                "🖨️ Printable Page",
                data=session.report_html(),
                file_name=f"{file_stem}_price.html",
                mime="text/html",
                help="Opens a printable page; print or save it as PDF.",
                use_container_width=True
            )
        with btn_col2:
            st.download_button(
                "📥 Text",
                data=session.results_text(),
                file_name=f"{file_stem}_price.txt",
                mime="text/plain",
                use_container_width=True
            )
        with btn_col3:
            if st.button("💾 Save to History", type="primary", use_container_width=True):
                try:
                    session.save_to_history()
                    st.toast("Saved to history")
                except OSError as e:
                    st.error(f"Could not save history: {e}")


# ============================================================================
# HISTORY
# ============================================================================
st.divider()
head_col, clear_col = st.columns([4, 1])
with head_col:
    st.subheader("Recent Calculations")
with clear_col:
    if st.button("🗑️ Clear", use_container_width=True):
        session.clear_history()
        st.rerun()

if len(history) == 0:
    st.info('No history yet. Click "Save to History" after a calculation.')
else:
    history_df = history.to_dataframe()
    st.dataframe(history_df, use_container_width=True, hide_index=True)

    r1, r2, r3 = st.columns([3, 1, 1])
    records = history.records
    with r1:
        choice = st.selectbox(
            "Recall",
            options=range(len(records)),
            format_func=lambda i: f"{history_df.iloc[i]['Time']} | {history_df.iloc[i]['Name']}",
            label_visibility="collapsed",
        )
    with r2:
        if st.button("↩️ Recall", use_container_width=True):
            session.restore(records[choice])
            st.session_state.pending_sync = True
            st.rerun()
    with r3:
        st.download_button(
            "📥 CSV",
            data=history_df.to_csv(index=False),
            file_name="candle_history.csv",
            mime="text/csv",
            use_container_width=True
        )
