"""
Export Cost Calculator
======================

Streamlit form for quoting a single export shipment, showing the printable
quote and offering it as a PDF download.

Run with:
    streamlit run carriers/export_freight/dashboard/Calculator.py
"""

import streamlit as st
import streamlit.components.v1 as components

from carriers.export_freight.data import CURRENCY_SYMBOL, VEHICLE_LABELS
from carriers.export_freight.errors import QuoteExportError
from carriers.export_freight.report import (
    QuoteRenderer,
    export_filename,
    export_pdf_bytes,
    format_money,
    format_number,
)
from carriers.export_freight.session import QuoteSession

# =============================================================================
# PAGE CONFIG
# =============================================================================

st.set_page_config(
    page_title="Export Cost Calculator",
    page_icon="📦",
    layout="centered",
)

if "quote_session" not in st.session_state:
    st.session_state.quote_session = QuoteSession()
    st.session_state.show_report = False

session: QuoteSession = st.session_state.quote_session


def _reset_charge_widgets() -> None:
    """Drop charge row widget state so rows re-read the session after a removal."""
    for key in [k for k in st.session_state if str(k).startswith("charge_")]:
        del st.session_state[key]


st.title("Export Cost Calculator")

# =============================================================================
# COMPANY
# =============================================================================

session.set_company_name(st.text_input("Company Name", value=session.company.company_name, key="company_name"))
session.set_contact_person(st.text_input("Contact Person", value=session.company.contact_person, key="contact_person"))
session.set_contact_no(st.text_input("Contact No", value=session.company.contact_no, key="contact_no"))

# =============================================================================
# SHIPMENT
# =============================================================================

request = session.request
destination_keys = list(session.destinations)
session.set_destination(
    st.selectbox(
        "Destination",
        destination_keys,
        index=destination_keys.index(request.destination),
        format_func=lambda key: session.destinations[key].name,
    )
)

col1, col2, col3 = st.columns(3)
with col1:
    session.set_length(st.number_input("Length (cm)", min_value=0.0, value=float(request.dimensions.length), key="length"))
with col2:
    session.set_width(st.number_input("Width (cm)", min_value=0.0, value=float(request.dimensions.width), key="width"))
with col3:
    session.set_height(st.number_input("Height (cm)", min_value=0.0, value=float(request.dimensions.height), key="height"))

col1, col2 = st.columns(2)
with col1:
    session.set_actual_weight(
        st.number_input("Actual Weight per Pallet (kg)", min_value=0.0, value=float(request.actual_weight), key="actual_weight")
    )
with col2:
    session.set_pallet_count(
        st.number_input("Number of Pallets", min_value=0, step=1, value=int(request.pallet_count), key="pallet_count")
    )

# =============================================================================
# CHARGES
# =============================================================================

delivery_required = st.checkbox("Delivery Service Required", value=request.delivery.required, key="delivery_required")
if delivery_required != request.delivery.required:
    session.set_delivery_required(delivery_required)

if delivery_required:
    rates = session.request.delivery.rates
    options = [None] + list(rates)
    session.set_vehicle(
        st.selectbox(
            "Vehicle type",
            options,
            index=options.index(session.request.delivery.vehicle),
            format_func=lambda key: "Select vehicle type" if key is None
            else f"{VEHICLE_LABELS.get(key, key)} ({CURRENCY_SYMBOL}{format_number(rates[key])})",
        )
    )

st.number_input("Clearance Charge (Include 7% VAT)", value=float(request.clearance_charge), disabled=True)

st.markdown("**Additional Charges**")
for i, charge in enumerate(session.request.additional_charges):
    col1, col2, col3 = st.columns([3, 2, 1])
    with col1:
        session.set_charge_name(
            i, st.text_input("Charge Name", value=charge.name, key=f"charge_name_{i}", label_visibility="collapsed",
                             placeholder="Charge Name")
        )
    with col2:
        session.set_charge_amount(
            i, st.number_input("Amount", value=float(charge.amount), key=f"charge_amount_{i}",
                               label_visibility="collapsed")
        )
    with col3:
        if st.button("Remove", key=f"charge_remove_{i}"):
            session.remove_charge(i)
            _reset_charge_widgets()
            st.rerun()

if st.button("+ Add Charge"):
    session.add_charge()
    st.rerun()

# =============================================================================
# RESULTS
# =============================================================================

request = session.request
result = session.quote()

st.markdown("---")
col1, col2 = st.columns(2)
col1.metric("Volume Weight per Pallet", f"{format_number(result.volume_weight_per_pallet)} kg")
col2.metric("Total Volume Weight", f"{format_number(result.total_volume_weight)} kg")
col1.metric("Total Actual Weight", f"{format_number(result.total_actual_weight)} kg")
col2.metric("Chargeable Weight", f"{format_number(result.chargeable_weight)} kg")
col1.metric("Applied Rate", f"{format_money(result.applied_rate)}/kg")
col2.metric("Total Cost", format_money(result.total_cost))

# =============================================================================
# REPORT
# =============================================================================

if st.button("Hide Report" if st.session_state.show_report else "Generate Report", use_container_width=True):
    st.session_state.show_report = not st.session_state.show_report
    st.rerun()

if st.session_state.show_report:
    rendered = QuoteRenderer().render(request, result, session.company)
    components.html(rendered.html, height=1150, scrolling=True)

    if st.button("Generate Quote"):
        try:
            pdf_bytes = export_pdf_bytes(rendered)
        except QuoteExportError as e:
            st.error(f"Could not export PDF: {e}")
        else:
            st.download_button(
                "Download PDF",
                data=pdf_bytes,
                file_name=export_filename(rendered),
                mime="application/pdf",
            )
