"""
Export Charge Configuration

Flat charges added on top of the freight cost. Amounts are in Thai baht.

Clearance is a fixed customs-clearance fee quoted with 7% VAT already
included; nothing here computes tax.
"""

CURRENCY_SYMBOL = "฿"  # Thai baht

# -----------------------------------------------------------------------------
# DELIVERY
# -----------------------------------------------------------------------------

DELIVERY_RATES = {
    "4wheel": 3500.0,
    "6wheel": 6500.0,
}

VEHICLE_LABELS = {
    "4wheel": "4 Wheels",
    "6wheel": "6 Wheels",
}

# -----------------------------------------------------------------------------
# CLEARANCE
# -----------------------------------------------------------------------------

CLEARANCE_CHARGE = 5350.0
CLEARANCE_VAT_RATE = 0.07

# -----------------------------------------------------------------------------
# QUOTE TERMS
# -----------------------------------------------------------------------------

QUOTE_VALIDITY_DAYS = 30

# Negative additional charges are accepted as discounts unless strict
STRICT_CHARGES = False
