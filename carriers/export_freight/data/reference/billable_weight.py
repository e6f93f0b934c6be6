"""
Billable Weight Configuration

Export freight bills per pallet on volumetric weight with divisor 6000
(cm3 per kg), rounded up to the next whole kilogram. The chargeable weight
of a shipment is the greater of total volumetric and total actual weight.
"""

DIM_FACTOR = 6000
FACTOR_FIELD = "cubic_cm"
