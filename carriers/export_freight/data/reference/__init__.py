"""Export freight reference data: rate bands and charge configuration."""
