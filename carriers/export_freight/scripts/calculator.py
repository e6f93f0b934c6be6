"""
Export Freight Cost Calculator
==============================

Interactive CLI tool to calculate an export shipping quote for a single
shipment. Press Enter to accept the default shown in brackets.

Usage:
    python -m carriers.export_freight.scripts.calculator
    python -m carriers.export_freight.scripts.calculator --pdf quotes/
"""

import argparse

from carriers.export_freight.data import CURRENCY_SYMBOL, VEHICLE_LABELS
from carriers.export_freight.errors import QuoteExportError
from carriers.export_freight.models import QuoteResult, ShipmentRequest
from carriers.export_freight.report import QuoteRenderer, export_pdf, format_money, format_number
from carriers.export_freight.session import QuoteSession
from carriers.export_freight.version import VERSION


def _ask(prompt: str, default) -> str:
    answer = input(f"{prompt} [{default}]: ").strip()
    return answer if answer else str(default)


def get_user_input(session: QuoteSession) -> None:
    """Prompt user for shipment details, writing each answer into the session."""
    print("\n=== Export Cost Calculator ===")
    print(f"Version: {VERSION}\n")

    request = session.request

    # Company
    session.set_company_name(input("Company name: ").strip())
    session.set_contact_person(input("Contact person: ").strip())
    session.set_contact_no(input("Contact no: ").strip())

    # Destination
    keys = list(session.destinations)
    if len(keys) > 1:
        print("\nDestinations: " + ", ".join(f"{k} ({d.name})" for k, d in session.destinations.items()))
        key = _ask("Destination", request.destination)
        while key not in session.destinations:
            print(f"Unknown destination '{key}'")
            key = _ask("Destination", request.destination)
        session.set_destination(key)
    else:
        print(f"\nDestination: {session.destination.name} (only destination)")

    # Dimensions and weight
    session.set_length(_ask("Length (cm)", format_number(request.dimensions.length)))
    session.set_width(_ask("Width (cm)", format_number(request.dimensions.width)))
    session.set_height(_ask("Height (cm)", format_number(request.dimensions.height)))
    session.set_actual_weight(_ask("Actual weight per pallet (kg)", format_number(request.actual_weight)))
    session.set_pallet_count(_ask("Number of pallets", request.pallet_count))

    # Delivery
    if _ask("Delivery service required? (y/n)", "n").lower().startswith("y"):
        session.set_delivery_required(True)
        rates = session.request.delivery.rates
        options = ", ".join(
            f"{key} = {VEHICLE_LABELS.get(key, key)} ({CURRENCY_SYMBOL}{format_number(rate)})"
            for key, rate in rates.items()
        )
        print(f"Vehicle types: {options}")
        session.set_vehicle(input("Vehicle type (blank for none): ").strip() or None)

    # Additional charges
    while _ask("Add an additional charge? (y/n)", "n").lower().startswith("y"):
        name = input("  Charge name: ").strip()
        amount = input("  Amount: ").strip()
        session.add_charge(name, amount)


def print_results(request: ShipmentRequest, result: QuoteResult) -> None:
    """Print calculation results."""
    print("\n" + "=" * 50)
    print("CALCULATION RESULTS")
    print("=" * 50)

    d = request.dimensions
    print(f"\nShipment: {request.pallet_count} pallet(s), "
          f"{format_number(d.length)}x{format_number(d.width)}x{format_number(d.height)} cm, "
          f"{format_number(request.actual_weight)} kg/pallet")
    print(f"Destination: {result.destination_name}")

    # Weight calculations
    print(f"\nVolume weight per pallet: {format_number(result.volume_weight_per_pallet)} kg")
    print(f"Total volume weight:      {format_number(result.total_volume_weight)} kg")
    print(f"Total actual weight:      {format_number(result.total_actual_weight)} kg")
    print(f"Chargeable weight:        {format_number(result.chargeable_weight)} kg", end="")
    print(" (volumetric)" if result.uses_volume_weight else " (actual)")
    print(f"Applied rate:             {format_money(result.applied_rate)}/kg")

    # Cost breakdown
    print("\n--- Cost Breakdown ---")
    print(f"Freight:     {format_money(result.freight_cost):>14}")
    if result.delivery_cost:
        print(f"Delivery:    {format_money(result.delivery_cost):>14}")
    print(f"Clearance:   {format_money(result.clearance_cost):>14}")
    for charge in request.additional_charges:
        print(f"{(charge.name or 'Additional')[:12] + ':':<13}{format_money(charge.amount):>14}")
    print(f"             {'=' * 14}")
    print(f"TOTAL:       {format_money(result.total_cost):>14}")
    print()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Calculate an export shipping quote")
    parser.add_argument("--pdf", metavar="DIR", help="Also export the quote as PDF into DIR")
    args = parser.parse_args()

    try:
        session = QuoteSession()
        get_user_input(session)

        request = session.request
        result = session.quote()
        print_results(request, result)

        if args.pdf:
            rendered = QuoteRenderer().render(request, result, session.company)
            try:
                path = export_pdf(rendered, args.pdf)
            except QuoteExportError as e:
                print(f"PDF export failed: {e}")
            else:
                print(f"Quote {rendered.quote_id} saved to {path}")

    except KeyboardInterrupt:
        print("\n\nCancelled.")
    except Exception as e:
        print(f"\nError: {e}")
        raise


if __name__ == "__main__":
    main()
