"""Service catalog and bookable time slots."""

SERVICE_CATALOG: dict[str, dict] = {
    "Oil Change": {
        "description": "Engine oil and filter replacement with a multi-point check.",
        "typical_duration": "30-45 minutes",
    },
    "Full Body Protection": {
        "description": "Paint protection film across every exterior panel.",
        "typical_duration": "2-3 days",
    },
    "Hood Protection": {
        "description": "Paint protection film on the hood and leading edges.",
        "typical_duration": "3 hours",
    },
    "Quarter Panel Protection": {
        "description": "Paint protection film on the rear quarter panels.",
        "typical_duration": "3 hours",
    },
    "Matte Protection": {
        "description": "Matte-finish protection film over the factory paint.",
        "typical_duration": "2-3 days",
    },
    "Black Matte Protection": {
        "description": "Black matte protection film for a satin blacked-out look.",
        "typical_duration": "2-3 days",
    },
    "Black Glossy Protection": {
        "description": "Gloss black protection film.",
        "typical_duration": "2-3 days",
    },
    "Blackout (Trim Color Change)": {
        "description": "Chrome and trim pieces wrapped in black.",
        "typical_duration": "4 hours",
    },
    "Caliper Painting": {
        "description": "Brake calipers cleaned and painted in a heat-resistant finish.",
        "typical_duration": "4 hours",
    },
    "Diamond Flooring": {
        "description": "Custom-fit diamond-stitched floor lining.",
        "typical_duration": "2 hours",
    },
    "Thermal Tint": {
        "description": "Heat-rejecting window tint.",
        "typical_duration": "3 hours",
    },
    "Thermal Tint (Vanet)": {
        "description": "Heat-rejecting tint for vans and light commercial vehicles.",
        "typical_duration": "4 hours",
    },
    "Windshield Protection": {
        "description": "Protective film for the windshield against chips and cracks.",
        "typical_duration": "2 hours",
    },
    "Exterior Polish": {
        "description": "Machine polish to remove swirls and light scratches.",
        "typical_duration": "4 hours",
    },
    "Interior & Exterior Polish": {
        "description": "Machine polish outside plus a deep interior clean.",
        "typical_duration": "1 day",
    },
    "Protection Removal": {
        "description": "Removal of old protection film and adhesive residue.",
        "typical_duration": "3 hours",
    },
    "Full Color Change Wrap": {
        "description": "Full vinyl wrap in a new colour.",
        "typical_duration": "3-4 days",
    },
}

SERVICE_TYPES: tuple[str, ...] = tuple(SERVICE_CATALOG)

TIME_SLOTS: tuple[str, ...] = (
    "08:00 AM",
    "09:00 AM",
    "10:00 AM",
    "11:00 AM",
    "12:00 PM",
    "01:00 PM",
    "02:00 PM",
    "03:00 PM",
    "04:00 PM",
    "05:00 PM",
)


def get_all_services() -> list[dict]:
    """Return all services with basic info."""
    return [
        {"name": name, "description": info["description"], "typical_duration": info["typical_duration"]}
        for name, info in SERVICE_CATALOG.items()
    ]
