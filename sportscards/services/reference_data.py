"""
Reference data for card form and filter dropdowns.

Static lookups only:
- sport -> manufacturers
- (manufacturer, sport) -> set names

These tables drive option lists. Stored records are never validated
against them, so older records with values missing here still load.
"""

MANUFACTURERS_BY_SPORT: dict[str, list[str]] = {
    "Baseball": [
        "Topps",
        "Bowman",
        "Donruss",
        "Fleer",
        "Upper Deck",
        "Panini",
        "Leaf",
        "Score",
        "Pinnacle",
        "O-Pee-Chee",
        "Other",
    ],
    "Football": [
        "Topps",
        "Panini",
        "Donruss",
        "Fleer",
        "Upper Deck",
        "Score",
        "Pinnacle",
        "Playoff",
        "Leaf",
        "Other",
    ],
    "Basketball": [
        "Topps",
        "Panini",
        "Upper Deck",
        "Fleer",
        "Donruss",
        "Hoops",
        "Other",
    ],
    "Hockey": [
        "Upper Deck",
        "Topps",
        "Panini",
        "O-Pee-Chee",
        "Donruss",
        "Fleer",
        "Score",
        "Pinnacle",
        "Other",
    ],
    "Soccer": [
        "Panini",
        "Topps",
        "Upper Deck",
        "Donruss",
        "Fleer",
        "Score",
        "Pinnacle",
        "Other",
    ],
    "Other": [
        "Topps",
        "Panini",
        "Upper Deck",
        "Donruss",
        "Fleer",
        "Score",
        "Pinnacle",
        "Other",
    ],
}

# Sports without their own manufacturer list use this one
FALLBACK_SPORT = "Other"

SETS_BY_MANUFACTURER: dict[str, dict[str, list[str]]] = {
    "Topps": {
        "Baseball": [
            "Base",
            "Chrome",
            "Heritage",
            "Stadium Club",
            "Finest",
            "Allen & Ginter",
            "Gypsy Queen",
            "Update",
            "Traded",
            "Other",
        ],
        "Football": ["Base", "Chrome", "Finest", "Stadium Club", "Other"],
        "Basketball": ["Base", "Chrome", "Finest", "Stadium Club", "Other"],
        "Hockey": ["Base", "Chrome", "Stadium Club", "Other"],
        "Soccer": ["Chrome UEFA", "Merlin", "Stadium Club", "Finest", "Other"],
    },
    "Bowman": {
        "Baseball": ["Base", "Chrome", "Draft", "Sterling", "Platinum", "Other"],
    },
    "Panini": {
        "Baseball": ["Prizm", "Diamond Kings", "Contenders", "Other"],
        "Football": [
            "Prizm",
            "Select",
            "Mosaic",
            "Optic",
            "Contenders",
            "National Treasures",
            "Other",
        ],
        "Basketball": [
            "Prizm",
            "Select",
            "Mosaic",
            "Optic",
            "Hoops",
            "National Treasures",
            "Other",
        ],
        "WNBA": ["Prizm", "Select", "Origins", "Other"],
        "Soccer": ["Prizm", "Select", "Mosaic", "Donruss", "Other"],
        "Hockey": ["Prizm", "Other"],
    },
    "Donruss": {
        "Baseball": ["Base", "Optic", "Elite", "Other"],
        "Football": ["Base", "Optic", "Elite", "Rated Rookies", "Other"],
        "Basketball": ["Base", "Optic", "Other"],
    },
    "Fleer": {
        "Baseball": ["Base", "Ultra", "Tradition", "Update", "Other"],
        "Football": ["Base", "Ultra", "Other"],
        "Basketball": ["Base", "Ultra", "Tradition", "Other"],
    },
    "Upper Deck": {
        "Baseball": ["Base", "SP", "SPx", "Other"],
        "Football": ["Base", "SP Authentic", "Other"],
        "Basketball": ["Base", "SP Authentic", "Exquisite", "Other"],
        "Hockey": ["Series 1", "Series 2", "SP Authentic", "The Cup", "MVP", "Other"],
        "Soccer": ["World Cup", "Other"],
    },
    "O-Pee-Chee": {
        "Baseball": ["Base", "Other"],
        "Hockey": ["Base", "Platinum", "Other"],
    },
    "Leaf": {
        "Baseball": ["Base", "Metal", "Other"],
        "Football": ["Base", "Metal", "Other"],
    },
    "Score": {
        "Baseball": ["Base", "Other"],
        "Football": ["Base", "Other"],
        "Hockey": ["Base", "Other"],
    },
    "Pinnacle": {
        "Baseball": ["Base", "Inside", "Other"],
        "Football": ["Base", "Other"],
        "Hockey": ["Base", "Other"],
    },
    "Playoff": {
        "Football": ["Contenders", "Prestige", "Absolute", "Other"],
    },
    "Hoops": {
        "Basketball": ["Base", "Premium Stock", "Other"],
    },
}

# Used when a manufacturer has no sets listed for a sport
DEFAULT_SETS: list[str] = ["Base", "Other"]


def get_manufacturers_for_sport(sport: str | None) -> list[str]:
    """
    Get the manufacturer options for a sport.

    Unknown sports (including WNBA) fall back to the "Other" list.
    """
    if sport and sport in MANUFACTURERS_BY_SPORT:
        return list(MANUFACTURERS_BY_SPORT[sport])
    return list(MANUFACTURERS_BY_SPORT[FALLBACK_SPORT])


def get_all_manufacturers() -> list[str]:
    """All unique manufacturers across every sport, sorted."""
    return sorted({m for manufacturers in MANUFACTURERS_BY_SPORT.values() for m in manufacturers})


def get_sets_for_manufacturer(manufacturer: str | None, sport: str | None = None) -> list[str]:
    """
    Get the set options for a manufacturer within a sport.

    Without a sport, returns the union of the manufacturer's sets across
    every sport (order of first appearance). Unknown combinations get
    DEFAULT_SETS; no manufacturer gets no sets.
    """
    if not manufacturer:
        return []

    by_sport = SETS_BY_MANUFACTURER.get(manufacturer, {})

    if sport:
        return list(by_sport.get(sport, DEFAULT_SETS))

    combined: list[str] = []
    for sets in by_sport.values():
        for set_name in sets:
            if set_name not in combined:
                combined.append(set_name)
    return combined or list(DEFAULT_SETS)
