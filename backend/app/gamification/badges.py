"""Static badge catalog, built once at import and never mutated."""

from backend.app.models.gamification import Badge, BadgeCriteria, CriteriaType, Rarity

_IMAGE_BASE = "https://placehold.co/200x200?text="


def _badge(
    badge_id: str,
    name: str,
    description: str,
    criteria_type: CriteriaType,
    threshold: int,
    rarity: Rarity,
) -> Badge:
    return Badge(
        id=badge_id,
        name=name,
        description=description,
        image_url=_IMAGE_BASE + name.replace(" ", "+") + "+Badge",
        criteria=BadgeCriteria(type=criteria_type, threshold=threshold),
        rarity=rarity,
    )


BADGE_CATALOG: tuple[Badge, ...] = (
    _badge(
        "first_trip",
        "First Journey",
        "Complete your first trip planning",
        CriteriaType.trips_completed,
        1,
        Rarity.common,
    ),
    _badge(
        "budget_saver",
        "Budget Master",
        "Save 20% or more from original budget",
        CriteriaType.budget_saved,
        20,
        Rarity.rare,
    ),
    _badge(
        "explorer",
        "World Explorer",
        "Visit 5 different countries",
        CriteriaType.countries_visited,
        5,
        Rarity.rare,
    ),
    _badge(
        "activity_enthusiast",
        "Activity Enthusiast",
        "Complete 50 different activities",
        CriteriaType.activities_done,
        50,
        Rarity.epic,
    ),
    _badge(
        "frequent_traveler",
        "Frequent Traveler",
        "Complete 10 trips",
        CriteriaType.trips_completed,
        10,
        Rarity.epic,
    ),
    _badge(
        "continent_collector",
        "Continent Collector",
        "Visit all 7 continents",
        CriteriaType.countries_visited,
        20,
        Rarity.legendary,
    ),
    _badge(
        "budget_guru",
        "Budget Guru",
        "Save over $10,000 total across all trips",
        CriteriaType.budget_saved,
        10000,
        Rarity.legendary,
    ),
    _badge(
        "solo_adventurer",
        "Solo Adventurer",
        "Complete 3 solo trips",
        CriteriaType.trips_completed,
        3,
        Rarity.rare,
    ),
    _badge(
        "group_organizer",
        "Group Organizer",
        "Organize 5 group trips (3+ people)",
        CriteriaType.trips_completed,
        5,
        Rarity.epic,
    ),
    _badge(
        "culture_seeker",
        "Culture Seeker",
        "Visit 25 museums and cultural sites",
        CriteriaType.activities_done,
        25,
        Rarity.rare,
    ),
)

_BY_ID: dict[str, Badge] = {badge.id: badge for badge in BADGE_CATALOG}


def get_all_badges() -> list[Badge]:
    """All catalog badges, in catalog order."""
    return list(BADGE_CATALOG)


def get_badge_by_id(badge_id: str) -> Badge | None:
    """Look up a catalog badge by id."""
    return _BY_ID.get(badge_id)
