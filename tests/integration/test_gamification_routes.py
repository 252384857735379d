"""Integration tests for /gamification endpoints."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from backend.app.main import app
from backend.app.models import Trip


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


class TestBadges:
    """Test GET /gamification/badges."""

    def test_lists_catalog(self, client: TestClient) -> None:
        """Test that the full catalog is returned in order."""
        response = client.get("/gamification/badges")

        assert response.status_code == 200
        badges = response.json()
        assert len(badges) == 10
        assert badges[0]["id"] == "first_trip"
        assert badges[0]["criteria"] == {"type": "trips_completed", "threshold": 1}


class TestProgress:
    """Test POST /gamification/progress."""

    def test_progress_for_new_traveler(self, client: TestClient) -> None:
        """Test eligibility, achievements and report for one completed trip."""
        response = client.post(
            "/gamification/progress",
            json={"user_id": "u1", "stats": {"trips_completed": 1}},
        )

        assert response.status_code == 200
        data = response.json()
        assert [b["badge_id"] for b in data["eligible_badges"]] == ["first_trip"]
        assert len(data["achievements"]) == 5
        report = data["report"]
        assert report["earned_badges"] == 0
        assert report["total_badges"] == 10
        assert report["rank"] == {"name": "Novice Traveler", "level": 1, "points_to_next": 80}
        assert len(report["next_badges"]) == 5
        assert report["next_badges"][0]["badge"]["id"] == "first_trip"

    def test_progress_counts_earned_badges(self, client: TestClient) -> None:
        """Test that earned badges feed points and rarity counts."""
        earned_at = datetime(2025, 6, 1, tzinfo=UTC).isoformat()
        response = client.post(
            "/gamification/progress",
            json={
                "user_id": "u1",
                "stats": {"trips_completed": 5},
                "earned_badges": [
                    {"user_id": "u1", "badge_id": "first_trip", "earned_date": earned_at},
                    {"user_id": "u1", "badge_id": "group_organizer", "earned_date": earned_at},
                ],
            },
        )

        assert response.status_code == 200
        report = response.json()["report"]
        assert report["completion_percentage"] == 20
        assert report["total_points"] == 60
        assert report["rarity_stats"] == {"common": 1, "rare": 0, "epic": 1, "legendary": 0}
        assert report["rank"]["name"] == "Explorer"


class TestStats:
    """Test POST /gamification/stats."""

    def test_completed_trip_updates_stats(self, client: TestClient, trip: Trip) -> None:
        """Test that a completed trip increments counters and the streak."""
        yesterday = (datetime.now(UTC) - timedelta(days=1)).isoformat()
        response = client.post(
            "/gamification/stats",
            json={
                "stats": {
                    "trips_completed": 2,
                    "visited_countries": ["Spain"],
                    "countries_visited": 1,
                    "current_streak": 4,
                    "longest_streak": 4,
                    "last_activity_date": yesterday,
                },
                "trip": trip.model_dump(mode="json"),
                "completed": True,
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["trips_completed"] == 3
        assert data["visited_countries"] == ["Spain", "France"]
        assert data["countries_visited"] == 2
        assert data["total_budget_saved"] == 1000
        assert data["current_streak"] == 5
        assert data["longest_streak"] == 5

    def test_incomplete_trip_is_noop(self, client: TestClient, trip: Trip) -> None:
        """Test that an incomplete trip leaves stats unchanged."""
        response = client.post(
            "/gamification/stats",
            json={"stats": {"trips_completed": 2}, "trip": trip.model_dump(mode="json")},
        )

        assert response.status_code == 200
        assert response.json()["trips_completed"] == 2


class TestChallenges:
    """Test POST /gamification/challenges."""

    def test_challenges(self, client: TestClient) -> None:
        """Test that the country challenge appears under five countries."""
        response = client.post("/gamification/challenges", json={"countries_visited": 4})

        assert response.status_code == 200
        challenges = response.json()
        assert [c["id"] for c in challenges] == [
            "weekly_planner",
            "budget_optimizer",
            "country_explorer",
        ]
        assert challenges[2]["description"] == "Visit 1 more countries"
