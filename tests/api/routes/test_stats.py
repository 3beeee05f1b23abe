"""Tests for GET /api/profiles/{profile_id}/stats.

Supabase is mocked via FastAPI dependency_overrides.
"""
from unittest.mock import AsyncMock, MagicMock, patch

from fastapi.testclient import TestClient

from kidcare.core.supabase import get_client
from kidcare.main import app
from kidcare.services.episodes import segment_episodes

USER_ID = "test-user-uuid"
PROFILE_ID = "profile-uuid-1"
AUTH_HEADER = {"Authorization": "Bearer valid-jwt-token"}
URL = f"/api/profiles/{PROFILE_ID}/stats"

STORED_PROFILE = {
    "id": PROFILE_ID,
    "user_id": USER_ID,
    "name": "Alex",
    "avatar_color": "bg-blue-400",
}

MARCH_ROWS = [
    {"log_date": "2024-03-10", "symptoms": ["Cough"]},
    {"log_date": "2024-03-01", "symptoms": ["Fever"]},
    {"log_date": "2024-03-02", "symptoms": ["Fever"], "medications": [{"name": "Calpol", "dosage": "5ml"}]},
    {"log_date": "2024-03-03", "symptoms": ["Fever"]},
    {"log_date": "2024-03-06", "notes": "Back at nursery"},
]


class MockQueryBuilder:
    """Fluent builder mock that supports arbitrary chaining + async execute()."""

    def __init__(self, data=None, error=None):
        self._data = data if data is not None else []
        self._error = error

    def select(self, *_, **__):
        return self

    def eq(self, *_, **__):
        return self

    def order(self, *_, **__):
        return self

    async def execute(self):
        if self._error:
            raise self._error
        result = MagicMock()
        result.data = self._data
        return result


def make_mock_client(profile_data=None, log_data=None, log_error=None) -> MagicMock:
    mock = MagicMock()
    mock.auth.get_user = AsyncMock(return_value=MagicMock(user=MagicMock(id=USER_ID)))

    def table_side_effect(table_name):
        if table_name == "profiles":
            return MockQueryBuilder(
                data=profile_data if profile_data is not None else [STORED_PROFILE]
            )
        return MockQueryBuilder(data=log_data, error=log_error)

    mock.table.side_effect = table_side_effect
    return mock


def get_stats(mock, headers=AUTH_HEADER):
    app.dependency_overrides[get_client] = lambda: mock
    try:
        with TestClient(app) as client:
            return client.get(URL, headers=headers)
    finally:
        app.dependency_overrides.clear()


class TestGetStats:
    def test_returns_stats_for_profile_history(self):
        response = get_stats(make_mock_client(log_data=MARCH_ROWS))

        assert response.status_code == 200
        body = response.json()
        assert body["profile_id"] == PROFILE_ID
        assert body["stats"] == {
            "total_sick_days": 4,
            "episodes_count": 2,
            "average_duration": 2.0,
            "mean_time_between_illness": 9,
            "common_symptoms": {"Fever": 3, "Cough": 1},
        }
        assert body["top_symptom"] == "Fever"

    def test_returns_episode_breakdown(self):
        body = get_stats(make_mock_client(log_data=MARCH_ROWS)).json()

        episodes = body["episodes"]
        assert [e["start_date"] for e in episodes] == ["2024-03-01", "2024-03-10"]
        assert [e["end_date"] for e in episodes] == ["2024-03-03", "2024-03-10"]
        assert [e["duration"] for e in episodes] == [3, 1]
        assert episodes[0]["dates"] == ["2024-03-01", "2024-03-02", "2024-03-03"]

    def test_history_is_segmented_once(self):
        with patch(
            "kidcare.api.routes.stats.segment_episodes", wraps=segment_episodes
        ) as in_route, patch(
            "kidcare.services.stats.segment_episodes", wraps=segment_episodes
        ) as in_service:
            response = get_stats(make_mock_client(log_data=MARCH_ROWS))

        assert response.status_code == 200
        assert in_route.call_count + in_service.call_count == 1
        assert response.json()["stats"]["episodes_count"] == 2

    def test_no_logs_returns_zero_stats(self):
        body = get_stats(make_mock_client(log_data=[])).json()

        assert body["stats"] == {
            "total_sick_days": 0,
            "episodes_count": 0,
            "average_duration": 0.0,
            "mean_time_between_illness": 0,
            "common_symptoms": {},
        }
        assert body["episodes"] == []
        assert body["top_symptom"] is None

    def test_malformed_rows_are_ignored(self):
        rows = MARCH_ROWS + [{"log_date": "garbage", "symptoms": ["Rash"]}]
        body = get_stats(make_mock_client(log_data=rows)).json()
        assert "Rash" not in body["stats"]["common_symptoms"]

    def test_missing_auth_returns_401(self):
        assert get_stats(make_mock_client(), headers={}).status_code == 401

    def test_other_users_profile_returns_404(self):
        assert get_stats(make_mock_client(profile_data=[])).status_code == 404

    def test_db_error_returns_500(self):
        response = get_stats(make_mock_client(log_error=RuntimeError("timeout")))
        assert response.status_code == 500
