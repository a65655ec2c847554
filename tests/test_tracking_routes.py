from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from app.models.tracking import SleepEntry, StepEntry, WeightEntry


def _iso(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _add(client: TestClient, headers: dict[str, str], path: str, **body) -> dict:
    response = client.post(path, json=body, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def test_tracking_routes_require_authentication(client: TestClient) -> None:
    response = client.post("/steptrack/addstepentry", json={"date": _iso(_now()), "steps": 10})

    assert response.status_code == 401
    assert response.json()["ok"] is False


def test_add_entry_appends_one_row(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
    session: Session,
) -> None:
    headers = register_user()

    body = _add(client, headers, "/steptrack/addstepentry", date=_iso(_now()), steps=4200)

    assert body["ok"] is True
    assert body["message"] == "Steps entry added successfully"
    assert body["data"]["steps"] == 4200
    assert isinstance(body["data"]["id"], int)
    assert len(session.exec(select(StepEntry)).all()) == 1


def test_add_entry_without_date_is_rejected(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
    session: Session,
) -> None:
    headers = register_user()

    response = client.post("/sleeptrack/addsleepentry", json={"durationInHrs": 7}, headers=headers)

    assert response.status_code == 400
    assert response.json() == {
        "ok": False,
        "message": "Please provide date and sleep duration",
        "data": None,
    }
    assert session.exec(select(SleepEntry)).all() == []


def test_add_entry_rejects_non_positive_values(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
) -> None:
    headers = register_user()

    response = client.post(
        "/watertrack/addwaterentry",
        json={"date": _iso(_now()), "amountInMilliliters": -250},
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json()["ok"] is False


@pytest.mark.parametrize(
    ("path", "body", "field", "expected"),
    [
        ("/weighttrack/addweightentry", {"weightInKg": 71.2}, "weight", 71.2),
        ("/heighttrack/addheightentry", {"heightInCm": 176}, "height", 176),
        ("/sleeptrack/addsleepentry", {"durationInHrs": 7.5}, "durationInHrs", 7.5),
        ("/watertrack/addwaterentry", {"amountInMilliliters": 500}, "amountInMilliliters", 500),
        (
            "/workouttrack/addworkoutentry",
            {"exercise": "Rowing", "durationInMinutes": 30},
            "exercise",
            "Rowing",
        ),
        (
            "/calorieintake/addcalorieintakeentry",
            {"item": "Oats", "quantity": 80, "quantitytype": "g", "calorieIntake": 300},
            "calorieIntake",
            300,
        ),
    ],
)
def test_every_metric_accepts_entries(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
    path: str,
    body: dict,
    field: str,
    expected: object,
) -> None:
    headers = register_user()

    data = _add(client, headers, path, date=_iso(_now()), **body)["data"]

    assert data[field] == expected


def test_get_by_date_defaults_to_today(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
) -> None:
    headers = register_user()
    now = _now()
    _add(client, headers, "/steptrack/addstepentry", date=_iso(now), steps=1000)
    _add(client, headers, "/steptrack/addstepentry", date=_iso(now - timedelta(days=2)), steps=2000)

    response = client.post("/steptrack/getstepsbydate", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Steps entries for today"
    assert [entry["steps"] for entry in body["data"]] == [1000]


def test_get_by_date_matches_calendar_day(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
) -> None:
    headers = register_user()
    day = datetime(2024, 5, 10, tzinfo=timezone.utc)
    _add(client, headers, "/watertrack/addwaterentry", date=_iso(day + timedelta(hours=1)), amountInMilliliters=250)
    _add(client, headers, "/watertrack/addwaterentry", date=_iso(day + timedelta(hours=23)), amountInMilliliters=300)
    _add(client, headers, "/watertrack/addwaterentry", date=_iso(day + timedelta(days=1)), amountInMilliliters=400)

    response = client.post(
        "/watertrack/getwaterbydate",
        json={"date": _iso(day + timedelta(hours=12))},
        headers=headers,
    )

    assert response.status_code == 200
    assert [entry["amountInMilliliters"] for entry in response.json()["data"]] == [250, 300]


def test_get_by_limit_all_returns_every_entry_in_append_order(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
) -> None:
    headers = register_user()
    now = _now()
    _add(client, headers, "/sleeptrack/addsleepentry", date=_iso(now - timedelta(days=40)), durationInHrs=6)
    _add(client, headers, "/sleeptrack/addsleepentry", date=_iso(now), durationInHrs=8)
    _add(client, headers, "/sleeptrack/addsleepentry", date=_iso(now - timedelta(days=3)), durationInHrs=7)

    response = client.post("/sleeptrack/getsleepbylimit", json={"limit": "all"}, headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "All sleep entries"
    assert [entry["durationInHrs"] for entry in body["data"]] == [6, 8, 7]


def test_get_by_limit_returns_rolling_window(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
) -> None:
    headers = register_user()
    now = _now()
    _add(client, headers, "/workouttrack/addworkoutentry", date=_iso(now - timedelta(days=1)), exercise="Run", durationInMinutes=30)
    _add(client, headers, "/workouttrack/addworkoutentry", date=_iso(now - timedelta(days=2)), exercise="Swim", durationInMinutes=45)
    _add(client, headers, "/workouttrack/addworkoutentry", date=_iso(now - timedelta(days=5)), exercise="Bike", durationInMinutes=60)

    response = client.post("/workouttrack/getworkoutsbylimit", json={"limit": "3"}, headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Workout entries for the last 3 days"
    assert [entry["exercise"] for entry in body["data"]] == ["Run", "Swim"]


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ({}, "Please provide limit"),
        ({"limit": "soon"}, "limit must be 'all' or a positive number of days"),
        ({"limit": 0}, "limit must be 'all' or a positive number of days"),
    ],
)
def test_get_by_limit_rejects_bad_limits(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
    body: dict,
    message: str,
) -> None:
    headers = register_user()

    response = client.post("/steptrack/getstepsbylimit", json=body, headers=headers)

    assert response.status_code == 400
    assert response.json()["message"] == message


def test_reads_do_not_change_stored_entries(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
    session: Session,
) -> None:
    headers = register_user()
    now = _now()
    _add(client, headers, "/steptrack/addstepentry", date=_iso(now), steps=10)
    _add(client, headers, "/steptrack/addstepentry", date=_iso(now - timedelta(days=30)), steps=20)

    client.post("/steptrack/getstepsbydate", headers=headers)
    client.post("/steptrack/getstepsbylimit", json={"limit": 1}, headers=headers)

    all_entries = client.post("/steptrack/getstepsbylimit", json={"limit": "all"}, headers=headers)
    assert [entry["steps"] for entry in all_entries.json()["data"]] == [10, 20]
    assert len(session.exec(select(StepEntry)).all()) == 2


def test_delete_removes_entries_at_exact_date(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
) -> None:
    headers = register_user()
    target = "2024-03-01T10:15:30.250Z"
    _add(client, headers, "/watertrack/addwaterentry", date=target, amountInMilliliters=250)
    _add(client, headers, "/watertrack/addwaterentry", date="2024-03-01T10:15:31.250Z", amountInMilliliters=300)

    response = client.request("DELETE", "/watertrack/deletewaterentry", json={"date": target}, headers=headers)

    assert response.status_code == 200
    assert response.json() == {
        "ok": True,
        "message": "Water entry deleted successfully",
        "data": {"removed": 1},
    }
    remaining = client.post("/watertrack/getwaterbylimit", json={"limit": "all"}, headers=headers)
    assert [entry["amountInMilliliters"] for entry in remaining.json()["data"]] == [300]


def test_delete_sleep_matches_to_the_second(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
) -> None:
    headers = register_user()
    _add(client, headers, "/sleeptrack/addsleepentry", date="2024-03-01T22:00:00.120Z", durationInHrs=7)

    response = client.request(
        "DELETE",
        "/sleeptrack/deletesleepentry",
        json={"date": "2024-03-01T22:00:00.870Z"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["data"] == {"removed": 1}


def test_delete_unknown_date_is_a_no_op(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
    session: Session,
) -> None:
    headers = register_user()
    _add(client, headers, "/steptrack/addstepentry", date="2024-03-01T10:00:00Z", steps=500)

    response = client.request(
        "DELETE",
        "/steptrack/deletestepentry",
        json={"date": "2024-03-02T10:00:00Z"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["data"] == {"removed": 0}
    assert len(session.exec(select(StepEntry)).all()) == 1


def test_delete_without_date_is_rejected(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
) -> None:
    headers = register_user()

    response = client.request("DELETE", "/steptrack/deletestepentry", json={}, headers=headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Please provide date"


def test_entries_are_isolated_per_user(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
    session: Session,
) -> None:
    first = register_user(email="first@test.dev")
    second = register_user(email="second@test.dev")
    _add(client, first, "/steptrack/addstepentry", date="2024-03-01T10:00:00Z", steps=111)

    response = client.post("/steptrack/getstepsbylimit", json={"limit": "all"}, headers=second)
    assert response.json()["data"] == []

    deleted = client.request(
        "DELETE",
        "/steptrack/deletestepentry",
        json={"date": "2024-03-01T10:00:00Z"},
        headers=second,
    )
    assert deleted.json()["data"] == {"removed": 0}
    assert len(session.exec(select(StepEntry)).all()) == 1


def test_goal_weight_uses_latest_height(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
) -> None:
    headers = register_user()
    _add(client, headers, "/weighttrack/addweightentry", date=_iso(_now() - timedelta(days=1)), weightInKg=72)

    response = client.get("/weighttrack/getusergoalweight", headers=headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["currentWeight"] == 72
    assert data["goalWeight"] == pytest.approx(67.375)


def test_last_appended_weight_wins_regardless_of_date(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
    session: Session,
) -> None:
    headers = register_user()
    _add(client, headers, "/weighttrack/addweightentry", date="2020-01-01T00:00:00Z", weightInKg=90)

    response = client.get("/weighttrack/getusergoalweight", headers=headers)

    assert response.json()["data"]["currentWeight"] == 90
    assert len(session.exec(select(WeightEntry)).all()) == 2


def test_goal_height(client: TestClient, register_user: Callable[..., dict[str, str]]) -> None:
    headers = register_user()

    response = client.get("/heighttrack/getusergoalheight", headers=headers)

    assert response.status_code == 200
    assert response.json()["data"] == {"currentHeight": 175}


@pytest.mark.parametrize(
    ("goal", "steps", "workout_days"),
    [
        ("weightLoss", 10000, 7),
        ("weightGain", 5000, 4),
        ("maintain", 7500, 5),
    ],
)
def test_daily_goal_routes_follow_user_goal(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
    goal: str,
    steps: int,
    workout_days: int,
) -> None:
    headers = register_user(goal=goal)

    assert client.get("/steptrack/getusergoalsteps", headers=headers).json()["data"] == {"totalSteps": steps}
    assert client.get("/workouttrack/getusergoalworkout", headers=headers).json()["data"] == {"goal": workout_days}
    assert client.get("/watertrack/getusergoalwater", headers=headers).json()["data"] == {"goalWater": 4000}
    assert client.get("/sleeptrack/getusersleep", headers=headers).json()["data"] == {"goalSleep": 8}


def test_calorie_intake_goal_is_daily_bmr_based(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
) -> None:
    headers = register_user(goal="weightLoss")

    response = client.get("/calorieintake/getusergoalcalorieintake", headers=headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["bmr"] == pytest.approx(1695.667)
    assert data["maxCalorieIntake"] == pytest.approx(1195.667)


def test_get_by_limit_with_huge_window_returns_all_entries(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
) -> None:
    headers = register_user()
    _add(client, headers, "/weighttrack/addweightentry", date="1980-01-01T00:00:00Z", weightInKg=65)

    response = client.post("/weighttrack/getweightbylimit", json={"limit": 1000000}, headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Weight entries for the last 1000000 days"
    assert [entry["weight"] for entry in body["data"]] == [70, 65]


def test_get_by_limit_rejects_boolean_limit(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
) -> None:
    headers = register_user()

    response = client.post("/steptrack/getstepsbylimit", json={"limit": True}, headers=headers)

    assert response.status_code == 400
    assert response.json()["ok"] is False
    assert "True days" not in response.text
