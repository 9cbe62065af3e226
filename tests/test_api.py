from datetime import datetime, timedelta, timezone
from uuid import uuid4

PREFIX = "/api/v1"


def test_health(client):
    assert client.get(f"{PREFIX}/health").json()["status"] == "ok"
    ready = client.get(f"{PREFIX}/health/ready")
    assert ready.status_code == 200
    assert ready.json()["database"] == "connected"
    assert ready.json()["state_saved"] is False

    client.put(f"{PREFIX}/profile/mode", json={"name": "Work + Rest"})
    assert client.get(f"{PREFIX}/health/ready").json()["state_saved"] is True


# ── Profile & budget ─────────────────────────────────────────────────────

def test_profile_defaults(client):
    body = client.get(f"{PREFIX}/profile").json()
    assert body["tdee"] == 1850
    assert body["selected_mode"] == "Work + Training"
    assert body["macros"] == {"protein": 30, "fat": 25, "carbs": 45}


def test_patch_profile_recomputes_bmi_and_persists(client):
    r = client.patch(f"{PREFIX}/profile", json={"weight": 70, "gender": "female"})
    assert r.status_code == 200
    assert r.json()["bmi"] == 22.9
    stored = client.get(f"{PREFIX}/profile").json()
    assert stored["weight"] == 70
    assert stored["gender"] == "female"


def test_patch_profile_rejects_bad_values(client):
    assert client.patch(f"{PREFIX}/profile", json={"height": -1}).status_code == 422
    assert client.patch(f"{PREFIX}/profile", json={"gender": "other"}).status_code == 422
    assert client.patch(f"{PREFIX}/profile", json={"activity_level": 0.5}).status_code == 422


def test_scenario_modes(client):
    modes = client.get(f"{PREFIX}/profile/modes").json()
    assert len(modes) == 4

    r = client.put(f"{PREFIX}/profile/mode", json={"name": "Work + Rest"})
    assert r.status_code == 200
    assert r.json()["tdee"] == 1750

    assert client.put(f"{PREFIX}/profile/mode", json={"name": "Nope"}).status_code == 404


def test_manual_and_recalculated_tdee(client):
    r = client.put(f"{PREFIX}/profile/tdee", json={"calories": 2100})
    assert r.json()["selected_mode"] == "custom"
    assert r.json()["tdee"] == 2100

    r = client.put(f"{PREFIX}/profile/tdee", json={"calories": 1550})
    assert r.json()["selected_mode"] == "Holiday + Rest"

    r = client.post(f"{PREFIX}/profile/tdee/recalculate")
    assert r.json()["tdee"] == 2649

    assert client.put(f"{PREFIX}/profile/tdee", json={"calories": 0}).status_code == 422


def test_macro_adjustment(client):
    r = client.put(f"{PREFIX}/profile/macros", json={"key": "carbs", "pct": 60})
    assert r.json()["macros"] == {"protein": 15, "fat": 25, "carbs": 60}

    r = client.put(f"{PREFIX}/profile/macros", json={"key": "fat", "pct": 90})
    assert r.json()["macros"] == {"protein": 0, "fat": 40, "carbs": 60}

    assert client.put(f"{PREFIX}/profile/macros", json={"key": "carbs", "pct": 150}).status_code == 422
    assert client.put(f"{PREFIX}/profile/macros", json={"key": "sugar", "pct": 10}).status_code == 422


def test_macro_grams(client):
    grams = client.get(f"{PREFIX}/profile/macros/grams").json()
    assert grams == {"protein": 139, "fat": 51, "carbs": 208}

    r = client.put(f"{PREFIX}/profile/macros/grams", json={"key": "carbs", "grams": 185})
    assert r.json()["macros"] == {"protein": 35, "fat": 25, "carbs": 40}


# ── Logs ─────────────────────────────────────────────────────────────────

def test_daily_log_lifecycle(client):
    r = client.post(f"{PREFIX}/logs/daily", json={"weight": 74.2, "sleep": 7.5, "rhr": 58})
    assert r.status_code == 201
    first = r.json()
    assert first["macros_reached"] == {"carbs": False, "fat": False, "protein": False}

    second = client.post(f"{PREFIX}/logs/daily", json={"weight": 74.0, "sleep": 8, "rhr": 57}).json()
    logs = client.get(f"{PREFIX}/logs/daily").json()
    assert [log["id"] for log in logs] == [second["id"], first["id"]]
    assert client.get(f"{PREFIX}/profile").json()["weight"] == 74.0

    assert client.delete(f"{PREFIX}/logs/daily/{first['id']}").status_code == 204
    assert client.delete(f"{PREFIX}/logs/daily/{first['id']}").status_code == 404
    assert len(client.get(f"{PREFIX}/logs/daily").json()) == 1


def test_daily_log_validation(client):
    assert client.post(f"{PREFIX}/logs/daily", json={"weight": 0, "sleep": 7, "rhr": 60}).status_code == 422
    assert client.post(f"{PREFIX}/logs/daily", json={"weight": 70, "sleep": 30, "rhr": 60}).status_code == 422


def test_toggle_macro_goal(client):
    r = client.post(f"{PREFIX}/logs/daily/latest/macros/protein/toggle")
    assert r.status_code == 409

    client.post(f"{PREFIX}/logs/daily", json={"weight": 74, "sleep": 8, "rhr": 58})
    r = client.post(f"{PREFIX}/logs/daily/latest/macros/protein/toggle")
    assert r.status_code == 200
    assert r.json()["macros_reached"]["protein"] is True
    assert client.get(f"{PREFIX}/dashboard").json()["macros_reached"]["protein"] is True


def test_weekly_checkin_lifecycle(client):
    payload = {"waist": 82.5, "left_arm": 35.0, "right_arm": 35.4, "photos": ["aGVsbG8="]}
    r = client.post(f"{PREFIX}/logs/weekly", json=payload)
    assert r.status_code == 201
    checkin = r.json()
    assert checkin["photos"] == ["aGVsbG8="]

    assert [c["id"] for c in client.get(f"{PREFIX}/logs/weekly").json()] == [checkin["id"]]
    assert client.delete(f"{PREFIX}/logs/weekly/{checkin['id']}").status_code == 204
    assert client.get(f"{PREFIX}/logs/weekly").json() == []


# ── Dashboard ────────────────────────────────────────────────────────────

def test_status_follows_logs(client):
    assert client.get(f"{PREFIX}/dashboard/status").json()["level"] == "GREEN"
    client.post(f"{PREFIX}/logs/daily", json={"weight": 74, "sleep": 4, "rhr": 58})
    assert client.get(f"{PREFIX}/dashboard/status").json()["level"] == "RED"


def test_dashboard_summary(client):
    body = client.get(f"{PREFIX}/dashboard").json()
    assert body["tdee"] == 1850
    assert body["macro_grams"] == {"protein": 139, "fat": 51, "carbs": 208}
    assert body["macros_reached"] is None


def test_weight_trend(client):
    client.post(f"{PREFIX}/logs/daily", json={"weight": 74.6, "sleep": 8, "rhr": 58})
    client.post(f"{PREFIX}/logs/daily", json={"weight": 74.1, "sleep": 8, "rhr": 58})
    points = client.get(f"{PREFIX}/dashboard/weight-trend", params={"days": 7}).json()
    assert [p["weight"] for p in points] == [74.6, 74.1]
    assert client.get(f"{PREFIX}/dashboard/weight-trend", params={"days": 14}).status_code == 400


# ── Whole state ──────────────────────────────────────────────────────────

def test_import_prunes_and_export_round_trips(client):
    now = datetime.now(timezone.utc)
    exported = client.get(f"{PREFIX}/state").json()
    exported["daily_logs"] = [
        {"date": now.isoformat(), "weight": 73, "sleep": 7, "rhr": 60},
        {"date": (now - timedelta(days=400)).isoformat(), "weight": 80, "sleep": 7, "rhr": 60},
    ]
    r = client.put(f"{PREFIX}/state", json=exported)
    assert r.status_code == 200
    assert [log["weight"] for log in r.json()["daily_logs"]] == [73]
    assert client.get(f"{PREFIX}/state").json() == r.json()


def test_reset_state(client):
    client.post(f"{PREFIX}/logs/daily", json={"weight": 74, "sleep": 8, "rhr": 58})
    client.put(f"{PREFIX}/profile/tdee", json={"calories": 2100})
    body = client.delete(f"{PREFIX}/state").json()
    assert body["daily_logs"] == []
    assert body["profile"]["tdee"] == 1850
    assert client.get(f"{PREFIX}/logs/daily").json() == []


def test_import_reads_browser_client_blob(client):
    now = datetime.now(timezone.utc).isoformat()
    blob = {
        "profile": {
            "height": 180,
            "weight": 80,
            "age": 30,
            "gender": "female",
            "activityLevel": 1.375,
            "bmi": 24.7,
            "tdee": 1750,
            "selectedMode": "Work + Rest",
            "macros": {"protein": 35, "fat": 25, "carbs": 40},
        },
        "dailyLogs": [
            {
                "id": str(uuid4()),
                "date": now,
                "weight": 80,
                "sleep": 7.5,
                "rhr": 60,
                "fatigue": 0,
                "performance": 0,
                "isEditable": True,
                "macrosReached": {"carbs": True, "fat": False, "protein": False},
            }
        ],
        "weeklyLogs": [
            {
                "id": str(uuid4()),
                "date": now,
                "waist": 82,
                "leftArm": 35,
                "rightArm": 35.5,
                "photos": [],
                "isEditable": True,
            }
        ],
    }
    r = client.put(f"{PREFIX}/state", json=blob)
    assert r.status_code == 200
    body = r.json()
    assert body["profile"]["activity_level"] == 1.375
    assert body["profile"]["selected_mode"] == "Work + Rest"
    assert body["daily_logs"][0]["macros_reached"]["carbs"] is True
    assert body["weekly_logs"][0]["left_arm"] == 35
    assert client.get(f"{PREFIX}/logs/daily").json()[0]["weight"] == 80


def test_import_rejects_unknown_keys(client):
    exported = client.get(f"{PREFIX}/state").json()
    exported["dailyLog"] = []
    assert client.put(f"{PREFIX}/state", json=exported).status_code == 422


def test_import_rejects_split_not_summing_to_100(client):
    exported = client.get(f"{PREFIX}/state").json()
    exported["profile"]["macros"] = {"protein": 80, "fat": 80, "carbs": 80}
    assert client.put(f"{PREFIX}/state", json=exported).status_code == 422
    assert client.get(f"{PREFIX}/profile/macros/grams").json() == {"protein": 139, "fat": 51, "carbs": 208}
