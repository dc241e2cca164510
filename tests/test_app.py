from __future__ import annotations

from datetime import date

import pytest

from shiftdesk.config import testing as test_settings
from shiftdesk.container import wire
from shiftdesk.core.enums import RequestStatus
from shiftdesk.main import create_app


@pytest.fixture
def app(monkeypatch, users_repo, requests_repo, notifications_repo):
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire(
        settings=test_settings,
        users_repo=users_repo,
        requests_repo=requests_repo,
        notifications_repo=notifications_repo,
    )
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, email, password="secret123"):
    return client.post("/auth/login", json={"email": email, "password": password})


def test_anonymous_home_goes_to_login(client):
    resp = client.get("/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/auth/login")


@pytest.mark.parametrize(
    "email,home",
    [("dana@example.com", "/employee"), ("miriam@example.com", "/manager"), ("office@example.com", "/office")],
)
def test_login_redirects_by_role(client, email, home):
    resp = login(client, email)
    assert resp.status_code == 200
    assert resp.get_json()["redirect"] == home
    assert client.get("/").headers["Location"].endswith(home)


def test_bad_login_is_401(client):
    resp = login(client, "dana@example.com", "nope")
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Invalid email or password"


def test_login_response_hides_password_hash(client):
    body = login(client, "dana@example.com").get_json()
    assert body["user"] == {"user_id": 1, "name": "Dana", "roles": ["employee"]}


def test_protected_routes_need_session(client):
    assert client.get("/me").status_code == 401
    assert client.get("/office/reports").status_code == 401


def test_wrong_role_is_403(client):
    login(client, "dana@example.com")
    assert client.get("/manager/requests").status_code == 403
    assert client.get("/office/users").status_code == 403


def test_request_flow_over_http(client, requests_repo):
    login(client, "dana@example.com")
    resp = client.post(
        "/employee/requests",
        json={"type": "vacation", "start_date": "2099-07-01", "end_date": "2099-07-03"},
    )
    assert resp.status_code == 201
    rid = resp.get_json()["request_id"]

    mine = client.get("/employee/requests").get_json()["requests"]
    assert mine[0]["status"] == "pending"
    assert mine[0]["start_date"] == "2099-07-01T00:00:00"

    client.post("/auth/logout")
    login(client, "miriam@example.com")
    notes = client.get("/notifications").get_json()
    assert notes["unread_count"] == 1
    assert client.post(f"/notifications/{notes['notifications'][0]['notification_id']}/read").status_code == 200

    assert [r["request_id"] for r in client.get("/manager/requests").get_json()["requests"]] == [rid]
    assert client.post(f"/manager/requests/{rid}/approve").status_code == 200
    assert requests_repo.get(request_id=rid).approved_by == "Miriam"
    assert client.post(f"/manager/requests/{rid}/reject").status_code == 400

    client.post("/auth/logout")
    login(client, "dana@example.com")
    assert client.get("/notifications").get_json()["notifications"][0]["title"] == "Request approved"
    assert client.post(f"/employee/requests/{rid}/cancel").status_code == 200
    assert requests_repo.get(request_id=rid).status == RequestStatus.CANCELLED


def test_submit_rejects_bad_input(client):
    login(client, "dana@example.com")
    assert client.post("/employee/requests", json={"type": "sick", "start_date": "2099-07-01"}).status_code == 400
    assert client.post("/employee/requests", json={"type": "vacation", "start_date": "01/07/2099"}).status_code == 400


def test_unknown_request_is_404(client):
    login(client, "miriam@example.com")
    assert client.post("/manager/requests/999/approve").status_code == 404


def test_office_report_json(client, requests_repo, vacation):
    requests_repo.add(vacation(1, 1, date(2025, 6, 1), date(2025, 6, 5)))
    login(client, "office@example.com")

    body = client.get("/office/reports?view=month&year=2025&month=6").get_json()
    assert body["window"]["label"] == "June 2025"
    assert body["policy"] == "approved_only"
    stats = body["report"]["employee_stats"]
    assert stats[0]["name"] == "Dana"
    assert stats[0]["vacation_tally"] == 4

    tallies = client.get("/office/reports/vacation-tallies?view=year&year=2025").get_json()["tallies"]
    assert tallies == [{"employee_id": 1, "total_workdays": 4}, {"employee_id": 2, "total_workdays": 0}]


def test_office_report_bad_month_is_400(client):
    login(client, "office@example.com")
    assert client.get("/office/reports?view=month&year=2025&month=13").status_code == 400


def test_report_store_failure_is_503(client, requests_repo):
    requests_repo.fail_reads = True
    login(client, "office@example.com")
    assert client.get("/office/reports?year=2025&month=6").status_code == 503


def test_csv_and_xlsx_downloads(client, requests_repo, vacation):
    requests_repo.add(vacation(1, 1, date(2025, 6, 1), date(2025, 6, 5)))
    login(client, "office@example.com")

    csv_resp = client.get("/office/reports/export.csv?year=2025&month=6")
    assert csv_resp.status_code == 200
    assert 'filename="employee-stats-june-2025.csv"' in csv_resp.headers["Content-Disposition"]
    assert csv_resp.get_data(as_text=True).startswith("Employee statistics - June 2025\n\n")

    xlsx_resp = client.get("/office/reports/export.xlsx?view=year&year=2025")
    assert xlsx_resp.status_code == 200
    assert 'filename="employee-stats-full-year-2025.xlsx"' in xlsx_resp.headers["Content-Disposition"]
    assert xlsx_resp.data[:2] == b"PK"


def test_office_manages_users(client, users_repo):
    login(client, "office@example.com")
    resp = client.post(
        "/office/users",
        json={"email": "noa@example.com", "name": "Noa", "password": "secret123", "roles": ["employee"]},
    )
    assert resp.status_code == 201
    uid = resp.get_json()["user_id"]

    assert client.put(f"/office/users/{uid}/roles", json={"roles": ["employee", "manager"]}).status_code == 200
    assert [r.value for r in users_repo.get_by_id(uid).roles] == ["employee", "manager"]

    users = client.get("/office/users").get_json()["users"]
    assert all("password_hash" not in u for u in users)

    assert client.delete("/office/users/4").status_code == 400
    assert client.delete(f"/office/users/{uid}").status_code == 200


def test_workday_endpoints(client):
    login(client, "dana@example.com")
    assert client.get("/workdays/count?start=2025-06-01&end=2025-06-05").get_json() == {"workdays": 4}
    assert client.get(
        "/workdays/count?start=2025-06-29&end=2025-07-03&clip_start=2025-07-01&clip_end=2025-07-31"
    ).get_json() == {"workdays": 3}
    assert client.get("/workdays/check?date=2025-09-23").get_json() == {"date": "2025-09-23", "workday": False}
    assert client.get("/workdays/count?start=junk&end=2025-06-05").status_code == 400


def test_manager_schedule(client):
    login(client, "dana@example.com")
    rid = client.post(
        "/employee/requests",
        json={"type": "vacation", "start_date": "2099-07-01", "end_date": "2099-07-03"},
    ).get_json()["request_id"]
    client.post("/employee/requests", json={"type": "extra_shift", "start_date": "2099-08-02", "project_name": "Tower B"})

    client.post("/auth/logout")
    login(client, "miriam@example.com")
    for item in client.get("/manager/requests").get_json()["requests"]:
        client.post(f"/manager/requests/{item['request_id']}/approve")

    schedule = client.get("/manager/schedule").get_json()["schedule"]
    assert [e["type"] for e in schedule] == ["vacation", "extra_shift"]
    assert schedule[0]["employee_name"] == "Dana"

    july = client.get("/manager/schedule?type=vacation&month=2099-07").get_json()["schedule"]
    assert [(e["request_id"], e["start_date"], e["end_date"]) for e in july] == [(rid, "2099-07-01", "2099-07-03")]
    assert client.get("/manager/schedule?month=July").status_code == 400


def test_update_own_profile(client, users_repo):
    login(client, "dana@example.com")
    resp = client.put("/me", json={"name": "Dana Levi", "phone_number": "050-1234567"})

    assert resp.status_code == 200
    assert resp.get_json()["user"]["phone_number"] == "050-1234567"
    assert "password_hash" not in resp.get_json()["user"]
    assert client.get("/me").get_json()["name"] == "Dana Levi"
    assert users_repo.get_by_id(1).name == "Dana Levi"
    assert client.put("/me", json={"name": ""}).status_code == 400
