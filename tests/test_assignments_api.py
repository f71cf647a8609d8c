"""Tests for driver-to-shift assignments."""

from datetime import date, timedelta

import pytest


@pytest.fixture
def setup(make_route, make_shift, make_driver):
    route = make_route()
    shift = make_shift(route["id"], weekday="MONDAY", start="06:00", end="14:00", week_number=10)
    driver = make_driver()
    return route, shift, driver


def assign(client, headers, shift_id, driver_id, start_date="2026-03-02", **fields):
    payload = {"shift_id": shift_id, "driver_id": driver_id, "start_date": start_date}
    payload.update(fields)
    return client.post("/api/assignments", json=payload, headers=headers)


class TestCreateAssignment:

    def test_create(self, client, admin_headers, setup):
        route, shift, driver = setup
        response = assign(client, admin_headers, shift["id"], driver["id"], notes="Bus 12")
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "ACTIVE"
        assert body["driver_name"] == driver["full_name"]
        assert body["route_id"] == route["id"]
        assert body["weekday"] == "MONDAY"
        assert body["start_time"] == "06:00:00"
        assert body["end_date"] is None
        assert body["notes"] == "Bus 12"

    def test_inactive_driver(self, client, admin_headers, setup):
        _, shift, driver = setup
        client.put(f"/api/drivers/{driver['id']}", json={"status": "INACTIVE"}, headers=admin_headers)
        response = assign(client, admin_headers, shift["id"], driver["id"])
        assert response.status_code == 400
        assert response.json()["detail"] == "The selected driver is not active"

    def test_inactive_shift(self, client, admin_headers, make_route, make_shift, make_driver):
        shift = make_shift(make_route()["id"], status="INACTIVE")
        driver = make_driver()
        assert assign(client, admin_headers, shift["id"], driver["id"]).status_code == 400

    def test_missing_references(self, client, admin_headers, setup):
        _, shift, driver = setup
        assert assign(client, admin_headers, 999, driver["id"]).status_code == 404
        assert assign(client, admin_headers, shift["id"], 999).status_code == 404

    def test_end_before_start(self, client, admin_headers, setup):
        _, shift, driver = setup
        response = assign(client, admin_headers, shift["id"], driver["id"], end_date="2026-03-01")
        assert response.status_code == 400
        assert response.json()["detail"] == "end_date cannot be before start_date"

    def test_shift_already_taken(self, client, admin_headers, setup, make_driver):
        _, shift, driver = setup
        other = make_driver()
        assert assign(client, admin_headers, shift["id"], driver["id"], end_date="2026-03-31").status_code == 201

        overlapping = assign(client, admin_headers, shift["id"], other["id"], start_date="2026-03-15")
        assert overlapping.status_code == 409

        later = assign(client, admin_headers, shift["id"], other["id"], start_date="2026-04-01")
        assert later.status_code == 201

    def test_driver_double_booked(self, client, admin_headers, setup, make_shift):
        route, shift, driver = setup
        overlapping_shift = make_shift(route["id"], weekday="MONDAY", start="12:00", end="18:00", week_number=10)
        next_shift = make_shift(route["id"], weekday="MONDAY", start="14:00", end="20:00", week_number=10)
        other_day = make_shift(route["id"], weekday="TUESDAY", start="06:00", end="14:00", week_number=10)

        assert assign(client, admin_headers, shift["id"], driver["id"]).status_code == 201
        assert assign(client, admin_headers, overlapping_shift["id"], driver["id"]).status_code == 409
        assert assign(client, admin_headers, next_shift["id"], driver["id"]).status_code == 201
        assert assign(client, admin_headers, other_day["id"], driver["id"]).status_code == 201


class TestAssignBySchedule:

    def test_resolves_shift_from_date(self, client, admin_headers, make_route, make_shift, make_driver):
        route = make_route()
        # 2026-03-04 is the Wednesday of ISO week 10
        shift = make_shift(route["id"], weekday="WEDNESDAY", start="08:00", end="12:00", week_number=10)
        driver = make_driver()

        response = client.post("/api/assignments/by-schedule", json={
            "driver_id": driver["id"], "route_id": route["id"],
            "start_date": "2026-03-04", "start_time": "08:00"
        }, headers=admin_headers)
        assert response.status_code == 201
        assert response.json()["shift_id"] == shift["id"]
        assert response.json()["start_date"] == "2026-03-04"

    def test_date_in_iso_week_53(self, client, admin_headers, make_route, make_shift, make_driver):
        route = make_route()
        # 2026-12-31 is the Thursday of ISO week 53
        shift = make_shift(route["id"], weekday="THURSDAY", start="08:00", end="12:00", week_number=53)
        driver = make_driver()

        response = client.post("/api/assignments/by-schedule", json={
            "driver_id": driver["id"], "route_id": route["id"],
            "start_date": "2026-12-31", "start_time": "08:00"
        }, headers=admin_headers)
        assert response.status_code == 201
        assert response.json()["shift_id"] == shift["id"]
        assert response.json()["week_number"] == 53

    def test_no_matching_shift(self, client, admin_headers, setup):
        route, _, driver = setup
        response = client.post("/api/assignments/by-schedule", json={
            "driver_id": driver["id"], "route_id": route["id"],
            "start_date": "2026-03-04", "start_time": "08:00"
        }, headers=admin_headers)
        assert response.status_code == 404


class TestAssignmentLifecycle:

    def test_finish(self, client, admin_headers, setup):
        _, shift, driver = setup
        created = assign(client, admin_headers, shift["id"], driver["id"]).json()

        response = client.post(f"/api/assignments/{created['id']}/finish", json={"end_date": "2026-03-20"},
                               headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["status"] == "FINISHED"
        assert response.json()["end_date"] == "2026-03-20"

        again = client.post(f"/api/assignments/{created['id']}/cancel", headers=admin_headers)
        assert again.status_code == 400

    def test_finish_defaults_to_today(self, client, admin_headers, setup):
        _, shift, driver = setup
        start = (date.today() - timedelta(days=7)).isoformat()
        created = assign(client, admin_headers, shift["id"], driver["id"], start_date=start).json()
        response = client.post(f"/api/assignments/{created['id']}/finish", headers=admin_headers)
        assert response.json()["end_date"] == date.today().isoformat()

    def test_finish_before_start(self, client, admin_headers, setup):
        _, shift, driver = setup
        created = assign(client, admin_headers, shift["id"], driver["id"]).json()
        response = client.post(f"/api/assignments/{created['id']}/finish", json={"end_date": "2026-01-01"},
                               headers=admin_headers)
        assert response.status_code == 400

    def test_cancel_frees_the_shift(self, client, admin_headers, setup, make_driver):
        _, shift, driver = setup
        created = assign(client, admin_headers, shift["id"], driver["id"]).json()
        client.post(f"/api/assignments/{created['id']}/cancel", headers=admin_headers)
        assert assign(client, admin_headers, shift["id"], make_driver()["id"]).status_code == 201

    def test_update_changes_driver(self, client, admin_headers, setup, make_driver):
        _, shift, driver = setup
        replacement = make_driver(full_name="Replacement")
        created = assign(client, admin_headers, shift["id"], driver["id"]).json()

        response = client.put(f"/api/assignments/{created['id']}", json={
            "driver_id": replacement["id"], "end_date": "2026-06-30"
        }, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["driver_name"] == "Replacement"
        assert response.json()["end_date"] == "2026-06-30"

    def test_list_filters(self, client, admin_headers, setup, make_driver):
        _, shift, driver = setup
        first = assign(client, admin_headers, shift["id"], driver["id"], end_date="2026-03-31").json()
        assign(client, admin_headers, shift["id"], make_driver()["id"], start_date="2026-04-01")
        client.post(f"/api/assignments/{first['id']}/finish", json={"end_date": "2026-03-31"}, headers=admin_headers)

        by_driver = client.get("/api/assignments", params={"driver_id": driver["id"]}, headers=admin_headers).json()
        assert [a["id"] for a in by_driver] == [first["id"]]

        active = client.get("/api/assignments", params={"status": "ACTIVE"}, headers=admin_headers).json()
        assert len(active) == 1

        on_day = client.get("/api/assignments", params={"on_date": "2026-04-15"}, headers=admin_headers).json()
        assert len(on_day) == 1
        assert on_day[0]["start_date"] == "2026-04-01"

    def test_delete(self, client, admin_headers, setup):
        _, shift, driver = setup
        created = assign(client, admin_headers, shift["id"], driver["id"]).json()
        assert client.delete(f"/api/assignments/{created['id']}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/assignments/{created['id']}", headers=admin_headers).status_code == 404
