"""
API tests for station settings: rotation cycle, shift templates,
divisions, people, memberships
and the station itself.
"""

import pytest

from conftest import ADMIN_USER, EDITOR_USER, VIEWER_USER
from roster.models import Membership, Person, ShiftTemplate, Station, UserRole


# ============================================
# Rotation cycle
# ============================================
class TestScheduleCycle:
    def test_not_configured(self, client, viewer_headers, station):
        assert client.get("/api/settings/schedule-cycle", headers=viewer_headers).status_code == 404

    def test_create_with_defaults(self, client, admin_headers, divisions):
        response = client.put(
            "/api/settings/schedule-cycle",
            headers=admin_headers,
            json={"order_division_ids": [d.id for d in divisions]},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["start_date"] == "2024-01-01"
        assert data["switch_hours"] == 12
        assert data["order_division_ids"] == [d.id for d in divisions]

    def test_non_positive_switch_hours_fall_back(self, client, admin_headers, divisions):
        response = client.put(
            "/api/settings/schedule-cycle",
            headers=admin_headers,
            json={"order_division_ids": [divisions[0].id], "switch_hours": -5},
        )
        assert response.json()["switch_hours"] == 12

    def test_unknown_divisions_dropped(self, client, admin_headers, divisions):
        response = client.put(
            "/api/settings/schedule-cycle",
            headers=admin_headers,
            json={"order_division_ids": [divisions[1].id, 9999, divisions[0].id]},
        )
        assert response.json()["order_division_ids"] == [divisions[1].id, divisions[0].id]

    def test_empty_order_keeps_previous(self, client, admin_headers, cycle, divisions):
        response = client.put(
            "/api/settings/schedule-cycle",
            headers=admin_headers,
            json={"start_date": "2024-03-01", "order_division_ids": [9999], "switch_hours": 36},
        )
        data = response.json()
        assert data["order_division_ids"] == [d.id for d in divisions]
        assert data["start_date"] == "2024-03-01"
        assert data["switch_hours"] == 36

    def test_viewer_reads_cycle(self, client, viewer_headers, cycle):
        response = client.get("/api/settings/schedule-cycle", headers=viewer_headers)
        assert response.status_code == 200
        assert response.json()["switch_hours"] == 12

    def test_editor_cannot_change_cycle(self, client, editor_headers, divisions):
        response = client.put(
            "/api/settings/schedule-cycle",
            headers=editor_headers,
            json={"order_division_ids": [divisions[0].id]},
        )
        assert response.status_code == 403


# ============================================
# Shift templates
# ============================================
class TestShiftTemplates:
    def test_list_ordered_by_start(self, client, viewer_headers, templates):
        response = client.get("/api/settings/shift-templates", headers=viewer_headers)
        assert [t["label"] for t in response.json()] == ["DAY", "NIGHT"]

    def test_create_normalizes_time(self, client, admin_headers, station):
        response = client.post(
            "/api/settings/shift-templates",
            headers=admin_headers,
            json={"label": " Spät ", "start_time": "14:00:00", "end_time": "22:00"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["label"] == "Spät"
        assert data["start_time"] == "14:00"

    def test_duplicate_label(self, client, admin_headers, templates):
        response = client.post(
            "/api/settings/shift-templates",
            headers=admin_headers,
            json={"label": "DAY", "start_time": "06:00", "end_time": "18:00"},
        )
        assert response.status_code == 409

    @pytest.mark.parametrize("value", ["7 Uhr", "24:00", ""])
    def test_invalid_time(self, client, admin_headers, station, value):
        response = client.post(
            "/api/settings/shift-templates",
            headers=admin_headers,
            json={"label": "DAY", "start_time": value, "end_time": "19:00"},
        )
        assert response.status_code == 422

    def test_update(self, client, admin_headers, templates):
        template_id = templates["DAY"].id
        response = client.put(
            f"/api/settings/shift-templates/{template_id}",
            headers=admin_headers,
            json={"start_time": "06:30"},
        )
        assert response.status_code == 200
        assert response.json()["start_time"] == "06:30"
        assert response.json()["end_time"] == "19:00"

    def test_delete(self, client, admin_headers, viewer_headers, templates):
        template_id = templates["NIGHT"].id
        assert client.delete(f"/api/settings/shift-templates/{template_id}", headers=admin_headers).status_code == 200
        labels = [t["label"] for t in client.get("/api/settings/shift-templates", headers=viewer_headers).json()]
        assert labels == ["DAY"]

    def test_delete_unknown(self, client, admin_headers, station):
        assert client.delete("/api/settings/shift-templates/9999", headers=admin_headers).status_code == 404


# ============================================
# Divisions and people
# ============================================
class TestDivisions:
    def test_list(self, client, viewer_headers, divisions):
        response = client.get("/api/divisions", headers=viewer_headers)
        assert [d["name"] for d in response.json()] == ["A", "B", "C"]

    def test_create(self, client, admin_headers, station):
        response = client.post("/api/divisions", headers=admin_headers, json={"name": "D", "color": "#ff0000"})
        assert response.status_code == 200
        assert response.json()["station_id"] == station.id

    def test_delete_unused(self, client, admin_headers, divisions):
        assert client.delete(f"/api/divisions/{divisions[2].id}", headers=admin_headers).status_code == 200

    def test_delete_in_use(self, client, admin_headers, divisions, cycle, templates):
        client.post("/api/shifts/generate", headers=admin_headers, params={"window_days": 1})
        response = client.delete(f"/api/divisions/{divisions[0].id}", headers=admin_headers)
        assert response.status_code == 409

    def test_delete_unknown(self, client, admin_headers, station):
        assert client.delete("/api/divisions/9999", headers=admin_headers).status_code == 404


class TestPeople:
    def test_create_and_toggle(self, client, admin_headers, viewer_headers, station):
        person = client.post("/api/people", headers=admin_headers, json={"name": "Lea Braun", "rank": "BM"}).json()
        assert person["active"] is True

        toggled = client.put(f"/api/people/{person['id']}/toggle-active", headers=admin_headers).json()
        assert toggled["active"] is False

        active = client.get("/api/people", headers=viewer_headers, params={"active_only": True}).json()
        assert active == []

    def test_blank_name(self, client, admin_headers, station):
        assert client.post("/api/people", headers=admin_headers, json={"name": "  "}).status_code == 400


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/utils/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


# ============================================
# Stored data edge cases
# ============================================
class TestTemplateResponses:
    def test_legacy_stored_time_is_returned_as_is(self, client, viewer_headers, station, db):
        db.add(ShiftTemplate(station_id=station.id, label="Alt", start_time="7 Uhr", end_time="19:00"))
        db.commit()
        response = client.get("/api/settings/shift-templates", headers=viewer_headers)
        assert response.status_code == 200
        assert [(t["label"], t["start_time"]) for t in response.json()] == [("Alt", "7 Uhr")]


class TestDivisionRemovalFromCycle:
    def test_deleted_division_leaves_rotation_order(self, client, admin_headers, viewer_headers, divisions, cycle, templates):
        response = client.delete(f"/api/divisions/{divisions[2].id}", headers=admin_headers)
        assert response.status_code == 200

        order = client.get("/api/settings/schedule-cycle", headers=viewer_headers).json()["order_division_ids"]
        assert order == [divisions[0].id, divisions[1].id]

        result = client.post("/api/shifts/generate", headers=admin_headers, params={"window_days": 3})
        assert result.status_code == 200
        assert result.json()["inserted"] == 6


# ============================================
# People management
# ============================================
class TestPeopleManagement:
    def test_update_person(self, client, admin_headers, people):
        response = client.put(
            f"/api/people/{people[0].id}",
            headers=admin_headers,
            json={"name": " Anna Schmidt-Kurz ", "rank": "HBM"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Anna Schmidt-Kurz"
        assert data["rank"] == "HBM"
        assert data["photo_url"] is None

    def test_update_requires_name(self, client, admin_headers, people):
        response = client.put(f"/api/people/{people[0].id}", headers=admin_headers, json={"name": ""})
        assert response.status_code == 400

    def test_update_person_of_other_station(self, client, admin_headers, station, db):
        other = Station(name="Feuerwache 2")
        db.add(other)
        db.flush()
        stranger = Person(station_id=other.id, name="Fremder")
        db.add(stranger)
        db.commit()
        response = client.put(f"/api/people/{stranger.id}", headers=admin_headers, json={"name": "Übernommen"})
        assert response.status_code == 404

    def test_delete_person_frees_slots(self, client, admin_headers, viewer_headers, people, divisions):
        payload = {
            "date": "2024-02-10",
            "start_time": "07:00",
            "end_time": "19:00",
            "division_id": divisions[0].id,
            "assignments": [{"vehicle_key": "HLF", "slot_key": "1", "person_id": people[0].id}],
        }
        shift = client.post("/api/shifts", headers=admin_headers, json=payload).json()

        assert client.delete(f"/api/people/{people[0].id}", headers=admin_headers).status_code == 200

        slots = client.get(f"/api/shifts/{shift['id']}", headers=viewer_headers).json()["assignments"]
        assert [(s["slot_key"], s["person_id"]) for s in slots] == [("1", None)]
        names = [p["name"] for p in client.get("/api/people", headers=viewer_headers).json()]
        assert names == ["Jonas Weber"]

    def test_editor_cannot_delete(self, client, editor_headers, people):
        assert client.delete(f"/api/people/{people[0].id}", headers=editor_headers).status_code == 403


# ============================================
# Memberships
# ============================================
def membership_id(db, user_id):
    db.expire_all()
    return db.query(Membership).filter(Membership.user_id == user_id).one().id


class TestMemberships:
    def test_list_memberships(self, client, admin_headers, station):
        response = client.get("/api/users/memberships", headers=admin_headers)
        assert response.status_code == 200
        assert {m["user_id"] for m in response.json()} == {ADMIN_USER, EDITOR_USER, VIEWER_USER}

    def test_viewer_cannot_list(self, client, viewer_headers, station):
        assert client.get("/api/users/memberships", headers=viewer_headers).status_code == 403

    def test_own_membership(self, client, editor_headers, divisions):
        data = client.get("/api/users/me", headers=editor_headers).json()
        assert data["role"] == "EDITOR"
        assert data["division_ids"] == [divisions[0].id]

    def test_change_role(self, client, admin_headers, station, db):
        target = membership_id(db, VIEWER_USER)
        response = client.put(f"/api/users/memberships/{target}", headers=admin_headers, json={"role": "EDITOR"})
        assert response.status_code == 200
        assert response.json()["role"] == "EDITOR"

    def test_change_editor_divisions(self, client, admin_headers, divisions, db):
        target = membership_id(db, EDITOR_USER)
        response = client.put(
            f"/api/users/memberships/{target}",
            headers=admin_headers,
            json={"role": "EDITOR", "division_ids": [divisions[1].id, divisions[2].id]},
        )
        assert response.json()["division_ids"] == [divisions[1].id, divisions[2].id]

    def test_unknown_division_rejected(self, client, admin_headers, divisions, db):
        target = membership_id(db, EDITOR_USER)
        response = client.put(
            f"/api/users/memberships/{target}",
            headers=admin_headers,
            json={"role": "EDITOR", "division_ids": [9999]},
        )
        assert response.status_code == 400

    def test_invalid_role(self, client, admin_headers, station, db):
        target = membership_id(db, VIEWER_USER)
        response = client.put(f"/api/users/memberships/{target}", headers=admin_headers, json={"role": "OWNER"})
        assert response.status_code == 422

    def test_cannot_change_own_role(self, client, admin_headers, station, db):
        own = membership_id(db, ADMIN_USER)
        response = client.put(f"/api/users/memberships/{own}", headers=admin_headers, json={"role": "VIEWER"})
        assert response.status_code == 400

    def test_other_station_membership_hidden(self, client, admin_headers, station, db):
        other = Station(name="Feuerwache 2")
        db.add(other)
        db.flush()
        foreign = Membership(user_id="admin-2", station_id=other.id, role=UserRole.ADMIN)
        db.add(foreign)
        db.commit()
        assert client.get(f"/api/users/memberships/{foreign.id}", headers=admin_headers).status_code == 404
        response = client.put(f"/api/users/memberships/{foreign.id}", headers=admin_headers, json={"role": "VIEWER"})
        assert response.status_code == 404

    def test_remove_membership(self, client, admin_headers, viewer_headers, station, db):
        target = membership_id(db, VIEWER_USER)
        assert client.delete(f"/api/users/memberships/{target}", headers=admin_headers).status_code == 200
        assert client.get("/api/divisions", headers=viewer_headers).status_code == 403

    def test_cannot_remove_self(self, client, admin_headers, station, db):
        own = membership_id(db, ADMIN_USER)
        assert client.delete(f"/api/users/memberships/{own}", headers=admin_headers).status_code == 400


# ============================================
# Station settings
# ============================================
class TestStationSettings:
    def test_rename_keeps_crest(self, client, admin_headers, station, db):
        station.crest_url = "https://example.org/wappen.png"
        db.commit()
        response = client.put("/api/settings/station", headers=admin_headers, json={"name": " Feuerwache Nord "})
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Feuerwache Nord"
        assert data["crest_url"] == "https://example.org/wappen.png"

    def test_new_crest(self, client, admin_headers, station):
        response = client.put(
            "/api/settings/station",
            headers=admin_headers,
            json={"name": "Feuerwache 1", "crest_url": "https://example.org/neu.png"},
        )
        assert response.json()["crest_url"] == "https://example.org/neu.png"

    def test_blank_name(self, client, admin_headers, station):
        assert client.put("/api/settings/station", headers=admin_headers, json={"name": "  "}).status_code == 422

    def test_editor_cannot_update(self, client, editor_headers, station):
        assert client.put("/api/settings/station", headers=editor_headers, json={"name": "X"}).status_code == 403

    def test_display_shows_new_name(self, client, admin_headers, station):
        client.get(f"/api/display/{station.id}")
        client.put("/api/settings/station", headers=admin_headers, json={"name": "Feuerwache Süd"})
        assert client.get(f"/api/display/{station.id}").json()["station_name"] == "Feuerwache Süd"
