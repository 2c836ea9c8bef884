# backend/tests/routes/test_timeslot_routes.py
from careersync.models import MentorSession, ScheduleTimeslot

BASE = "/api/v1/timeslots"


def _payload(session_id="auto-create", windows=None):
    return {
        "session_id": session_id,
        "timeslots": windows
        if windows is not None
        else [
            {"start_time": "2030-01-15T09:00:00Z", "end_time": "2030-01-15T10:00:00Z"},
            {"start_time": "2030-01-15T10:00:00Z", "end_time": "2030-01-15T11:00:00Z"},
        ],
    }


class TestAddTimeslots:
    def test_auto_create(self, client, db, test_mentor, mentor_headers):
        response = client.post(BASE, json=_payload(), headers=mentor_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["addedCount"] == 2
        session = db.get(MentorSession, body["sessionId"])
        assert session.is_auto_provisioned

    def test_legacy_field_names(self, client, test_mentor, mentor_headers):
        response = client.post(
            BASE,
            json={
                "sessionId": "auto-create",
                "timeslots": [
                    {"start_date": "2030-01-15T09:00:00Z", "end_date": "2030-01-15T10:00:00Z"}
                ],
            },
            headers=mentor_headers,
        )

        assert response.status_code == 201
        assert response.json()["addedCount"] == 1

    def test_repeat_calls_share_default_session(self, client, test_mentor, mentor_headers):
        first = client.post(BASE, json=_payload(), headers=mentor_headers).json()
        second = client.post(
            BASE,
            json=_payload(
                windows=[{"start_time": "2030-01-16T09:00:00Z", "end_time": "2030-01-16T10:00:00Z"}]
            ),
            headers=mentor_headers,
        ).json()

        assert first["sessionId"] == second["sessionId"]

    def test_empty_list_is_bad_request(self, client, db, test_mentor, mentor_headers):
        response = client.post(BASE, json=_payload(windows=[]), headers=mentor_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "At least one timeslot is required"
        assert db.query(MentorSession).count() == 0

    def test_inverted_window_is_bad_request(self, client, test_mentor, mentor_headers):
        response = client.post(
            BASE,
            json=_payload(
                windows=[{"start_time": "2030-01-15T10:00:00Z", "end_time": "2030-01-15T09:00:00Z"}]
            ),
            headers=mentor_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_TIMESLOT"

    def test_missing_position_is_unprocessable(self, client, db, make_mentor, auth_headers_for):
        mentor = make_mentor(with_position=False)

        response = client.post(BASE, json=_payload(), headers=auth_headers_for(mentor.user_id))

        assert response.status_code == 422
        assert response.json()["code"] == "PRECONDITION_FAILED"
        assert db.query(MentorSession).count() == 0

    def test_foreign_session_is_not_found(
        self, client, test_mentor, mentor_headers, mentor_2_headers
    ):
        other = client.post(BASE, json=_payload(), headers=mentor_2_headers).json()["sessionId"]

        response = client.post(BASE, json=_payload(session_id=other), headers=mentor_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Session not found or not yours"

    def test_requires_mentor(self, client, account_headers):
        response = client.post(BASE, json=_payload(), headers=account_headers)
        assert response.status_code == 403

    def test_requires_token(self, client):
        response = client.post(BASE, json=_payload())
        assert response.status_code == 401

    def test_unknown_field_rejected(self, client, mentor_headers):
        payload = _payload()
        payload["extra"] = True
        response = client.post(BASE, json=payload, headers=mentor_headers)

        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"


class TestReadAndEdit:
    def _add(self, client, headers):
        return client.post(BASE, json=_payload(), headers=headers).json()["sessionId"]

    def test_list_available(self, client, mentor_headers):
        self._add(client, mentor_headers)

        response = client.get(BASE, headers=mentor_headers)

        assert response.status_code == 200
        rows = response.json()
        assert [row["start_time"] for row in rows] == [
            "2030-01-15T09:00:00Z",
            "2030-01-15T10:00:00Z",
        ]
        assert rows[0]["session_price"] == 60.0
        assert rows[0]["session_location"] == "Online"
        assert rows[0]["requester_name"] is None
        assert rows[0]["booking_id"] is None
        assert rows[0]["booking_status"] is None
        assert rows[0]["requester_email"] is None

    def test_list_session(self, client, mentor_headers, mentor_2_headers):
        session_id = self._add(client, mentor_headers)

        own = client.get(f"{BASE}/session/{session_id}", headers=mentor_headers)
        other = client.get(f"{BASE}/session/{session_id}", headers=mentor_2_headers)

        assert own.status_code == 200
        assert len(own.json()) == 2
        assert other.status_code == 403

    def test_patch_and_delete(self, client, db, mentor_headers):
        session_id = self._add(client, mentor_headers)
        slot_id = client.get(f"{BASE}/session/{session_id}", headers=mentor_headers).json()[0]["id"]

        patched = client.patch(
            f"{BASE}/{slot_id}", json={"end_time": "2030-01-15T09:30:00Z"}, headers=mentor_headers
        )
        assert patched.status_code == 200
        assert patched.json()["end_time"] == "2030-01-15T09:30:00Z"

        deleted = client.delete(f"{BASE}/{slot_id}", headers=mentor_headers)
        assert deleted.status_code == 204
        assert db.query(ScheduleTimeslot).filter_by(id=slot_id).count() == 0

    def test_delete_unknown(self, client, mentor_headers):
        response = client.delete(f"{BASE}/01HZZZZZZZZZZZZZZZZZZZZZZZ", headers=mentor_headers)
        assert response.status_code == 404
