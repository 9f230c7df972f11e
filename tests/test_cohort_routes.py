from bson import ObjectId


def test_create_cohort_returns_201_with_id_and_timestamps(client, cohort_payload) -> None:
    response = client.post("/api/cohorts", json=cohort_payload)

    assert response.status_code == 201
    body = response.json()
    assert ObjectId.is_valid(body["_id"])
    assert body["cohortSlug"] == "wd-101"
    assert body["cohortName"] == "Web Dev 101"
    assert body["program"] == "Web Dev"
    assert body["format"] == "Full Time"
    assert body["inProgress"] is False
    assert body["createdAt"] and body["updatedAt"]
    assert response.headers["location"] == f"/api/cohorts/{body['_id']}"


def test_create_cohort_accepts_stored_field_names(client) -> None:
    response = client.post("/api/cohorts", json={
        "cohortSlug": "ux-7",
        "cohortName": "UX Seven",
        "program": "UX/UI",
        "format": "Part Time",
        "inProgress": True,
    })

    assert response.status_code == 201
    assert response.json()["inProgress"] is True


def test_list_cohorts_contains_exactly_the_created_records(client, cohort_payload) -> None:
    assert client.get("/api/cohorts").json() == []

    slugs = ["wd-101", "wd-102", "da-1"]
    for slug in slugs:
        assert client.post("/api/cohorts", json={**cohort_payload, "slug": slug}).status_code == 201

    listed = client.get("/api/cohorts")

    assert listed.status_code == 200
    assert sorted(c["cohortSlug"] for c in listed.json()) == sorted(slugs)


def test_duplicate_slug_is_409_and_only_one_record_is_stored(client, cohort_payload, db) -> None:
    assert client.post("/api/cohorts", json=cohort_payload).status_code == 201

    response = client.post("/api/cohorts", json={**cohort_payload, "name": "Another"})

    assert response.status_code == 409
    assert "error" in response.json()
    assert db.cohorts.count_documents({}) == 1


def test_create_cohort_missing_field_is_400(client) -> None:
    response = client.post("/api/cohorts", json={"slug": "x", "program": "Web Dev", "format": "Full Time"})

    assert response.status_code == 400
    assert "cohortName" in response.json()["error"] or "name" in response.json()["error"]


def test_create_cohort_unknown_program_is_400(client, cohort_payload) -> None:
    response = client.post("/api/cohorts", json={**cohort_payload, "program": "Basket Weaving"})

    assert response.status_code == 400
    assert set(response.json()) == {"error"}


def test_get_cohort_by_id(client, cohort) -> None:
    response = client.get(f"/api/cohorts/{cohort['_id']}")

    assert response.status_code == 200
    assert response.json()["cohortSlug"] == "wd-101"


def test_get_cohort_malformed_id_is_400(client) -> None:
    response = client.get("/api/cohorts/abc")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid id"}


def test_get_cohort_absent_id_is_404(client) -> None:
    response = client.get(f"/api/cohorts/{ObjectId()}")

    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_update_cohort_returns_post_update_record(client, cohort) -> None:
    response = client.put(f"/api/cohorts/{cohort['_id']}", json={"inProgress": True, "name": "Renamed"})

    assert response.status_code == 200
    body = response.json()
    assert body["inProgress"] is True
    assert body["cohortName"] == "Renamed"
    assert body["cohortSlug"] == "wd-101"


def test_update_cohort_rejects_invalid_enum_and_null_required_field(client, cohort) -> None:
    bad_format = client.put(f"/api/cohorts/{cohort['_id']}", json={"format": "Weekends"})
    null_name = client.put(f"/api/cohorts/{cohort['_id']}", json={"cohortName": None})

    assert bad_format.status_code == 400
    assert null_name.status_code == 400
    assert client.get(f"/api/cohorts/{cohort['_id']}").json()["cohortName"] == "Web Dev 101"


def test_update_cohort_to_taken_slug_is_409_and_record_unchanged(client, cohort, cohort_payload) -> None:
    other = client.post("/api/cohorts", json={**cohort_payload, "slug": "wd-102", "name": "Web Dev 102"}).json()

    response = client.put(f"/api/cohorts/{other['_id']}", json={"slug": "wd-101", "name": "Stolen"})

    assert response.status_code == 409
    assert set(response.json()) == {"error"}
    stored = client.get(f"/api/cohorts/{other['_id']}").json()
    assert stored["cohortSlug"] == "wd-102"
    assert stored["cohortName"] == "Web Dev 102"


def test_update_cohort_id_checks(client) -> None:
    assert client.put("/api/cohorts/abc", json={"inProgress": True}).status_code == 400
    assert client.put(f"/api/cohorts/{ObjectId()}", json={"inProgress": True}).status_code == 404


def test_update_cohort_with_empty_body_returns_record_unchanged(client, cohort) -> None:
    response = client.put(f"/api/cohorts/{cohort['_id']}", json={})

    assert response.status_code == 200
    assert response.json()["cohortName"] == cohort["cohortName"]


def test_delete_cohort_returns_204_then_404(client, cohort) -> None:
    response = client.delete(f"/api/cohorts/{cohort['_id']}")

    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"/api/cohorts/{cohort['_id']}").status_code == 404
    assert client.delete(f"/api/cohorts/{cohort['_id']}").status_code == 404


def test_delete_cohort_malformed_id_is_400(client) -> None:
    assert client.delete("/api/cohorts/not-an-id").status_code == 400
