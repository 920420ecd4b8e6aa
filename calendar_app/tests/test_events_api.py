from bson import ObjectId


def _create(client, **overrides):
    body = {
        "title": "Standup",
        "start": "2024-03-11T09:00:00Z",
        "end": "2024-03-11T09:15:00Z",
        "category": "mle",
    }
    body.update(overrides)
    response = client.post("/api/events", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def test_standup_lifecycle(client) -> None:
    created = _create(client)
    event_id = created["id"]
    assert event_id
    assert created["title"] == "Standup"
    assert created["category"] == "mle"
    assert created["description"] == ""
    assert created["createdAt"]

    listed = client.get("/api/events").json()
    assert [event["id"] for event in listed] == [event_id]

    updated = client.put(f"/api/events/{event_id}", json={"category": "basics"})
    assert updated.status_code == 200
    assert updated.json()["id"] == event_id

    fetched = client.get(f"/api/events/{event_id}").json()
    assert fetched["category"] == "basics"
    assert fetched["title"] == "Standup"
    assert fetched["createdAt"] == created["createdAt"]

    deleted = client.delete(f"/api/events/{event_id}")
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Event deleted"}

    missing = client.get(f"/api/events/{event_id}")
    assert missing.status_code == 404
    assert missing.json() == {"message": "Event not found"}


def test_list_is_sorted_by_start_regardless_of_insert_order(client) -> None:
    for start in ["2024-03-13T10:00:00Z", "2024-03-11T08:00:00Z", "2024-03-12T23:00:00Z", "2024-03-11T07:30:00Z"]:
        _create(client, title=start, start=start, end="2024-03-14T00:00:00Z")

    starts = [event["start"] for event in client.get("/api/events").json()]
    assert starts == sorted(starts)
    assert starts[0].startswith("2024-03-11T07:30:00")


def test_partial_update_leaves_other_fields_untouched(client) -> None:
    created = _create(client, description="daily sync")

    response = client.put(f"/api/events/{created['id']}", json={"description": "moved to zoom"})
    updated = response.json()

    assert updated["description"] == "moved to zoom"
    for field in ["id", "title", "start", "end", "category", "createdAt"]:
        assert updated[field] == created[field]


def test_empty_values_in_update_do_not_clear_fields(client) -> None:
    created = _create(client, description="keep me")

    response = client.put(
        f"/api/events/{created['id']}",
        json={"title": "", "description": "", "category": "", "start": "", "end": 0},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Standup"
    assert body["description"] == "keep me"
    assert body["category"] == "mle"
    assert body["start"] == created["start"]
    assert body["end"] == created["end"]


def test_falsy_non_string_values_in_update_are_ignored(client) -> None:
    created = _create(client, description="keep me")

    for body in [
        {"title": 0, "description": 0, "category": 0},
        {"title": False},
        {"description": None, "category": False, "start": False},
    ]:
        response = client.put(f"/api/events/{created['id']}", json=body)
        assert response.status_code == 200, response.text
        updated = response.json()
        for field in ["title", "description", "category", "start", "end", "createdAt"]:
            assert updated[field] == created[field]


def test_update_rejects_unparsable_timestamp(client) -> None:
    created = _create(client)

    response = client.put(f"/api/events/{created['id']}", json={"start": "not a date"})

    assert response.status_code == 400
    assert "start" in response.json()["message"]


def test_update_rejects_blank_title(client) -> None:
    created = _create(client)

    response = client.put(f"/api/events/{created['id']}", json={"title": "   "})

    assert response.status_code == 400


def test_unknown_ids_are_not_found(client) -> None:
    for event_id in [str(ObjectId()), "not-an-object-id"]:
        assert client.get(f"/api/events/{event_id}").status_code == 404
        assert client.put(f"/api/events/{event_id}", json={"title": "x"}).status_code == 404
        assert client.delete(f"/api/events/{event_id}").status_code == 404


def test_create_requires_title_start_end(client) -> None:
    for missing in ["title", "start", "end"]:
        body = {"title": "x", "start": "2024-03-11T09:00:00Z", "end": "2024-03-11T10:00:00Z"}
        body.pop(missing)
        response = client.post("/api/events", json=body)
        assert response.status_code == 400
        assert missing in response.json()["message"]


def test_create_rejects_blank_title_and_bad_dates(client) -> None:
    blank = client.post(
        "/api/events",
        json={"title": "  ", "start": "2024-03-11T09:00:00Z", "end": "2024-03-11T10:00:00Z"},
    )
    bad_date = client.post(
        "/api/events",
        json={"title": "x", "start": "someday", "end": "2024-03-11T10:00:00Z"},
    )

    assert blank.status_code == 400
    assert bad_date.status_code == 400


def test_create_defaults_category_and_trims_text(client) -> None:
    omitted = _create(client, category=None)
    unknown = _create(client, category="gardening", title="  Plant  ", description="  water  ")

    assert omitted["category"] == "other"
    assert unknown["category"] == "other"
    assert unknown["title"] == "Plant"
    assert unknown["description"] == "water"


def test_start_after_end_is_accepted(client) -> None:
    created = _create(client, start="2024-03-11T10:00:00Z", end="2024-03-11T09:00:00Z")

    assert created["start"] > created["end"]


def test_ignores_client_supplied_id(client) -> None:
    created = _create(client)

    response = client.put(
        f"/api/events/{created['id']}",
        json={"id": str(ObjectId()), "_id": "x", "title": "Renamed"},
    )

    assert response.json()["id"] == created["id"]
    assert response.json()["title"] == "Renamed"
