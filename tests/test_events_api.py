from datetime import datetime

from app.db.models.event import Event

EVENT_PAYLOAD = {
    "title": "6h de Spa",
    "date": "2024-03-15T14:00:00",
    "type": "sprint",
    "car": "BMW M4 GT3",
    "track": "Spa-Francorchamps",
    "duration": 45,
}


def test_create_one_off_defaults_driver_to_caller(client, make_user, auth_headers):
    driver = make_user("Ana", roles=["driver"])

    response = client.post("/events/one-off", json=EVENT_PAYLOAD, headers=auth_headers(driver))

    assert response.status_code == 201
    data = response.json()
    assert [d["id"] for d in data["drivers"]] == [driver.id]
    assert data["manager_id"] is None
    assert data["team_id"] is None


def test_create_one_off_with_drivers(client, make_user, auth_headers):
    manager = make_user("Boss", roles=["manager"])
    a = make_user("A", roles=["driver"])
    b = make_user("B", roles=["driver"])
    payload = {**EVENT_PAYLOAD, "drivers": [{"id": a.id, "name": "A"}, {"id": b.id, "name": "B"}]}

    response = client.post("/events/one-off", json=payload, headers=auth_headers(manager))

    assert response.status_code == 201
    assert sorted(d["id"] for d in response.json()["drivers"]) == sorted([a.id, b.id])


def test_create_one_off_with_unknown_driver_is_404(client, make_user, auth_headers):
    manager = make_user("Boss", roles=["manager"])
    payload = {**EVENT_PAYLOAD, "drivers": [{"id": 999}]}

    response = client.post("/events/one-off", json=payload, headers=auth_headers(manager))

    assert response.status_code == 404


def test_endurance_event_takes_the_managed_team(client, make_user, make_team, auth_headers):
    manager = make_user("Boss", roles=["manager"])
    driver = make_user("D", roles=["driver"])
    team = make_team("Endurance Squad", manager, drivers=[driver])
    payload = {
        **EVENT_PAYLOAD,
        "type": "endurance",
        "manager_id": manager.id,
        "drivers": [{"id": driver.id}],
    }

    response = client.post("/events/one-off", json=payload, headers=auth_headers(manager))

    assert response.status_code == 201
    data = response.json()
    assert data["team_id"] == team.id
    assert data["manager_id"] == manager.id


def test_sprint_event_ignores_manager_id(client, make_user, make_team, auth_headers):
    manager = make_user("Boss", roles=["manager"])
    make_team("Squad", manager)
    payload = {**EVENT_PAYLOAD, "manager_id": manager.id}

    response = client.post("/events/one-off", json=payload, headers=auth_headers(manager))

    assert response.status_code == 201
    assert response.json()["manager_id"] is None
    assert response.json()["team_id"] is None


def test_create_championship_round(client, make_user, auth_headers):
    manager = make_user("Boss", roles=["manager"])
    driver = make_user("D", roles=["driver"])
    headers = auth_headers(manager)
    championship = client.post(
        "/championships/", json={"name": "GT World Challenge", "organizer": "SRO"}, headers=headers
    ).json()
    payload = {
        **EVENT_PAYLOAD,
        "type": "championship",
        "championship_id": championship["id"],
        "manager_id": manager.id,
        "drivers": [{"id": driver.id}],
    }

    response = client.post("/events/championship", json=payload, headers=headers)

    assert response.status_code == 201
    data = response.json()
    assert data["championship_id"] == championship["id"]
    assert data["championship"] == {"name": "GT World Challenge", "organizer": "SRO"}
    assert data["manager_id"] == manager.id


def test_list_championships_only_mine(client, make_user, auth_headers):
    boss = make_user("Boss", roles=["manager"])
    other = make_user("Other", roles=["manager"])
    client.post("/championships/", json={"name": "Mine", "organizer": "X"}, headers=auth_headers(boss))
    client.post("/championships/", json={"name": "Theirs", "organizer": "Y"}, headers=auth_headers(other))

    response = client.get("/championships/", headers=auth_headers(boss))

    assert [c["name"] for c in response.json()] == ["Mine"]


def test_driving_events_by_month(client, make_user, make_event, auth_headers):
    a = make_user("A", roles=["driver"])
    b = make_user("B", roles=["driver"])
    c = make_user("C", roles=["driver"])
    event = make_event(datetime(2024, 3, 15), drivers=[a, b])
    make_event(datetime(2024, 4, 1), drivers=[a])

    response = client.get("/events/driving", params={"month": 2, "year": 2024}, headers=auth_headers(a))
    assert response.status_code == 200
    assert [e["id"] for e in response.json()] == [event.id]
    assert {d["name"] for d in response.json()[0]["drivers"]} == {"A", "B"}

    response = client.get("/events/driving", params={"month": 2, "year": 2024}, headers=auth_headers(c))
    assert response.json() == []


def test_driving_events_with_explicit_range(client, make_user, make_event, auth_headers):
    a = make_user("A", roles=["driver"])
    event = make_event(datetime(2024, 3, 15, 22, 0), drivers=[a])

    same_day = client.get(
        "/events/driving",
        params={"first_day": "2024-03-15", "last_day": "2024-03-15"},
        headers=auth_headers(a),
    )
    later = client.get(
        "/events/driving",
        params={"first_day": "2024-03-16", "last_day": "2024-03-25"},
        headers=auth_headers(a),
    )

    assert [e["id"] for e in same_day.json()] == [event.id]
    assert later.json() == []


def test_range_needs_both_days(client, make_user, auth_headers):
    a = make_user("A", roles=["driver"])

    only_first = client.get("/events/driving", params={"first_day": "2024-03-15"}, headers=auth_headers(a))
    reversed_range = client.get(
        "/events/driving",
        params={"first_day": "2024-03-15", "last_day": "2024-03-01"},
        headers=auth_headers(a),
    )

    assert only_first.status_code == 400
    assert reversed_range.status_code == 400


def test_role_gated_views(client, make_user, auth_headers):
    driver = make_user("D", roles=["driver"])
    manager = make_user("M", roles=["manager"])

    assert client.get("/events/managing", headers=auth_headers(driver)).status_code == 403
    assert client.get("/events/driving", headers=auth_headers(manager)).status_code == 403
    assert client.get("/events/managing", headers=auth_headers(manager)).status_code == 200
    assert client.get("/events/driving").status_code == 401


def test_team_events_endpoint(client, make_user, make_team, make_event, auth_headers):
    manager = make_user("M", roles=["manager"])
    a = make_user("A", roles=["driver"])
    b = make_user("B", roles=["driver"])
    make_team("Team", manager, drivers=[a, b])
    make_event(datetime(2024, 3, 2), drivers=[a, b], manager=manager)
    pair = make_event(datetime(2024, 3, 5), drivers=[a, b])
    outsider = make_user("Out", roles=["driver"])

    response = client.get("/events/team", params={"month": 2, "year": 2024}, headers=auth_headers(manager))
    assert [e["id"] for e in response.json()] == [pair.id]

    response = client.get("/events/team", params={"month": 2, "year": 2024}, headers=auth_headers(outsider))
    assert response.status_code == 200
    assert response.json() == []


def test_edit_without_type_becomes_sprint(client, db, make_user, make_event, auth_headers):
    manager = make_user("M", roles=["manager"])
    driver = make_user("D", roles=["driver"])
    event = make_event(datetime(2024, 3, 5), drivers=[driver], type="endurance", manager=manager)

    response = client.patch(f"/events/{event.id}", json={"track": "Monza"}, headers=auth_headers(manager))

    assert response.status_code == 200
    data = response.json()
    assert data["type"] == "sprint"
    assert data["track"] == "Monza"
    assert data["car"] == "Porsche 911 GT3 R"
    assert [d["id"] for d in data["drivers"]] == [driver.id]


def test_edit_keeps_type_when_given_and_replaces_drivers(client, make_user, make_event, auth_headers):
    manager = make_user("M", roles=["manager"])
    a = make_user("A", roles=["driver"])
    b = make_user("B", roles=["driver"])
    c = make_user("C", roles=["driver"])
    event = make_event(datetime(2024, 3, 5), drivers=[a, b], type="endurance", manager=manager)

    response = client.patch(
        f"/events/{event.id}",
        json={"type": "endurance", "drivers": [{"id": c.id}]},
        headers=auth_headers(manager),
    )

    assert response.status_code == 200
    assert response.json()["type"] == "endurance"
    assert [d["id"] for d in response.json()["drivers"]] == [c.id]


def test_edit_by_stranger_is_forbidden(client, make_user, make_event, auth_headers):
    driver = make_user("D", roles=["driver"])
    stranger = make_user("S", roles=["driver"])
    event = make_event(datetime(2024, 3, 5), drivers=[driver])

    response = client.patch(f"/events/{event.id}", json={"track": "Monza"}, headers=auth_headers(stranger))

    assert response.status_code == 403


def test_delete_event(client, db, make_user, make_event, auth_headers):
    driver = make_user("D", roles=["driver"])
    stranger = make_user("S", roles=["driver"])
    event = make_event(datetime(2024, 3, 5), drivers=[driver])
    event_id = event.id

    assert client.delete(f"/events/{event_id}", headers=auth_headers(stranger)).status_code == 403
    assert client.delete(f"/events/{event_id}", headers=auth_headers(driver)).status_code == 200
    assert client.delete(f"/events/{event_id}", headers=auth_headers(driver)).status_code == 404

    assert db.query(Event).filter(Event.id == event_id).count() == 0


def test_championship_round_needs_own_championship_and_team(client, make_user, make_team, auth_headers):
    manager = make_user("Boss", roles=["manager"])
    a = make_user("A", roles=["driver"])
    team = make_team("Team", manager, drivers=[a])
    championship = client.post(
        "/championships/", json={"name": "GT World Challenge", "organizer": "SRO"}, headers=auth_headers(manager)
    ).json()
    stranger = make_user("Stranger", roles=["manager"])
    nobody = make_user("Nobody")
    stranger_championship = client.post(
        "/championships/", json={"name": "Club Cup", "organizer": "Club"}, headers=auth_headers(stranger)
    ).json()
    base = {**EVENT_PAYLOAD, "type": "championship", "drivers": [{"id": stranger.id}]}

    # Campeonato ajeno, con o sin roles, y colgado de la escudería de otro
    for user in (stranger, nobody):
        response = client.post(
            "/events/championship",
            json={**base, "championship_id": championship["id"], "team_id": team.id},
            headers=auth_headers(user),
        )
        assert response.status_code == 403

    # Campeonato propio pero escudería ajena
    response = client.post(
        "/events/championship",
        json={**base, "championship_id": stranger_championship["id"], "team_id": team.id},
        headers=auth_headers(stranger),
    )
    assert response.status_code == 403

    # Ids que no existen
    response = client.post(
        "/events/championship", json={**base, "championship_id": 999}, headers=auth_headers(stranger)
    )
    assert response.status_code == 404
    response = client.post(
        "/events/championship",
        json={**base, "championship_id": stranger_championship["id"], "team_id": 999},
        headers=auth_headers(stranger),
    )
    assert response.status_code == 404

    # Nada ha llegado al feed de la escudería
    feed = client.get("/events/team", params={"month": 2, "year": 2024}, headers=auth_headers(a))
    assert feed.json() == []


def test_championship_round_for_managed_team(client, make_user, make_team, auth_headers):
    manager = make_user("Boss", roles=["manager"])
    a = make_user("A", roles=["driver"])
    b = make_user("B", roles=["driver"])
    team = make_team("Team", manager, drivers=[a, b])
    championship = client.post(
        "/championships/", json={"name": "GT World Challenge", "organizer": "SRO"}, headers=auth_headers(manager)
    ).json()
    payload = {
        **EVENT_PAYLOAD,
        "type": "championship",
        "championship_id": championship["id"],
        "team_id": team.id,
        "drivers": [{"id": a.id}],
    }

    response = client.post("/events/championship", json=payload, headers=auth_headers(manager))

    assert response.status_code == 201
    assert response.json()["team_id"] == team.id
    feed = client.get("/events/team", params={"month": 2, "year": 2024}, headers=auth_headers(b))
    assert [e["id"] for e in feed.json()] == [response.json()["id"]]


def test_ranges_past_the_last_year_are_400(client, make_user, auth_headers):
    a = make_user("A", roles=["driver"])

    by_month = client.get("/events/driving", params={"month": 24, "year": 9998}, headers=auth_headers(a))
    by_days = client.get(
        "/events/driving",
        params={"first_day": "9999-12-30", "last_day": "9999-12-31"},
        headers=auth_headers(a),
    )
    last_month = client.get("/events/driving", params={"month": 22, "year": 9998}, headers=auth_headers(a))

    assert by_month.status_code == 400
    assert by_days.status_code == 400
    assert last_month.status_code == 200
    assert last_month.json() == []
