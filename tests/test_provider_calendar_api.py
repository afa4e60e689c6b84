from travelmarket.services.availability import calendar_service


async def test_blocked_dates_are_replaced_as_a_whole(client, provider):
    headers = provider["headers"]

    first = await client.put(
        "/api/me/calendar/blocked-dates",
        json={"dates": ["2025-06-10", "2025-06-11", "2025-06-10"]},
        headers=headers,
    )
    second = await client.put(
        "/api/me/calendar/blocked-dates", json={"dates": ["2025-06-20"]}, headers=headers
    )
    listed = await client.get("/api/me/calendar/blocked-dates", headers=headers)

    assert first.json() == {"ok": True, "count": 2}
    assert second.json() == {"ok": True, "count": 1}
    assert listed.json() == [{"date": "2025-06-20"}]


async def test_blocked_dates_range_filter(client, provider):
    headers = provider["headers"]
    await client.put(
        "/api/me/calendar/blocked-dates",
        json={"dates": ["2025-06-01", "2025-06-15", "2025-07-01"]},
        headers=headers,
    )

    response = await client.get(
        "/api/me/calendar/blocked-dates", params={"from": "2025-06-10", "to": "2025-06-30"}, headers=headers
    )

    assert response.json() == [{"date": "2025-06-15"}]


async def test_booked_dates_only_count_active_bookings(client, provider, traveller):
    headers = provider["headers"]
    pending = await client.post(
        "/api/bookings", json={"provider_id": provider["id"], "dates": ["2030-01-10"]}, headers=traveller
    )
    accepted = await client.post(
        "/api/bookings", json={"provider_id": provider["id"], "dates": ["2030-01-11", "2030-01-12"]}, headers=traveller
    )
    await client.post(f"/api/bookings/{accepted.json()['id']}/accept", headers=headers)
    assert pending.status_code == 201

    response = await client.get("/api/me/calendar/booked-dates", headers=headers)
    bounded = await client.get(
        "/api/me/calendar/booked-dates", params={"from": "2030-01-12", "to": "2030-01-31"}, headers=headers
    )

    assert response.json() == [{"date": "2030-01-11"}, {"date": "2030-01-12"}]
    assert bounded.json() == [{"date": "2030-01-12"}]


async def test_calendar_is_provider_only(client, traveller):
    response = await client.get("/api/me/calendar/blocked-dates", headers=traveller)
    assert response.status_code == 403


async def test_provider_without_profile(client):
    from conftest import register_and_login

    headers = await register_and_login(client, "newprovider", role="provider")
    response = await client.get("/api/me/calendar/blocked-dates", headers=headers)
    assert response.status_code == 404


async def test_booked_dates_default_to_today_onwards(client, provider, traveller):
    headers = provider["headers"]
    for day in ("2020-01-10", "2040-01-10"):
        created = await client.post(
            "/api/bookings", json={"provider_id": provider["id"], "dates": [day]}, headers=traveller
        )
        await client.post(f"/api/bookings/{created.json()['id']}/accept", headers=headers)

    response = await client.get("/api/me/calendar/booked-dates", headers=headers)

    assert response.json() == [{"date": "2040-01-10"}]


async def test_blocked_dates_replace_takes_the_calendar_lock(client, provider, monkeypatch):
    locked = []

    async def record_lock(db, provider_id):
        locked.append(provider_id)

    monkeypatch.setattr(calendar_service, "lock_provider_calendar", record_lock)

    response = await client.put(
        "/api/me/calendar/blocked-dates", json={"dates": ["2025-06-10"]}, headers=provider["headers"]
    )

    assert response.status_code == 200
    assert locked == [provider["id"]]
