import asyncio

from conftest import create_provider, register_and_login
from travelmarket.services.bookings import booking_service


async def _book(client, headers, **body):
    return await client.post("/api/bookings", json=body, headers=headers)


async def test_create_booking_with_dates(client, provider, traveller):
    response = await _book(
        client, traveller,
        provider_id=provider["id"],
        dates=["2025-06-12", "2025-06-10", "2025-06-12"],
        message="Two people, English speaking guide",
        attachments=[{"name": "passport.pdf", "content_type": "application/pdf", "data": "JVBERi0x"}],
    )

    assert response.status_code == 201, response.text
    booking = response.json()
    assert booking["status"] == "pending"
    assert booking["kind"] == "dates"
    assert booking["dates"] == ["2025-06-10", "2025-06-12"]
    assert booking["start_date"] == "2025-06-10"
    assert booking["end_date"] == "2025-06-12"
    assert booking["note"] == "Two people, English speaking guide"
    assert booking["attachments"][0]["name"] == "passport.pdf"


async def test_create_booking_with_range(client, provider, traveller):
    response = await _book(
        client, traveller, provider_id=provider["id"], startDate="2025-06-29", endDate="2025-07-02"
    )

    assert response.status_code == 201, response.text
    booking = response.json()
    assert booking["kind"] == "range"
    assert booking["dates"] == ["2025-06-29", "2025-06-30", "2025-07-01", "2025-07-02"]


async def test_conflict_lists_each_unavailable_day(client, provider, traveller):
    await client.put(
        "/api/me/calendar/blocked-dates", json={"dates": ["2025-06-10"]}, headers=provider["headers"]
    )
    await _book(client, traveller, provider_id=provider["id"], dates=["2025-06-12"])

    response = await _book(
        client, traveller, provider_id=provider["id"], dates=["2025-06-10", "2025-06-11", "2025-06-12"]
    )

    assert response.status_code == 409
    assert response.json()["conflicts"] == [
        {"date": "2025-06-10", "reason": "blocked"},
        {"date": "2025-06-12", "reason": "booked"},
    ]
    availability = await client.get("/api/availability", params={"providerId": provider["id"]})
    assert availability.json()["booked"] == ["2025-06-12"]


async def test_check_endpoint_is_advisory(client, provider, traveller):
    await _book(client, traveller, provider_id=provider["id"], dates=["2025-06-12"])

    busy = await client.post(
        "/api/bookings/check", json={"provider_id": provider["id"], "startDate": "2025-06-11", "endDate": "2025-06-13"}
    )
    free = await client.post(
        "/api/bookings/check", json={"provider_id": provider["id"], "dates": ["2025-06-20"]}
    )

    assert busy.json() == {"available": False, "conflicts": [{"date": "2025-06-12", "reason": "booked"}]}
    assert free.json() == {"available": True, "conflicts": []}
    my = await client.get("/api/bookings/my", headers=traveller)
    assert len(my.json()) == 1


async def test_concurrent_requests_for_same_day(client, provider):
    first = await register_and_login(client, "traveller_a")
    second = await register_and_login(client, "traveller_b")
    body = {"provider_id": provider["id"], "dates": ["2025-07-01"]}

    responses = await asyncio.gather(_book(client, first, **body), _book(client, second, **body))

    assert sorted(r.status_code for r in responses) == [201, 409]
    availability = await client.get("/api/availability", params={"providerId": provider["id"]})
    assert availability.json()["booked"] == ["2025-07-01"]


async def test_stale_conflict_check_is_caught_by_the_database(client, provider, traveller, monkeypatch):
    async def stale_check(*args, **kwargs):
        return []

    monkeypatch.setattr(booking_service, "check_conflicts", stale_check)
    body = {"provider_id": provider["id"], "dates": ["2025-07-01", "2025-07-02"]}

    assert (await _book(client, traveller, **body)).status_code == 201
    second = await _book(client, traveller, provider_id=provider["id"], dates=["2025-07-02"])

    assert second.status_code == 409
    assert second.json()["detail"] == "Dates were booked concurrently"


async def test_invalid_booking_requests(client, provider, traveller):
    cases = [
        {"dates": ["2025-06-10"]},
        {"provider_id": provider["id"]},
        {"provider_id": provider["id"], "dates": []},
        {"provider_id": provider["id"], "dates": ["10/06/2025x"]},
        {"provider_id": provider["id"], "dates": ["2025-06-10"], "startDate": "2025-06-10", "endDate": "2025-06-11"},
        {"provider_id": provider["id"], "startDate": "2025-06-12", "endDate": "2025-06-10"},
        {"provider_id": provider["id"], "startDate": "2025-01-01", "endDate": "2025-12-31"},
    ]
    for body in cases:
        response = await _book(client, traveller, **body)
        assert response.status_code == 400, body


async def test_unknown_provider_or_service(client, traveller):
    assert (await _book(client, traveller, provider_id=999, dates=["2025-06-10"])).status_code == 404
    assert (await _book(client, traveller, service_id=999, dates=["2025-06-10"])).status_code == 404


async def test_hotels_do_not_take_date_bookings(client, traveller):
    hotel = await create_provider(client, "hotel1", provider_type="hotel")

    response = await _book(client, traveller, provider_id=hotel["id"], dates=["2025-06-10"])

    assert response.status_code == 400


async def test_booking_requires_authentication(client, provider):
    response = await client.post("/api/bookings", json={"provider_id": provider["id"], "dates": ["2025-06-10"]})
    assert response.status_code in (401, 403)


async def test_accept_quote_and_provider_listing(client, provider, traveller):
    created = (await _book(client, traveller, provider_id=provider["id"], dates=["2025-08-01"])).json()

    quoted = await client.post(
        f"/api/bookings/{created['id']}/quote",
        json={"price": 120, "currency": "usd", "note": "Includes museum tickets"},
        headers=provider["headers"],
    )
    accepted = await client.post(f"/api/bookings/{created['id']}/accept", headers=provider["headers"])

    assert quoted.status_code == 200
    assert quoted.json()["status"] == "pending"
    assert quoted.json()["currency"] == "USD"
    assert accepted.status_code == 200, accepted.text
    assert accepted.json()["status"] == "active"
    assert accepted.json()["provider_price"] == 120

    active = await client.get("/api/bookings/provider", params={"status": "active"}, headers=provider["headers"])
    assert [b["id"] for b in active.json()] == [created["id"]]

    again = await client.post(f"/api/bookings/{created['id']}/accept", headers=provider["headers"])
    assert again.status_code == 409


async def test_accept_revalidates_against_new_blocks(client, provider, traveller):
    created = (await _book(client, traveller, provider_id=provider["id"], dates=["2025-08-01"])).json()
    await client.put(
        "/api/me/calendar/blocked-dates", json={"dates": ["2025-08-01"]}, headers=provider["headers"]
    )

    response = await client.post(f"/api/bookings/{created['id']}/accept", headers=provider["headers"])

    assert response.status_code == 409
    assert response.json()["conflicts"] == [{"date": "2025-08-01", "reason": "blocked"}]


async def test_reject_and_cancel_release_days(client, provider, traveller):
    rejected = (await _book(client, traveller, provider_id=provider["id"], dates=["2025-09-01"])).json()
    cancelled = (await _book(client, traveller, provider_id=provider["id"], dates=["2025-09-02"])).json()

    r1 = await client.post(
        f"/api/bookings/{rejected['id']}/reject", json={"note": "Fully booked"}, headers=provider["headers"]
    )
    r2 = await client.post(f"/api/bookings/{cancelled['id']}/cancel", headers=traveller)

    assert r1.json()["status"] == "rejected"
    assert r2.json()["status"] == "cancelled"
    availability = await client.get("/api/availability", params={"providerId": provider["id"]})
    assert availability.json()["booked"] == []

    rebook = await _book(client, traveller, provider_id=provider["id"], dates=["2025-09-01", "2025-09-02"])
    assert rebook.status_code == 201


async def test_only_owners_can_act_on_a_booking(client, provider, traveller):
    created = (await _book(client, traveller, provider_id=provider["id"], dates=["2025-10-01"])).json()
    stranger = await register_and_login(client, "stranger")
    other_provider = await create_provider(client, "guide2")

    cancel = await client.post(f"/api/bookings/{created['id']}/cancel", headers=stranger)
    accept = await client.post(f"/api/bookings/{created['id']}/accept", headers=other_provider["headers"])
    by_traveller = await client.post(f"/api/bookings/{created['id']}/accept", headers=traveller)
    missing = await client.post("/api/bookings/999/cancel", headers=traveller)

    assert cancel.status_code == 403
    assert accept.status_code == 403
    assert by_traveller.status_code == 403
    assert missing.status_code == 404


async def test_requester_confirms_a_quote(client, provider, traveller):
    created = (await _book(client, traveller, provider_id=provider["id"], dates=["2025-11-01"])).json()
    await client.post(
        f"/api/bookings/{created['id']}/quote", json={"price": 80, "currency": "eur"}, headers=provider["headers"]
    )

    confirmed = await client.post(f"/api/bookings/{created['id']}/confirm", headers=traveller)

    assert confirmed.status_code == 200, confirmed.text
    assert confirmed.json()["status"] == "active"
    assert confirmed.json()["provider_price"] == 80
    assert confirmed.json()["currency"] == "EUR"

    again = await client.post(f"/api/bookings/{created['id']}/confirm", headers=traveller)
    assert again.status_code == 409


async def test_only_the_requester_can_confirm(client, provider, traveller):
    created = (await _book(client, traveller, provider_id=provider["id"], dates=["2025-11-02"])).json()
    stranger = await register_and_login(client, "stranger")

    by_stranger = await client.post(f"/api/bookings/{created['id']}/confirm", headers=stranger)
    by_provider = await client.post(f"/api/bookings/{created['id']}/confirm", headers=provider["headers"])
    missing = await client.post("/api/bookings/999/confirm", headers=traveller)

    assert by_stranger.status_code == 403
    assert by_provider.status_code == 403
    assert missing.status_code == 404


async def test_confirm_revalidates_against_new_blocks(client, provider, traveller):
    created = (await _book(client, traveller, provider_id=provider["id"], dates=["2025-11-03"])).json()
    await client.put(
        "/api/me/calendar/blocked-dates", json={"dates": ["2025-11-03"]}, headers=provider["headers"]
    )

    response = await client.post(f"/api/bookings/{created['id']}/confirm", headers=traveller)

    assert response.status_code == 409
    assert response.json()["conflicts"] == [{"date": "2025-11-03", "reason": "blocked"}]
    mine = await client.get("/api/bookings/my", headers=traveller)
    assert mine.json()[0]["status"] == "pending"
