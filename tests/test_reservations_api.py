"""Tests for the reservation endpoints, including booking rules."""
from src.db.database import ReservationDB


def _booking(**overrides):
    booking = {
        "campsiteId": 2,
        "userProfileId": 1,
        "checkinDate": "2024-06-01T14:00:00",
        "checkoutDate": "2024-06-04T11:00:00",
    }
    booking.update(overrides)
    return booking


def test_list_reservations_includes_related_data_and_totals(client):
    response = client.get("/api/reservations")
    assert response.status_code == 200
    reservations = response.json()
    assert len(reservations) == 1

    reservation = reservations[0]
    assert reservation["checkinDate"] == "2023-09-01T16:00:00"
    assert reservation["checkoutDate"] == "2023-09-08T11:00:00"
    assert reservation["totalNights"] == 6
    assert reservation["totalCost"] == 105.94
    assert reservation["userProfile"]["firstName"] == "John"
    assert reservation["userProfile"]["email"] == "John.Doe@gmail.comx"
    assert reservation["campsite"]["nickname"] == "Barred Owl"
    assert reservation["campsite"]["campsiteType"]["campsiteTypeName"] == "Tent"


def test_list_reservations_is_ordered_by_checkin(client):
    client.post("/api/reservations", json=_booking(checkinDate="2024-07-01T14:00:00", checkoutDate="2024-07-02T11:00:00"))
    client.post("/api/reservations", json=_booking(checkinDate="2022-07-01T14:00:00", checkoutDate="2022-07-03T11:00:00"))

    checkins = [r["checkinDate"] for r in client.get("/api/reservations").json()]
    assert checkins == sorted(checkins)
    assert len(checkins) == 3


def test_create_reservation_returns_201_with_cost(client):
    response = client.post("/api/reservations", json=_booking())
    assert response.status_code == 201
    reservation = response.json()
    assert reservation["id"] == 2
    assert reservation["totalNights"] == 2
    assert reservation["totalCost"] == 63.0
    assert reservation["campsite"]["campsiteType"]["campsiteTypeName"] == "RV"
    assert response.headers["location"] == "/api/reservations/2"


def test_get_reservation_by_id(client):
    response = client.get("/api/reservations/1")
    assert response.status_code == 200
    assert response.json()["campsiteId"] == 1


def test_get_missing_reservation_returns_404(client):
    assert client.get("/api/reservations/999").status_code == 404


def test_checkout_before_checkin_is_rejected_without_persisting(client, db_session):
    response = client.post(
        "/api/reservations",
        json=_booking(checkinDate="2024-06-04T11:00:00", checkoutDate="2024-06-01T14:00:00"),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Reservation checkout must be at least one day after checkin"
    assert db_session.query(ReservationDB).count() == 1


def test_checkout_equal_to_checkin_is_rejected(client):
    response = client.post(
        "/api/reservations",
        json=_booking(checkinDate="2024-06-01T14:00:00", checkoutDate="2024-06-01T14:00:00"),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Reservation checkout must be at least one day after checkin"


def test_unknown_campsite_is_rejected(client, db_session):
    response = client.post("/api/reservations", json=_booking(campsiteId=999))
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid data submitted"
    assert db_session.query(ReservationDB).count() == 1


def test_unknown_user_profile_is_rejected(client):
    response = client.post("/api/reservations", json=_booking(userProfileId=999))
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid data submitted"


def test_malformed_dates_are_rejected(client):
    response = client.post("/api/reservations", json=_booking(checkinDate="not-a-date"))
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid data submitted"


def test_stay_longer_than_campsite_type_allows_is_rejected(client):
    # Primitive sites allow at most 3 nights
    response = client.post(
        "/api/reservations",
        json=_booking(campsiteId=3, checkinDate="2024-06-01T14:00:00", checkoutDate="2024-06-06T11:00:00"),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Reservation exceeds maximum reservation days for this campsite type"


def test_stay_of_exactly_the_maximum_is_allowed(client):
    response = client.post(
        "/api/reservations",
        json=_booking(campsiteId=3, checkinDate="2024-06-01T14:00:00", checkoutDate="2024-06-04T14:00:00"),
    )
    assert response.status_code == 201
    assert response.json()["totalCost"] == 40.0


def test_timezone_offsets_are_dropped(client):
    response = client.post(
        "/api/reservations",
        json=_booking(checkinDate="2024-06-01T14:00:00+02:00", checkoutDate="2024-06-03T14:00:00+02:00"),
    )
    assert response.status_code == 201
    assert response.json()["checkinDate"] == "2024-06-01T14:00:00"


def test_cancel_reservation(client):
    response = client.delete("/api/reservations/1")
    assert response.status_code == 204
    assert client.get("/api/reservations/1").status_code == 404
    assert client.get("/api/campsites/1").status_code == 200


def test_cancel_missing_reservation_returns_404(client):
    assert client.delete("/api/reservations/999").status_code == 404
