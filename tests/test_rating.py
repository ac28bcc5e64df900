"""Tests for rating submission, aggregates and listings."""

from datetime import datetime

import pytest

from app.models import Rating, Store
from app.schemas.rating import SubmitRatingRequest
from app.services.otp_repository import OtpRepository
from app.services.rating_repository import RatingRepository


class TestSubmitRating:
    """POST /api/submitRating."""

    def test_end_to_end_scenario(self, client, mailer, seeded, issue_and_verify):
        """Issue, verify, rate, then read the aggregate."""
        seeded.add(Store(store_id=1, store_name="Corner Shop", city_id=11))
        seeded.commit()

        code = issue_and_verify("a@b.com")
        assert len(code) == 6 and code.isdigit()

        response = client.post("/api/submitRating", json={"StoreID": 1, "email": "a@b.com", "rating": 4})
        assert response.status_code == 200
        assert response.json() == {"message": "Rating submitted successfully"}

        response = client.get("/getRatings/1")
        assert response.status_code == 200
        assert response.json() == {"averageRating": "4.0", "ratingCount": 1}

    def test_second_submission_updates(self, client, seeded, issue_and_verify):
        """Two submissions for the same (email, store) leave one row with the latest score."""
        issue_and_verify("a@b.com")

        client.post("/api/submitRating", json={"StoreID": 100, "email": "a@b.com", "rating": 4, "name": "Asha"})
        response = client.post("/api/submitRating", json={"StoreID": 100, "email": "a@b.com", "rating": 2})

        assert response.status_code == 200
        assert response.json() == {"message": "Rating updated successfully"}
        seeded.expire_all()
        rows = seeded.query(Rating).filter_by(email="a@b.com", store_id=100).all()
        assert len(rows) == 1
        assert rows[0].rating == 2
        assert rows[0].name is None
        assert client.get("/getRatings/100").json() == {"averageRating": "2.0", "ratingCount": 1}

    def test_same_email_other_store_is_separate(self, client, seeded, issue_and_verify):
        issue_and_verify("a@b.com")

        client.post("/api/submitRating", json={"StoreID": 100, "email": "a@b.com", "rating": 5})
        client.post("/api/submitRating", json={"StoreID": 200, "email": "a@b.com", "rating": 1})

        assert client.get("/getRatings/100").json() == {"averageRating": "5.0", "ratingCount": 1}
        assert client.get("/getRatings/200").json() == {"averageRating": "1.0", "ratingCount": 1}

    def test_unverified_email_is_forbidden(self, client, seeded):
        response = client.post("/api/submitRating", json={"StoreID": 100, "email": "a@b.com", "rating": 4})

        assert response.status_code == 403
        assert response.json() == {"message": "Please verify your email first"}
        assert seeded.query(Rating).count() == 0

    def test_issued_but_unverified_is_forbidden(self, client, seeded):
        client.post("/api/sendOTP", json={"email": "a@b.com"})

        response = client.post("/api/submitRating", json={"StoreID": 100, "email": "a@b.com", "rating": 4})

        assert response.status_code == 403

    def test_unknown_store(self, client, seeded, issue_and_verify):
        issue_and_verify("a@b.com")

        response = client.post("/api/submitRating", json={"StoreID": 999, "email": "a@b.com", "rating": 4})

        assert response.status_code == 404
        assert response.json() == {"message": "Store with ID 999 not found"}

    @pytest.mark.parametrize("body", [
        {"email": "a@b.com", "rating": 4},
        {"StoreID": 100, "rating": 4},
        {"StoreID": 100, "email": "a@b.com"},
    ])
    def test_missing_fields(self, client, seeded, body):
        response = client.post("/api/submitRating", json=body)

        assert response.status_code == 400
        assert response.json() == {"message": "StoreID, email and rating are required"}

    @pytest.mark.parametrize("score", [0, 6, -1])
    def test_score_out_of_range(self, client, seeded, issue_and_verify, score):
        issue_and_verify("a@b.com")

        response = client.post("/api/submitRating", json={"StoreID": 100, "email": "a@b.com", "rating": score})

        assert response.status_code == 400
        assert response.json() == {"message": "Rating must be between 1 and 5"}

    def test_client_submitted_at_is_kept(self, client, seeded, issue_and_verify):
        issue_and_verify("a@b.com")

        client.post("/api/submitRating", json={
            "StoreID": 100,
            "email": "a@b.com",
            "rating": 3,
            "mobile": "9876543210",
            "submitted_at": "2024-02-01T10:30:00",
        })

        seeded.expire_all()
        row = seeded.query(Rating).filter_by(email="a@b.com").one()
        assert row.submitted_at == datetime(2024, 2, 1, 10, 30)
        assert row.mobile == "9876543210"


class TestRatingRepository:
    """Upsert behaviour at the repository level."""

    def test_lost_insert_race_falls_back_to_update(self, seeded, monkeypatch):
        """When a concurrent insert wins, the unique constraint turns ours into an update."""
        record = OtpRepository.issue(seeded, "a@b.com", 5)
        OtpRepository.verify(seeded, "a@b.com", record.otp)

        seeded.add(Rating(store_id=100, email="a@b.com", rating=1, submitted_at=datetime(2024, 1, 1)))
        seeded.commit()

        real_lookup = RatingRepository.get_by_email_and_store
        calls = []

        def stale_then_real(db, email, store_id):
            calls.append(email)
            if len(calls) == 1:
                return None
            return real_lookup(db, email, store_id)

        monkeypatch.setattr(RatingRepository, "get_by_email_and_store", staticmethod(stale_then_real))

        rating, created = RatingRepository.submit(
            seeded, SubmitRatingRequest(StoreID=100, email="a@b.com", rating=5)
        )

        assert created is False
        assert rating.rating == 5
        assert seeded.query(Rating).filter_by(email="a@b.com", store_id=100).count() == 1

    def test_has_rated_scopes(self, seeded, add_rating):
        add_rating(100, "a@b.com", 4, datetime(2024, 1, 1))

        assert RatingRepository.has_rated(seeded, "a@b.com") is True
        assert RatingRepository.has_rated(seeded, "a@b.com", 100) is True
        assert RatingRepository.has_rated(seeded, "a@b.com", 200) is False
        assert RatingRepository.has_rated(seeded, "c@d.com") is False


class TestRatingAggregates:
    """GET /getRatings/{store_id}."""

    def test_unrated_store_is_zero(self, client, seeded):
        response = client.get("/getRatings/100")

        assert response.status_code == 200
        assert response.json() == {"averageRating": "0.0", "ratingCount": 0}

    def test_unknown_store_is_zero(self, client):
        response = client.get("/getRatings/12345")

        assert response.json() == {"averageRating": "0.0", "ratingCount": 0}

    def test_average_one_decimal(self, client, add_rating):
        add_rating(100, "a@b.com", 5, datetime(2024, 1, 1))
        add_rating(100, "c@d.com", 4, datetime(2024, 1, 2))
        add_rating(100, "e@f.com", 4, datetime(2024, 1, 3))
        add_rating(200, "a@b.com", 1, datetime(2024, 1, 3))

        response = client.get("/getRatings/100")

        assert response.json() == {"averageRating": "4.3", "ratingCount": 3}


class TestRatingListing:
    """GET /getAllRatings/{store_id}."""

    @pytest.fixture
    def five_ratings(self, add_rating):
        for day in range(1, 6):
            add_rating(100, f"user{day}@b.com", day, datetime(2024, 1, day), name=f"User {day}")

    def test_newest_first_with_total(self, client, five_ratings):
        response = client.get("/getAllRatings/100", params={"page": 1, "limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 5
        assert body["page"] == 1
        assert body["limit"] == 2
        assert body["totalPages"] == 3
        assert [r["name"] for r in body["ratings"]] == ["User 5", "User 4"]
        assert "email" not in body["ratings"][0]

    def test_last_page(self, client, five_ratings):
        body = client.get("/getAllRatings/100", params={"page": 3, "limit": 2}).json()

        assert [r["rating"] for r in body["ratings"]] == [1]

    def test_defaults(self, client, five_ratings):
        body = client.get("/getAllRatings/100").json()

        assert body["page"] == 1
        assert body["limit"] == 10
        assert len(body["ratings"]) == 5

    def test_empty_store(self, client, seeded):
        body = client.get("/getAllRatings/200").json()

        assert body == {"ratings": [], "total": 0, "page": 1, "limit": 10, "totalPages": 0}

    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}])
    def test_invalid_pagination(self, client, seeded, params):
        response = client.get("/getAllRatings/100", params=params)

        assert response.status_code == 400


class TestSubmittedAtTimezones:
    """Client timestamps with offsets are stored as UTC."""

    def test_offset_is_converted_to_utc(self, client, seeded, issue_and_verify):
        issue_and_verify("a@b.com")

        client.post("/api/submitRating", json={
            "StoreID": 100,
            "email": "a@b.com",
            "rating": 3,
            "submitted_at": "2024-02-01T10:30:00+05:30",
        })

        seeded.expire_all()
        row = seeded.query(Rating).filter_by(email="a@b.com").one()
        assert row.submitted_at == datetime(2024, 2, 1, 5, 0)
        assert row.submitted_at.tzinfo is None

    def test_listing_orders_by_utc_instant(self, client, seeded, issue_and_verify):
        """10:30+05:30 (05:00 UTC) is older than 06:00+00:00."""
        issue_and_verify("a@b.com")
        issue_and_verify("c@d.com")

        client.post("/api/submitRating", json={
            "StoreID": 100, "email": "a@b.com", "rating": 3,
            "submitted_at": "2024-02-01T10:30:00+05:30",
        })
        client.post("/api/submitRating", json={
            "StoreID": 100, "email": "c@d.com", "rating": 4,
            "submitted_at": "2024-02-01T06:00:00+00:00",
        })

        body = client.get("/getAllRatings/100").json()

        assert [r["rating"] for r in body["ratings"]] == [4, 3]

    def test_naive_timestamp_is_kept_as_utc(self):
        request = SubmitRatingRequest(submitted_at="2024-02-01T10:30:00")

        assert request.submitted_at == datetime(2024, 2, 1, 10, 30)
