import pytest
from sqlalchemy.dialects import postgresql

from app.api.ratings.models import Rating
from app.api.ratings.service import RatingService, average_rating


def post_rating(client, **overrides):
    body = {"username": "alice", "rating": 4, "animeId": 21, "episodeNumber": 1}
    body.update(overrides)
    return client.post("/api/ratings", json=body)


# ---------- Aggregate ----------
@pytest.mark.parametrize("values, expected", [
    ([], 0),
    ([5], 5.0),
    ([5, 4, 4], 4.3),
    ([1, 2], 1.5),
    ([5, 5, 4], 4.7),
    ([1, 1, 2, 2, 2, 2], 1.7),
])
def test_average_rating(values, expected):
    assert average_rating(values) == expected


# ---------- POST ----------
@pytest.mark.parametrize("value", [1, 5, "3"])
def test_rate_accepts_range(client, value):
    resp = post_rating(client, rating=value)
    assert resp.status_code == 200
    assert resp.json()["rating"]["rating"] == int(value)


@pytest.mark.parametrize("value", [6, -1, "9"])
def test_rate_rejects_out_of_range(client, db_session, value):
    resp = post_rating(client, rating=value)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Rating must be between 1 and 5"
    assert db_session.query(Rating).count() == 0


def test_rate_zero_is_rejected(client, db_session):
    resp = post_rating(client, rating=0)
    assert resp.status_code == 400
    assert db_session.query(Rating).count() == 0


def test_rate_missing_field(client):
    resp = client.post("/api/ratings", json={"username": "alice", "rating": 3, "animeId": 21})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Missing required fields"


def test_rate_twice_replaces_previous(client, db_session):
    first = post_rating(client, rating=2)
    second = post_rating(client, rating=5)
    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json()["rating"]["rating"] == 5
    assert second.json()["rating"]["id"] == first.json()["rating"]["id"]

    rows = db_session.query(Rating).all()
    assert len(rows) == 1
    assert rows[0].rating == 5


def test_rate_other_users_and_episodes_are_separate_rows(client, db_session):
    post_rating(client, username="alice")
    post_rating(client, username="bob")
    post_rating(client, username="alice", episodeNumber=2)
    post_rating(client, username="alice", animeId=22)
    assert db_session.query(Rating).count() == 4


def test_rate_username_is_trimmed_before_conflict_check(client, db_session):
    post_rating(client, username="alice", rating=1)
    post_rating(client, username="  alice ", rating=3)
    rows = db_session.query(Rating).all()
    assert len(rows) == 1
    assert rows[0].rating == 3


def test_rate_truncates_fractional_values(client, db_session):
    resp = post_rating(client, rating=4.5, animeId=21.5)
    assert resp.status_code == 200
    stored = db_session.query(Rating).one()
    assert stored.rating == 4
    assert stored.anime_id == 21


def test_rate_long_username(client, db_session):
    resp = post_rating(client, username="r" * 150)
    assert resp.status_code == 200
    assert resp.json()["rating"]["username"] == "r" * 150
    assert Rating.__table__.c.username.type.length is None


def test_rating_service_upserts_with_postgresql_by_default(db_session):
    assert RatingService(db_session).insert is postgresql.insert


# ---------- GET ----------
def test_get_ratings_aggregates(client):
    post_rating(client, username="a", rating=5)
    post_rating(client, username="b", rating=4)
    post_rating(client, username="c", rating=4)
    post_rating(client, username="d", rating=1, episodeNumber=2)

    resp = client.get("/api/ratings", params={"animeId": 21, "episode": 1})
    assert resp.status_code == 200
    data = resp.json()
    assert data["totalRatings"] == 3
    assert data["averageRating"] == 4.3
    assert sorted(r["rating"] for r in data["ratings"]) == [4, 4, 5]


def test_get_ratings_after_replace(client):
    post_rating(client, username="a", rating=1)
    post_rating(client, username="b", rating=2)
    post_rating(client, username="a", rating=5)

    data = client.get("/api/ratings", params={"animeId": 21, "episode": 1}).json()
    assert data["totalRatings"] == 2
    assert data["averageRating"] == 3.5


def test_get_ratings_empty(client):
    resp = client.get("/api/ratings", params={"animeId": 21, "episode": 1})
    assert resp.status_code == 200
    assert resp.json() == {"ratings": [], "averageRating": 0, "totalRatings": 0}


def test_get_ratings_non_numeric_filter_matches_nothing(client):
    post_rating(client)
    resp = client.get("/api/ratings", params={"animeId": "abc", "episode": "x"})
    assert resp.status_code == 200
    assert resp.json() == {"ratings": [], "averageRating": 0, "totalRatings": 0}


def test_get_ratings_missing_params(client):
    resp = client.get("/api/ratings", params={"animeId": 21})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Missing animeId or episode"
