from datetime import date, datetime

from models.genre import Genre
from models.movie import Movie
from models.user import User

STAMP = datetime(2024, 1, 1, 12, 0, 0)


def make_movie(**overrides):
    fields = dict(
        id=1, title="Inception", release_date=date(2010, 7, 16), runtime=148,
        mpaa_rating="PG-13", description="Dreams within dreams.",
        created_at=STAMP, updated_at=STAMP,
    )
    fields.update(overrides)
    return Movie(**fields)


def test_movie_image_defaults_to_empty_string():
    assert make_movie().image == ""
    assert make_movie(image=None).image == ""


def test_movie_lists_are_not_shared():
    a, b = make_movie(), make_movie()
    a.genres.append(Genre(1, "Sci-Fi"))

    assert b.genres == []


def test_movie_to_dict():
    movie = make_movie(genres=[Genre(1, "Sci-Fi")], genres_array=[1])

    data = movie.to_dict()

    assert data["release_date"] == "2010-07-16"
    assert data["created_at"] == "2024-01-01T12:00:00"
    assert data["image"] == ""
    assert data["genres"] == [{"id": 1, "genre": "Sci-Fi"}]
    assert data["genres_array"] == [1]


def test_movie_to_dict_omits_empty_genres():
    data = make_movie().to_dict()

    assert "genres" not in data
    assert "genres_array" not in data


def test_movie_str():
    assert str(make_movie()) == "Inception (2010) | 148 min | PG-13"


def test_user_hides_password():
    user = User(
        id=1, email="a@b.com", first_name="Ada", last_name="Lovelace",
        password="$2a$12$secret", created_at=STAMP, updated_at=STAMP,
    )

    assert "password" not in user.to_dict()
    assert "secret" not in repr(user)
