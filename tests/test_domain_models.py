"""Unit tests for domain models."""

import bisect
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from concerts.domain.models import Concert, Genre, Performer


class TestGenre:
    """Tests for the Genre enum."""

    def test_genre_values_are_stored_labels(self):
        """Test each genre's value is the label written to the database."""
        assert Genre.POP.value == "Pop"
        assert Genre.HIP_HOP.value == "HipHop"
        assert Genre.RHYTHM_AND_BLUES.value == "RhythmAndBlues"
        assert Genre.ACAPPELLA.value == "Acappella"
        assert Genre.METAL.value == "Metal"
        assert Genre.ROCK.value == "Rock"

    def test_genre_from_label(self):
        """Test genres can be looked up by stored label."""
        assert Genre("RhythmAndBlues") is Genre.RHYTHM_AND_BLUES

    def test_unknown_genre_label_raises(self):
        """Test an unknown label is rejected."""
        with pytest.raises(ValueError):
            Genre("Polka")


class TestPerformer:
    """Tests for Performer model."""

    def test_valid_performer(self):
        """Test creating a performer without an id."""
        performer = Performer(name="Lorde", image_ref="Lorde.jpg", genre=Genre.POP)

        assert performer.id is None
        assert performer.name == "Lorde"
        assert performer.image_ref == "Lorde.jpg"
        assert performer.genre is Genre.POP

    def test_image_ref_is_optional(self):
        """Test a performer may have no image."""
        performer = Performer(name="Lorde", genre=Genre.POP)

        assert performer.image_ref is None
        assert str(performer) == "Performer, id: None, name: Lorde, image: None, genre: Pop"

    def test_genre_accepts_label(self):
        """Test genre can be given as its stored label."""
        performer = Performer(name="Metallica", image_ref="Metallica.jpg", genre="Metal")
        assert performer.genre is Genre.METAL

    def test_empty_name_rejected(self):
        """Test a blank name fails validation."""
        with pytest.raises(ValidationError):
            Performer(name="   ", image_ref="x.jpg", genre=Genre.POP)

    def test_assignment_is_validated(self):
        """Test setters validate like the constructor."""
        performer = Performer(name="Lorde", image_ref="Lorde.jpg", genre=Genre.POP)

        performer.image_ref = "new_image.jpg"
        assert performer.image_ref == "new_image.jpg"

        with pytest.raises(ValidationError):
            performer.genre = "Polka"

    def test_equality_uses_name_only(self):
        """Test performers with the same name are equal whatever the other fields."""
        stored = Performer(id=5, name="Katy Perry", image_ref="KatyPerry.jpg", genre=Genre.POP)
        unsaved = Performer(name="Katy Perry", image_ref="other.jpg", genre=Genre.ROCK)

        assert stored.same_performer(unsaved)
        assert stored == unsaved
        assert hash(stored) == hash(unsaved)

    def test_different_names_not_equal(self):
        """Test performers with different names differ even with the same id."""
        a = Performer(id=1, name="Lorde", image_ref="Lorde.jpg", genre=Genre.POP)
        b = Performer(id=1, name="Adele", image_ref="Lorde.jpg", genre=Genre.POP)

        assert not a.same_performer(b)
        assert a != b

    def test_not_equal_to_other_types(self):
        """Test comparison with a non-performer is False."""
        performer = Performer(name="Lorde", image_ref="Lorde.jpg", genre=Genre.POP)

        assert not performer.same_performer("Lorde")
        assert performer != "Lorde"

    def test_set_collapses_same_name(self):
        """Test a set keeps one performer per name."""
        performers = {
            Performer(id=1, name="Drake", image_ref="a.jpg", genre=Genre.HIP_HOP),
            Performer(name="Drake", image_ref="b.jpg", genre=Genre.HIP_HOP),
            Performer(name="Adele", image_ref="c.jpg", genre=Genre.POP),
        }
        assert len(performers) == 2

    def test_sort_key_orders_by_name(self):
        """Test sort_key sorts performers by name."""
        performers = [
            Performer(name="Lorde", image_ref="", genre=Genre.POP),
            Performer(name="Adele", image_ref="", genre=Genre.POP),
            Performer(name="Drake", image_ref="", genre=Genre.HIP_HOP),
        ]
        names = [p.name for p in sorted(performers, key=Performer.sort_key)]
        assert names == ["Adele", "Drake", "Lorde"]

    def test_str(self):
        """Test string rendering lists all fields."""
        performer = Performer(id=4, name="Bruno Mars", image_ref="BrunoMars.jpg",
                              genre=Genre.RHYTHM_AND_BLUES)
        assert str(performer) == (
            "Performer, id: 4, name: Bruno Mars, image: BrunoMars.jpg, genre: RhythmAndBlues"
        )


class TestConcert:
    """Tests for Concert model."""

    def test_valid_concert(self, bruno_mars):
        """Test creating a concert without an id."""
        concert = Concert(
            title="24K Magic World Tour",
            date=datetime(2017, 9, 2, 19, 30),
            performer=bruno_mars,
        )

        assert concert.id is None
        assert concert.title == "24K Magic World Tour"
        assert concert.date == datetime(2017, 9, 2, 19, 30)

    def test_performer_is_shared_not_copied(self, bruno_mars):
        """Test the concert references the given performer instance."""
        first = Concert(title="A", date=datetime(2017, 1, 1, 20, 0), performer=bruno_mars)
        second = Concert(title="B", date=datetime(2017, 1, 2, 20, 0))
        second.performer = bruno_mars

        assert first.performer is bruno_mars
        assert second.performer is bruno_mars

    def test_performer_is_optional_in_memory(self):
        """Test a concert can exist before its performer is known."""
        concert = Concert(title="TBA", date=datetime(2018, 1, 1, 20, 0))
        assert concert.performer is None

    def test_empty_title_rejected(self):
        """Test a blank title fails validation."""
        with pytest.raises(ValidationError):
            Concert(title="", date=datetime(2018, 1, 1, 20, 0))

    def test_timezone_aware_date_rejected(self):
        """Test concert dates must be naive local date-times."""
        with pytest.raises(ValidationError):
            Concert(title="Tour", date=datetime(2018, 1, 1, 20, 0, tzinfo=timezone.utc))

    def test_date_assignment_is_validated(self):
        """Test setting an aware date fails like the constructor."""
        concert = Concert(title="Tour", date=datetime(2018, 1, 1, 20, 0))

        concert.date = datetime(2018, 1, 8, 20, 0)
        assert concert.date == datetime(2018, 1, 8, 20, 0)

        with pytest.raises(ValidationError):
            concert.date = datetime(2018, 1, 8, 20, 0, tzinfo=timezone.utc)

    def test_equality_uses_title_only(self, bruno_mars):
        """Test stored and unsaved concerts with the same title are equal."""
        stored = Concert(id=4, title="Evolve!", date=datetime(2018, 2, 17, 19, 30),
                         performer=bruno_mars)
        unsaved = Concert(title="Evolve!", date=datetime(2019, 1, 1, 12, 0))

        assert stored.same_concert(unsaved)
        assert stored == unsaved
        assert hash(stored) == hash(unsaved)

    def test_different_titles_not_equal(self):
        """Test concerts with different titles differ."""
        a = Concert(id=1, title="Divide Tour", date=datetime(2017, 11, 25, 19, 0))
        b = Concert(id=1, title="Divide Tour Encore", date=datetime(2017, 11, 25, 19, 0))

        assert not a.same_concert(b)
        assert a != b

    def test_sort_key_supports_binary_search(self):
        """Test a title-sorted list can be searched with bisect and sort_key."""
        concerts = sorted(
            [
                Concert(title="Witness: The Tour", date=datetime(2017, 12, 3, 20, 0)),
                Concert(title="24K Magic World Tour", date=datetime(2017, 9, 2, 19, 30)),
                Concert(title="One Love Manchester", date=datetime(2017, 6, 4, 19, 0)),
            ],
            key=Concert.sort_key,
        )

        assert [c.title for c in concerts] == [
            "24K Magic World Tour",
            "One Love Manchester",
            "Witness: The Tour",
        ]
        index = bisect.bisect_left(concerts, "One Love Manchester", key=Concert.sort_key)
        assert concerts[index].title == "One Love Manchester"

    def test_str(self, magic_tour):
        """Test string rendering names the performer."""
        magic_tour.id = 4
        assert str(magic_tour) == (
            "Concert, id: 4, title: 24K Magic World Tour, "
            "date: 2017-09-02T19:30:00, featuring: Bruno Mars"
        )
