"""Tests for the text save format and the repositories built on it."""

import pytest

from media_manager.domain.catalog.entities import Catalog, Library
from media_manager.domain.result import InvalidFormatError, StorageError
from media_manager.infrastructure.repositories import (
    FileBasedMediaRepository,
    InMemoryMediaRepository,
)
from media_manager.infrastructure.serialization import text_format

SAVED = (
    "3\n"
    "2 VHS 5 Alien\n"
    "3 BluRay 0 Heat\n"
    "1 DVD 4 The Matrix\n"
    "2\n"
    "Favorites 2\n"
    "Alien\n"
    "The Matrix\n"
    "SciFi 1\n"
    "The Matrix\n"
)


@pytest.fixture
def populated():
    """Library and catalog matching SAVED."""
    library = Library()
    catalog = Catalog()
    library.add_record("DVD", "The Matrix")
    library.add_record("VHS", "Alien")
    library.add_record("BluRay", "Heat")
    library.find_record_by_id(1).value().set_rating(4)
    library.find_record_by_id(2).value().set_rating(5)

    favorites = catalog.add_collection("Favorites").value()
    scifi = catalog.add_collection("SciFi").value()
    favorites.add_member(library.find_record_by_id(1).value())
    favorites.add_member(library.find_record_by_id(2).value())
    scifi.add_member(library.find_record_by_id(1).value())
    return library, catalog


def assert_invalid(text):
    result = text_format.loads(text)
    assert result.is_failure()
    assert isinstance(result.error(), InvalidFormatError)
    assert str(result.error()) == "Invalid data found in file!"


class TestDump:
    """Test writing the text format."""

    def test_dumps_orders_records_and_collections(self, populated):
        assert text_format.dumps(*populated) == SAVED

    def test_dumps_empty(self):
        assert text_format.dumps(Library(), Catalog()) == "0\n0\n"

    def test_empty_collection_block(self):
        catalog = Catalog()
        catalog.add_collection("Empty")
        assert text_format.dumps(Library(), catalog) == "0\n1\nEmpty 0\n"


class TestLoad:
    """Test reading the text format."""

    def test_loads_restores_records(self):
        library, catalog = text_format.loads(SAVED).value()
        matrix = library.find_record_by_title("The Matrix").value()
        assert (matrix.id, matrix.medium, matrix.rating) == (1, "DVD", 4)
        assert library.find_record_by_id(3).value().rating == 0
        assert library.next_id == 4

    def test_loads_restores_memberships(self):
        library, catalog = text_format.loads(SAVED).value()
        assert catalog.find_collection("Favorites").value().member_ids == {1, 2}
        assert catalog.find_collection("SciFi").value().member_ids == {1}
        assert library.find_record_by_id(1).value().membership_count == 2
        assert library.find_record_by_id(2).value().membership_count == 1
        assert library.find_record_by_id(3).value().membership_count == 0

    def test_round_trip(self, populated):
        library, catalog = text_format.loads(text_format.dumps(*populated)).value()
        assert text_format.dumps(library, catalog) == SAVED

    def test_next_id_follows_max_id(self):
        library, _ = text_format.loads("2\n7 DVD 0 B\n3 DVD 0 A\n0\n").value()
        assert library.next_id == 8
        assert library.add_record("DVD", "C").value() == 8

    def test_empty_file_contents(self):
        library, catalog = text_format.loads("0\n0\n").value()
        assert library.num_records == 0
        assert library.next_id == 1
        assert catalog.num_collections == 0

    def test_title_keeps_interior_spaces(self):
        library, _ = text_format.loads("1\n1 DVD 0 Lord of the Rings\n0\n").value()
        assert library.find_record_by_title("Lord of the Rings").is_success()

    def test_restore_library_and_catalog_separately(self):
        lines = iter(SAVED.splitlines(keepends=True))
        library = text_format.restore_library(lines).value()
        catalog = text_format.restore_catalog(lines, library).value()
        assert catalog.num_collections == 2

    @pytest.mark.parametrize("text", [
        "-1\n0\n",
        "1\n1 DVD 6 Alien\n0\n",
        "1\n1 DVD -1 Alien\n0\n",
        "2\n1 DVD 0 Alien\n1 DVD 0 Heat\n0\n",
        "2\n1 DVD 0 Alien\n2 DVD 0 Alien\n0\n",
        "1\n0 DVD 0 Alien\n0\n",
        "1\n1 DVD 0\n0\n",
        "1\nx DVD 0 Alien\n0\n",
        "1\n1 DVD five Alien\n0\n",
        "2\n1 DVD 0 Alien\n",
        "",
        "zero\n",
        "0\n-1\n",
        "0\n1\nEmpty\n",
        "0\n1\nEmpty -1\n",
        "0\n1\nEmpty 1\n",
        "1\n1 DVD 0 Alien\n1\nFav 1\nHeat\n",
        "1\n1 DVD 0 Alien\n1\nFav 2\nAlien\nAlien\n",
        "0\n2\nFav 0\nFav 0\n",
        "1\n1 DVD 0 Heat  \n0\n",
        "1\n1 DVD 0 The  Matrix\n0\n",
    ])
    def test_malformed_input_rejected(self, text):
        assert_invalid(text)


class TestRestoreCatalogAgainstLibrary:
    """A rejected catalog must leave the library's membership counts alone."""

    @pytest.fixture
    def library(self):
        return text_format.restore_library(["2\n", "1 VHS 0 Alien\n", "2 DVD 0 Heat\n"]).value()

    def assert_no_memberships(self, library):
        assert [r.membership_count for r in library.records] == [0, 0]

    def test_unknown_title_mid_block(self, library):
        result = text_format.restore_catalog(["1\n", "Fav 2\n", "Alien\n", "Nope\n"], library)
        assert isinstance(result.error(), InvalidFormatError)
        self.assert_no_memberships(library)
        assert library.delete_record("Alien").is_success()

    def test_failure_in_later_block(self, library):
        lines = ["2\n", "Fav 2\n", "Alien\n", "Heat\n", "Other 1\n", "Nope\n"]
        assert text_format.restore_catalog(lines, library).is_failure()
        self.assert_no_memberships(library)

    def test_duplicate_collection_name(self, library):
        lines = ["2\n", "Fav 1\n", "Alien\n", "Fav 1\n", "Heat\n"]
        assert text_format.restore_catalog(lines, library).is_failure()
        self.assert_no_memberships(library)

    def test_truncated_catalog(self, library):
        assert text_format.restore_catalog(["2\n", "Fav 1\n", "Alien\n"], library).is_failure()
        self.assert_no_memberships(library)

    def test_success_counts_memberships(self, library):
        catalog = text_format.restore_catalog(["1\n", "Fav 2\n", "Alien\n", "Heat\n"], library).value()
        assert catalog.find_collection("Fav").value().member_ids == {1, 2}
        assert [r.membership_count for r in library.records] == [1, 1]


class TestFileBasedRepository:
    """Test the file-backed repository."""

    def test_save_and_load(self, tmp_path, populated):
        repository = FileBasedMediaRepository(tmp_path)
        assert repository.save("media.txt", *populated).is_success()
        assert (tmp_path / "media.txt").read_text(encoding="utf-8") == SAVED

        library, catalog = repository.load("media.txt").value()
        assert library.num_records == 3
        assert catalog.num_collections == 2

    def test_load_missing_file(self, tmp_path):
        error = FileBasedMediaRepository(tmp_path).load("missing.txt").error()
        assert isinstance(error, StorageError)
        assert str(error) == "Could not open file!"

    def test_save_into_missing_directory(self, tmp_path):
        result = FileBasedMediaRepository(tmp_path).save("no/such/dir.txt", Library(), Catalog())
        assert isinstance(result.error(), StorageError)

    def test_load_invalid_file(self, tmp_path):
        (tmp_path / "bad.txt").write_text("1\n1 DVD 9 Alien\n0\n", encoding="utf-8")
        error = FileBasedMediaRepository(tmp_path).load("bad.txt").error()
        assert isinstance(error, InvalidFormatError)


class TestInMemoryRepository:
    """Test the in-memory repository."""

    def test_save_and_load(self, populated):
        repository = InMemoryMediaRepository()
        repository.save("snapshot", *populated)
        assert repository.get("snapshot") == SAVED
        library, _ = repository.load("snapshot").value()
        assert library.num_records == 3

    def test_load_unknown(self):
        assert isinstance(InMemoryMediaRepository().load("nope").error(), StorageError)
