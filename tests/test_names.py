# tests/test_names.py

import pytest

from panchangam.engines import names as nm


@pytest.mark.parametrize("raw", ["Shukla Paksha", "shukla_paksha", "SHUKLA", "sukla", "shukla-paksha", "  Shukla  Paksha "])
def test_paksha_variants(raw):
    assert nm.canonical_paksha(raw) == "shukla"

@pytest.mark.parametrize(
    "raw,key",
    [
        ("badhrapada", "bhadrapada"),
        ("Bhadrapada", "bhadrapada"),
        ("aswija", "ashvayuja"),
        ("Karthika", "kartika"),
        ("margasira", "margashira"),
        ("jyaistha", "jyeshtha"),
        ("vaisakha", "vaishakha"),
        ("asadha", "ashadha"),
        ("sravana", "shravana"),
        ("Magha Masam", "magha"),
    ],
)
def test_masa_variants(raw, key):
    assert nm.canonical_masa(raw) == key

def test_tithi_index():
    assert nm.tithi_index("padyami", "shukla") == 0
    assert nm.tithi_index("Chaviti", "Shukla Paksha") == 3
    assert nm.tithi_index("pournami", "shukla") == 14
    assert nm.tithi_index("amavasya", "krishna_paksha") == 29
    assert nm.tithi_index("ekadasi", "bahula") == 25
    assert nm.tithi_index(15, "krishna") == 29
    assert nm.tithi_index(4, "krishna") == 18

def test_tithi_index_rejects():
    assert nm.tithi_index("pournami", "krishna") is None
    assert nm.tithi_index("amavasya", "shukla") is None
    assert nm.tithi_index("panchami", "purple") is None
    assert nm.tithi_index("nonami", "shukla") is None
    assert nm.tithi_index(16, "shukla") is None
    assert nm.tithi_index(None, "shukla") is None

def test_nakshatra_variants():
    assert nm.canonical_nakshatra("makha") == "magha"
    assert nm.canonical_nakshatra("Purva Phalguni") == "purva_phalguni"
    assert nm.canonical_nakshatra("moola") == "mula"
    assert nm.canonical_nakshatra("Shatabhishak") == "shatabhisha"
    assert nm.canonical_nakshatra("pluto") is None

def test_weekday_variants():
    assert nm.canonical_weekday("Somavara") == "monday"
    assert nm.canonical_weekday(6) == "sunday"
    assert nm.canonical_weekday(9) is None

def test_table_sizes():
    assert len(nm.TITHI_NAMES) == 30
    assert len(nm.NAKSHATRA_KEYS) == 27
    assert len(nm.YOGA_NAMES) == 27
    assert len(nm.KARANA_NAMES) == 11
    assert len(nm.MASA_KEYS) == 12
    assert len(nm.SAMVATSARA_NAMES) == 60
    assert nm.SAMVATSARA_NAMES[(2025 - nm.SAMVATSARA_BASE_YEAR) % 60] == "Vishwavasu"

@pytest.mark.parametrize(
    "fn,raw,key",
    [
        (nm.canonical_masa, "Kartika Masam", "kartika"),
        (nm.canonical_masa, "badhrapada month", "bhadrapada"),
        (nm.canonical_masa, "Aswija Masa", "ashvayuja"),
        (nm.canonical_paksha, "Bahula Paksha", "krishna"),
        (nm.canonical_paksha, "sukla paksham", "shukla"),
        (nm.canonical_tithi, "Amavasya Tithi", "amavasya"),
        (nm.canonical_nakshatra, "Makha Nakshatra", "magha"),
    ],
)
def test_qualified_names_are_table_entries(fn, raw, key):
    assert fn(raw) == key

def test_qualifier_only_follows_a_known_name():
    assert nm.canonical_masa("kartikamasam") is None
    assert nm.canonical_masa("smarch_masam") is None
    assert nm.canonical_paksha("shukla_masam") is None
