"""Name tables of the panchangam limbs and the alias tables used to read names back.

Canonical keys are lower-case ASCII with '_' separators. `canonical_*`
helpers return None for names they do not know.
"""
from __future__ import annotations

import re
from typing import Dict, Iterable, Optional, Tuple, Union

TITHI_NAMES: Tuple[str, ...] = (
    "Pratipada", "Dvitiya", "Tritiya", "Chaturthi", "Panchami",
    "Shashthi", "Saptami", "Ashtami", "Navami", "Dashami",
    "Ekadashi", "Dvadashi", "Trayodashi", "Chaturdashi", "Purnima",
    "Pratipada", "Dvitiya", "Tritiya", "Chaturthi", "Panchami",
    "Shashthi", "Saptami", "Ashtami", "Navami", "Dashami",
    "Ekadashi", "Dvadashi", "Trayodashi", "Chaturdashi", "Amavasya",
)

PAKSHA_NAMES: Tuple[str, ...] = ("Shukla", "Krishna")

NAKSHATRA_KEYS: Tuple[str, ...] = (
    "ashwini", "bharani", "krittika", "rohini", "mrigashira", "ardra",
    "punarvasu", "pushya", "ashlesha", "magha", "purva_phalguni", "uttara_phalguni",
    "hasta", "chitra", "swati", "vishakha", "anuradha", "jyeshtha",
    "mula", "purva_ashadha", "uttara_ashadha", "shravana", "dhanishtha", "shatabhisha",
    "purva_bhadrapada", "uttara_bhadrapada", "revati",
)

YOGA_NAMES: Tuple[str, ...] = (
    "Vishkambha", "Priti", "Ayushman", "Saubhagya", "Shobhana", "Atiganda",
    "Sukarma", "Dhriti", "Shula", "Ganda", "Vriddhi", "Dhruva",
    "Vyaghata", "Harshana", "Vajra", "Siddhi", "Vyatipata", "Variyana",
    "Parigha", "Shiva", "Siddha", "Sadhya", "Shubha", "Shukla",
    "Brahma", "Indra", "Vaidhriti",
)

# seven movable karanas, then the four fixed ones
KARANA_NAMES: Tuple[str, ...] = (
    "Bava", "Balava", "Kaulava", "Taitila", "Garaja", "Vanija", "Vishti",
    "Shakuni", "Chatushpada", "Naga", "Kimstughna",
)

MASA_KEYS: Tuple[str, ...] = (
    "chaitra", "vaishakha", "jyeshtha", "ashadha", "shravana", "bhadrapada",
    "ashvayuja", "kartika", "margashira", "pushya", "magha", "phalguna",
)

RAASI_NAMES: Tuple[str, ...] = (
    "Mesha", "Vrishabha", "Mithuna", "Karka", "Simha", "Kanya",
    "Tula", "Vrischika", "Dhanu", "Makara", "Kumbha", "Meena",
)

RITU_NAMES: Tuple[str, ...] = ("Vasanta", "Grishma", "Varsha", "Sharad", "Hemanta", "Shishira")

AYANA_NAMES: Tuple[str, ...] = ("Uttarayana", "Dakshinayana")

GANA_NAMES: Tuple[str, ...] = ("Deva", "Manushya", "Rakshasa")

# gana of each nakshatra, Ashwini first
NAKSHATRA_GANA: Tuple[int, ...] = (
    0, 1, 2, 1, 0, 1, 0, 0, 2,
    2, 1, 1, 0, 2, 0, 2, 0, 2,
    2, 1, 1, 0, 2, 2, 1, 1, 0,
)

# raasi index % 3
GUNA_NAMES: Tuple[str, ...] = ("Rajas", "Tamas", "Sattva")

# nakshatra index // 9
TRINITY_NAMES: Tuple[str, ...] = ("Brahma", "Vishnu", "Maheshwara")

VARA_NAMES: Tuple[str, ...] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)  # indexed by date.weekday()

# 60-year cycle; 1867 is Prabhava
SAMVATSARA_BASE_YEAR = 1867
SAMVATSARA_NAMES: Tuple[str, ...] = (
    "Prabhava", "Vibhava", "Shukla", "Pramoda", "Prajothpatti", "Aangirasa",
    "Shrimukha", "Bhava", "Yuva", "Dhathu", "Eeshwara", "Bahudhanya",
    "Pramathi", "Vikrama", "Vrisha", "Chitrabhanu", "Subhanu", "Taarana",
    "Paarthiva", "Vyaya", "Sarvajit", "Sarvadhari", "Virodhi", "Vikruti",
    "Khara", "Nandana", "Vijaya", "Jaya", "Manmatha", "Durmukhi",
    "Hevilambi", "Vilambi", "Vikaari", "Shaarvari", "Plava", "Shubhakrit",
    "Shobhakrith", "Krodhi", "Vishwavasu", "Parabhava", "Plavanga", "Keelaka",
    "Saumya", "Sadharana", "Virodhikrith", "Paridhavi", "Pramadicha", "Aananda",
    "Rakshasa", "Nala", "Pingala", "Kalayukthi", "Siddharthi", "Raudra",
    "Durmathi", "Dundubhi", "Rudhirodgaari", "Raktakshi", "Krodhana", "Akshaya",
)


def display(key: str) -> str:
    return key.replace("_", " ").title()


NAKSHATRA_NAMES: Tuple[str, ...] = tuple(display(k) for k in NAKSHATRA_KEYS)
MASA_NAMES: Tuple[str, ...] = tuple(display(k) for k in MASA_KEYS)


# ------------------------------------------------------------
# Alias tables (normalized spelling -> canonical key)
# ------------------------------------------------------------

def _table(groups: Dict[str, Iterable[str]], qualifiers: Iterable[str] = ()) -> Dict[str, str]:
    """Alias -> canonical key, plus each spelling followed by a qualifier word ('chaitra_masam')."""
    out: Dict[str, str] = {}
    for canon, aliases in groups.items():
        for a in (canon, *aliases):
            out[a] = canon
            for q in qualifiers:
                out.setdefault(f"{a}_{q}", canon)
    return out


_MASA_ALIASES = _table({
    "chaitra": ("chaithra", "chaitramu", "chait"),
    "vaishakha": ("vaisakha", "vaishaka", "vaisakhamu", "vaishakh", "baisakh", "vaisakh"),
    "jyeshtha": ("jyaistha", "jyeshta", "jyaishtha", "jyestha", "jeth"),
    "ashadha": ("asadha", "aashadha", "ashada", "aashaadha", "asharh"),
    "shravana": ("sravana", "shraavana", "sravanam", "shravan", "sawan"),
    "bhadrapada": ("badhrapada", "bhaadrapada", "bhadra", "bhadrapadam", "bhadon"),
    "ashvayuja": ("aswija", "ashwayuja", "asvayuja", "aswayuja", "ashvin", "ashwin", "ashweeja"),
    "kartika": ("karthika", "kaarthika", "kartik", "karthik", "kaartika"),
    "margashira": ("margasira", "margashirsha", "margasirsha", "margashirsh", "agrahayana", "aghan"),
    "pushya": ("pausha", "pusya", "paush", "pushyam", "pousha"),
    "magha": ("maagha", "magh", "maghamu"),
    "phalguna": ("phalgun", "palguna", "phalgunam", "phagun"),
}, qualifiers=("masam", "masa", "month"))

_PAKSHA_ALIASES = _table({
    "shukla": ("sukla", "shuddha", "sudhi", "sudi", "bright", "waxing"),
    "krishna": ("krsna", "bahula", "vadi", "badi", "dark", "waning"),
}, qualifiers=("paksha", "paksham"))

# tithi within a paksha: 0..13 common to both, 14 = purnima (shukla) / amavasya (krishna)
_TITHI_ALIASES = _table({
    "pratipada": ("padyami", "prathama", "pratipat", "pratipad", "padya", "paadyami"),
    "dvitiya": ("vidhiya", "vidiya", "dwitiya", "dvithiya"),
    "tritiya": ("thadiya", "tadiya", "trutiya", "tritheeya", "teej"),
    "chaturthi": ("chaviti", "chavithi", "chauthi", "chathurthi"),
    "panchami": ("panchamee",),
    "shashthi": ("shasti", "sasthti", "shashti", "sashti", "shasthi", "sasti"),
    "saptami": ("sapthami", "sapthamee"),
    "ashtami": ("astami", "ashtamee", "asthami"),
    "navami": ("navamee",),
    "dashami": ("dasami", "dashamee", "dasamee"),
    "ekadashi": ("ekadasi", "ekadashee", "ekadasee"),
    "dvadashi": ("dvadasi", "dwadashi", "dwadasi", "dvaadashi"),
    "trayodashi": ("trayodasi", "thrayodasi", "trayodashee"),
    "chaturdashi": ("chaturdasi", "chathurdasi", "chaturdashee"),
    "purnima": ("pournami", "poornima", "pournima", "purnami", "punnami", "poornami"),
    "amavasya": ("amavasai", "amavasi", "amavas", "amaavasya"),
}, qualifiers=("tithi",))
_TITHI_POSITION = {
    "pratipada": 0, "dvitiya": 1, "tritiya": 2, "chaturthi": 3, "panchami": 4,
    "shashthi": 5, "saptami": 6, "ashtami": 7, "navami": 8, "dashami": 9,
    "ekadashi": 10, "dvadashi": 11, "trayodashi": 12, "chaturdashi": 13,
    "purnima": 14, "amavasya": 14,
}

_NAKSHATRA_ALIASES = _table({
    "ashwini": ("aswini", "asvini", "ashvini"),
    "bharani": ("barani",),
    "krittika": ("krithika", "krthika", "kritika"),
    "rohini": (),
    "mrigashira": ("mrigashirsha", "mrigasira", "mrugasira", "mrigasirsha"),
    "ardra": ("arudra", "aardra", "thiruvathira"),
    "punarvasu": ("punarpoosam",),
    "pushya": ("pushyami", "pusya", "poosam"),
    "ashlesha": ("aslesha", "ashlesa", "ayilyam"),
    "magha": ("makha", "makham"),
    "purva_phalguni": ("pubba", "poorva_phalguni", "purvaphalguni", "purva_falguni"),
    "uttara_phalguni": ("uthara", "uttaraphalguni", "uttara_falguni"),
    "hasta": ("hastha", "atham"),
    "chitra": ("chitta", "chithra", "chittha"),
    "swati": ("svati", "swathi", "chothi"),
    "vishakha": ("vishaka", "visakha", "visakam"),
    "anuradha": ("anusham",),
    "jyeshtha": ("jyeshta", "jyestha", "kettai"),
    "mula": ("moola", "moolam"),
    "purva_ashadha": ("purvashadha", "poorvashada", "purvashada", "pooradam"),
    "uttara_ashadha": ("uttarashadha", "uttarashada", "uthiradam"),
    "shravana": ("sravana", "shravanam", "thiruvonam"),
    "dhanishtha": ("dhanishta", "dhanista", "avittam"),
    "shatabhisha": ("shatabhishak", "satabhisha", "sathayam"),
    "purva_bhadrapada": ("purvabhadra", "poorvabhadra", "purva_bhadra", "poorattathi"),
    "uttara_bhadrapada": ("uttarabhadra", "uttara_bhadra", "uthrattathi"),
    "revati": ("revathi", "revathy"),
}, qualifiers=("nakshatra",))

_WEEKDAY_ALIASES = _table({
    "monday": ("mon", "somavara", "somavaram", "soma"),
    "tuesday": ("tue", "tues", "mangalavara", "mangalavaram", "mangala"),
    "wednesday": ("wed", "budhavara", "budhavaram", "budha"),
    "thursday": ("thu", "thur", "thurs", "guruvara", "guruvaram", "brihaspativara"),
    "friday": ("fri", "shukravara", "sukravaram", "shukra"),
    "saturday": ("sat", "shanivara", "sanivaram", "shani"),
    "sunday": ("sun", "ravivara", "adivaram", "ravi"),
})

_SEP_RE = re.compile(r"[-\s]+")


def normalize(name: str) -> str:
    """'Shukla Paksha' -> 'shukla_paksha'."""
    return _SEP_RE.sub("_", name.strip().lower())


def _lookup(table: Dict[str, str], name: Optional[str]) -> Optional[str]:
    if not isinstance(name, str):
        return None
    return table.get(normalize(name))


def canonical_masa(name: Optional[str]) -> Optional[str]:
    return _lookup(_MASA_ALIASES, name)


def masa_index(name: Optional[str]) -> Optional[int]:
    key = canonical_masa(name)
    return None if key is None else MASA_KEYS.index(key)


def canonical_paksha(name: Optional[str]) -> Optional[str]:
    return _lookup(_PAKSHA_ALIASES, name)


def paksha_index(name: Optional[str]) -> Optional[int]:
    key = canonical_paksha(name)
    return None if key is None else ("shukla", "krishna").index(key)


def canonical_tithi(name: Union[str, int, None]) -> Optional[str]:
    if isinstance(name, int) and not isinstance(name, bool):
        if 1 <= name <= 15:
            # position in paksha; 15 is ambiguous between purnima/amavasya
            return None if name == 15 else tuple(_TITHI_POSITION)[name - 1]
        return None
    return _lookup(_TITHI_ALIASES, name)


def tithi_index(tithi: Union[str, int, None], paksha: Optional[str]) -> Optional[int]:
    """
    Absolute tithi index 0..29 from a tithi name and a paksha name.

    Returns None for unknown names or for impossible pairs
    (purnima in krishna paksha, amavasya in shukla paksha). With an integer
    15 the paksha decides between purnima and amavasya.
    """
    p = paksha_index(paksha)
    if p is None:
        return None
    if isinstance(tithi, int) and not isinstance(tithi, bool) and tithi == 15:
        return 14 + 15 * p
    key = canonical_tithi(tithi)
    if key is None:
        return None
    if key == "purnima" and p != 0:
        return None
    if key == "amavasya" and p != 1:
        return None
    return _TITHI_POSITION[key] + 15 * p


def canonical_nakshatra(name: Optional[str]) -> Optional[str]:
    return _lookup(_NAKSHATRA_ALIASES, name)


def canonical_weekday(day: Union[str, int, None]) -> Optional[str]:
    """Weekday key from a name/alias or a date.weekday() integer."""
    if isinstance(day, int) and not isinstance(day, bool):
        return VARA_NAMES[day].lower() if 0 <= day <= 6 else None
    return _lookup(_WEEKDAY_ALIASES, day)
