# scraper_autoconfig/date_names.py
"""
Month and weekday names per language, used by dates.py to recognise named date
parts and to guess the date language.

Tables are read-only: dict order is the language priority, values are frozensets
of lower-cased names.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping


def _table(names_by_lang: Dict[str, Iterable[str]]) -> Mapping[str, FrozenSet[str]]:
    return MappingProxyType(
        {lang: frozenset(n.lower() for n in names) for lang, names in names_by_lang.items()}
    )


LONG_MONTH_NAMES = _table({
    "en_US": ["January", "February", "March", "April", "May", "June", "July",
              "August", "September", "October", "November", "December"],
    "de_DE": ["Januar", "Februar", "März", "April", "Mai", "Juni", "Juli",
              "August", "September", "Oktober", "November", "Dezember"],
    "fr_FR": ["janvier", "février", "mars", "avril", "mai", "juin", "juillet",
              "août", "septembre", "octobre", "novembre", "décembre"],
    "nl_BE": ["januari", "februari", "maart", "april", "mei", "juni", "juli",
              "augustus", "september", "oktober", "november", "december"],
    "sk_SK": ["január", "február", "marec", "apríl", "máj", "jún", "júl",
              "august", "september", "október", "november", "december"],
})

SHORT_MONTH_NAMES = _table({
    "en_US": ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep",
              "Oct", "Nov", "Dec"],
    "de_DE": ["Jan", "Feb", "Mär", "Apr", "Mai", "Juni", "Juli", "Aug", "Sep",
              "Okt", "Nov", "Dez"],
    "fr_FR": ["janv", "févr", "mars", "avr", "mai", "juin", "juil", "août",
              "sept", "oct", "nov", "déc"],
    "nl_BE": ["jan", "feb", "mrt", "apr", "mei", "jun", "jul", "aug", "sep",
              "okt", "nov", "dec"],
    "sk_SK": ["jan", "feb", "mar", "apr", "máj", "jún", "júl", "aug", "sep",
              "okt", "nov", "dec"],
})

LONG_DAY_NAMES = _table({
    "en_US": ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"],
    "de_DE": ["Sonntag", "Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag"],
    "fr_FR": ["dimanche", "lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi"],
    "nl_BE": ["zondag", "maandag", "dinsdag", "woensdag", "donderdag", "vrijdag", "zaterdag"],
    "sk_SK": ["nedeľa", "pondelok", "utorok", "streda", "štvrtok", "piatok", "sobota"],
})

SHORT_DAY_NAMES = _table({
    "en_US": ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"],
    "de_DE": ["So", "Mo", "Di", "Mi", "Do", "Fr", "Sa"],
    "fr_FR": ["dim", "lun", "mar", "mer", "jeu", "ven", "sam"],
    "nl_BE": ["zo", "ma", "di", "wo", "do", "vr", "za"],
    "sk_SK": ["ne", "po", "ut", "st", "št", "pi", "so"],
})
