"""Caller-side helpers kept directly over the store's generic primitives."""

from journeyscopes.companions.books import ContactBook, JournalBook
from journeyscopes.companions.emergency_numbers import (
    EMERGENCY_NUMBERS,
    CountryEmergencyNumbers,
    EmergencyNumber,
    find_country_numbers,
)

__all__ = [
    "ContactBook",
    "CountryEmergencyNumbers",
    "EMERGENCY_NUMBERS",
    "EmergencyNumber",
    "JournalBook",
    "find_country_numbers",
]
