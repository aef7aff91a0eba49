"""Built-in emergency numbers by country."""

from pydantic import BaseModel, ConfigDict


class EmergencyNumber(BaseModel):
    model_config = ConfigDict(frozen=True)

    service: str
    number: str

    @property
    def dial_string(self) -> str:
        """The number with spaces removed, ready for a tel: link."""
        return "".join(self.number.split())


class CountryEmergencyNumbers(BaseModel):
    model_config = ConfigDict(frozen=True)

    country: str
    flag: str
    numbers: tuple[EmergencyNumber, ...]


def _country(country: str, flag: str, *numbers: tuple[str, str]) -> CountryEmergencyNumbers:
    return CountryEmergencyNumbers(
        country=country,
        flag=flag,
        numbers=tuple(EmergencyNumber(service=s, number=n) for s, n in numbers),
    )


EMERGENCY_NUMBERS: tuple[CountryEmergencyNumbers, ...] = (
    _country(
        "United States", "\U0001F1FA\U0001F1F8",
        ("Emergency (Police, Fire, Medical)", "911"),
        ("Poison Control", "1-800-222-1222"),
    ),
    _country(
        "United Kingdom", "\U0001F1EC\U0001F1E7",
        ("Emergency (Police, Fire, Medical)", "999"),
        ("Non-Emergency Police", "101"),
        ("NHS Direct (Medical)", "111"),
    ),
    _country(
        "Australia", "\U0001F1E6\U0001F1FA",
        ("Emergency (Police, Fire, Medical)", "000"),
        ("Police (Non-Emergency)", "131 444"),
    ),
    _country(
        "Japan", "\U0001F1EF\U0001F1F5",
        ("Police", "110"),
        ("Fire & Ambulance", "119"),
    ),
    _country(
        "France", "\U0001F1EB\U0001F1F7",
        ("European Emergency", "112"),
        ("Police", "17"),
        ("Ambulance", "15"),
        ("Fire", "18"),
    ),
    _country(
        "Germany", "\U0001F1E9\U0001F1EA",
        ("European Emergency", "112"),
        ("Police", "110"),
    ),
    _country(
        "Italy", "\U0001F1EE\U0001F1F9",
        ("European Emergency", "112"),
        ("Police", "113"),
        ("Ambulance", "118"),
        ("Fire", "115"),
    ),
    _country(
        "Spain", "\U0001F1EA\U0001F1F8",
        ("European Emergency", "112"),
        ("Police", "091"),
    ),
    _country(
        "China", "\U0001F1E8\U0001F1F3",
        ("Police", "110"),
        ("Ambulance", "120"),
        ("Fire", "119"),
    ),
    _country(
        "Thailand", "\U0001F1F9\U0001F1ED",
        ("Tourist Police", "1155"),
        ("Emergency Medical", "1669"),
        ("Police", "191"),
    ),
    _country(
        "India", "\U0001F1EE\U0001F1F3",
        ("National Emergency", "112"),
        ("Police", "100"),
        ("Ambulance", "108"),
        ("Fire", "101"),
    ),
    _country(
        "Brazil", "\U0001F1E7\U0001F1F7",
        ("Police", "190"),
        ("Ambulance", "192"),
        ("Fire", "193"),
    ),
)


def find_country_numbers(query: str = "") -> list[CountryEmergencyNumbers]:
    """Countries whose name contains `query` (case-insensitive); all if empty."""
    if not query:
        return list(EMERGENCY_NUMBERS)
    needle = query.lower()
    return [entry for entry in EMERGENCY_NUMBERS if needle in entry.country.lower()]
