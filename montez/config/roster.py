"""Apartment roster loading.

The building layout (unit numbers, floors, bedroom types and rents) is data,
not code. It is read from a JSON file so the calculators stay independent of
any one building:

    {
      "building": "Montez A Apartments",
      "apartments": [
        {"number": "1A1", "floor": 1, "type": "TWO_BEDROOM"},
        {"number": "1B1", "floor": 1, "type": "ONE_BEDROOM", "rent": 15500}
      ]
    }

Entries without a "rent" take the standard rent for their type from
BillingSettings.
"""

import json
import logging
import os
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from dotenv import load_dotenv

from montez.config.settings import BillingSettings, get_billing_settings
from montez.models.apartment import Apartment, UnitType

logger = logging.getLogger(__name__)

DEFAULT_ROSTER_PATH = Path(__file__).with_name("apartments.json")


class ApartmentRoster:
    """Immutable collection of the building's apartments, indexed by number."""

    def __init__(self, apartments: Iterable[Apartment], building: str = ""):
        self._apartments = tuple(apartments)
        self._by_number = {apartment.number: apartment for apartment in self._apartments}
        if len(self._by_number) != len(self._apartments):
            raise ValueError("Roster contains duplicate apartment numbers")
        self.building = building

    def __len__(self) -> int:
        return len(self._apartments)

    def __iter__(self) -> Iterator[Apartment]:
        return iter(self._apartments)

    def __contains__(self, number: object) -> bool:
        return number in self._by_number

    def get(self, number: str) -> Optional[Apartment]:
        """Look up an apartment by unit number."""
        return self._by_number.get(number)

    @property
    def floors(self) -> List[int]:
        """Distinct floors in ascending order."""
        return sorted({apartment.floor for apartment in self._apartments})

    def on_floor(self, floor: int) -> List[Apartment]:
        return [apartment for apartment in self._apartments if apartment.floor == floor]

    def count_by_type(self) -> Dict[UnitType, int]:
        counts = {unit_type: 0 for unit_type in UnitType}
        for apartment in self._apartments:
            counts[apartment.unit_type] += 1
        return counts

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        default_rents: Mapping[UnitType, Decimal],
    ) -> "ApartmentRoster":
        """Build a roster from parsed JSON data.

        Raises:
            ValueError: If the structure or any entry is invalid
        """
        entries = data.get("apartments")
        if not isinstance(entries, list):
            raise ValueError("Roster must contain an 'apartments' list")

        apartments = []
        for index, entry in enumerate(entries):
            try:
                number = str(entry["number"])
                floor = int(entry["floor"])
                unit_type = UnitType(entry["type"])
                rent = entry.get("rent")
                rent = Decimal(str(rent)) if rent is not None else default_rents[unit_type]
            except (KeyError, TypeError, ValueError, InvalidOperation) as e:
                raise ValueError(f"Invalid roster entry #{index}: {entry!r} ({e})") from e

            if floor < 1:
                raise ValueError(f"Invalid roster entry #{index}: floor must be >= 1")
            if rent < 0:
                raise ValueError(f"Invalid roster entry #{index}: rent cannot be negative")

            apartments.append(Apartment(number=number, floor=floor, unit_type=unit_type, rent=rent))

        return cls(apartments, building=str(data.get("building", "")))

    @classmethod
    def load(
        cls,
        path: Optional[str | Path] = None,
        settings: Optional[BillingSettings] = None,
    ) -> "ApartmentRoster":
        """Load the roster from a JSON file.

        Priority for the file location:
        1. The explicit path argument
        2. APARTMENT_ROSTER_PATH environment variable (or in .env file)
        3. The packaged Montez A roster

        Raises:
            ValueError: If the file is missing, not valid JSON, or malformed
        """
        if path is None:
            env_path = Path(".env")
            if env_path.exists():
                load_dotenv(env_path)
            path = os.getenv("APARTMENT_ROSTER_PATH") or DEFAULT_ROSTER_PATH

        settings = settings or get_billing_settings()
        default_rents = {
            UnitType.ONE_BEDROOM: settings.one_bedroom_rent,
            UnitType.TWO_BEDROOM: settings.two_bedroom_rent,
        }

        roster_file = Path(path)
        try:
            with open(roster_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ValueError(f"Roster file not found: {roster_file}") from e
        except json.JSONDecodeError as e:
            raise ValueError(f"Roster file is not valid JSON: {roster_file}. Error: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Roster file must contain a JSON object: {roster_file}")

        roster = cls.from_dict(data, default_rents)
        logger.info("Loaded %d apartments from %s", len(roster), roster_file)
        return roster
