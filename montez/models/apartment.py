"""Apartment roster entries."""

from decimal import Decimal
from enum import Enum
from typing import NamedTuple


class UnitType(str, Enum):
    """Bedroom configuration of a unit."""

    ONE_BEDROOM = "ONE_BEDROOM"
    TWO_BEDROOM = "TWO_BEDROOM"


class Apartment(NamedTuple):
    """A rentable unit in the building."""

    number: str
    floor: int
    unit_type: UnitType
    rent: Decimal
