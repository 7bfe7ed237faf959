"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass

from irito.domain.exceptions import InvalidInputError


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity of stock units.

    Inbound and outbound movements always carry one of these; the
    direction comes from the transaction type, never from the sign.
    """

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True must not pass as 1 unit
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise InvalidInputError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise InvalidInputError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


AREA_SUFFIXES = ("区域", "エリア")


def area_key(label: str) -> str:
    """Reduce an area label to a comparable key.

    ``"A区域"``, ``"Aエリア"`` and ``" a区域 "`` all map to ``"A"``.
    """
    key = label.strip()
    for suffix in AREA_SUFFIXES:
        if key.endswith(suffix):
            key = key[: -len(suffix)].strip()
            break
    return key.upper()
