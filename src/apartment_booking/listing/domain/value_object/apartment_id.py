from dataclasses import dataclass


@dataclass(frozen=True)
class ApartmentId:
    """Apartment identifier"""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("Apartment id cannot be empty")
        if "#" in self.value:
            raise ValueError("Apartment id cannot contain '#'")

    def __str__(self) -> str:
        return self.value
