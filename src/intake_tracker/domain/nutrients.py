"""Nutrient domain models."""

from dataclasses import dataclass, fields

ENERGY = "Energy"
PROTEIN = "Protein"
CARBOHYDRATES = "Carbohydrates"
FAT = "Total lipid (fat)"
SATURATED_FAT = "Fatty acids, total saturated"
UNSATURATED_FAT = "Fatty acids, total unsaturated"
MONOUNSATURATED_FAT = "Fatty acids, total monounsaturated"
POLYUNSATURATED_FAT = "Fatty acids, total polyunsaturated"

# Units daily targets are expressed in.
TARGET_UNITS = {
    ENERGY: "kcal",
    PROTEIN: "g",
    CARBOHYDRATES: "g",
    FAT: "g",
    SATURATED_FAT: "g",
    UNSATURATED_FAT: "g",
}

# Nutrients counted against a combined target when they have none of their own.
TARGET_PARENTS = {
    MONOUNSATURATED_FAT: UNSATURATED_FAT,
    POLYUNSATURATED_FAT: UNSATURATED_FAT,
}


@dataclass(frozen=True)
class NutrientFact:
    """Nutrient value per 100 g of the owning food item."""

    name: str
    value: float | None
    unit: str
    nutrient_id: int | None = None


@dataclass(frozen=True)
class NutrientAmount:
    """Computed amount of a nutrient for a portion.

    ``name`` is the breakdown key, which carries the unit when one nutrient
    shows up in several units. ``nutrient`` is always the bare nutrient name.
    """

    name: str
    value: float
    unit: str
    nutrient: str


@dataclass(frozen=True)
class MacroTotals:
    """Macro totals for a meal, day or plan."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    sugars: float = 0.0
    saturated_fat: float = 0.0
    unsaturated_fat: float = 0.0

    def __add__(self, other: "MacroTotals") -> "MacroTotals":
        return MacroTotals(
            **{
                name: getattr(self, name) + getattr(other, name)
                for name in MACRO_FIELDS
            }
        )

    def scaled(self, factor: float) -> "MacroTotals":
        """Return totals multiplied by a factor."""
        return MacroTotals(
            **{name: getattr(self, name) * factor for name in MACRO_FIELDS}
        )


MACRO_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(MacroTotals))


def normalize_nutrient_name(name: str) -> str:
    """Normalize a nutrient name for lookups between meals and intake targets.

    Leading and trailing whitespace is removed, the name is lowercased and
    every whitespace run becomes a single underscore.
    """
    return "_".join(name.strip().lower().split())
