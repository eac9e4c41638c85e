from enum import Enum


class UnitType(Enum):
    ARMY = "Army"
    FLEET = "Fleet"

    @property
    def template_id(self) -> str:
        """Id of the page element holding this unit's artwork."""
        return f"unit{self.value}"
