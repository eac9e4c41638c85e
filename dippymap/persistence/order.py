from __future__ import annotations

from typing import Sequence

from dippymap.persistence.unit import UnitType


class Order:
    """An order to draw. Legality is decided by the game server, not here."""

    kind: str = ""

    def __init__(self, province: str):
        self.province: str = province

    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self):
        return hash((type(self), tuple(vars(self).values())))

    def __repr__(self):
        return f"{type(self).__name__} {self}"


class Hold(Order):
    kind = "Hold"

    def __str__(self):
        return f"{self.province} Holds"


class Move(Order):
    kind = "Move"

    def __init__(self, province: str, destination: str):
        super().__init__(province)
        self.destination: str = destination

    def __str__(self):
        return f"{self.province} - {self.destination}"


class MoveViaConvoy(Move):
    kind = "MoveViaConvoy"

    def __str__(self):
        return f"{self.province} - {self.destination} via Convoy"


class Build(Order):
    kind = "Build"

    def __init__(self, province: str, unit_type: UnitType):
        super().__init__(province)
        self.unit_type: UnitType = unit_type

    def __str__(self):
        return f"Build {self.unit_type.value} {self.province}"


class Disband(Order):
    kind = "Disband"

    def __str__(self):
        return f"Disband {self.province}"


class Convoy(Order):
    kind = "Convoy"

    def __init__(self, province: str, source: str, destination: str):
        super().__init__(province)
        self.source: str = source
        self.destination: str = destination

    def __str__(self):
        return f"{self.province} Convoys {self.source} - {self.destination}"


class Support(Order):
    kind = "Support"

    # destination is None when the wire order names only the supported unit
    def __init__(self, province: str, source: str, destination: str | None = None):
        super().__init__(province)
        self.source: str = source
        self.destination: str | None = destination

    def is_hold(self) -> bool:
        return self.destination is None or self.destination == self.source

    def __str__(self):
        suffix = "Hold" if self.is_hold() else f"- {self.destination}"
        return f"{self.province} Supports {self.source} {suffix}"


# kind -> (order class, allowed argument counts after the kind)
_ARITY: dict[str, tuple[type[Order], tuple[int, ...]]] = {
    Hold.kind: (Hold, (0,)),
    Move.kind: (Move, (1,)),
    MoveViaConvoy.kind: (MoveViaConvoy, (1,)),
    Build.kind: (Build, (1,)),
    Disband.kind: (Disband, (0,)),
    Convoy.kind: (Convoy, (2,)),
    Support.kind: (Support, (1, 2)),
}


def parse_order(raw: Sequence[str]) -> Order:
    """Turns a wire order, [province, kind, *arguments], into an Order."""
    if isinstance(raw, str) or len(raw) < 2:
        raise ValueError(f"Order {raw!r} needs at least a province and a kind")

    province, kind, *args = raw
    if kind not in _ARITY:
        raise ValueError(f"Unknown order kind {kind!r} in {list(raw)}")

    order_class, arities = _ARITY[kind]
    if len(args) not in arities:
        raise ValueError(f"{kind} takes {' or '.join(map(str, arities))} arguments, got {list(raw)}")

    if order_class is Build:
        try:
            unit_type = UnitType(args[0])
        except ValueError:
            raise ValueError(f"Unknown unit type {args[0]!r} in {list(raw)}") from None
        return Build(province, unit_type)
    return order_class(province, *args)
