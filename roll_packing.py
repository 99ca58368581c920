# roll_packing.py - poolfoil ver1.0
#
# Packs strips onto physical 25 m rolls.
# Next-fit per surface and width in declaration order (an approximation, not
# an optimal bin packing). Strips of later surfaces may be cut from the unused
# tail of rolls opened for an earlier surface (bottom -> walls).

import copy
from typing import Dict, Iterable, List, Optional, Tuple

from models import CutStrip, FoilAssignment, RollAllocation, RollWidth, SurfaceKey


class RollPacker:
    """
    Holds the rolls opened so far. One roll per (product, surface, width)
    is "open"; when the next strip does not fit it is closed for that
    surface and a new one is started.
    """

    def __init__(self, roll_length: float = 25.0, tolerance: float = 1e-6):
        self.roll_length = roll_length
        self.tolerance = tolerance
        self.rolls: List[RollAllocation] = []
        self._open: Dict[Tuple[FoilAssignment, SurfaceKey, RollWidth], RollAllocation] = {}

    def copy(self) -> "RollPacker":
        return copy.deepcopy(self)

    # ------------------------------
    # Queries
    # ------------------------------

    def free_length(self, roll: RollAllocation) -> float:
        return self.roll_length - roll.used_length

    def fits(self, roll: RollAllocation, length: float) -> bool:
        return roll.used_length + length <= self.roll_length + self.tolerance

    def donor_rolls(self, product: FoilAssignment, width: RollWidth,
                    surfaces: Iterable[SurfaceKey]) -> List[RollAllocation]:
        keys = set(surfaces)
        return [
            r for r in self.rolls
            if r.product is product and r.width is width and r.opened_for in keys
            and self.free_length(r) > self.tolerance
        ]

    # ------------------------------
    # Packing
    # ------------------------------

    def _open_roll(self, product: FoilAssignment, surface: SurfaceKey,
                   width: RollWidth) -> RollAllocation:
        roll = RollAllocation(
            number=len(self.rolls) + 1,
            width=width,
            product=product,
            opened_for=surface,
            roll_length=self.roll_length,
        )
        self.rolls.append(roll)
        self._open[(product, surface, width)] = roll
        return roll

    def _best_donor(self, product: FoilAssignment, width: RollWidth, length: float,
                    reuse_from: Iterable[SurfaceKey]) -> Optional[RollAllocation]:
        donors = [r for r in self.donor_rolls(product, width, reuse_from) if self.fits(r, length)]
        if not donors:
            return None
        # tightest tail first, lower roll number on ties
        return min(donors, key=lambda r: (self.free_length(r), r.number))

    def place(self, surface: SurfaceKey, product: FoilAssignment, width: RollWidth,
              length: float, index: int, course: int = 0,
              reuse_from: Iterable[SurfaceKey] = ()) -> CutStrip:
        """Cuts one strip and returns where it went."""
        if length > self.roll_length + self.tolerance:
            raise ValueError(
                f"Strip of {length:.2f} m for '{surface.value}' is longer than "
                f"a {self.roll_length:.0f} m roll."
            )

        donor = self._best_donor(product, width, length, reuse_from)
        if donor is not None:
            cut = CutStrip(surface, index, course, length, donor.used_length, reused=True)
            donor.strips.append(cut)
            return cut

        roll = self._open.get((product, surface, width))
        if roll is None or not self.fits(roll, length):
            roll = self._open_roll(product, surface, width)

        cut = CutStrip(surface, index, course, length, roll.used_length)
        roll.strips.append(cut)
        return cut

    def pack(self, surface: SurfaceKey, product: FoilAssignment,
             strips: Iterable[Tuple[RollWidth, float]], courses: int = 1,
             reuse_from: Iterable[SurfaceKey] = ()) -> List[CutStrip]:
        """Packs (width, length) strips in the given order, each `courses` times."""
        reuse_from = tuple(reuse_from)
        cuts = []
        for index, (width, length) in enumerate(strips):
            for course in range(courses):
                cuts.append(self.place(surface, product, width, length, index,
                                       course, reuse_from))
        return cuts
