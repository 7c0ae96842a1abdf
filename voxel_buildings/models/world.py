"""
World editor for Voxel Buildings Generator.

Provides WorldEditor, the in-memory voxel store that every generator
writes into. Each set_block call is applied on its own; a later write
to the same coordinate replaces the earlier one unless a placement
constraint forbids it.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, Tuple
import logging

from .blocks import Block
from ..config import WORLD_MIN_Y, WORLD_MAX_Y

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int, int]


@dataclass(frozen=True)
class PlacedBlock:
    """A block stored in the world, with optional placement state."""
    block: Block
    properties: Tuple[Tuple[str, str], ...] = ()

    def property_dict(self) -> Dict[str, str]:
        """Placement state as a dict."""
        return dict(self.properties)


@dataclass
class WorldStats:
    """Write statistics of a WorldEditor."""
    writes_requested: int = 0
    writes_applied: int = 0
    writes_rejected: int = 0  # Blocked by whitelist/blacklist
    writes_dropped: int = 0   # Outside the vertical range


@dataclass
class WorldEditor:
    """
    In-memory voxel world.

    Attributes:
        min_y: Lowest accepted elevation
        max_y: Highest accepted elevation
        blocks: Stored blocks keyed by (x, y, z)
        stats: Write counters
    """
    min_y: int = WORLD_MIN_Y
    max_y: int = WORLD_MAX_Y
    blocks: Dict[Coordinate, PlacedBlock] = field(default_factory=dict)
    stats: WorldStats = field(default_factory=WorldStats)

    def set_block(
        self,
        block: Block,
        x: int,
        y: int,
        z: int,
        override_whitelist: Optional[Iterable[Block]] = None,
        override_blacklist: Optional[Iterable[Block]] = None,
        properties: Optional[Dict[str, str]] = None
    ) -> None:
        """
        Place a block.

        Empty positions are always filled. An occupied position is
        replaced only if its current block is in override_whitelist
        (when given), or is not in override_blacklist (when given);
        with neither list the new block always wins.

        Coordinates outside [min_y, max_y] are dropped silently.

        Args:
            block: Block to place
            x, y, z: Voxel coordinates
            override_whitelist: Blocks that may be replaced
            override_blacklist: Blocks that must not be replaced
            properties: Optional placement state (e.g. {'half': 'upper'})
        """
        self.stats.writes_requested += 1

        if not (self.min_y <= y <= self.max_y):
            self.stats.writes_dropped += 1
            return

        key = (x, y, z)
        existing = self.blocks.get(key)

        if existing is not None:
            if override_whitelist is not None:
                if existing.block not in set(override_whitelist):
                    self.stats.writes_rejected += 1
                    return
            elif override_blacklist is not None:
                if existing.block in set(override_blacklist):
                    self.stats.writes_rejected += 1
                    return

        state = tuple(sorted(properties.items())) if properties else ()
        self.blocks[key] = PlacedBlock(block, state)
        self.stats.writes_applied += 1

    def get_block(self, x: int, y: int, z: int) -> Optional[Block]:
        """Block at a coordinate, or None if empty."""
        placed = self.blocks.get((x, y, z))
        return placed.block if placed is not None else None

    def get_placed(self, x: int, y: int, z: int) -> Optional[PlacedBlock]:
        """Block and placement state at a coordinate, or None if empty."""
        return self.blocks.get((x, y, z))

    def check_for_block(
        self,
        x: int,
        y: int,
        z: int,
        whitelist: Optional[Iterable[Block]] = None
    ) -> bool:
        """
        Check whether a coordinate is occupied.

        Args:
            whitelist: If given, only these blocks count as a match
        """
        placed = self.blocks.get((x, y, z))
        if placed is None:
            return False
        if whitelist is None:
            return True
        return placed.block in set(whitelist)

    def column(self, x: int, z: int) -> Dict[int, Block]:
        """All blocks in a column keyed by y."""
        return {
            y: placed.block
            for (bx, y, bz), placed in self.blocks.items()
            if bx == x and bz == z
        }

    def iter_blocks(self) -> Iterator[Tuple[Coordinate, Block]]:
        """Iterate over (coordinate, block) pairs."""
        for key, placed in self.blocks.items():
            yield key, placed.block

    def block_counts(self) -> Counter:
        """Number of stored voxels per block name."""
        return Counter(placed.block.name for placed in self.blocks.values())

    def __len__(self) -> int:
        return len(self.blocks)

    def is_empty(self) -> bool:
        """Check if nothing has been placed."""
        return not self.blocks
