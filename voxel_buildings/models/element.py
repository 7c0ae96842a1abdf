"""
OSM element model for Voxel Buildings Generator.

Elements arrive here already projected to integer block columns.
Tags are plain string-to-string mappings; absent keys are normal.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

from .geometry import XZPoint


class MemberRole(Enum):
    """Role of a way inside a relation."""
    OUTER = "outer"
    INNER = "inner"
    PART = "part"
    OTHER = "other"

    @classmethod
    def from_osm_role(cls, role: str) -> 'MemberRole':
        """
        Classify an OSM member role string.

        Args:
            role: Value of the member's role attribute (may be empty)

        Returns:
            Appropriate MemberRole enum value
        """
        role = (role or '').lower().strip()

        # Default role is outer
        if role in ('outer', ''):
            return cls.OUTER
        elif role == 'inner':
            return cls.INNER
        elif role == 'part':
            return cls.PART
        else:
            return cls.OTHER


@dataclass
class ProcessedNode:
    """A projected OSM node."""
    id: str
    x: int
    z: int
    tags: Dict[str, str] = field(default_factory=dict)

    def xz(self) -> XZPoint:
        """Column of this node."""
        return XZPoint(self.x, self.z)


@dataclass
class ProcessedWay:
    """
    A projected OSM way.

    Attributes:
        id: OSM way ID
        nodes: Ordered boundary nodes (the ring is not explicitly closed)
        tags: Tag mapping shared by the whole way
    """
    id: str
    nodes: List[ProcessedNode]
    tags: Dict[str, str] = field(default_factory=dict)

    def columns(self) -> List[XZPoint]:
        """Node columns in boundary order."""
        return [node.xz() for node in self.nodes]

    def polygon_coords(self) -> List[Tuple[int, int]]:
        """Node columns as plain (x, z) tuples for the fill routine."""
        return [(node.x, node.z) for node in self.nodes]


@dataclass
class ProcessedMember:
    """A way member of a relation with its role."""
    role: MemberRole
    way: ProcessedWay


@dataclass
class ProcessedRelation:
    """A projected OSM relation with its way members."""
    id: str
    members: List[ProcessedMember] = field(default_factory=list)
    tags: Dict[str, str] = field(default_factory=dict)

    def outer_ways(self) -> List[ProcessedWay]:
        """Member ways with the outer role, in member order."""
        return [m.way for m in self.members if m.role == MemberRole.OUTER]
