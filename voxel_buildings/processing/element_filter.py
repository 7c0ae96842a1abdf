"""
Element routing for Voxel Buildings Generator.

Decides which parsed OSM element is handed to which generator:
building relations, standalone building ways (including shelters and
bridges tagged as buildings), and door/entrance nodes. Ways already
synthesized as members of a building relation are not routed again.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Set, Tuple
import logging

from ..models.element import ProcessedNode, ProcessedWay, ProcessedRelation

logger = logging.getLogger(__name__)


class RouteReason(Enum):
    """Reason an element was not routed to any generator."""
    NOT_A_BUILDING = "not_a_building"
    IN_RELATION = "member_of_building_relation"
    TOO_FEW_NODES = "too_few_nodes"
    NO_OUTER_MEMBER = "no_outer_member"


@dataclass
class RoutedElements:
    """Elements grouped by the generator that consumes them."""
    relations: List[ProcessedRelation] = field(default_factory=list)
    ways: List[ProcessedWay] = field(default_factory=list)
    doors: List[ProcessedNode] = field(default_factory=list)
    ignored: List[Tuple[str, RouteReason]] = field(default_factory=list)  # (element id, reason)

    @property
    def total_routed(self) -> int:
        return len(self.relations) + len(self.ways) + len(self.doors)


def is_building_tags(tags: Dict[str, str]) -> bool:
    """Check if tags describe a building, a building part or a shelter."""
    return (
        'building' in tags or
        'building:part' in tags or
        tags.get('amenity') == 'shelter'
    )


def is_building_relation(relation: ProcessedRelation) -> bool:
    """Check if a relation is a building multipolygon."""
    if relation.tags.get('type') != 'multipolygon':
        return False
    return 'building' in relation.tags or 'building:part' in relation.tags


def is_door_node(node: ProcessedNode) -> bool:
    """Check if a node marks a door or an entrance."""
    return 'door' in node.tags or 'entrance' in node.tags


def route_elements(
    ways: List[ProcessedWay],
    relations: List[ProcessedRelation],
    nodes: List[ProcessedNode]
) -> RoutedElements:
    """
    Group parsed elements by generator.

    Args:
        ways: Projected ways
        relations: Projected relations
        nodes: Projected tagged nodes

    Returns:
        RoutedElements with the routed elements and ignored IDs with reasons
    """
    routed = RoutedElements()
    ways_in_relations: Set[str] = set()

    for relation in relations:
        if not is_building_relation(relation):
            continue

        if not relation.outer_ways():
            routed.ignored.append((relation.id, RouteReason.NO_OUTER_MEMBER))
            logger.debug(f"Relation {relation.id} has no outer members")
            continue

        routed.relations.append(relation)

        for member in relation.members:
            ways_in_relations.add(member.way.id)

    for way in ways:
        if way.id in ways_in_relations:
            # Synthesized through its relation
            routed.ignored.append((way.id, RouteReason.IN_RELATION))
            continue

        if not is_building_tags(way.tags):
            continue

        if len(way.nodes) < 2:
            routed.ignored.append((way.id, RouteReason.TOO_FEW_NODES))
            logger.debug(f"Way {way.id} has {len(way.nodes)} node(s)")
            continue

        routed.ways.append(way)

    for node in nodes:
        if is_door_node(node):
            routed.doors.append(node)

    logger.info(
        f"Routed {len(routed.relations)} relations, {len(routed.ways)} ways, "
        f"{len(routed.doors)} doors ({len(routed.ignored)} ignored)"
    )

    return routed
