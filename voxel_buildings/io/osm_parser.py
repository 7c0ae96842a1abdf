"""
OSM XML parser for Voxel Buildings Generator.

Parses OpenStreetMap XML data and projects it onto integer block
columns, producing the ProcessedNode / ProcessedWay / ProcessedRelation
elements consumed by the generators.

Ways keep their node order as found in the file; closed ways keep the
repeated first node, so tracing consecutive pairs walks the full ring.
"""

import xml.etree.ElementTree as ET
from typing import List, Dict, Tuple, Optional
from dataclasses import dataclass, field
import logging

from ..models.element import (
    MemberRole,
    ProcessedNode,
    ProcessedWay,
    ProcessedMember,
    ProcessedRelation,
)
from ..projection import IProjector, create_projector

logger = logging.getLogger(__name__)

# Padding (degrees) applied to a degenerate node extent
BBOX_PADDING_DEG = 0.0001


@dataclass
class OSMNode:
    """An OSM node with geographic coordinates."""
    id: str
    lat: float
    lon: float
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass
class OSMWay:
    """An OSM way with node references and tags."""
    id: str
    node_ids: List[str]
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass
class OSMRelation:
    """An OSM relation with members and tags."""
    id: str
    members: List[Tuple[str, str, str]]  # (type, ref, role)
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass
class ParseResult:
    """Result of parsing an OSM file."""
    ways: List[ProcessedWay]
    relations: List[ProcessedRelation]
    nodes: List[ProcessedNode]  # Tagged nodes only
    stats: Dict[str, int]
    warnings: List[str]
    bbox: Optional[Tuple[float, float, float, float]] = None  # (min_lat, min_lon, max_lat, max_lon)


def _read_tags(elem: ET.Element) -> Dict[str, str]:
    """Collect <tag k=.. v=..> children of an element."""
    return {tag.get('k'): tag.get('v', '') for tag in elem.findall('tag')}


def _read_bounds(
    root: ET.Element,
    nodes: Dict[str, OSMNode]
) -> Optional[Tuple[float, float, float, float]]:
    """
    Determine the geographic extent of the data.

    Uses the <bounds> element when present, otherwise the node extent.
    """
    bounds = root.find('bounds')
    if bounds is not None:
        try:
            return (
                float(bounds.get('minlat')),
                float(bounds.get('minlon')),
                float(bounds.get('maxlat')),
                float(bounds.get('maxlon')),
            )
        except (TypeError, ValueError):
            logger.warning("Invalid <bounds> element, using node extent")

    if not nodes:
        return None

    lats = [n.lat for n in nodes.values()]
    lons = [n.lon for n in nodes.values()]
    min_lat, max_lat = min(lats), max(lats)
    min_lon, max_lon = min(lons), max(lons)

    if max_lat <= min_lat:
        min_lat -= BBOX_PADDING_DEG
        max_lat += BBOX_PADDING_DEG
    if max_lon <= min_lon:
        min_lon -= BBOX_PADDING_DEG
        max_lon += BBOX_PADDING_DEG

    return (min_lat, min_lon, max_lat, max_lon)


def parse_osm_file(
    filepath: str,
    projector: Optional[IProjector] = None,
    scale: float = 1.0
) -> ParseResult:
    """
    Parse an OSM XML file into projected elements.

    Args:
        filepath: Path to .osm XML file
        projector: Coordinate projector (lat/lon -> block columns).
            When None, a bounding box projector is created from the
            file's <bounds> or node extent.
        scale: Blocks per metre for the default projector

    Returns:
        ParseResult with ways, relations, tagged nodes, stats, and warnings

    Raises:
        FileNotFoundError: If the file does not exist
        xml.etree.ElementTree.ParseError: If the XML is malformed
    """
    logger.info(f"Parsing OSM file: {filepath}")

    tree = ET.parse(filepath)
    root = tree.getroot()

    warnings: List[str] = []

    # First pass: collect all nodes
    nodes: Dict[str, OSMNode] = {}
    for node_elem in root.findall('node'):
        node_id = node_elem.get('id')
        try:
            lat = float(node_elem.get('lat'))
            lon = float(node_elem.get('lon'))
        except (TypeError, ValueError):
            warnings.append(f"Node {node_id} has invalid coordinates")
            logger.warning(f"Node {node_id} has invalid coordinates")
            continue
        nodes[node_id] = OSMNode(node_id, lat, lon, _read_tags(node_elem))

    logger.debug(f"Parsed {len(nodes)} nodes")

    # Second pass: collect all ways
    ways: Dict[str, OSMWay] = {}
    for way_elem in root.findall('way'):
        way_id = way_elem.get('id')
        node_ids = [nd.get('ref') for nd in way_elem.findall('nd')]
        ways[way_id] = OSMWay(way_id, node_ids, _read_tags(way_elem))

    logger.debug(f"Parsed {len(ways)} ways")

    # Third pass: collect all relations
    relations: Dict[str, OSMRelation] = {}
    for rel_elem in root.findall('relation'):
        rel_id = rel_elem.get('id')
        members = [
            (m.get('type'), m.get('ref'), m.get('role', ''))
            for m in rel_elem.findall('member')
        ]
        relations[rel_id] = OSMRelation(rel_id, members, _read_tags(rel_elem))

    logger.debug(f"Parsed {len(relations)} relations")

    bbox = _read_bounds(root, nodes)

    stats = {
        'total_nodes': len(nodes),
        'total_ways': len(ways),
        'total_relations': len(relations),
        'tagged_nodes': 0,
        'ways_projected': 0,
        'relations_projected': 0,
        'missing_nodes': 0,
        'missing_ways': 0,
    }

    if bbox is None:
        logger.warning(f"No nodes found in {filepath}")
        return ParseResult([], [], [], stats, warnings, None)

    if projector is None:
        projector = create_projector(bbox, scale)

    # Project nodes once
    projected: Dict[str, ProcessedNode] = {}
    for node_id, node in nodes.items():
        x, z = projector.project(node.lat, node.lon)
        projected[node_id] = ProcessedNode(node_id, int(x), int(z), node.tags)

    tagged_nodes = [n for n in projected.values() if n.tags]
    stats['tagged_nodes'] = len(tagged_nodes)

    # Fourth pass: project ways
    processed_ways: Dict[str, ProcessedWay] = {}
    for way_id, way in ways.items():
        way_nodes: List[ProcessedNode] = []
        for node_id in way.node_ids:
            node = projected.get(node_id)
            if node is None:
                stats['missing_nodes'] += 1
                warnings.append(f"Node {node_id} not found for way {way_id}")
                logger.warning(f"Node {node_id} not found for way {way_id}")
                continue
            way_nodes.append(node)

        processed_ways[way_id] = ProcessedWay(way_id, way_nodes, way.tags)
        stats['ways_projected'] += 1

    # Fifth pass: resolve relation members
    processed_relations: List[ProcessedRelation] = []
    for rel_id, relation in relations.items():
        members: List[ProcessedMember] = []
        for member_type, ref, role in relation.members:
            if member_type != 'way':
                continue

            way = processed_ways.get(ref)
            if way is None:
                stats['missing_ways'] += 1
                warnings.append(f"Way {ref} referenced in relation {rel_id} not found")
                logger.warning(f"Way {ref} referenced in relation {rel_id} not found")
                continue

            members.append(ProcessedMember(MemberRole.from_osm_role(role), way))

        processed_relations.append(ProcessedRelation(rel_id, members, relation.tags))
        stats['relations_projected'] += 1

    logger.info(
        f"Projected {stats['ways_projected']} ways, "
        f"{stats['relations_projected']} relations, "
        f"{stats['tagged_nodes']} tagged nodes"
    )

    return ParseResult(
        ways=list(processed_ways.values()),
        relations=processed_relations,
        nodes=tagged_nodes,
        stats=stats,
        warnings=warnings,
        bbox=bbox,
    )
