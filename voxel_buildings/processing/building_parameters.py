"""
Building parameter derivation for Voxel Buildings Generator.

Turns the tags of one footprint into the numeric parameters used by
the generators: base elevation, start elevation and height. Tag values
are free text, so every parse failure simply means "value absent" and
the next lower priority source is kept.

Height precedence (later sources win when present and valid):
1. Default height (6 blocks, scaled)
2. building:levels
3. height (a trailing 'm' is ignored; other units make it absent)
4. Level count of the enclosing relation
"""

from typing import Dict, Optional, Tuple
import logging
import re

from ..config import (
    BLOCKS_PER_LEVEL,
    LEVEL_HEIGHT_PADDING,
    MIN_BUILDING_HEIGHT,
    DEFAULT_BUILDING_HEIGHT,
)
from ..models.building import BuildingParameters, HeightSource, SkipReason
from ..models.element import ProcessedWay
from ..models.terrain import Ground

logger = logging.getLogger(__name__)

# Number with an optional metre suffix ("12", "12.5", "12m", "12 m")
_HEIGHT_PATTERN = re.compile(r'^\s*([-+]?[0-9]+(?:\.[0-9]*)?|[-+]?\.[0-9]+)\s*m?\s*$')

# Plain ASCII integer, optional sign
_INT_PATTERN = re.compile(r'[-+]?[0-9]+')


def scaled_height(value: float, scale: float) -> int:
    """
    Scale a height and apply the minimum building height.

    Args:
        value: Height in blocks before scaling
        scale: Horizontal scale factor

    Returns:
        max(3, round(value * scale))
    """
    return max(MIN_BUILDING_HEIGHT, int(round(value * scale)))


def levels_to_height(levels: int, scale: float) -> int:
    """Height of a building with the given number of stories."""
    return scaled_height(levels * BLOCKS_PER_LEVEL + LEVEL_HEIGHT_PADDING, scale)


def parse_int_tag(tags: Dict[str, str], key: str) -> Optional[int]:
    """
    Parse an integer tag.

    Returns:
        Parsed value, or None if the tag is absent or not an integer
    """
    value = tags.get(key)
    if value is None:
        return None

    value = value.strip()
    if not _INT_PATTERN.fullmatch(value):
        logger.debug(f"Ignoring non-integer {key}={value!r}")
        return None

    return int(value)


def parse_min_level(tags: Dict[str, str]) -> int:
    """Parse building:min_level (0 when absent or invalid)."""
    min_level = parse_int_tag(tags, 'building:min_level')
    return min_level if min_level is not None else 0


def parse_height_tag(tags: Dict[str, str]) -> Optional[float]:
    """
    Parse the height tag.

    A trailing metre suffix is stripped, so '12m' and '12' are
    equivalent. Any other unit ('40ft') makes the value absent.

    Returns:
        Height as float, or None if absent or not numeric
    """
    value = tags.get('height')
    if value is None:
        return None

    match = _HEIGHT_PATTERN.match(value)
    if match is None:
        logger.debug(f"Ignoring non-numeric height={value!r}")
        return None

    return float(match.group(1))


def check_skip_reason(tags: Dict[str, str]) -> Optional[SkipReason]:
    """
    Check the tag-only early rejection conditions.

    Features declared below ground (negative layer or level) are not
    rendered.

    Returns:
        SkipReason, or None if the footprint should be synthesized
    """
    layer = parse_int_tag(tags, 'layer')
    if layer is not None and layer < 0:
        return SkipReason.NEGATIVE_LAYER

    level = parse_int_tag(tags, 'level')
    if level is not None and level < 0:
        return SkipReason.NEGATIVE_LEVEL

    return None


def resolve_height(
    tags: Dict[str, str],
    min_level: int,
    scale: float = 1.0,
    relation_levels: Optional[int] = None
) -> Tuple[int, HeightSource]:
    """
    Resolve the wall height from tags and relation context.

    Args:
        tags: Tag mapping of the footprint
        min_level: Parsed building:min_level
        scale: Horizontal scale factor
        relation_levels: Level count supplied by an enclosing relation

    Returns:
        Tuple of (height, HeightSource)
    """
    height = scaled_height(DEFAULT_BUILDING_HEIGHT, scale)
    source = HeightSource.DEFAULT

    levels = parse_int_tag(tags, 'building:levels')
    if levels is not None:
        stories = levels - min_level
        if stories >= 1:
            height = levels_to_height(stories, scale)
            source = HeightSource.LEVELS

    height_tag = parse_height_tag(tags)
    if height_tag is not None:
        height = scaled_height(height_tag, scale)
        source = HeightSource.HEIGHT_TAG

    if relation_levels is not None:
        height = levels_to_height(relation_levels, scale)
        source = HeightSource.RELATION

    return height, source


def derive_parameters(
    way: ProcessedWay,
    ground: Ground,
    scale: float = 1.0,
    relation_levels: Optional[int] = None
) -> Optional[BuildingParameters]:
    """
    Derive the building parameters of one footprint.

    Args:
        way: Projected footprint
        ground: Ground elevation oracle
        scale: Horizontal scale factor
        relation_levels: Level count supplied by an enclosing relation

    Returns:
        BuildingParameters (without palette), or None if the footprint
        must be skipped. The reason is logged at debug level.
    """
    base_y = ground.min_level(way.columns())

    reason = SkipReason.NO_GROUND if base_y is None else check_skip_reason(way.tags)
    if reason is not None:
        logger.debug(f"Skipping way {way.id}: {reason.value}")
        return None

    min_level = parse_min_level(way.tags)
    height, source = resolve_height(way.tags, min_level, scale, relation_levels)

    params = BuildingParameters(
        base_y=base_y,
        min_level=min_level,
        height=height,
        height_source=source,
    )

    logger.debug(
        f"Way {way.id}: base={params.base_y}, start={params.start_level}, "
        f"height={params.height} ({params.height_source.value})"
    )

    return params
