"""
Door generator for Voxel Buildings Generator.

Places a ground-floor door on nodes tagged door or entrance.
"""

import logging

from ..models.blocks import DARK_OAK_DOOR, GRAY_CONCRETE
from ..models.element import ProcessedNode
from ..models.terrain import Ground
from ..models.world import WorldEditor
from ..processing.building_parameters import parse_int_tag

logger = logging.getLogger(__name__)


def generate_doors(editor: WorldEditor, node: ProcessedNode, ground: Ground) -> None:
    """
    Place a door on a door/entrance node.

    Writes a gray concrete threshold at ground level and the lower and
    upper halves of a dark oak door above it. Nodes on any level other
    than 0 are skipped; an unparsable level counts as ground floor.
    """
    if 'door' not in node.tags and 'entrance' not in node.tags:
        return

    level = parse_int_tag(node.tags, 'level')
    if level is not None and level != 0:
        logger.debug(f"Skipping door {node.id} on level {level}")
        return

    ground_y = ground.level(node.xz())

    editor.set_block(GRAY_CONCRETE, node.x, ground_y, node.z)
    editor.set_block(DARK_OAK_DOOR, node.x, ground_y + 1, node.z, properties={'half': 'lower'})
    editor.set_block(DARK_OAK_DOOR, node.x, ground_y + 2, node.z, properties={'half': 'upper'})
