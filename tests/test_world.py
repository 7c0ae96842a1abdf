import os
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from voxel_buildings.models.blocks import BRICK, COBBLESTONE, DARK_OAK_DOOR, GRAY_CONCRETE, STONE
from voxel_buildings.models.element import ProcessedNode
from voxel_buildings.models.geometry import XZPoint
from voxel_buildings.models.terrain import Ground, Heightmap
from voxel_buildings.models.world import WorldEditor
from voxel_buildings.generators.doors import generate_doors


class TestWorldEditor(unittest.TestCase):
    def setUp(self):
        self.editor = WorldEditor(min_y=-64, max_y=319)

    def test_last_write_wins(self):
        """A later write replaces an earlier one."""
        self.editor.set_block(STONE, 1, 2, 3)
        self.editor.set_block(BRICK, 1, 2, 3)
        self.assertEqual(self.editor.get_block(1, 2, 3), BRICK)
        self.assertEqual(len(self.editor), 1)

    def test_out_of_range_is_dropped(self):
        """Writes outside the vertical range are dropped and counted."""
        self.editor.set_block(STONE, 0, 400, 0)
        self.editor.set_block(STONE, 0, -65, 0)
        self.assertTrue(self.editor.is_empty())
        self.assertEqual(self.editor.stats.writes_dropped, 2)
        self.assertEqual(self.editor.stats.writes_requested, 2)

    def test_whitelist(self):
        """A whitelist limits which blocks may be replaced."""
        self.editor.set_block(STONE, 0, 0, 0)
        self.editor.set_block(BRICK, 0, 0, 0, override_whitelist=[COBBLESTONE])
        self.assertEqual(self.editor.get_block(0, 0, 0), STONE)

        self.editor.set_block(BRICK, 0, 0, 0, override_whitelist=[STONE])
        self.assertEqual(self.editor.get_block(0, 0, 0), BRICK)
        self.assertEqual(self.editor.stats.writes_rejected, 1)

    def test_whitelist_does_not_block_empty_positions(self):
        """Empty positions are filled despite a whitelist."""
        self.editor.set_block(BRICK, 5, 5, 5, override_whitelist=[COBBLESTONE])
        self.assertEqual(self.editor.get_block(5, 5, 5), BRICK)

    def test_blacklist(self):
        """A blacklist protects the listed blocks."""
        self.editor.set_block(STONE, 0, 0, 0)
        self.editor.set_block(BRICK, 0, 0, 0, override_blacklist=[STONE])
        self.assertEqual(self.editor.get_block(0, 0, 0), STONE)

        self.editor.set_block(BRICK, 0, 0, 0, override_blacklist=[COBBLESTONE])
        self.assertEqual(self.editor.get_block(0, 0, 0), BRICK)

    def test_properties(self):
        """Placement state is stored with the block."""
        self.editor.set_block(DARK_OAK_DOOR, 0, 1, 0, properties={'half': 'lower'})
        placed = self.editor.get_placed(0, 1, 0)
        self.assertEqual(placed.block, DARK_OAK_DOOR)
        self.assertEqual(placed.property_dict(), {'half': 'lower'})

    def test_queries(self):
        """column, check_for_block and block_counts."""
        self.editor.set_block(STONE, 0, 0, 0)
        self.editor.set_block(STONE, 0, 1, 0)
        self.editor.set_block(BRICK, 1, 0, 0)

        self.assertEqual(self.editor.column(0, 0), {0: STONE, 1: STONE})
        self.assertTrue(self.editor.check_for_block(1, 0, 0))
        self.assertFalse(self.editor.check_for_block(1, 0, 0, whitelist=[STONE]))
        self.assertEqual(self.editor.block_counts()['stone'], 2)


class TestGround(unittest.TestCase):
    def test_flat_ground(self):
        """Flat ground returns the ground level everywhere."""
        ground = Ground(ground_level=-62)
        self.assertFalse(ground.elevation_enabled)
        self.assertEqual(ground.level(XZPoint(100, -100)), -62)

    def test_heightmap_lookup_and_clamp(self):
        """Heightmap lookups clamp to the grid edge."""
        heightmap = Heightmap([[1, 2], [3, 4]])
        ground = Ground(0, heightmap)
        self.assertTrue(ground.elevation_enabled)
        self.assertEqual(ground.level(XZPoint(1, 0)), 2)
        self.assertEqual(ground.level(XZPoint(0, 1)), 3)
        self.assertEqual(ground.level(XZPoint(10, 10)), 4)
        self.assertEqual(ground.level(XZPoint(-5, -5)), 1)

    def test_heightmap_origin(self):
        """Heightmap lookups honour the origin."""
        heightmap = Heightmap([[7, 8]], origin_x=10, origin_z=20)
        self.assertEqual(heightmap.height_at(11, 20), 8)
        self.assertEqual(heightmap.bbox.max_x, 11)

    def test_min_level(self):
        """min_level is the lowest ground, None for no points."""
        ground = Ground(0, Heightmap([[5, 2], [9, 4]]))
        self.assertEqual(ground.min_level([XZPoint(0, 0), XZPoint(1, 1)]), 4)
        self.assertIsNone(ground.min_level([]))

    def test_invalid_heightmap(self):
        """Empty or ragged grids raise ValueError."""
        with self.assertRaises(ValueError):
            Heightmap([])
        with self.assertRaises(ValueError):
            Heightmap([[1, 2], [3]])


class TestDoors(unittest.TestCase):
    def setUp(self):
        self.editor = WorldEditor()
        self.ground = Ground(0, Heightmap([[3, 3], [3, 3]]))

    def test_door(self):
        """Doors get a threshold and lower and upper halves."""
        generate_doors(self.editor, ProcessedNode("n1", 1, 1, {"door": "hinged"}), self.ground)

        self.assertEqual(self.editor.get_block(1, 3, 1), GRAY_CONCRETE)
        self.assertEqual(self.editor.get_placed(1, 4, 1).property_dict(), {'half': 'lower'})
        self.assertEqual(self.editor.get_placed(1, 5, 1).property_dict(), {'half': 'upper'})
        self.assertEqual(self.editor.get_block(1, 5, 1), DARK_OAK_DOOR)

    def test_entrance_on_ground_level(self):
        """Entrances on level 0 are placed."""
        node = ProcessedNode("n1", 0, 0, {"entrance": "main", "level": "0"})
        generate_doors(self.editor, node, self.ground)
        self.assertEqual(len(self.editor), 3)

    def test_upper_level_is_skipped(self):
        """Doors on other levels are skipped."""
        node = ProcessedNode("n1", 0, 0, {"door": "yes", "level": "1"})
        generate_doors(self.editor, node, self.ground)
        self.assertTrue(self.editor.is_empty())

    def test_unparsable_level_counts_as_ground(self):
        """An unparsable level counts as ground floor."""
        node = ProcessedNode("n1", 0, 0, {"door": "yes", "level": "G"})
        generate_doors(self.editor, node, self.ground)
        self.assertEqual(len(self.editor), 3)

    def test_untagged_node(self):
        """Nodes without door or entrance tags are ignored."""
        generate_doors(self.editor, ProcessedNode("n1", 0, 0, {"shop": "bakery"}), self.ground)
        self.assertTrue(self.editor.is_empty())


if __name__ == '__main__':
    unittest.main()
