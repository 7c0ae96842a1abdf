import os
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from voxel_buildings.models.building import HeightSource, SkipReason
from voxel_buildings.models.element import ProcessedNode, ProcessedWay
from voxel_buildings.models.terrain import Ground, Heightmap
from voxel_buildings.processing.building_parameters import (
    check_skip_reason,
    derive_parameters,
    parse_height_tag,
    parse_int_tag,
    parse_min_level,
    resolve_height,
    scaled_height,
)


def make_way(coords, tags=None, way_id="w1"):
    nodes = [ProcessedNode(f"n{i}", x, z) for i, (x, z) in enumerate(coords)]
    return ProcessedWay(way_id, nodes, dict(tags or {}))


SQUARE = [(0, 0), (4, 0), (4, 4), (0, 4)]


class TestTagParsing(unittest.TestCase):
    def test_min_level_defaults_to_zero(self):
        """building:min_level defaults to 0 when absent or invalid."""
        self.assertEqual(parse_min_level({}), 0)
        self.assertEqual(parse_min_level({"building:min_level": "two"}), 0)
        self.assertEqual(parse_min_level({"building:min_level": "2"}), 2)

    def test_height_unit_suffix_is_ignored(self):
        """A trailing metre suffix on height is stripped."""
        self.assertEqual(parse_height_tag({"height": "12m"}), 12.0)
        self.assertEqual(parse_height_tag({"height": "12"}), 12.0)
        self.assertEqual(parse_height_tag({"height": "12.5 m"}), 12.5)

    def test_unparsable_height_is_absent(self):
        """Non-numeric height values count as absent."""
        self.assertIsNone(parse_height_tag({}))
        self.assertIsNone(parse_height_tag({"height": "tall"}))
        self.assertIsNone(parse_height_tag({"height": "12;15"}))

    def test_non_metre_units_are_absent(self):
        """Heights in other units count as absent."""
        self.assertIsNone(parse_height_tag({"height": "40ft"}))
        self.assertIsNone(parse_height_tag({"height": "12 km"}))
        self.assertEqual(parse_height_tag({"height": " 7 m "}), 7.0)

    def test_integer_tags_accept_plain_digits_only(self):
        """Integer tags accept only signed ASCII digits."""
        self.assertEqual(parse_int_tag({"building:levels": " 3 "}, "building:levels"), 3)
        self.assertEqual(parse_int_tag({"level": "-1"}, "level"), -1)
        self.assertEqual(parse_int_tag({"level": "+2"}, "level"), 2)
        self.assertIsNone(parse_int_tag({"building:levels": "1_0"}, "building:levels"))
        self.assertIsNone(parse_int_tag({"building:levels": "\u0663"}, "building:levels"))
        self.assertIsNone(parse_int_tag({"building:levels": ""}, "building:levels"))
        self.assertIsNone(parse_int_tag({}, "building:levels"))

    def test_underscored_levels_fall_back_to_default(self):
        """building:levels=1_0 keeps the default height."""
        self.assertEqual(resolve_height({"building:levels": "1_0"}, 0), (6, HeightSource.DEFAULT))

    def test_skip_reasons(self):
        """Negative layer and level tags yield skip reasons."""
        self.assertEqual(check_skip_reason({"layer": "-1"}), SkipReason.NEGATIVE_LAYER)
        self.assertEqual(check_skip_reason({"level": "-2"}), SkipReason.NEGATIVE_LEVEL)
        self.assertIsNone(check_skip_reason({"layer": "1", "level": "0"}))
        self.assertIsNone(check_skip_reason({"layer": "underground"}))
        self.assertIsNone(check_skip_reason({}))


class TestHeightResolution(unittest.TestCase):
    def test_default_height(self):
        """Untagged buildings get the scaled default height."""
        self.assertEqual(resolve_height({}, 0), (6, HeightSource.DEFAULT))
        self.assertEqual(resolve_height({}, 0, scale=2.0)[0], 12)

    def test_default_height_never_below_three(self):
        """The default height is clamped to three."""
        self.assertEqual(resolve_height({}, 0, scale=0.1)[0], 3)

    def test_levels(self):
        """building:levels gives levels * 4 + 2."""
        self.assertEqual(resolve_height({"building:levels": "2"}, 0), (10, HeightSource.LEVELS))

    def test_levels_are_counted_above_min_level(self):
        """Levels are counted above building:min_level."""
        self.assertEqual(resolve_height({"building:levels": "3"}, 1)[0], 10)

    def test_levels_at_or_below_min_level_keep_default(self):
        """Levels not above min_level keep the default."""
        height, source = resolve_height({"building:levels": "1"}, 1)
        self.assertEqual(height, 6)
        self.assertEqual(source, HeightSource.DEFAULT)

    def test_height_tag_overrides_levels(self):
        """The height tag wins over building:levels."""
        tags = {"building:levels": "2", "height": "12m"}
        self.assertEqual(resolve_height(tags, 0), (12, HeightSource.HEIGHT_TAG))

    def test_height_tag_with_and_without_unit_match(self):
        """'12m' and '12' give the same height."""
        self.assertEqual(
            resolve_height({"height": "12m"}, 0),
            resolve_height({"height": "12"}, 0),
        )

    def test_relation_levels_win(self):
        """Relation levels win over every tag."""
        tags = {"building:levels": "5", "height": "30"}
        self.assertEqual(
            resolve_height(tags, 0, relation_levels=3),
            (14, HeightSource.RELATION),
        )

    def test_malformed_levels_fall_back(self):
        """Fractional building:levels falls back to the default."""
        tags = {"building:levels": "2.5"}
        self.assertEqual(resolve_height(tags, 0), (6, HeightSource.DEFAULT))

    def test_height_is_at_least_three(self):
        """Every height source is clamped to three."""
        cases = [
            ({"height": "0"}, 0, 1.0, None),
            ({"height": "1m"}, 0, 1.0, None),
            ({"building:levels": "1"}, 0, 0.1, None),
            ({}, 0, 0.01, 0),
            ({"height": "-5"}, 0, 1.0, None),
        ]
        for tags, min_level, scale, relation_levels in cases:
            height, _ = resolve_height(tags, min_level, scale, relation_levels)
            self.assertGreaterEqual(height, 3, msg=f"{tags} scale={scale}")

    def test_scaled_height_rounds(self):
        """scaled_height rounds the scaled value."""
        self.assertEqual(scaled_height(10, 1.26), 13)
        self.assertEqual(scaled_height(10, 0.5), 5)


class TestDeriveParameters(unittest.TestCase):
    def test_start_level_equals_base_on_flat_ground(self):
        """Start level equals base on flat ground."""
        params = derive_parameters(make_way(SQUARE, {"building": "yes"}), Ground(10))
        self.assertEqual(params.base_y, 10)
        self.assertEqual(params.start_level, 10)
        self.assertEqual(params.min_level, 0)

    def test_min_level_raises_start_level(self):
        """building:min_level raises the start level."""
        way = make_way(SQUARE, {"building": "yes", "building:min_level": "2"})
        params = derive_parameters(way, Ground(10))
        self.assertEqual(params.start_level, 18)

    def test_base_is_lowest_ground_under_footprint(self):
        """Base is the lowest ground under the nodes."""
        heightmap = Heightmap([[5, 6, 7, 8, 9] for _ in range(5)])
        params = derive_parameters(make_way([(2, 0), (4, 0), (4, 4)]), Ground(0, heightmap))
        self.assertEqual(params.base_y, 7)

    def test_no_nodes_is_skipped(self):
        """A way without nodes yields no parameters."""
        self.assertIsNone(derive_parameters(make_way([]), Ground(0)))

    def test_negative_layer_is_skipped(self):
        """A negative layer yields no parameters."""
        way = make_way(SQUARE, {"building": "yes", "layer": "-1"})
        self.assertIsNone(derive_parameters(way, Ground(0)))

    def test_relation_levels_are_applied(self):
        """Relation levels set the height and its source."""
        params = derive_parameters(make_way(SQUARE), Ground(0), relation_levels=2)
        self.assertEqual(params.height, 10)
        self.assertEqual(params.height_source, HeightSource.RELATION)


if __name__ == '__main__':
    unittest.main()
