import os
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from voxel_buildings.io.osm_parser import parse_osm_file
from voxel_buildings.io.terrain_loader import TerrainLoadError, get_terrain_stats, load_terrain
from voxel_buildings.models.element import MemberRole
from voxel_buildings.projection import BBoxProjector, IProjector, create_projector, haversine_distance


OSM_XML = """<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <bounds minlat="0.0" minlon="0.0" maxlat="0.0001" maxlon="0.0001"/>
  <node id="1" lat="0.0001" lon="0.0"/>
  <node id="2" lat="0.0001" lon="0.0001"/>
  <node id="3" lat="0.0" lon="0.0001"/>
  <node id="4" lat="0.0" lon="0.0">
    <tag k="entrance" v="main"/>
  </node>
  <node id="5" lat="bad" lon="0.0"/>
  <way id="10">
    <nd ref="1"/>
    <nd ref="2"/>
    <nd ref="3"/>
    <nd ref="4"/>
    <nd ref="1"/>
    <tag k="building" v="house"/>
  </way>
  <way id="11">
    <nd ref="1"/>
    <nd ref="99"/>
    <nd ref="3"/>
  </way>
  <relation id="20">
    <member type="way" ref="10" role="outer"/>
    <member type="way" ref="11" role="inner"/>
    <member type="way" ref="12" role=""/>
    <member type="node" ref="4" role="entrance"/>
    <tag k="type" v="multipolygon"/>
    <tag k="building" v="yes"/>
  </relation>
</osm>
"""

TERRAIN_ASC = """ncols 3
nrows 2
cellsize 1
NODATA_value -9999
10 11 12
-9999 12 14
"""


class TestProjection(unittest.TestCase):
    def test_haversine_one_degree(self):
        """One degree of latitude is about 111 km."""
        self.assertAlmostEqual(haversine_distance(0.0, 0.0, 1.0, 0.0), 111194.9, delta=1.0)

    def test_corners(self):
        """The north-west corner maps to (0, 0)."""
        projector = BBoxProjector(0.0, 0.0, 0.0001, 0.0001)
        self.assertEqual(projector.project(0.0001, 0.0), (0, 0))
        self.assertEqual(projector.project(0.0, 0.0001), (11, 11))

    def test_scale(self):
        """Scale multiplies block coordinates."""
        projector = BBoxProjector(0.0, 0.0, 0.0001, 0.0001, scale=2.0)
        self.assertEqual(projector.project(0.0, 0.0001), (22, 22))

    def test_unproject(self):
        """unproject inverts the origin column."""
        projector = BBoxProjector(10.0, 20.0, 10.01, 20.01)
        lat, lon = projector.unproject(0, 0)
        self.assertAlmostEqual(lat, 10.01)
        self.assertAlmostEqual(lon, 20.0)

    def test_interface(self):
        """create_projector returns an IProjector."""
        projector = create_projector((0.0, 0.0, 1.0, 1.0))
        self.assertIsInstance(projector, IProjector)

    def test_invalid_box(self):
        """Empty boxes and non-positive scales are rejected."""
        with self.assertRaises(ValueError):
            BBoxProjector(1.0, 0.0, 0.0, 1.0)
        with self.assertRaises(ValueError):
            BBoxProjector(0.0, 0.0, 1.0, 1.0, scale=0)


class TestOSMParser(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, 'map.osm')
        with open(self.path, 'w', encoding='utf-8') as f:
            f.write(OSM_XML)

    def tearDown(self):
        self.tmp.cleanup()

    def test_ways_are_projected(self):
        """Way nodes are projected in file order."""
        result = parse_osm_file(self.path)
        ways = {w.id: w for w in result.ways}

        house = ways['10']
        self.assertEqual(
            house.polygon_coords(),
            [(0, 0), (11, 0), (11, 11), (0, 11), (0, 0)],
        )
        self.assertEqual(house.tags, {'building': 'house'})

    def test_missing_nodes_are_skipped(self):
        """Missing node references are skipped with a warning."""
        result = parse_osm_file(self.path)
        ways = {w.id: w for w in result.ways}

        self.assertEqual(len(ways['11'].nodes), 2)
        self.assertEqual(result.stats['missing_nodes'], 1)
        self.assertTrue(any('99' in w for w in result.warnings))

    def test_invalid_node_coordinates(self):
        """Nodes with invalid coordinates are dropped."""
        result = parse_osm_file(self.path)
        self.assertEqual(result.stats['total_nodes'], 4)
        self.assertTrue(any('Node 5' in w for w in result.warnings))

    def test_only_tagged_nodes_are_returned(self):
        """Only tagged nodes are returned."""
        result = parse_osm_file(self.path)
        self.assertEqual([n.id for n in result.nodes], ['4'])
        self.assertEqual(result.nodes[0].tags, {'entrance': 'main'})

    def test_relation_members(self):
        """Relation members resolve to the parsed ways with roles."""
        result = parse_osm_file(self.path)
        self.assertEqual(len(result.relations), 1)

        relation = result.relations[0]
        self.assertEqual(
            [(m.role, m.way.id) for m in relation.members],
            [(MemberRole.OUTER, '10'), (MemberRole.INNER, '11')],
        )
        self.assertEqual(result.stats['missing_ways'], 1)

        ways = {w.id: w for w in result.ways}
        self.assertIs(relation.members[0].way, ways['10'])

    def test_bbox(self):
        """The bounding box comes from the bounds element."""
        result = parse_osm_file(self.path)
        self.assertEqual(result.bbox, (0.0, 0.0, 0.0001, 0.0001))

    def test_missing_file(self):
        """A missing file raises FileNotFoundError."""
        with self.assertRaises(FileNotFoundError):
            parse_osm_file(os.path.join(self.tmp.name, 'nope.osm'))

    def test_empty_file(self):
        """A file without nodes parses to an empty result."""
        path = os.path.join(self.tmp.name, 'empty.osm')
        with open(path, 'w', encoding='utf-8') as f:
            f.write('<osm version="0.6"></osm>')

        result = parse_osm_file(path)
        self.assertEqual((result.ways, result.relations, result.nodes), ([], [], []))
        self.assertIsNone(result.bbox)


class TestTerrainLoader(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def _write(self, text, name='dem.asc'):
        path = os.path.join(self.tmp.name, name)
        with open(path, 'w') as f:
            f.write(text)
        return path

    def test_load(self):
        """Grids load relative to the lowest cell, NODATA at the minimum."""
        heightmap = load_terrain(self._write(TERRAIN_ASC), ground_level=0)
        self.assertEqual(heightmap.heights, [[0, 1, 2], [0, 2, 4]])

    def test_ground_level_and_vertical_scale(self):
        """Ground level shifts and vertical scale stretches elevations."""
        path = self._write(TERRAIN_ASC)
        self.assertEqual(
            load_terrain(path, ground_level=0, vertical_scale=2.0).heights,
            [[0, 2, 4], [0, 4, 8]],
        )
        self.assertEqual(load_terrain(path, ground_level=-62).heights[0], [-62, -61, -60])

    def test_georeferencing_keys_do_not_affect_grid(self):
        """Corner and cellsize keys are accepted but one cell stays one block."""
        path = self._write(
            "ncols 3\nnrows 2\nxllcorner 500000\nyllcorner 4000000\ncellsize 30\n"
            "10 11 12\n10 12 14\n"
        )
        heightmap = load_terrain(path, ground_level=0)
        self.assertEqual((heightmap.width, heightmap.depth), (3, 2))
        self.assertEqual(heightmap.height_at(2, 1), 4)

    def test_stats(self):
        """get_terrain_stats reports size and range."""
        stats = get_terrain_stats(load_terrain(self._write(TERRAIN_ASC), ground_level=0))
        self.assertEqual((stats['width'], stats['depth']), (3, 2))
        self.assertEqual(stats['elevation']['range'], 4)

    def test_wrong_row_count(self):
        """A row count mismatch raises TerrainLoadError."""
        path = self._write("ncols 2\nnrows 3\n1 2\n3 4\n")
        with self.assertRaises(TerrainLoadError):
            load_terrain(path)

    def test_wrong_row_length(self):
        """A row length mismatch raises TerrainLoadError."""
        path = self._write("ncols 2\nnrows 2\n1 2\n3 4 5\n")
        with self.assertRaises(TerrainLoadError):
            load_terrain(path)

    def test_missing_header(self):
        """A missing ncols header raises TerrainLoadError."""
        path = self._write("nrows 2\n1 2\n3 4\n")
        with self.assertRaises(TerrainLoadError):
            load_terrain(path)

    def test_non_numeric_value(self):
        """Non-numeric cells raise TerrainLoadError."""
        path = self._write("ncols 2\nnrows 2\n1 2\n3 x\n")
        with self.assertRaises(TerrainLoadError):
            load_terrain(path)

    def test_missing_file(self):
        """A missing file raises FileNotFoundError."""
        with self.assertRaises(FileNotFoundError):
            load_terrain(os.path.join(self.tmp.name, 'missing.asc'))


if __name__ == '__main__':
    unittest.main()
