"""
Voxel Buildings Generator - Main CLI

Generates voxel buildings from OSM data into an in-memory block world
and writes a JSON report of the run.

Usage:
    python -m voxel_buildings.main --osm <file.osm> [--terrain <grid.asc>]

Example:
    python -m voxel_buildings.main --osm ./data/map.osm --terrain ./data/dem.asc --winter
"""

import argparse
import json
import logging
import os
import random
import sys
import time
from dataclasses import dataclass, field, asdict
from typing import Any, List, Dict, Optional

from . import __version__
from .config import GenerationConfig, DEFAULT_GROUND_LEVEL, FLOODFILL_TIMEOUT
from .io.terrain_loader import load_terrain
from .io.osm_parser import parse_osm_file
from .models.terrain import Ground
from .models.world import WorldEditor
from .processing.element_filter import route_elements
from .generators.building_generator import generate_buildings, generate_building_from_relation
from .generators.doors import generate_doors

REPORT_FILENAME = "report.json"
LOG_FILENAME = "voxel_buildings.log"


@dataclass
class PipelineStats:
    """Statistics from the pipeline run."""
    ways_parsed: int = 0
    relations_parsed: int = 0
    tagged_nodes_parsed: int = 0
    building_relations: int = 0
    building_ways: int = 0
    door_nodes: int = 0
    elements_processed: int = 0  # Produced at least one write
    elements_skipped: int = 0    # Produced no writes (silent skip)
    elements_failed: int = 0     # Raised an exception
    elements_ignored: int = 0    # Not routed to any generator
    voxel_writes: int = 0
    voxels_placed: int = 0
    writes_rejected: int = 0
    writes_dropped: int = 0
    terrain_cells: int = 0
    processing_time_ms: int = 0
    block_counts: Dict[str, int] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)


@dataclass
class PipelineReport:
    """Report from pipeline run."""
    version: str
    success: bool
    stats: PipelineStats
    output_files: List[str]
    errors: List[str] = field(default_factory=list)
    config_used: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PipelineResult:
    """
    Complete result of pipeline execution.

    Attributes:
        success: Whether pipeline completed without errors
        report: Detailed statistics and metadata
        world: The generated world (None if the run failed before synthesis)
        report_path: Path to the JSON report
    """
    success: bool
    report: PipelineReport
    world: Optional[WorldEditor] = None
    report_path: Optional[str] = None


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configure logging to console and optionally to file.

    Args:
        verbose: If True, use DEBUG level; otherwise INFO
        log_file: Optional path to log file. If provided, logs will be written to file.
    """
    level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if log_file else level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)  # Always log DEBUG to file
        file_formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)


def _config_used(config: GenerationConfig) -> Dict[str, Any]:
    """Capture the settings that shape the output, for reproducibility."""
    return {
        'osm_path': config.osm_path,
        'terrain_path': config.terrain_path,
        'scale': config.scale,
        'winter': config.winter,
        'floodfill_timeout': config.floodfill_timeout,
        'ground_level': config.ground_level,
        'terrain_vertical_scale': config.terrain_vertical_scale,
        'min_y': config.min_y,
        'max_y': config.max_y,
        'seed': config.seed,
    }


def _write_report(report: PipelineReport, output_dir: str) -> str:
    """Save the report JSON and return its path."""
    report_path = os.path.join(output_dir, REPORT_FILENAME)
    report.output_files.append(report_path)
    with open(report_path, 'w', encoding='utf-8') as f:
        json.dump(asdict(report), f, indent=2)
    return report_path


def _failed_result(
    config: GenerationConfig,
    stats: PipelineStats,
    errors: List[str]
) -> PipelineResult:
    """Build and save the report of a run that stopped early."""
    report = PipelineReport(
        version=__version__,
        success=False,
        stats=stats,
        output_files=[],
        errors=errors,
        config_used=_config_used(config),
    )
    report_path = _write_report(report, config.output_dir)
    return PipelineResult(success=False, report=report, report_path=report_path)


def run_pipeline(config: GenerationConfig) -> PipelineResult:
    """
    Run the complete building generation pipeline.

    Steps:
    1. Load terrain grid (or use flat ground)
    2. Parse and project OSM elements
    3. Route elements to generators
    4. Synthesize building relations, building ways and doors
    5. Generate report

    A failure while synthesizing one element is logged and counted;
    the run continues with the next element.

    Args:
        config: Generation configuration

    Returns:
        PipelineResult with report and the generated world
    """
    logger = logging.getLogger(__name__)

    start_time = time.time()
    stats = PipelineStats()
    errors: List[str] = []

    os.makedirs(config.output_dir, exist_ok=True)

    # Step 1: Ground
    if config.terrain_path:
        logger.info("Loading terrain grid")
        try:
            heightmap = load_terrain(
                config.terrain_path,
                ground_level=config.ground_level,
                vertical_scale=config.terrain_vertical_scale,
            )
        except Exception as e:
            errors.append(f"Failed to load terrain: {e}")
            return _failed_result(config, stats, errors)

        stats.terrain_cells = heightmap.width * heightmap.depth
        ground = Ground(config.ground_level, heightmap)
    else:
        logger.info(f"No terrain given, using flat ground at y={config.ground_level}")
        ground = Ground(config.ground_level)

    # Step 2: Parse OSM
    logger.info("Parsing OSM data")
    try:
        parse_result = parse_osm_file(config.osm_path, scale=config.scale)
    except Exception as e:
        errors.append(f"Failed to parse OSM: {e}")
        return _failed_result(config, stats, errors)

    stats.ways_parsed = len(parse_result.ways)
    stats.relations_parsed = len(parse_result.relations)
    stats.tagged_nodes_parsed = len(parse_result.nodes)
    stats.warnings.extend(parse_result.warnings)

    # Step 3: Route
    routed = route_elements(parse_result.ways, parse_result.relations, parse_result.nodes)
    stats.building_relations = len(routed.relations)
    stats.building_ways = len(routed.ways)
    stats.door_nodes = len(routed.doors)
    stats.elements_ignored = len(routed.ignored)

    # Step 4: Synthesize
    logger.info(
        f"Generating {stats.building_relations} relations, "
        f"{stats.building_ways} ways, {stats.door_nodes} doors"
    )

    editor = WorldEditor(min_y=config.min_y, max_y=config.max_y)
    rng = random.Random(config.seed) if config.seed is not None else None

    jobs = (
        [(f"relation {r.id}", generate_building_from_relation, (editor, r, ground, config, rng))
         for r in routed.relations] +
        [(f"way {w.id}", generate_buildings, (editor, w, ground, config, None, rng))
         for w in routed.ways] +
        [(f"node {n.id}", generate_doors, (editor, n, ground))
         for n in routed.doors]
    )

    for label, generator, args in jobs:
        writes_before = editor.stats.writes_requested
        try:
            generator(*args)
        except Exception as e:
            stats.elements_failed += 1
            stats.warnings.append(f"Failed to generate {label}: {e}")
            logger.warning(f"Failed to generate {label}: {e}")
            continue

        if editor.stats.writes_requested > writes_before:
            stats.elements_processed += 1
        else:
            stats.elements_skipped += 1

    stats.voxel_writes = editor.stats.writes_requested
    stats.voxels_placed = len(editor)
    stats.writes_rejected = editor.stats.writes_rejected
    stats.writes_dropped = editor.stats.writes_dropped
    stats.block_counts = dict(editor.block_counts().most_common(config.report_top_n))

    if stats.writes_dropped:
        logger.warning(
            f"{stats.writes_dropped} writes fell outside the world "
            f"(y {config.min_y}..{config.max_y})"
        )

    # Step 5: Report
    stats.processing_time_ms = int((time.time() - start_time) * 1000)

    report = PipelineReport(
        version=__version__,
        success=len(errors) == 0,
        stats=stats,
        output_files=[],
        errors=errors,
        config_used=_config_used(config),
    )
    report_path = _write_report(report, config.output_dir)
    logger.info(f"Report saved to {report_path}")

    logger.info(
        f"Pipeline completed in {stats.processing_time_ms}ms: "
        f"{stats.elements_processed} elements, {stats.voxels_placed} voxels"
    )

    return PipelineResult(
        success=report.success,
        report=report,
        world=editor,
        report_path=report_path,
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        description='Voxel Buildings Generator - Generate voxel buildings from OSM'
    )

    parser.add_argument(
        '--osm',
        required=True,
        help='OSM XML file with the buildings to generate'
    )

    parser.add_argument(
        '--terrain',
        default=None,
        help='ESRI ASCII elevation grid (default: flat ground)'
    )

    parser.add_argument(
        '--output-dir',
        default='./output',
        help='Output directory for the report and log (default: ./output)'
    )

    parser.add_argument(
        '--scale',
        type=float,
        default=1.0,
        help='Blocks per metre, also scales building heights (default: 1.0)'
    )

    parser.add_argument(
        '--winter',
        action='store_true',
        help='Put snow layers on roofs'
    )

    parser.add_argument(
        '--timeout',
        type=float,
        default=FLOODFILL_TIMEOUT,
        help=f'Time budget in seconds for one interior fill (default: {FLOODFILL_TIMEOUT})'
    )

    parser.add_argument(
        '--ground-level',
        type=int,
        default=DEFAULT_GROUND_LEVEL,
        help=f'Elevation of flat ground / lowest terrain cell (default: {DEFAULT_GROUND_LEVEL})'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for reproducible block palettes (default: unseeded)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--no-log-file',
        action='store_true',
        help='Disable log file output (only console)'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Create output directory early so we can put log file there
    os.makedirs(args.output_dir, exist_ok=True)

    log_file = None
    if not args.no_log_file:
        log_file = os.path.join(args.output_dir, LOG_FILENAME)

    setup_logging(args.verbose, log_file)

    try:
        config = GenerationConfig(
            osm_path=args.osm,
            terrain_path=args.terrain,
            output_dir=args.output_dir,
            scale=args.scale,
            winter=args.winter,
            floodfill_timeout=args.timeout,
            ground_level=args.ground_level,
            seed=args.seed,
            verbose=args.verbose,
        )
    except ValueError as e:
        print(f"Invalid configuration: {e}")
        return 1

    try:
        result = run_pipeline(config)
        report = result.report

        if result.success:
            print(f"\nSuccess! Generated {report.stats.elements_processed} elements")
            print(f"Relations: {report.stats.building_relations}, "
                  f"ways: {report.stats.building_ways}, doors: {report.stats.door_nodes}")
            print(f"Skipped: {report.stats.elements_skipped}, failed: {report.stats.elements_failed}")
            print(f"Voxels: {report.stats.voxels_placed} placed, "
                  f"{report.stats.writes_dropped} outside the world")

            if report.stats.block_counts:
                print(f"\nMost used blocks:")
                for name, count in report.stats.block_counts.items():
                    print(f"  {name}: {count}")

            print(f"\nOutput files: {', '.join(report.output_files)}")
            if log_file:
                print(f"Log file: {log_file}")
            return 0
        else:
            print(f"\nPipeline failed with errors:")
            for error in report.errors:
                print(f"  - {error}")
            if log_file:
                print(f"See log file for details: {log_file}")
            return 1

    except Exception as e:
        logging.exception(f"Pipeline failed: {e}")
        if log_file:
            print(f"See log file for details: {log_file}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
