#!/usr/bin/env python3
"""
Quick Test Script for the Wang Tileset Generator
================================================

Tests all modules can be imported and a small project goes through the
whole pipeline.
"""

import sys
import os
import tempfile
import traceback

# Fix path - add parent directory so 'wangtiles' package is found
script_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(script_dir)
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

import matplotlib
matplotlib.use('Agg')


def test_imports():
    """Test all module imports"""
    print("Testing imports...")

    from wangtiles.config import Config, OutputConfig, PreviewConfig, VisualizationConfig
    print("  ✓ config")

    from wangtiles.terrain import TilesetData, Atom, Wang2, Wang3, load_project, save_project
    print("  ✓ terrain")

    from wangtiles.geometry import Tile, Fence, make_line, generate_split
    print("  ✓ geometry")

    from wangtiles.layout import Tileset, generate_two_corners_wang_tileset
    print("  ✓ layout")

    from wangtiles.colorize import colorize_tile, generate_wang2_preview
    print("  ✓ colorize")

    from wangtiles.export import generate_tilesets, generate_tileset_xml
    print("  ✓ export")

    from wangtiles.metrics import validate_tilesets, compute_tileset_stats
    print("  ✓ metrics")

    from wangtiles.visualization import TilesetVisualizer
    print("  ✓ visualization")

    from wangtiles.pipeline import TilesetRunner
    print("  ✓ pipeline")

    print("All imports successful!\n")


def test_config():
    """Test configuration"""
    print("Testing configuration...")

    from wangtiles.config import Config

    config = Config()

    assert config.output.directory == 'output', "Default output directory should be 'output'"
    assert config.output.image_name == 'tileset', "Default image name should be 'tileset'"
    assert config.preview.gutter == 1, "Default gutter should be 1"
    assert config.random_seed is None, "Default seed should be None"

    restored = Config.from_dict(config.to_dict())
    assert restored == config, "Config should survive a dict round trip"

    custom = Config.from_dict({'random_seed': 7, 'output': {'image_name': 'terrain'}})
    assert custom.random_seed == 7
    assert custom.output.image_name == 'terrain'
    assert custom.output.directory == 'output', "Missing keys keep their defaults"

    print(f"  Output: {config.output.directory}/{config.output.image_name}.png")
    print("Configuration test passed!\n")


def test_small_project():
    """Test the pipeline on a two-atom project"""
    print("Testing small project...")

    from wangtiles import (
        Atom, AtomId, Border, Config, Settings, TileSettings, TilesetData, TilesetRunner, Wang2,
    )

    grass = Atom(id=AtomId.from_name('Grass'), color=(0.2, 0.7, 0.2, 1.0))
    water = Atom(id=AtomId.from_name('Water'), color=(0.1, 0.3, 0.9, 1.0))

    data = TilesetData(
        settings=Settings(max_atom_count=2, max_wang2_count=1, max_wang3_count=0,
                          tile=TileSettings(size=16, spacing=1)),
        atoms=[grass, water],
        wang2=[Wang2(borders=(Border(id=grass.id), Border(id=water.id)))],
    )

    with tempfile.TemporaryDirectory() as directory:
        result = TilesetRunner(Config(random_seed=42)).run(data, directory)

        print(f"  Atlas: {result.image_size[0]}x{result.image_size[1]}px")
        print(f"  Tiles: {result.tile_count}")

        assert result.success, f"Generation failed: {result.error}"
        assert result.tile_count == 3 * 16, "Two atom tilesets and one wang2 tileset expected"
        assert os.path.exists(result.files['image'])

    print("Small project test passed!\n")


def run_all_tests():
    """Run all tests"""
    print("=" * 60)
    print("WANG TILESET GENERATOR - MODULE TESTS")
    print("=" * 60 + "\n")

    tests = [
        ("Imports", test_imports),
        ("Configuration", test_config),
        ("Small Project", test_small_project),
    ]

    results = []

    for name, test_func in tests:
        try:
            test_func()
            results.append((name, True, None))
        except Exception as e:
            print(f"  ✗ EXCEPTION: {e}")
            traceback.print_exc()
            results.append((name, False, str(e)))

    # Summary
    print("=" * 60)
    print("TEST SUMMARY")
    print("=" * 60)

    passed = sum(1 for _, s, _ in results if s)
    total = len(results)

    for name, success, error in results:
        status = "✓ PASS" if success else "✗ FAIL"
        print(f"  {status}: {name}")
        if error:
            print(f"         Error: {error}")

    print(f"\nTotal: {passed}/{total} tests passed")
    print("=" * 60)

    return passed == total


if __name__ == '__main__':
    success = run_all_tests()
    sys.exit(0 if success else 1)
