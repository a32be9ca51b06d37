#!/usr/bin/env python3
"""
Wang Tileset Generator - Main Entry Point
==========================================

Usage:
    # Create an empty project
    python -m wangtiles.main init project.json --size 32 --spacing 1

    # Generate the atlas and its Tiled description
    python -m wangtiles.main generate project.json --seed 42 --output build/ --name terrain

    # Preview a single atom or rule
    python -m wangtiles.main preview project.json --wang2 Grass Water --output preview.png

    # Check coverage and Wang adjacency of every tileset
    python -m wangtiles.main check project.json --seed 42 --verbose

    # Rebuild the triple rules from the pairwise rules
    python -m wangtiles.main wang3 project.json

From Python:
    from wangtiles import Config, TilesetRunner, load_project

    config = Config(random_seed=42)
    result = TilesetRunner(config).run(load_project('project.json'), 'build')
"""

import argparse
import json
import logging
import sys
from pathlib import Path


def _setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


def _load(path: str):
    """Load a project, None if the file does not exist"""
    from wangtiles import load_project

    if not Path(path).exists():
        print(f"Error: Project file does not exist: {path}")
        return None

    return load_project(path)


def run_init(args):
    """Create an empty project document"""
    from wangtiles import Settings, TileSettings, TilesetData, save_project

    path = Path(args.project)

    if path.exists() and not args.force:
        print(f"Error: {path} already exists (use --force to overwrite)")
        return 1

    settings = Settings(tile=TileSettings(size=args.size, spacing=args.spacing))
    save_project(path, TilesetData(settings=settings))

    print(f"Project created: {path}")
    return 0


def run_generate(args):
    """Generate the atlas image and TSX file"""
    from wangtiles import Config, TilesetRunner

    data = _load(args.project)
    if data is None:
        return 1

    if args.config:
        with open(args.config) as f:
            config = Config.from_dict(json.load(f))
    else:
        config = Config()

    if args.seed is not None:
        config.random_seed = args.seed
    if args.output:
        config.output.directory = args.output
    if args.name:
        config.output.image_name = args.name
    config.verbose = config.verbose or args.verbose

    runner = TilesetRunner(config)
    result = runner.run(data, figure_path=args.figure)

    print("\n" + "=" * 60)
    print(f"GENERATION RESULT (seed={config.random_seed})")
    print("=" * 60)

    status_icon = "✓" if result.success else "✗"
    print(f"{status_icon} {result.atom_count} atoms, {result.wang2_count} wang2, {result.wang3_count} wang3")

    if result.success:
        width, height = result.image_size
        print(f"  Atlas: {width}x{height}px, {result.tile_count} tiles, {result.fence_count} fences")
        for kind, path in result.files.items():
            print(f"  {kind:6s}: {path}")
        print(f"  Runtime: {result.runtime:.2f}s")
    else:
        print(f"  Error: {result.error}")

    print("=" * 60)

    return 0 if result.success else 1


def run_preview(args):
    """Render a single atom or rule"""
    import numpy as np
    from wangtiles import AtomId, Config, VOID, Wang3, hash_name
    from wangtiles.colorize import generate_atom_preview, generate_wang2_preview, generate_wang3_preview
    from wangtiles.export import save_atlas
    from wangtiles.visualization import TilesetVisualizer

    data = _load(args.project)
    if data is None:
        return 1

    config = Config(random_seed=args.seed)
    rng = np.random.default_rng(config.random_seed)

    def known(name: str) -> bool:
        if name == 'Void' or data.get_atom(hash_name(name)).id.hash != VOID:
            return True
        print(f"Error: Unknown atom: {name}")
        return False

    if args.atom:
        if not known(args.atom):
            return 1
        atom = data.get_atom(hash_name(args.atom))
        colors = generate_atom_preview(atom, rng, data.settings.tile)
        title = atom.id.name

    elif args.wang2:
        id0, id1 = (hash_name(name) for name in args.wang2)
        rule = next((wang for wang in data.wang2 if wang.matches(id0, id1)), None)

        if rule is None:
            print(f"Error: No wang2 for {args.wang2[0]} and {args.wang2[1]}")
            return 1

        colors = generate_wang2_preview(rule, rng, data, gutter=config.preview.gutter)
        title = ' / '.join(border.id.name for border in rule.borders)

    else:
        if not all(known(name) for name in args.wang3):
            return 1
        wang = Wang3(ids=tuple(AtomId.from_name(name) for name in args.wang3))
        colors = generate_wang3_preview(wang, rng, data, gutter=config.preview.gutter)
        title = ' / '.join(args.wang3)

    save_atlas(args.output, colors)
    print(f"Preview saved to: {args.output}")

    if args.figure:
        visualizer = TilesetVisualizer(config.visualization)
        visualizer.save_figure(visualizer.create_preview_figure(colors, title=title), args.figure)
        print(f"Figure saved to: {args.figure}")

    return 0


def run_check(args):
    """Check coverage and Wang adjacency of every tileset"""
    from wangtiles import Config, TilesetRunner
    from wangtiles.export import AtlasCapacityError

    data = _load(args.project)
    if data is None:
        return 1

    problems = data.validate()

    config = Config(random_seed=args.seed, verbose=args.verbose)

    try:
        report = TilesetRunner(config).check(data, check_borders=args.borders)
    except AtlasCapacityError as e:
        print(f"Error: {e}")
        return 1

    print("\n" + "=" * 60)
    print("CHECK SUMMARY")
    print("=" * 60)
    print(f"Tilesets: {report.tileset_count}, tiles: {report.tile_count}")

    for title, errors in (
        ('Project', problems),
        ('Coverage', report.coverage_errors),
        ('Corners', report.corner_errors),
        ('Borders', report.border_errors),
    ):
        status_icon = "✓" if not errors else "✗"
        print(f"{status_icon} {title:10s}: {len(errors)} problem(s)")
        for error in errors[:args.max_errors]:
            print(f"    {error}")

    print("=" * 60)

    return 0 if report.is_valid and not problems else 1


def run_wang3(args):
    """Regenerate every Wang3 rule and save the project"""
    from wangtiles import save_project

    data = _load(args.project)
    if data is None:
        return 1

    data.generate_all_wang3()
    save_project(args.project, data)

    for wang in data.wang3:
        print("  " + ' / '.join(atom_id.name for atom_id in wang.ids))

    print(f"{len(data.wang3)} wang3 rule(s) saved to: {args.project}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Wang Tileset Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Init command
    init_parser = subparsers.add_parser('init', help='Create an empty project')
    init_parser.add_argument('project', type=str, help='Project file')
    init_parser.add_argument('--size', type=int, default=32, help='Tile size in pixels')
    init_parser.add_argument('--spacing', type=int, default=1, help='Tile spacing in pixels')
    init_parser.add_argument('--force', action='store_true', help='Overwrite an existing file')

    # Generate command
    gen_parser = subparsers.add_parser('generate', help='Generate the atlas and TSX file')
    gen_parser.add_argument('project', type=str, help='Project file')
    gen_parser.add_argument('--seed', type=int, help='Random seed')
    gen_parser.add_argument('--output', type=str, help='Output directory')
    gen_parser.add_argument('--name', type=str, help='Image and TSX base name')
    gen_parser.add_argument('--config', type=str, help='JSON run configuration')
    gen_parser.add_argument('--figure', type=str, help='Also save an annotated figure')
    gen_parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')

    # Preview command
    preview_parser = subparsers.add_parser('preview', help='Render a single atom or rule')
    preview_parser.add_argument('project', type=str, help='Project file')
    target = preview_parser.add_mutually_exclusive_group(required=True)
    target.add_argument('--atom', type=str, metavar='NAME', help='Atom to render')
    target.add_argument('--wang2', type=str, nargs=2, metavar=('A', 'B'), help='Pairwise rule to render')
    target.add_argument('--wang3', type=str, nargs=3, metavar=('A', 'B', 'C'), help='Triple rule to render')
    preview_parser.add_argument('--seed', type=int, help='Random seed')
    preview_parser.add_argument('--output', type=str, default='preview.png', help='Output image')
    preview_parser.add_argument('--figure', type=str, help='Also save a matplotlib figure')
    preview_parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')

    # Check command
    check_parser = subparsers.add_parser('check', help='Check coverage and Wang adjacency')
    check_parser.add_argument('project', type=str, help='Project file')
    check_parser.add_argument('--seed', type=int, help='Random seed')
    check_parser.add_argument('--borders', action='store_true',
                              help='Also compare border pixels (straight edges only)')
    check_parser.add_argument('--max_errors', type=int, default=10, help='Errors printed per check')
    check_parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')

    # Wang3 command
    wang3_parser = subparsers.add_parser('wang3', help='Rebuild wang3 rules from wang2 rules')
    wang3_parser.add_argument('project', type=str, help='Project file')
    wang3_parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    _setup_logging(getattr(args, 'verbose', False))

    if args.command == 'init':
        return run_init(args)
    elif args.command == 'generate':
        return run_generate(args)
    elif args.command == 'preview':
        return run_preview(args)
    elif args.command == 'check':
        return run_check(args)
    elif args.command == 'wang3':
        return run_wang3(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
