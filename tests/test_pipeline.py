"""
Tests for the generation runner.
"""

import json

import matplotlib.image as mpimg
import numpy as np

from wangtiles import TilesetRunner
from wangtiles.config import Config, OutputConfig
from wangtiles.terrain import Atom, AtomId, Settings


def test_run_writes_outputs(tmp_path, overlay_db):
    config = Config(output=OutputConfig(image_name='terrain'), random_seed=42)
    result = TilesetRunner(config).run(overlay_db, tmp_path)

    assert result.success, result.error
    assert result.image_size == (216, 144)
    assert result.tile_count == 32
    assert result.fence_count > 0

    assert (tmp_path / 'terrain.png').exists()
    assert (tmp_path / 'terrain.tsx').exists()
    assert (tmp_path / 'logs.json').exists()

    image = mpimg.imread(str(tmp_path / 'terrain.png'))
    assert image.shape == (144, 216, 4)

    tsx = (tmp_path / 'terrain.tsx').read_text()
    assert 'source="terrain.png"' in tsx

    with open(tmp_path / 'logs.json') as f:
        log = json.load(f)

    assert log['success']
    assert log['seed'] == 42
    assert set(log['runtimes']) == {'synthesis', 'colorization', 'export'}


def test_run_is_reproducible(tmp_path, db):
    config = Config(random_seed=7)

    TilesetRunner(config).run(db, tmp_path / 'a')
    TilesetRunner(config).run(db, tmp_path / 'b')

    a = mpimg.imread(str(tmp_path / 'a' / 'tileset.png'))
    b = mpimg.imread(str(tmp_path / 'b' / 'tileset.png'))

    assert np.array_equal(a, b)
    assert (tmp_path / 'a' / 'tileset.tsx').read_text() == (tmp_path / 'b' / 'tileset.tsx').read_text()


def test_run_reports_capacity_error(tmp_path, overlay_db):
    overlay_db.atoms.append(Atom(id=AtomId.from_name('B')))

    result = TilesetRunner(Config(random_seed=1)).run(overlay_db, tmp_path)

    assert not result.success
    assert 'Too many atoms' in result.error
    assert not (tmp_path / 'tileset.png').exists()

    with open(tmp_path / 'logs.json') as f:
        assert json.load(f)['error'] == result.error


def test_run_empty_atlas(tmp_path, overlay_db):
    overlay_db.atoms = []
    overlay_db.wang2 = []
    overlay_db.settings = Settings(max_atom_count=0, max_wang2_count=0, max_wang3_count=0)

    result = TilesetRunner(Config()).run(overlay_db, tmp_path)

    assert not result.success
    assert 'Empty atlas' in result.error


def test_run_without_log(tmp_path, overlay_db):
    config = Config(output=OutputConfig(write_log=False))
    result = TilesetRunner(config).run(overlay_db, tmp_path)

    assert result.success
    assert not (tmp_path / 'logs.json').exists()
    assert 'log' not in result.files


def test_check(db):
    report = TilesetRunner(Config(random_seed=3)).check(db, check_borders=True)

    assert report.is_valid
    assert report.tileset_count == 7


def test_run_figure_uses_written_atlas(tmp_path, overlay_db):
    figure = tmp_path / 'figure.png'
    result = TilesetRunner(Config(random_seed=None)).run(overlay_db, tmp_path / 'out', figure_path=figure)

    assert result.success, result.error
    assert figure.exists()
    assert result.files['figure'] == str(figure)

    with open(tmp_path / 'out' / 'logs.json') as f:
        assert 'figure' in json.load(f)['files']
