from __future__ import annotations

import json

import pytest

from alphakey.pipeline import PipelineLogger


def test_log_stage_requires_open_image(logger) -> None:
    with pytest.raises(RuntimeError):
        logger.log_stage('s1_grayscale', method='x')


def test_save_image_log_appends_json_lines(logger) -> None:
    assert not logger.log_file.parent.exists()

    for name in ('a.png', 'b.png'):
        logger.start_image(name)
        logger.log_stage('s2_edges', strong_edge_pixels=3)
        logger.save_image_log()

    lines = [json.loads(line) for line in logger.log_file.read_text().splitlines()]
    assert [line['image'] for line in lines] == ['a.png', 'b.png']
    assert lines[0]['stages'][0]['strong_edge_pixels'] == 3
    assert logger.current_image is None
    assert len(logger.logs) == 2


def test_save_without_image_is_noop(logger) -> None:
    logger.save_image_log()
    assert not logger.log_file.exists()


def test_debug_mode_prints_stage(tmp_path, capsys) -> None:
    logger = PipelineLogger(log_file=tmp_path / 'debug.log', debug_mode=True)
    logger.start_image('x')

    logger.log_stage('s5_combine', kept_pixels=4)

    assert '[s5_combine]' in capsys.readouterr().out


def test_verbose_controls_info_echo(tmp_path, capsys) -> None:
    quiet = PipelineLogger(log_file=tmp_path / 'q.log')
    loud = PipelineLogger(log_file=tmp_path / 'l.log', verbose=True)

    quiet.log_info('hidden')
    loud.log_info('shown')
    out = capsys.readouterr().out

    assert 'hidden' not in out
    assert 'INFO: shown' in out


def test_in_memory_history_is_bounded(tmp_path) -> None:
    logger = PipelineLogger(log_file=tmp_path / 'debug.log', max_records=3)

    for i in range(8):
        logger.start_image(f'img{i}')
        logger.finish_image()

    assert [record['image'] for record in logger.logs] == ['img5', 'img6', 'img7']
