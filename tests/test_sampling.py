from __future__ import annotations

from alphakey.pipeline.stages import sample_background_colors, sample_positions
from conftest import make_image


def test_sample_positions_corners_then_midpoints() -> None:
    assert sample_positions(5, 4) == [
        (0, 0),
        (4, 0),
        (0, 3),
        (4, 3),
        (2, 0),
        (2, 3),
        (0, 2),
        (4, 2),
    ]


def test_samples_follow_position_order() -> None:
    image = make_image(5, 4)
    for i, (x, y) in enumerate(sample_positions(5, 4)):
        image[y, x, :3] = (i * 10, i * 10 + 1, i * 10 + 2)

    samples = sample_background_colors(image)

    assert samples == [(i * 10, i * 10 + 1, i * 10 + 2) for i in range(8)]
    assert all(isinstance(c, int) for sample in samples for c in sample)


def test_single_pixel_image_yields_eight_duplicates() -> None:
    image = make_image(1, 1, color=(9, 8, 7))

    samples = sample_background_colors(image)

    assert samples == [(9, 8, 7)] * 8


def test_two_by_two_image_overlaps_positions() -> None:
    positions = sample_positions(2, 2)
    assert len(positions) == 8
    assert set(positions) == {(0, 0), (1, 0), (0, 1), (1, 1)}


def test_custom_positions_are_clamped(logger) -> None:
    image = make_image(4, 4)
    image[3, 0, :3] = (1, 2, 3)
    logger.start_image('test')

    samples = sample_background_colors(image, positions=[(-5, 100)], logger=logger)

    assert samples == [(1, 2, 3)]
    assert logger.current_image['stages'][-1]['method'] == 'custom'
