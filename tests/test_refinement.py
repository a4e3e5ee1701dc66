from __future__ import annotations

import numpy as np
import pytest

from alphakey.pipeline.stages import refine_edges
from conftest import make_image


def _with_alpha(alpha: np.ndarray) -> np.ndarray:
    h, w = alpha.shape
    image = make_image(w, h, color=(50, 60, 70))
    image[:, :, 3] = alpha
    return image


def _reference_refine(alpha: np.ndarray, radius: int, density: float) -> np.ndarray:
    h, w = alpha.shape
    out = alpha.copy()
    window = 2 * radius + 1
    for y in range(radius, h - radius):
        for x in range(radius, w - radius):
            if alpha[y, x] == 0:
                continue
            count = 0
            for dy in range(-radius, radius + 1):
                for dx in range(-radius, radius + 1):
                    if alpha[y + dy, x + dx] > 0:
                        count += 1
            if count < window * window * density:
                out[y, x] = 0
    return out


def test_solid_region_is_kept() -> None:
    image = _with_alpha(np.full((7, 7), 255, dtype=np.uint8))

    assert refine_edges(image) == 0
    assert (image[:, :, 3] == 255).all()


def test_isolated_speckle_is_removed() -> None:
    alpha = np.zeros((7, 7), dtype=np.uint8)
    alpha[3, 3] = 255
    image = _with_alpha(alpha)

    assert refine_edges(image) == 1
    assert not image[:, :, 3].any()


@pytest.mark.parametrize('opaque, survives', [(17, False), (18, True)])
def test_density_threshold_boundary(opaque, survives) -> None:
    flat = np.zeros(25, dtype=np.uint8)
    flat[:opaque] = 255
    image = _with_alpha(flat.reshape(5, 5))

    refine_edges(image, radius=2, density=0.7)

    # only the centre pixel is far enough from every border
    assert bool(image[2, 2, 3] == 255) == survives
    assert np.array_equal(image[:, :, 3].ravel()[:12], flat[:12])


def test_border_band_is_never_modified() -> None:
    alpha = np.zeros((8, 8), dtype=np.uint8)
    alpha[0, 3] = 255
    alpha[1, 1] = 255
    alpha[6, 7] = 255
    image = _with_alpha(alpha)

    assert refine_edges(image) == 0
    assert np.array_equal(image[:, :, 3], alpha)


@pytest.mark.parametrize('size', [(1, 1), (2, 2), (4, 4), (4, 9)])
def test_small_images_are_untouched(size) -> None:
    h, w = size
    alpha = np.zeros((h, w), dtype=np.uint8)
    alpha[0, 0] = 255
    image = _with_alpha(alpha)

    assert refine_edges(image) == 0
    assert np.array_equal(image[:, :, 3], alpha)


def test_matches_snapshot_reference_and_only_erodes() -> None:
    rng = np.random.default_rng(5)
    alpha = np.where(rng.random((14, 17)) > 0.35, 255, 0).astype(np.uint8)
    image = _with_alpha(alpha)

    refine_edges(image, radius=2, density=0.7)
    result = image[:, :, 3]

    assert np.array_equal(result, _reference_refine(alpha, 2, 0.7))
    assert not (result[alpha == 0]).any()
    assert (image[:, :, :3] == (50, 60, 70)).all()


def test_radius_one_reference() -> None:
    rng = np.random.default_rng(9)
    alpha = np.where(rng.random((9, 9)) > 0.5, 128, 0).astype(np.uint8)
    image = _with_alpha(alpha)

    refine_edges(image, radius=1, density=0.5)

    assert np.array_equal(image[:, :, 3], _reference_refine(alpha, 1, 0.5))
