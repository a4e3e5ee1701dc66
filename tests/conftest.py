from __future__ import annotations

import numpy as np
import pytest

from alphakey.pipeline import BackgroundRemovalPipeline, PipelineConfig, PipelineLogger


def make_image(width: int, height: int, color=(20, 20, 20), alpha: int = 255) -> np.ndarray:
    image = np.zeros((height, width, 4), dtype=np.uint8)
    image[:, :, :3] = color
    image[:, :, 3] = alpha
    return image


@pytest.fixture
def logger(tmp_path) -> PipelineLogger:
    return PipelineLogger(log_file=tmp_path / 'logs' / 'debug.log')


@pytest.fixture
def pipeline(logger) -> BackgroundRemovalPipeline:
    return BackgroundRemovalPipeline(config=PipelineConfig(), logger=logger)


@pytest.fixture
def dot_image() -> np.ndarray:
    """5x5 dark background with a single bright pixel in the middle."""
    image = make_image(5, 5, color=(20, 20, 20))
    image[2, 2, :3] = (220, 220, 220)
    return image
