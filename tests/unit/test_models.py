from __future__ import annotations

import dataclasses

import pytest

from cluster_log.models.core import Frame, Pixel
from cluster_log.models.errors import PixelNotFoundError


def test_pixel_defaults_and_linear_index() -> None:
    assert Pixel() == Pixel(0, 0, 0)
    assert Pixel(19, 0, 55).linear_index == 19
    assert Pixel(3, 4, 2).linear_index == 256 * 4 + 3


def test_pixel_is_immutable() -> None:
    pixel = Pixel(1, 2, 3)
    with pytest.raises(dataclasses.FrozenInstanceError):
        pixel.x = 5  # type: ignore[misc]


def test_frame_defaults() -> None:
    frame = Frame()
    assert frame.capture_time == 0.0
    assert frame.running_time == 0.0
    assert len(frame) == 0


def test_frame_does_not_accept_external_pixel_dict() -> None:
    with pytest.raises(TypeError):
        Frame(_pixels={1: Pixel()})  # type: ignore[call-arg]

    first, second = Frame(), Frame()
    first.set_pixel(1, Pixel(1, 1, 1))
    assert len(second) == 0


def test_set_pixel_overwrites_existing_key() -> None:
    frame = Frame()
    frame.set_pixel(1, Pixel(1, 1, 1))
    frame.set_pixel(1, Pixel(2, 2, 2))
    assert frame.get_pixel(1) == Pixel(2, 2, 2)
    assert len(frame) == 1


def test_get_pixel_fails_on_empty_frame() -> None:
    with pytest.raises(PixelNotFoundError) as exc:
        Frame().get_pixel(1)
    assert exc.value.key == 1
    assert isinstance(exc.value, KeyError)


def test_get_pixel_fails_on_missing_key() -> None:
    frame = Frame()
    frame.set_pixel(1, Pixel(1, 1, 1))
    with pytest.raises(PixelNotFoundError):
        frame.get_pixel(2)


def test_pixels_view_is_read_only() -> None:
    frame = Frame()
    frame.set_pixel(1, Pixel(1, 1, 1))
    with pytest.raises(TypeError):
        frame.pixels[2] = Pixel()  # type: ignore[index]


def test_describe_lists_metadata_then_pixels_in_key_order() -> None:
    frame = Frame(capture_time=1335967757.29, running_time=0.1)
    frame.set_pixel(2, Pixel(3, 4, 2))
    frame.set_pixel(1, Pixel(19, 0, 55))

    text = frame.describe().splitlines()

    assert text == [
        'Capture time: 1335967757.29',
        'Running time: 0.1',
        'No. 1 pixel: x=19 y=0 count=55 index=19',
        'No. 2 pixel: x=3 y=4 count=2 index=1027',
    ]
