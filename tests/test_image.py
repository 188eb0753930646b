"""Tests for scanserver.image: raw frames to arrays and images."""

import numpy
import pytest

from conftest import RGB_PIXELS
from scanserver.errors import AcquisitionFailed
from scanserver.image import frame_to_array, frame_to_image


class TestFrameToArray:

    def test_shape(self):
        arr = frame_to_array(RGB_PIXELS, 2, 2, 3, 1)
        assert arr.shape == (2, 2, 3)
        assert arr.dtype == numpy.uint8
        assert list(arr[1, 0]) == [0, 0, 255]

    def test_sixteen_bit(self):
        data = numpy.array([0, 65535, 256, 512], numpy.uint16).tobytes()
        arr = frame_to_array(data, 2, 2, 1, 2)
        assert arr.dtype == numpy.uint16

    def test_empty(self):
        with pytest.raises(AcquisitionFailed, match='no data'):
            frame_to_array(b'', 2, 2, 3, 1)

    def test_bad_sample_size(self):
        with pytest.raises(AcquisitionFailed):
            frame_to_array(RGB_PIXELS, 2, 2, 3, 4)

    def test_short_frame(self):
        with pytest.raises(AcquisitionFailed):
            frame_to_array(RGB_PIXELS[:-3], 2, 2, 3, 1)


class TestFrameToImage:

    def test_rgb(self):
        image = frame_to_image(RGB_PIXELS, 2, 2, 3, 1)
        assert image.mode == 'RGB'
        assert image.getpixel((0, 0)) == (255, 0, 0)
        assert image.getpixel((1, 1)) == (255, 255, 255)

    def test_gray_sixteen_bit_keeps_high_byte(self):
        data = numpy.array([0, 65535, 256, 512], numpy.uint16).tobytes()
        image = frame_to_image(data, 2, 2, 1, 2)
        assert image.mode == 'L'
        assert list(numpy.asarray(image).ravel()) == [0, 255, 1, 2]
