# image.py
#
# Conversion of the raw frames read from a device into numpy arrays and
# PIL images.

import numpy
from PIL import Image

from .errors import AcquisitionFailed


def frame_to_array(data, width, height, samples, sample_size):
    """
    Return the frame as a 3d numpy array of the shape
    ``(height, width, samples)``.

    :raises AcquisitionFailed: If the frame is empty or has an
                               unexpected sample size.
    """
    if not data:
        raise AcquisitionFailed("Scanner returned no data")
    if sample_size == 1:
        arr = numpy.frombuffer(bytes(data), numpy.uint8)
    elif sample_size == 2:
        arr = numpy.frombuffer(bytes(data), numpy.uint16)
    else:
        raise AcquisitionFailed("Unexpected sample size: %d" % sample_size)
    if arr.size != width * height * samples:
        raise AcquisitionFailed("Frame holds %d samples, expected %dx%dx%d"
                                % (arr.size, width, height, samples))
    return numpy.reshape(arr, (height, width, samples))


def frame_to_image(data, width, height, samples, sample_size):
    """
    Return the frame as a ``PIL.Image``: RGB for three samples per
    pixel, L otherwise.  16-bit samples keep their high byte.
    """
    arr = frame_to_array(data, width, height, samples, sample_size)
    if arr.dtype == numpy.uint16:
        arr = (arr >> 8).astype(numpy.uint8)
    if samples == 3:
        mode = 'RGB'
    else:
        mode = 'L'
        arr = arr[:, :, 0]
    return Image.frombytes(mode, (width, height),
                           numpy.ascontiguousarray(arr).tobytes())
