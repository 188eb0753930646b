# encoders.py
#
# Choice of the image format from the destination file name.

import os

from .errors import UnsupportedFormat


def encode_png(stream, image):
    image.save(stream, format='PNG')


def encode_jpeg(stream, image):
    # Pillow's default quality
    image.save(stream, format='JPEG')


def encode_tiff(stream, image):
    image.save(stream, format='TIFF')


ENCODERS = {'.png':  encode_png,
            '.jpg':  encode_jpeg,
            '.jpeg': encode_jpeg,
            '.tif':  encode_tiff,
            '.tiff': encode_tiff}


def resolver_for(path):
    """
    Return the function ``encode(stream, image)`` writing the format
    named by the extension of `path`.  The extension is matched without
    regard to case.

    :raises UnsupportedFormat: If the extension is missing or unknown.
    """
    ext = os.path.splitext(os.fspath(path))[1].lower()
    try:
        return ENCODERS[ext]
    except KeyError:
        raise UnsupportedFormat("Unrecognized extension for %s" % path) \
            from None
