# pipeline.py
#
# One scan from a configured device to an image file.

import logging
import os

from . import negotiate
from .encoders import resolver_for
from .errors import IOFailure, ScanError
from .options import show_options

log = logging.getLogger(__name__)


def acquire(device, request, path, show=False, out=None):
    """
    Configure `device` with `request`, scan one image and write it to
    `path` in the format named by its extension.

    The format is checked before the device is touched.  The output file
    is closed on every path; if any step fails after it was created, the
    incomplete file is removed.  Nothing is retried.

    :param show: Print the device's options before configuring it.
    :returns: The scanned ``PIL.Image``.
    :raises UnsupportedFormat: If the extension of `path` is unknown.
    :raises IOFailure: If the file cannot be opened, written or closed.
    :raises UnknownOption, TypeMismatch, OptionError: From negotiation.
    :raises AcquisitionFailed: If the scan fails.
    """
    encode = resolver_for(path)

    try:
        stream = open(path, 'wb')
    except OSError as e:
        raise IOFailure("Cannot create %s: %s" % (path, e)) from e

    try:
        with stream:
            image = _scan_into(device, request, stream, encode, show, out)
    except OSError as e:
        _discard(path)
        raise IOFailure("Cannot write %s: %s" % (path, e)) from e
    except ScanError:
        _discard(path)
        raise
    log.info("Wrote %dx%d %s image to %s", image.width, image.height,
             image.mode, path)
    return image


def _scan_into(device, request, stream, encode, show, out):
    if show:
        show_options(device, out)
    negotiate.apply(device, request)
    image = device.scan()
    try:
        encode(stream, image)
    except (OSError, ValueError) as e:
        raise IOFailure("Cannot encode %s image: %s" % (image.mode, e)) from e
    return image


def _discard(path):
    try:
        os.remove(path)
    except OSError as e:
        log.warning("Cannot remove incomplete file %s: %s", path, e)


def numbered_path(path, number):
    """
    Insert `number` before the extension of `path`:
    ``numbered_path('scan.jpg', 1) == 'scan-1.jpg'``.
    """
    root, ext = os.path.splitext(path)
    return '%s-%d%s' % (root, number, ext)


def scan_devices(context, path, request, show=False, out=None):
    """
    Scan once with every available device, one after the other.  Each
    device is closed before the next one is opened.  With more than one
    device, the device number is added to the file name.

    :returns: The list of paths written.
    :raises ScanError: On the first device that fails.
    """
    resolver_for(path)
    devices = context.get_devices()
    if not devices:
        log.info("No available devices.")
    written = []
    for number, (name, vendor, model, type_) in enumerate(devices):
        log.info("Device %s is a %s %s %s", name, vendor, model, type_)
        dest = path if len(devices) == 1 else numbered_path(path, number)
        with context.resolve(name) as device:
            acquire(device, request, dest, show=show, out=out)
        written.append(dest)
    return written
