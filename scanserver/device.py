# device.py
#
# Process-wide access to the SANE library and the device sessions opened
# through it.  The SANE calls themselves are made by the _sane extension
# module of python-sane; for a complete understanding of SANE, consult
# the documentation at the SANE home page:
# http://www.sane-project.org/docs.html

import logging

from .errors import (AcquisitionFailed, DeviceClosed, EnumerationFailed,
                     NotFound)
from .image import frame_to_image

log = logging.getLogger(__name__)


def load_driver():
    """
    Import the _sane extension module of python-sane.

    :raises RuntimeError: If the binding is not installed.
    """
    try:
        import _sane
    except ImportError as e:
        raise RuntimeError("Cannot import _sane, install python-sane") from e
    return _sane


class SaneContext:
    """
    The SANE library, initialized once for the whole process.  Use it as
    a context manager so that :func:`exit` is called exactly once::

        with SaneContext() as context:
            with context.resolve('pixma') as device:
                ...

    `driver` is the object making the SANE calls; it defaults to the
    _sane module and may be replaced by anything exposing the same API.
    """

    def __init__(self, driver=None):
        self.driver = driver if driver is not None else load_driver()
        self.version = None

    def init(self):
        """
        Initialize SANE.

        :returns: A tuple ``(sane_ver, ver_maj, ver_min, ver_patch)``.
        :raises EnumerationFailed: If SANE cannot be initialized.
        """
        try:
            self.version = self.driver.init()
        except self.driver.error as e:
            raise EnumerationFailed("Cannot initialize SANE: %s" % e) from e
        log.debug("SANE version %s", self.version)
        return self.version

    def exit(self):
        """
        Exit SANE.  Every device must be closed before.
        """
        if self.version is not None:
            self.driver.exit()
            self.version = None

    def __enter__(self):
        self.init()
        return self

    def __exit__(self, *exc_info):
        self.exit()

    def get_devices(self, local_only=False):
        """
        Return a list of 4-tuples ``(device_name, vendor, model, type)``
        for the available scanning devices.

        :raises EnumerationFailed: If the SANE library reports an error.
        """
        try:
            return list(self.driver.get_devices(local_only))
        except self.driver.error as e:
            raise EnumerationFailed("Cannot list devices: %s" % e) from e

    def open(self, devname):
        """
        Open the device with the exact name `devname`.

        :returns: A :class:`Device`.
        :raises _sane.error: If SANE cannot open the device.
        """
        return Device(self, devname, self.driver._open(devname))

    def resolve(self, identifier):
        return resolve(self, identifier)


def resolve(context, identifier):
    """
    Open a device by name, tolerating partial names.  The exact name is
    tried first; if that fails, the first device in enumeration order
    whose name contains `identifier` is opened.

    :returns: An open :class:`Device`.
    :raises NotFound: If no device matches or the match cannot be opened.
    :raises EnumerationFailed: If the device list cannot be read.
    """
    try:
        return context.open(identifier)
    except context.driver.error as e:
        log.debug("Cannot open %s directly: %s", identifier, e)

    matches = [dev[0] for dev in context.get_devices()
               if identifier in dev[0]]
    if not matches:
        raise NotFound("No device named %s" % identifier)
    if len(matches) > 1:
        log.warning("Device name %s is ambiguous (%s), using %s",
                    identifier, ', '.join(matches), matches[0])
    try:
        return context.open(matches[0])
    except context.driver.error as e:
        raise NotFound("Cannot open device %s: %s" % (matches[0], e)) from e


class Device:
    """
      Class representing an open SANE device.  It has the following
      attributes:

      * `name`           -- The device name, as passed to SANE's open.
      * `sane_signature` -- The tuple ``(name, vendor, model, type)``.
      * `vendor`, `model`, `type` -- The fields of the signature.

      The signature is read from the device list on first use only, so
      opening a device by its exact name never enumerates devices.

      The device must be closed exactly once, best by using it as a
      context manager.  Every other method raises :class:`DeviceClosed`
      afterwards.
    """

    def __init__(self, context, name, dev):
        self.context = context
        self.name = name
        self._dev = dev
        self._signature = None

    @property
    def error(self):
        """The exception class the SANE binding raises."""
        return self.context.driver.error

    @property
    def dev(self):
        if self._dev is None:
            raise DeviceClosed("Device %s is closed" % self.name)
        return self._dev

    @property
    def closed(self):
        return self._dev is None

    @property
    def sane_signature(self):
        if self._signature is None:
            for dev in self.context.get_devices():
                if dev[0] == self.name:
                    self._signature = tuple(dev)
                    break
            else:
                raise NotFound("No such scan device '%s'" % self.name)
        return self._signature

    @property
    def vendor(self):
        return self.sane_signature[1]

    @property
    def model(self):
        return self.sane_signature[2]

    @property
    def type(self):
        return self.sane_signature[3]

    def get_options(self):
        """
        :returns: A list of tuples describing all the available options.
        :raises EnumerationFailed: If the device cannot list its options.
        """
        try:
            return self.dev.get_options()
        except self.error as e:
            raise EnumerationFailed("Cannot read options of %s: %s"
                                    % (self.name, e)) from e

    def get_option(self, index):
        """
        :raises _sane.error: If the value cannot be read; the caller knows
                             the option name to report.
        """
        return self.dev.get_option(index)

    def set_option(self, index, value):
        """
        :returns: The SANE info bits of the write (``INFO_INEXACT``,
                  ``INFO_RELOAD_OPTIONS``, ``INFO_RELOAD_PARAMS``).
        """
        return self.dev.set_option(index, value)

    def set_auto_option(self, index):
        return self.dev.set_auto_option(index)

    def start(self):
        """
        Initiate a scanning operation.

        :raises AcquisitionFailed: If the device refuses to start.
        """
        try:
            self.dev.start()
        except self.error as e:
            raise AcquisitionFailed("Cannot start scan on %s: %s"
                                    % (self.name, e)) from e

    def snap(self):
        """
        Read image data and return a ``PIL.Image`` object. An RGB image is
        returned for three-sample frames, an L image otherwise.  16-bit
        samples are scaled down to 8 bits.

        :returns: A ``PIL.Image`` object.
        :raises AcquisitionFailed: If the device reports an error or
                                   returns no data.
        """
        try:
            frame = self.dev.snap(False)
        except self.error as e:
            raise AcquisitionFailed("Scan on %s failed: %s"
                                    % (self.name, e)) from e
        return frame_to_image(*frame)

    def scan(self):
        """
        Convenience method which calls :func:`Device.start` followed by
        :func:`Device.snap`.
        """
        self.start()
        return self.snap()

    def close(self):
        """
        Close the scanning device.  Closing twice is harmless.

        :raises AcquisitionFailed: If SANE reports an error while closing;
                                   the device counts as closed anyway.
        """
        if self._dev is None:
            return
        dev, self._dev = self._dev, None
        try:
            dev.close()
        except self.error as e:
            raise AcquisitionFailed("Cannot close device %s: %s"
                                    % (self.name, e)) from e
        log.debug("Closed device %s", self.name)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __repr__(self):
        state = 'closed' if self.closed else 'open'
        return '<Device %s (%s)>' % (self.name, state)
