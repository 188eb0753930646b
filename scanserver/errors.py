# errors.py
#
# Every failure the scan pipeline reports is a ScanError.  Errors coming
# from the SANE library or from Pillow are wrapped into one of the
# classes below with the original exception chained.


class ScanError(Exception):
    """Base class of all scanserver errors."""


class EnumerationFailed(ScanError):
    """The SANE library could not list the available devices."""


class NotFound(ScanError):
    """No device matches the given identifier."""


class DeviceClosed(ScanError):
    """An operation was attempted on a device that was already closed."""


class UnknownOption(ScanError):
    """The device has no settable option of that name."""

    def __init__(self, name):
        ScanError.__init__(self, "No such option: %s" % name)
        self.name = name


class TypeMismatch(ScanError):
    """
    The requested value does not match the option's declared type.  This
    is a mistake in the request, not something the device decided.
    """

    def __init__(self, name, expected, value):
        ScanError.__init__(self, "Option %s expects a %s value, got %r"
                           % (name, expected, value))
        self.name = name
        self.expected = expected
        self.value = value


class OptionError(ScanError):
    """
    A value was refused for an option, either because it violates the
    option's constraint or because the device rejected it.

    * `name` -- the option name.
    * `reason` -- text describing why the value was refused.
    """

    def __init__(self, name, reason):
        ScanError.__init__(self, "Cannot set option %s: %s" % (name, reason))
        self.name = name
        self.reason = reason


class UnsupportedFormat(ScanError):
    """The destination file name has no recognized image extension."""


class AcquisitionFailed(ScanError):
    """The device failed while producing the image."""


class IOFailure(ScanError):
    """Opening, writing or closing the destination file failed."""
