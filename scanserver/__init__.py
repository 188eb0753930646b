# scanserver
#
# Command-line scanning through SANE: pick a device, configure its
# options, scan one image and save it as PNG, JPEG or TIFF.

__version__ = '1.0.0'

from .device import Device, SaneContext, resolve
from .errors import (AcquisitionFailed, DeviceClosed, EnumerationFailed,
                     IOFailure, NotFound, OptionError, ScanError,
                     TypeMismatch, UnknownOption, UnsupportedFormat)
from .negotiate import ConfigurationRequest, apply
from .options import Option, OptionCatalog, Range, current_value, \
    show_options
from .pipeline import acquire, scan_devices
from .values import AUTO, Value
