# negotiate.py
#
# Validation and writing of a requested configuration to a device.

import logging

from .errors import OptionError, TypeMismatch
from .options import OptionCatalog
from .values import (INFO_INEXACT, INFO_RELOAD_OPTIONS, KIND_FOR_TYPE,
                     KIND_INT, KIND_TEXT, TYPE_FIXED, TYPE_STR, VALUE_TYPES,
                     Value)

log = logging.getLogger(__name__)


class ConfigurationRequest:
    """
    Ordered list of ``(option name, Value)`` pairs.  The order is kept as
    given: a write may change which options are active, or their
    constraints, for the entries after it.
    """

    def __init__(self, entries=()):
        self.entries = []
        for name, value in entries:
            self.add(name, value)

    @classmethod
    def parse(cls, args):
        """
        Build a request from ``name=value`` strings as typed on the command
        line.  Values stay text until the option they are written to is
        known, see :meth:`Value.typed`.

        :raises ValueError: If a string has no ``=``.
        """
        request = cls()
        for arg in args:
            name, sep, text = arg.partition('=')
            if not sep or not name:
                raise ValueError("Expected NAME=VALUE, got %r" % arg)
            request.add(name.strip(), Value.parse(text))
        return request

    def add(self, name, value):
        self.entries.append((name, Value.of(value)))
        return self

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)

    def __repr__(self):
        return 'ConfigurationRequest(%r)' % (self.entries,)


def coerce(option, value):
    """
    Return the plain value to write to `option`.  Every difference
    between the value's kind and the option's type is an error in the
    request, with one intended exception: an int is widened to a real
    for a TYPE_FIXED option, as SANE frontends accept ``10`` for a
    fixed-point value.  No other conversion between types is done.

    :raises TypeMismatch: If the value does not fit the option's type.
    """
    expected = KIND_FOR_TYPE[option.type]
    if value.kind == expected:
        return value.data
    if value.kind == KIND_INT and option.type == TYPE_FIXED:
        return float(value.data)
    raise TypeMismatch(option.name, expected, value)


def write(device, option, value):
    """
    Validate `value` against `option` and write it to the device.

    :returns: The SANE info bits reported for the write.
    :raises TypeMismatch: If the value has the wrong type.
    :raises OptionError: If the value is refused.
    """
    if value.kind == KIND_TEXT:
        try:
            value = value.typed(option.type, option.is_automatic())
        except ValueError:
            raise TypeMismatch(option.name, KIND_FOR_TYPE[option.type],
                               value) from None
    auto = value.is_auto() and option.is_automatic()
    if not auto:
        value = Value(KIND_FOR_TYPE[option.type], coerce(option, value))
    if not option.is_active():
        raise OptionError(option.name, "inactive option")
    reason = option.accepts(value)
    if reason is not None:
        raise OptionError(option.name, reason)
    try:
        if auto:
            info = device.set_auto_option(option.index)
        else:
            info = device.set_option(option.index, value.data)
    except device.error as e:
        raise OptionError(option.name, str(e)) from e
    info = info or 0
    if info & INFO_INEXACT:
        log.info("Device rounded option %s", option.name)
    return info


def apply(device, request):
    """
    Write every entry of `request` to `device`, in order.  The first
    failure stops the negotiation; entries written before it stay
    written.

    :raises UnknownOption: If the device has no settable option of a
                           requested name.
    :raises TypeMismatch: If a value has the wrong type.
    :raises OptionError: If a value is refused.
    """
    catalog = OptionCatalog.list_settable(device)
    for name, value in request:
        option = catalog.find(name)
        if option.type not in VALUE_TYPES:
            log.info("Skipping option %s of type %s", name,
                     TYPE_STR.get(option.type, option.type))
            continue
        info = write(device, option, value)
        log.debug("Set option %s to %r", option.name, value)
        if info & INFO_RELOAD_OPTIONS:
            catalog = OptionCatalog.list_settable(device)
    return catalog
