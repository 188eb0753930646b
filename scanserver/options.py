# options.py
#
# The options a device declares, their constraints, and the catalog of
# settable options the negotiator works from.

import logging
import math
import sys

from .errors import UnknownOption
from .values import (TYPE_FIXED, TYPE_GROUP, TYPE_INT, TYPE_STR,
                     TYPE_STRING, UNIT_NAMES, VALUE_TYPES, is_active,
                     is_automatic, is_settable)

log = logging.getLogger(__name__)

# Fraction of a quantization step a real value may be off the grid.
QUANT_TOLERANCE = 1e-9


class Range:
    """
    A range constraint: any value from `min` to `max` inclusive, on the
    grid ``min + k * quant`` when `quant` is nonzero.
    """

    __slots__ = ('min', 'max', 'quant')

    def __init__(self, min, max, quant=0):
        self.min = min
        self.max = max
        self.quant = quant

    def __contains__(self, value):
        if not self.min <= value <= self.max:
            return False
        if not self.quant:
            return True
        if isinstance(value, int) and isinstance(self.min, int) and \
                isinstance(self.quant, int):
            return (value - self.min) % self.quant == 0
        steps = (value - self.min) / self.quant
        return math.isclose(steps, round(steps), rel_tol=0,
                            abs_tol=QUANT_TOLERANCE)

    def __eq__(self, other):
        if not isinstance(other, Range):
            return NotImplemented
        return (self.min, self.max, self.quant) == \
            (other.min, other.max, other.quant)

    def __repr__(self):
        return 'Range(%r, %r, %r)' % (self.min, self.max, self.quant)


class Option:
    """
    Class representing a SANE option, built from one of the tuples
    returned by the device's ``get_options()``.

    The :class:`Option` class has the following attributes:

      * `index` -- Number from ``0`` to ``n``, giving the option number.
      * `name` -- A string uniquely identifying the option.
      * `py_name` -- `name` with dashes replaced by underscores.
      * `title` -- Single-line string containing a title for the option.
      * `desc` -- A long string describing the option, useful as a help
                  message.
      * `type` -- Type of this option: ``TYPE_BOOL``, ``TYPE_INT``,
                  ``TYPE_STRING``, etc.
      * `unit` -- Units of this option. ``UNIT_NONE``, ``UNIT_PIXEL``, etc.
      * `size` -- Size of the value in bytes.
      * `cap` -- Capabilities available: ``CAP_EMULATED``,
                 ``CAP_SOFT_SELECT``, etc.
      * `group` -- Title of the option group this option belongs to.
      * `constraint` -- Constraint on values. Possible values:

        - None : No constraint
        - :class:`Range` : Range with optional quantization
        - list of numbers or strings: listed permitted values

    Options are snapshots: setting a value on the device never changes an
    existing :class:`Option`.
    """

    def __init__(self, args, group=''):
        self.index, self.name = args[0], args[1]
        self.title, self.desc = args[2], args[3]
        self.type, self.unit = args[4], args[5]
        self.size, self.cap = args[6], args[7]
        self.group = group

        constraint = args[8]
        if isinstance(constraint, tuple):
            constraint = Range(*constraint)
        elif constraint is not None:
            constraint = list(constraint)
        self.constraint = constraint

        if not isinstance(self.name, str):
            self.py_name = str(self.name)
        else:
            self.py_name = self.name.replace("-", "_")

    def is_active(self):
        return is_active(self.cap)

    def is_settable(self):
        return is_settable(self.cap)

    def is_automatic(self):
        return is_automatic(self.cap)

    def accepts(self, value):
        """
        Check `value` against the option's constraint.  The automatic
        value is accepted only if the option supports it; other values
        must be plain Python values of the option's type.

        :returns: `None` if the value is legal, otherwise a string
                  saying why it is not.
        """
        if value.is_auto():
            if self.is_automatic():
                return None
            return "option has no automatic value"
        data = value.data
        if isinstance(self.constraint, Range):
            if self.type not in (TYPE_INT, TYPE_FIXED):
                return None
            if data in self.constraint:
                return None
            rng = self.constraint
            if rng.quant:
                return "%r is not in %r..%r in steps of %r" \
                    % (data, rng.min, rng.max, rng.quant)
            return "%r is not in %r..%r" % (data, rng.min, rng.max)
        if self.constraint is not None:
            textual = self.type == TYPE_STRING
            if any(isinstance(legal, str) == textual and data == legal
                   for legal in self.constraint):
                return None
            return "%r is not one of %s" \
                % (data, '|'.join(str(v) for v in self.constraint))
        return None

    def constraint_str(self):
        """
        Render the legal values, e.g. ``auto|100..1200 in steps of 100``
        or ``Lineart|Gray|Color``.
        """
        parts = []
        if self.is_automatic():
            parts.append('auto')
        if isinstance(self.constraint, Range):
            rng = self.constraint
            s = '%s..%s' % (rng.min, rng.max)
            if rng.quant and self.type in (TYPE_INT, TYPE_FIXED):
                s += ' in steps of %s' % rng.quant
            parts.append(s)
        elif self.constraint is not None:
            parts.extend(str(v) for v in self.constraint)
        return '|'.join(parts)

    def unit_str(self):
        return UNIT_NAMES.get(self.unit, '')

    def __repr__(self):
        return ("\n"
                "Name:      %s\n"
                "Index:     %d\n"
                "Title:     %s\n"
                "Desc:      %s\n"
                "Group:     %s\n"
                "Type:      %s\n"
                "Unit:      %s\n"
                "Constr:    %s\n"
                "active:    %s\n"
                "settable:  %s\n" % (self.py_name, self.index, self.title,
                                     self.desc, self.group,
                                     TYPE_STR.get(self.type, self.type),
                                     self.unit_str() or 'none',
                                     repr(self.constraint),
                                     'yes' if self.is_active() else 'no',
                                     'yes' if self.is_settable() else 'no'))


def read_options(device):
    """
    Enumerate the options of `device` in device order, attaching to each
    the title of the group entry preceding it.  Group entries themselves
    are not returned.
    """
    options = []
    group = ''
    for t in device.get_options():
        o = Option(t, group)
        if o.type == TYPE_GROUP:
            group = o.title
            continue
        options.append(o)
    return options


class OptionCatalog:
    """
    Snapshot of the settable options of a device, in the order the
    device reports them.  Take a new snapshot to observe changes caused
    by option writes.
    """

    def __init__(self, options):
        self.options = tuple(options)
        self._by_name = {}
        for o in self.options:
            self._by_name.setdefault(o.name, o)
            self._by_name.setdefault(o.py_name, o)

    @classmethod
    def list_settable(cls, device):
        return cls(o for o in read_options(device) if o.is_settable())

    def __iter__(self):
        return iter(self.options)

    def __len__(self):
        return len(self.options)

    def __contains__(self, name):
        return name in self._by_name

    def find(self, name):
        """
        :returns: The :class:`Option` called `name` (or its `py_name`).
        :raises UnknownOption: If there is none.
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownOption(name) from None

    @property
    def names(self):
        return [o.name for o in self.options]


def current_value(device, option):
    """
    Read the current value of `option`.

    :returns: The value, or `None` if the option has no value (buttons),
              is inactive or cannot be read.
    """
    if option.type not in VALUE_TYPES or not option.is_active():
        return None
    try:
        return device.get_option(option.index)
    except device.error as e:
        log.debug("Cannot read option %s: %s", option.name, e)
        return None


def format_option(option, value):
    if value is not None:
        current = '[%s]' % (value,)
    elif not option.is_active():
        current = '[inactive]'
    else:
        current = '[?]'
    line = '    --%s' % option.name
    constraint = option.constraint_str()
    if constraint:
        line += ' ' + constraint
    if option.type in VALUE_TYPES:
        line += ' ' + current
    unit = option.unit_str()
    if unit:
        line += ' ' + unit
    if option.desc:
        line += '\n        %s' % option.desc
    return line


def show_options(device, out=None):
    """
    Print the settable options of `device`, grouped as the device groups
    them, with their legal values, current value and unit.
    """
    out = out if out is not None else sys.stdout
    catalog = OptionCatalog.list_settable(device)
    print("Options for device %s:" % device.name, file=out)
    last_group = None
    for o in catalog:
        if o.group != last_group:
            print("  %s:" % (o.group or 'General'), file=out)
            last_group = o.group
        print(format_option(o, current_value(device, o)), file=out)
    return catalog
