# values.py
#
# SANE option types, units and capability bits, plus the tagged value
# that the negotiator writes to a device.  The numeric constants are the
# ones fixed by the SANE standard, see
# http://www.sane-project.org/html/doc011.html

TYPE_BOOL = 0
TYPE_INT = 1
TYPE_FIXED = 2
TYPE_STRING = 3
TYPE_BUTTON = 4
TYPE_GROUP = 5

UNIT_NONE = 0
UNIT_PIXEL = 1
UNIT_BIT = 2
UNIT_MM = 3
UNIT_DPI = 4
UNIT_PERCENT = 5
UNIT_MICROSECOND = 6

CAP_SOFT_SELECT = 1
CAP_HARD_SELECT = 2
CAP_SOFT_DETECT = 4
CAP_EMULATED = 8
CAP_AUTOMATIC = 16
CAP_INACTIVE = 32
CAP_ADVANCED = 64

INFO_INEXACT = 1
INFO_RELOAD_OPTIONS = 2
INFO_RELOAD_PARAMS = 4

TYPE_STR = {TYPE_BOOL:   "TYPE_BOOL",   TYPE_INT:    "TYPE_INT",
            TYPE_FIXED:  "TYPE_FIXED",  TYPE_STRING: "TYPE_STRING",
            TYPE_BUTTON: "TYPE_BUTTON", TYPE_GROUP:  "TYPE_GROUP"}

UNIT_NAMES = {UNIT_PIXEL:       "pixels",
              UNIT_BIT:         "bits",
              UNIT_MM:          "millimetres",
              UNIT_DPI:         "dots per inch",
              UNIT_PERCENT:     "percent",
              UNIT_MICROSECOND: "microseconds"}

# Types the negotiator knows how to write.
VALUE_TYPES = (TYPE_BOOL, TYPE_INT, TYPE_FIXED, TYPE_STRING)

KIND_BOOL = 'bool'
KIND_INT = 'int'
KIND_FIXED = 'fixed'
KIND_STRING = 'string'
KIND_AUTO = 'auto'
# Command-line text not yet read against an option type.
KIND_TEXT = 'text'

KIND_FOR_TYPE = {TYPE_BOOL: KIND_BOOL, TYPE_INT: KIND_INT,
                 TYPE_FIXED: KIND_FIXED, TYPE_STRING: KIND_STRING}

_TRUE_WORDS = ('true', 'yes', 'on')
_FALSE_WORDS = ('false', 'no', 'off')


def is_active(cap):
    return not cap & CAP_INACTIVE


def is_settable(cap):
    return bool(cap & CAP_SOFT_SELECT)


def is_automatic(cap):
    return bool(cap & CAP_AUTOMATIC)


class Value:
    """
    A value for a device option, tagged with its kind.  Build one with
    the class methods rather than the constructor::

        Value.int(600)
        Value.string('color')
        AUTO

    and inspect it through `kind` and `data`.  `AUTO` carries no data and
    asks the device to choose the value itself.
    """

    __slots__ = ('kind', 'data')

    def __init__(self, kind, data=None):
        self.kind = kind
        self.data = data

    @classmethod
    def bool(cls, data):
        if not isinstance(data, bool):
            raise TypeError("bool value expected, got %r" % (data,))
        return cls(KIND_BOOL, data)

    @classmethod
    def int(cls, data):
        if isinstance(data, bool) or not isinstance(data, int):
            raise TypeError("int value expected, got %r" % (data,))
        return cls(KIND_INT, data)

    @classmethod
    def fixed(cls, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            raise TypeError("real value expected, got %r" % (data,))
        return cls(KIND_FIXED, float(data))

    @classmethod
    def string(cls, data):
        if not isinstance(data, str):
            raise TypeError("string value expected, got %r" % (data,))
        return cls(KIND_STRING, data)

    @classmethod
    def of(cls, data):
        """
        Wrap a plain Python value, picking the kind from its type.

        :raises TypeError: If `data` is not a bool, int, float or str.
        """
        if isinstance(data, Value):
            return data
        if isinstance(data, bool):
            return cls.bool(data)
        if isinstance(data, int):
            return cls.int(data)
        if isinstance(data, float):
            return cls.fixed(data)
        if isinstance(data, str):
            return cls.string(data)
        raise TypeError("unsupported option value %r" % (data,))

    @classmethod
    def parse(cls, text):
        """
        Keep a value typed on the command line as text.  What it means
        depends on the option it is written to, see :meth:`typed`.
        """
        return cls(KIND_TEXT, text)

    def typed(self, type_, automatic=False):
        """
        Read a text value as a value of SANE type `type_`.  ``auto`` gives
        `AUTO` when the option is `automatic`; booleans are read from
        true/false, yes/no or on/off; string options keep the text as it
        was typed.  Values that are not text are returned unchanged.

        :raises ValueError: If the text cannot be read as `type_`.
        """
        if self.kind != KIND_TEXT:
            return self
        word = self.data.strip()
        lowered = word.lower()
        if automatic and lowered == KIND_AUTO:
            return AUTO
        if type_ == TYPE_BOOL:
            if lowered in _TRUE_WORDS:
                return Value.bool(True)
            if lowered in _FALSE_WORDS:
                return Value.bool(False)
            raise ValueError("not a boolean: %r" % self.data)
        if type_ == TYPE_INT:
            return Value.int(int(word))
        if type_ == TYPE_FIXED:
            return Value.fixed(float(word))
        if type_ == TYPE_STRING:
            return Value.string(self.data)
        raise ValueError("option type %s has no value" % type_)

    def is_auto(self):
        return self.kind == KIND_AUTO

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return self.kind == other.kind and self.data == other.data

    def __hash__(self):
        return hash((self.kind, self.data))

    def __repr__(self):
        if self.is_auto():
            return 'AUTO'
        return 'Value.%s(%r)' % (self.kind, self.data)


AUTO = Value(KIND_AUTO)
