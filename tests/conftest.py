"""Pytest fixtures for scanserver tests.

The SANE binding is replaced by an in-memory fake exposing the same
calls as the _sane module, so the tests run without scanner hardware or
python-sane installed.
"""

import pytest

from scanserver.device import SaneContext
from scanserver.values import (CAP_AUTOMATIC, CAP_INACTIVE, CAP_SOFT_DETECT,
                               CAP_SOFT_SELECT, INFO_RELOAD_OPTIONS,
                               TYPE_BOOL, TYPE_BUTTON, TYPE_FIXED,
                               TYPE_GROUP, TYPE_INT, TYPE_STRING, UNIT_DPI,
                               UNIT_MM, UNIT_NONE, UNIT_PERCENT)

SETTABLE = CAP_SOFT_SELECT | CAP_SOFT_DETECT

# 2x2 RGB frame: red, green / blue, white
RGB_PIXELS = bytes([255, 0, 0, 0, 255, 0,
                    0, 0, 255, 255, 255, 255])


class FakeError(Exception):
    pass


class FakeDev:
    """A device as returned by ``_sane._open``."""

    def __init__(self, options, values, frame, reject=(), reloads=None):
        self.options = [list(o) for o in options]
        self.values = dict(values)
        self.frame = frame
        self.reject = dict.fromkeys(reject, "Invalid argument")
        self.reloads = reloads or {}
        self.calls = []
        self.closed = 0
        self.close_error = None
        self.started = False

    def _check(self):
        if self.closed:
            raise FakeError("device closed")

    def get_options(self):
        self._check()
        self.calls.append(('get_options',))
        return [tuple(o) for o in self.options]

    def get_option(self, index):
        self._check()
        if self.options[index][7] & CAP_INACTIVE:
            raise FakeError("Invalid argument")
        return self.values[index]

    def set_option(self, index, value):
        self._check()
        self.calls.append(('set_option', self.options[index][1], value))
        if index in self.reject:
            raise FakeError(self.reject[index])
        self.values[index] = value
        hook = self.reloads.get(index)
        if hook is not None:
            hook(self, value)
            return INFO_RELOAD_OPTIONS
        return 0

    def set_auto_option(self, index):
        self._check()
        self.calls.append(('set_auto_option', self.options[index][1]))
        self.values[index] = 'auto'
        return 0

    def start(self):
        self._check()
        self.calls.append(('start',))
        if self.frame is None:
            raise FakeError("Document feeder out of documents")
        self.started = True

    def snap(self, no_cancel=False):
        self._check()
        self.calls.append(('snap', no_cancel))
        if not self.started:
            raise FakeError("Invalid argument")
        self.started = False
        return self.frame

    def close(self):
        self.closed += 1
        if self.close_error is not None:
            raise FakeError(self.close_error)


class FakeSane:
    """Stands in for the _sane module."""

    error = FakeError

    def __init__(self, devices=(), fail_enumeration=False):
        self.devices = dict(devices)
        self.fail_enumeration = fail_enumeration
        self.calls = []
        self.initialized = 0
        self.exited = 0

    def init(self):
        self.initialized += 1
        return (16908290, 1, 2, 2)

    def exit(self):
        self.exited += 1

    def get_devices(self, local_only=False):
        self.calls.append(('get_devices', local_only))
        if self.fail_enumeration:
            raise FakeError("Error during device I/O")
        return [(name, 'Noname', 'frontend-tester', 'virtual device')
                for name in self.devices]

    def _open(self, name):
        self.calls.append(('open', name))
        if name not in self.devices:
            raise FakeError("Invalid argument")
        return self.devices[name]


def activate_depth(dev, value):
    """Mode Lineart deactivates the depth option, the others enable it."""
    depth = dev.options[6]
    if value == 'Lineart':
        depth[7] |= CAP_INACTIVE
    else:
        depth[7] &= ~CAP_INACTIVE


def scanner_options():
    return [
        (0, '', 'Number of options', 'Read-only option that specifies how '
         'many options a specific device supports.', TYPE_INT, UNIT_NONE,
         4, CAP_SOFT_DETECT, None),
        (1, '', 'Scan Mode', '', TYPE_GROUP, UNIT_NONE, 0, 0, None),
        (2, 'mode', 'Scan mode', 'Selects the scan mode.', TYPE_STRING,
         UNIT_NONE, 32, SETTABLE, ['Lineart', 'Gray', 'Color', 'color']),
        (3, 'resolution', 'Scan resolution', 'Sets the resolution of the '
         'scanned image.', TYPE_INT, UNIT_DPI, 4, SETTABLE,
         (100, 1200, 100)),
        (4, 'preview', 'Preview', 'Request a preview-quality scan.',
         TYPE_BOOL, UNIT_NONE, 4, SETTABLE, None),
        (5, 'brightness', 'Brightness', 'Controls the brightness.',
         TYPE_FIXED, UNIT_PERCENT, 4, SETTABLE | CAP_AUTOMATIC,
         (-100.0, 100.0, 0.5)),
        (6, 'depth', 'Bit depth', 'Number of bits per sample.', TYPE_INT,
         UNIT_NONE, 4, SETTABLE | CAP_INACTIVE, [8, 16]),
        (7, '', 'Geometry', '', TYPE_GROUP, UNIT_NONE, 0, 0, None),
        (8, 'tl-x', 'Top-left x', 'Top-left x position of scan area.',
         TYPE_FIXED, UNIT_MM, 4, SETTABLE, (0.0, 215.9, 0.0)),
        (9, 'calibrate', 'Calibrate', 'Run calibration.', TYPE_BUTTON,
         UNIT_NONE, 0, SETTABLE, None),
        (10, 'firmware', 'Firmware', 'Firmware version.', TYPE_STRING,
         UNIT_NONE, 16, CAP_SOFT_DETECT, None),
    ]


def add_lamp(dev):
    """Give `dev` a string option whose legal values read like booleans."""
    dev.options.append([11, 'lamp', 'Lamp', 'Switches the lamp.', TYPE_STRING,
                        UNIT_NONE, 4, SETTABLE, ['On', 'Off']])
    dev.values[11] = 'Off'
    return dev


def scanner_values():
    return {0: 11, 2: 'Lineart', 3: 300, 4: False, 5: 0.0, 6: 8,
            8: 0.0, 10: '1.0.7'}


@pytest.fixture
def make_dev():
    """Factory for fake devices: ``make_dev(reject=(3,), frame=...)``."""

    def make(frame=(RGB_PIXELS, 2, 2, 3, 1), reject=(), reloads=None):
        return FakeDev(scanner_options(), scanner_values(), frame,
                       reject=reject, reloads=reloads)

    return make


@pytest.fixture
def fake_dev(make_dev):
    return make_dev(reloads={2: activate_depth})


@pytest.fixture
def fake_sane(fake_dev):
    return FakeSane({'test:0': fake_dev})


@pytest.fixture
def context(fake_sane):
    with SaneContext(fake_sane) as context:
        yield context


@pytest.fixture
def device(context):
    with context.open('test:0') as device:
        yield device
