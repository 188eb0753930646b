"""Command-line entry point for scanserver.

Usage::

    # Scan with every device into 1.jpg (1-0.jpg, 1-1.jpg, ...)
    scanserver

    # Scan with the first device whose name contains "pixma"
    scanserver -d pixma -o scan.png -O resolution=300 -O mode=Gray

    # Show the options of a device, then scan with automatic brightness
    scanserver -d test -A -O brightness=auto

Exits with status 1 and a one-line message if anything fails.
"""

import argparse
import logging
import sys

from . import __version__
from .device import SaneContext
from .encoders import resolver_for
from .errors import ScanError
from .negotiate import ConfigurationRequest
from .pipeline import acquire, scan_devices

log = logging.getLogger(__name__)

DEFAULT_OUTPUT = '1.jpg'
DEFAULT_OPTIONS = ('resolution=600', 'mode=color', 'preview=false')


def build_parser():
    parser = argparse.ArgumentParser(
        prog='scanserver',
        description="Scan an image with a SANE device.")
    parser.add_argument('-d', '--device',
                        help="device name, or part of it (default: scan "
                             "with every device)")
    parser.add_argument('-o', '--output', default=DEFAULT_OUTPUT,
                        help="destination file, .png, .jpg or .tif "
                             "(default: %(default)s)")
    parser.add_argument('-O', '--option', dest='options', action='append',
                        metavar='NAME=VALUE',
                        help="set a device option, repeat for several; "
                             "VALUE 'auto' lets the device choose "
                             "(default: %s)" % ' '.join(DEFAULT_OPTIONS))
    parser.add_argument('-A', '--all-options', action='store_true',
                        help="print the device options before scanning")
    parser.add_argument('-L', '--list-devices', action='store_true',
                        help="list the available devices and exit")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="log debug messages")
    parser.add_argument('--version', action='version',
                        version='%(prog)s ' + __version__)
    return parser


def list_devices(context, out):
    devices = context.get_devices()
    if not devices:
        print("No available devices.", file=out)
    for name, vendor, model, type_ in devices:
        print("device `%s' is a %s %s %s" % (name, vendor, model, type_),
              file=out)
    return devices


def run(args, request, context, out):
    if args.list_devices:
        list_devices(context, out)
        return
    resolver_for(args.output)
    if args.device is None:
        scan_devices(context, args.output, request,
                     show=args.all_options, out=out)
        return
    with context.resolve(args.device) as device:
        acquire(device, request, args.output,
                show=args.all_options, out=out)


def main(argv=None, driver=None, out=None):
    """
    Run the command line `argv` (default ``sys.argv[1:]``).

    :param driver: The SANE binding, the _sane module by default.
    :returns: The process exit status.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(message)s')
    out = out if out is not None else sys.stdout
    log.debug("scanserver %s", __version__)

    try:
        request = ConfigurationRequest.parse(args.options or DEFAULT_OPTIONS)
    except ValueError as e:
        log.error("scanserver: %s", e)
        return 2

    try:
        with SaneContext(driver) as context:
            run(args, request, context, out)
    except (ScanError, RuntimeError) as e:
        log.error("scanserver: %s", e)
        return 1
    return 0
