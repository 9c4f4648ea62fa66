#!/usr/bin/env python3

import sys
import argparse

from . import __version__
from .constants import DEFAULT_SEGMENTS, DEFAULT_INTERVAL, MAGNET_LENGTH, MAGNET_WIDTH, MAGNET_THICKNESS, MAGNET_REMANENCE
from .errors import PiecewiseError
from .flux import flux_density, flux_function
from .inverter import PiecewiseInverter
from .logger import logger, set_verbose


def _build_inverter(ns: argparse.Namespace) -> PiecewiseInverter:
    func = flux_function(ns.length, ns.width, ns.thickness, ns.remanence)
    logger.debug('Building flux table with %d segments on [%f, %f).', ns.segments, ns.start, ns.end)
    return PiecewiseInverter(func, ns.segments, (ns.start, ns.end), strict=ns.strict)


def _flux(ns: argparse.Namespace):
    print(float(flux_density(ns.distance, ns.length, ns.width, ns.thickness, ns.remanence)))


def _x_to_y(ns: argparse.Namespace):
    print(_build_inverter(ns).x_to_y(ns.x))


def _y_to_x(ns: argparse.Namespace):
    print(_build_inverter(ns).y_to_x(ns.y))


def _table(ns: argparse.Namespace):
    inverter = _build_inverter(ns)

    print('# segment\tx_lo\tx_hi\tslope\tintercept\ty_lo\ty_hi\tinverse_slope\tinverse_intercept')
    for i, (fwd, inv) in enumerate(zip(inverter.forward_segments, inverter.inverse_segments)):
        if inv.invertible:
            inverse = F'{inv.chord.slope}\t{inv.chord.intercept}'
        else:
            inverse = '-\t-'
        print(F'{i}\t{fwd.x_lo}\t{fwd.x_hi}\t{fwd.chord.slope}\t{fwd.chord.intercept}\t{inv.y_lo}\t{inv.y_hi}\t{inverse}')


def _add_magnet_arguments(parser: argparse.ArgumentParser):
    parser.add_argument('--length', type=float, default=MAGNET_LENGTH, help=F'Magnet length in mm. Default: {MAGNET_LENGTH}')
    parser.add_argument('--width', type=float, default=MAGNET_WIDTH, help=F'Magnet width in mm. Default: {MAGNET_WIDTH}')
    parser.add_argument('--thickness', type=float, default=MAGNET_THICKNESS, help=F'Magnet thickness in mm. Default: {MAGNET_THICKNESS}')
    parser.add_argument('--remanence', type=float, default=MAGNET_REMANENCE, help=F'Remanence of the magnet material in mT. Default: {MAGNET_REMANENCE}')


def _add_table_arguments(parser: argparse.ArgumentParser):
    _add_magnet_arguments(parser)
    parser.add_argument('--segments', type=int, default=DEFAULT_SEGMENTS, help=F'Number of linear segments. Default: {DEFAULT_SEGMENTS}')
    parser.add_argument('--start', type=float, default=DEFAULT_INTERVAL[0], help=F'Start of the distance interval in mm. Default: {DEFAULT_INTERVAL[0]}')
    parser.add_argument('--end', type=float, default=DEFAULT_INTERVAL[1], help=F'End of the distance interval in mm (excluded). Default: {DEFAULT_INTERVAL[1]}')
    parser.add_argument('--strict', action='store_true', default=False, help='Fail if a segment has zero slope instead of excluding it from backward lookups.')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='piecewise_inverter')

    parser.description = 'Approximate the flux density of a block magnet seen by a Hall-effect sensor with a piecewise linear table, and invert it to get the distance from a reading.'

    parser.add_argument('--verbose', '-v', help='Show verbose logging.', action='store_true', default=False)
    parser.add_argument('--version', action='version', version=F'%(prog)s {__version__}')

    sub = parser.add_subparsers(title='action')

    # action: evaluate the exact flux density equation
    flux_parser = sub.add_parser('flux', help='Evaluate the flux density equation at a distance.')
    _add_magnet_arguments(flux_parser)
    flux_parser.add_argument('--distance', type=float, required=True, help='Distance from the magnet in mm.')
    flux_parser.set_defaults(func=_flux)

    # action: forward lookup
    x_to_y_parser = sub.add_parser('x-to-y', help='Approximate the flux density at a distance from the piecewise table.')
    _add_table_arguments(x_to_y_parser)
    x_to_y_parser.add_argument('x', type=float, help='Distance from the magnet in mm.')
    x_to_y_parser.set_defaults(func=_x_to_y)

    # action: backward lookup
    y_to_x_parser = sub.add_parser('y-to-x', help='Approximate the distance for a flux density reading from the piecewise table.')
    _add_table_arguments(y_to_x_parser)
    y_to_x_parser.add_argument('y', type=float, help='Flux density in mT.')
    y_to_x_parser.set_defaults(func=_y_to_x)

    # action: dump tables
    table_parser = sub.add_parser('table', help='Print the forward and inverse segment tables.')
    _add_table_arguments(table_parser)
    table_parser.set_defaults(func=_table)

    return parser


def main(argv=None):
    parser = build_parser()
    ns = parser.parse_args(argv)
    set_verbose(ns.verbose)

    if 'func' not in ns:
        parser.print_usage()
        sys.exit(1)

    try:
        ns.func(ns)
    except PiecewiseError as e:
        logger.error('%s', e)
        sys.exit(1)


if __name__ == '__main__':
    main()
