'''Run a resolver from the command line and print its result as geojson.

Usage:
    python -m geotiles.main [-v] tiles NORTH WEST SOUTH EAST ZOOM
    python -m geotiles.main [-v] places NORTH WEST SOUTH EAST
    python -m geotiles.main [-v] edges NORTH WEST SOUTH EAST ZOOM
'''

import asyncio
import logging
import sys

import geojson

from geotiles import dbhelper
from geotiles import queries


def print_usage(stat):
    '''Print the usage and exit'''
    print(__doc__, file=sys.stderr)
    sys.exit(stat)


def parse_bbox(values):
    return [float(value) for value in values]


def run(argv):
    '''Execute entrance. Given the command line args, return the resolver result'''
    command, values = argv[0], argv[1:]
    if command == 'tiles' and len(values) == 5:
        args = {'bbox': parse_bbox(values[:4]), 'zoomLevel': int(values[4])}
        return asyncio.run(queries.fetch_tiles_by_bbox(args))
    if command == 'edges' and len(values) == 5:
        args = {'bbox': parse_bbox(values[:4]), 'zoomLevel': int(values[4])}
        return asyncio.run(queries.fetch_edges_by_bbox(args))
    if command == 'places' and len(values) == 4:
        args = {'bbox': parse_bbox(values)}
        return asyncio.run(queries.fetch_places_by_bbox(args))
    print_usage(1)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    level = logging.INFO
    if argv and argv[0] == '-v':
        level = logging.DEBUG
        argv = argv[1:]
    logging.basicConfig(level=level, format='%(asctime)s %(name)s %(levelname)s %(message)s')
    if not argv:
        print_usage(1)
    try:
        result = run(argv)
    except ValueError as err:
        logging.error('%s', err)
        print_usage(1)
    finally:
        dbhelper.shutdown()
    print(geojson.dumps(result))


if __name__ == '__main__':
    main()
