'''Geo helper module. Slippy map tile math and bounding box helpers'''

import math
import numbers
from collections import namedtuple

Tile = namedtuple('Tile', ['x', 'y', 'z'])


def degrees_to_tile(latitude_deg, longitude_deg, zoom):
    '''Given the lat, lng in degrees and the zoom level, return the slippy map tile
    containing the point. Latitude at or beyond +-90 has no finite tile, so the caller
    should check with is_valid_latitude first.

    See http://wiki.openstreetmap.org/wiki/Slippy_map_tilenames#Python'''
    lat_rad = math.radians(latitude_deg)
    n = 2.0 ** zoom
    # longitude 180 is the east edge of the last column
    xtile = min(int(math.floor((longitude_deg + 180.0) / 360.0 * n)), int(n) - 1)
    ytile = int(math.floor((1.0 - math.log(math.tan(lat_rad) + (1 / math.cos(lat_rad))) / math.pi) / 2.0 * n))
    return Tile(xtile, ytile, zoom)


def is_number(value):
    # bool is an int subclass but never a coordinate
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def is_valid_latitude(lat):
    '''Test if the lat can be projected, i.e. strictly between the poles'''
    return is_number(lat) and -90 < lat < 90


def is_valid_longitude(lng):
    return is_number(lng) and -180 <= lng <= 180


def is_valid_zoom(zoom):
    return isinstance(zoom, numbers.Integral) and not isinstance(zoom, bool) and zoom >= 0


def bbox_to_fence(bbox):
    '''bbox is ordered (north, west, south, east)'''
    return {'north': bbox[0], 'west': bbox[1], 'south': bbox[2], 'east': bbox[3]}


def is_valid_bbox(bbox):
    '''Check the bbox values can be projected. West may be greater than east for a box
    crossing the antimeridian, so only the lat order is checked'''
    if len(bbox) != 4:
        return False
    fence = bbox_to_fence(bbox)
    if not (is_valid_latitude(fence['north']) and is_valid_latitude(fence['south'])):
        return False
    if not (is_valid_longitude(fence['west']) and is_valid_longitude(fence['east'])):
        return False
    return fence['north'] >= fence['south']


def bbox_corner_points(bbox):
    '''Return the (lat, lng) of the four corners, in the order NW, SW, NE, SE'''
    fence = bbox_to_fence(bbox)
    return [(fence['north'], fence['west']),
            (fence['south'], fence['west']),
            (fence['north'], fence['east']),
            (fence['south'], fence['east'])]


def is_valid_location(location):
    '''location is a (lat, lng) pair'''
    try:
        lat, lng = location
    except (TypeError, ValueError):
        return False
    return is_valid_latitude(lat) and is_valid_longitude(lng)


def tiles_for_points(points, zoom):
    '''Given the list of (lat, lng), return the tile of each point at the zoom level'''
    return [degrees_to_tile(lat, lng, zoom) for lat, lng in points]
