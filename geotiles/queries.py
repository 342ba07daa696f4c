'''Resolvers of the tile, place and edge lookups. Each resolver takes the request
args and an unused response context, and returns a dict that with_run_time stamps
with runTime'''

import logging
from collections.abc import Sequence

from geotiles import cfgparser
from geotiles import dbhelper
from geotiles import featureservice
from geotiles import geohelper
from geotiles import querybuilder
from geotiles import rowmapper
from geotiles.errors import ResolverError
from geotiles.shared import with_run_time

logger = logging.getLogger(__name__)


def _is_sequence(value, length=None):
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return False
    return length is None or len(value) == length


def _check_bbox(args, subject):
    '''Raise if args lack a bbox, otherwise return it'''
    bbox = (args or {}).get('bbox')
    if bbox is None:
        raise ResolverError('No bounding box for which to fetch %s specified' % subject)
    return bbox


def _check_bbox_values(bbox, subject):
    if not _is_sequence(bbox, 4) or not geohelper.is_valid_bbox(bbox):
        raise ResolverError('Invalid bounding box for which to fetch %s specified' % subject)


def _check_zoom(zoom, subject):
    if not geohelper.is_valid_zoom(zoom):
        raise ResolverError('Invalid zoom level for which to fetch %s specified' % subject)


def _bbox_tiles(args, subject):
    '''Validate bbox and zoomLevel, in that order, then return the tiles of the four
    corners of the bbox'''
    bbox = _check_bbox(args, subject)
    zoom = args.get('zoomLevel')
    if zoom is None:
        raise ResolverError('No zoom level for which to fetch %s specified' % subject)
    _check_bbox_values(bbox, subject)
    _check_zoom(zoom, subject)
    logger.debug('Looking up the corner tiles of %s at zoom %s', bbox, zoom)
    return geohelper.tiles_for_points(geohelper.bbox_corner_points(bbox), zoom)


def _location_tiles(args, subject):
    '''Validate locations and the optional zoomLevel, then return the tile of every
    location'''
    locations = (args or {}).get('locations')
    if not locations:
        raise ResolverError('No locations for which to fetch %s specified' % subject)
    max_locations = cfgparser.load_module('queries')['max locations']
    if not _is_sequence(locations) or len(locations) > max_locations or not all(
            _is_sequence(location, 2) and geohelper.is_valid_location(location) for location in locations):
        raise ResolverError('Invalid locations for which to fetch %s specified' % subject)
    zoom = args.get('zoomLevel')
    if zoom is None:
        zoom = cfgparser.load_module('queries')['default zoom level']
    _check_zoom(zoom, subject)
    return geohelper.tiles_for_points(locations, zoom)


async def _fetch_features(args, tiles):
    query = querybuilder.build_tile_filter_query(args, tiles)
    rows = await dbhelper.execute_query(query.query, query.params)
    return rowmapper.map_rows_to_features(rows)


async def _fetch_edges(args, tiles):
    query = querybuilder.build_edges_query(args, tiles)
    rows = await dbhelper.execute_query(query.query, query.params)
    return rowmapper.map_rows_to_edges(rows)


@with_run_time
async def fetch_tiles_by_bbox(args, res=None):
    '''
    args: {site: str, bbox: [north, west, south, east], mainEdge: str, filteredEdges: [str],
           timespan: str, zoomLevel: int, layertype: str, sourceFilter: [str],
           fromDate: str, toDate: str}
    returns: {runTime: int, features: [{type, geometry, properties: {mentionCount,
              neg_sentiment, pos_sentiment, tileId}}]}
    '''
    tiles = _bbox_tiles(args, 'tiles')
    features = await _fetch_features(args, tiles)
    return {'features': features}


@with_run_time
async def fetch_tiles_by_locations(args, res=None):
    '''
    args: {site: str, locations: [[lat, lng]], zoomLevel: int, filteredEdges: [str],
           timespan: str, layertype: str, sourceFilter: [str], fromDate: str, toDate: str}
    returns: same shape as fetch_tiles_by_bbox
    '''
    tiles = _location_tiles(args, 'tiles')
    features = await _fetch_features(args, tiles)
    return {'features': features}


@with_run_time
async def fetch_places_by_bbox(args, res=None):
    '''
    args: {site: str, bbox: [north, west, south, east], zoom: int, populationMin: int,
           populationMax: int}
    returns: {runTime: int, bbox: [float], features: [{coordinate, name, id}]}

    zoom and the population bounds are accepted but not used by the feature service
    '''
    bbox = _check_bbox(args, 'places')
    _check_bbox_values(bbox, 'places')

    places = await featureservice.fetch_by_bbox(geohelper.bbox_to_fence(bbox))
    features = [{'coordinate': place.get('bbox'), 'name': place.get('name'), 'id': place.get('id')}
                for place in places]
    return {'features': features, 'bbox': bbox}


@with_run_time
async def fetch_edges_by_locations(args, res=None):
    '''
    args: {site: str, locations: [[lat, lng]], zoomLevel: int, mainEdge: str, timespan: str,
           layertype: str, sourceFilter: [str], fromDate: str, toDate: str}
    returns: {runTime: int, edges: [{type, name, mentionCount}]}
    '''
    tiles = _location_tiles(args, 'edges')
    edges = await _fetch_edges(args, tiles)
    return {'edges': edges}


@with_run_time
async def fetch_edges_by_bbox(args, res=None):
    '''
    args: {site: str, bbox: [north, west, south, east], zoomLevel: int, mainEdge: str,
           timespan: str, layertype: str, sourceFilter: [str], fromDate: str, toDate: str}
    returns: {runTime: int, edges: [{type, name, mentionCount}]}
    '''
    tiles = _bbox_tiles(args, 'edges')
    edges = await _fetch_edges(args, tiles)
    return {'edges': edges}
