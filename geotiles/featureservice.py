'''Client of the external feature service, which looks up named places'''

import logging

import aiohttp

from geotiles import cfgparser

logger = logging.getLogger(__name__)

BBOX_PATH = '/features/bbox/{north}/{west}/{south}/{east}'


def open_session():
    '''New aiohttp session using the configured timeout'''
    cfg = cfgparser.load_module('featureservice')
    return aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=cfg['timeout']))


def bbox_url(fence):
    base_url = cfgparser.load_module('featureservice')['base url'].rstrip('/')
    return base_url + BBOX_PATH.format(**fence)


async def fetch_by_bbox(fence):
    '''Given the fence {north, west, south, east}, return the list of places inside it.
    HTTP errors are raised as aiohttp.ClientResponseError'''
    url = bbox_url(fence)
    logger.debug('Fetching places from %s', url)
    async with open_session() as session:
        async with session.get(url) as response:
            response.raise_for_status()
            body = await response.json()
    places = body.get('features') or []
    logger.debug('Feature service returned %d places', len(places))
    return places
