'''Dbhelper module, this module contains the abstraction of querying the computed
tiles out of the database'''

import asyncio
import atexit
import logging
import threading
from collections import OrderedDict

from cassandra.cluster import Cluster
from cassandra.query import dict_factory

from geotiles import cfgparser

logger = logging.getLogger(__name__)

CLUSTER = None
SESSION = None
# query string -> prepared statement, least recently used first
PREPARED = OrderedDict()
LOCK = threading.Lock()


def get_session():
    '''Connect to the cluster on first use, the session is shared afterwards.
    Blocks on the network, so coroutines call it through the executor'''
    global CLUSTER, SESSION
    with LOCK:
        if SESSION is None:
            cfg = cfgparser.load_module('dbhelper')
            CLUSTER = Cluster(cfg['list of node'], port=cfg['port'])
            SESSION = CLUSTER.connect(cfg['key space'])
            SESSION.row_factory = dict_factory
            logger.info('Connected to keyspace %s on %s', cfg['key space'], cfg['list of node'])
        return SESSION


def prepare(statement):
    '''Prepare the statement once per query string. Only the most recently used
    statements are kept, up to the configured prepared cache size'''
    with LOCK:
        if statement in PREPARED:
            PREPARED.move_to_end(statement)
            return PREPARED[statement]

    prepared = get_session().prepare(statement)

    limit = cfgparser.load_module('dbhelper')['prepared cache size']
    with LOCK:
        PREPARED[statement] = prepared
        PREPARED.move_to_end(statement)
        while len(PREPARED) > limit:
            evicted, _ = PREPARED.popitem(last=False)
            logger.debug('Evicted prepared statement %s', evicted)
    return prepared


class PagedResult(object):
    '''Collect every page of a ResponseFuture into an asyncio future. Driver callbacks
    run on the driver's event thread, so results are handed back to the loop thread'''

    def __init__(self, response_future, loop):
        self.rows = []
        self.loop = loop
        self.future = loop.create_future()
        self.response_future = response_future
        self.response_future.add_callbacks(callback=self.handle_page, errback=self.handle_error)

    def handle_page(self, rows):
        self.rows.extend(rows)
        if self.response_future.has_more_pages:
            self.response_future.start_fetching_next_page()
        else:
            self.loop.call_soon_threadsafe(self._settle, None)

    def handle_error(self, exc):
        self.loop.call_soon_threadsafe(self._settle, exc)

    def _settle(self, exc):
        if self.future.done():
            return
        if exc is not None:
            self.future.set_exception(exc)
        else:
            self.future.set_result(self.rows)


async def execute_query(query, params):
    '''Run the query with its bind params and return the list of rows. Driver errors
    are raised as is'''
    logger.debug('Executing %s with %d params', query, len(params))
    loop = asyncio.get_running_loop()
    # connecting and preparing are blocking round trips
    prepared = await loop.run_in_executor(None, prepare, query)
    response_future = get_session().execute_async(prepared, params)
    rows = await PagedResult(response_future, loop).future
    logger.debug('Query returned %d rows', len(rows))
    return rows


def shutdown():
    '''Close the connection to the cluster, if any'''
    global CLUSTER, SESSION
    with LOCK:
        if CLUSTER is not None:
            CLUSTER.shutdown()
        CLUSTER = None
        SESSION = None
        PREPARED.clear()


atexit.register(shutdown)
