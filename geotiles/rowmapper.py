'''Shape computed tile rows into response features and edges'''

from collections.abc import Mapping

import geojson

EDGE_TYPE = 'Term'


def get_field(obj, name):
    '''Read a column or UDT field. Rows come as dicts or as named tuples depending on
    the session row_factory. Anything missing reads as None'''
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def get_path(obj, *names):
    for name in names:
        obj = get_field(obj, name)
    return obj


def make_map(iterable, key_func, value_func):
    '''Index the items by key. A later item with the same key replaces the earlier
    one but keeps the position of the first'''
    result = dict()
    for item in iterable:
        result[key_func(item)] = value_func(item)
    return result


def map_rows_to_features(rows):
    '''Given the computed tile rows, return one feature per tile id. When a tile id
    appears more than once, the last row wins'''
    rows_by_tile_id = make_map(rows, lambda row: get_field(row, 'tileid'), lambda row: row)
    features = []
    for tile_id, row in rows_by_tile_id.items():
        computed = get_field(row, 'computedfeatures')
        features.append(geojson.Feature(properties={
            'pos_sentiment': get_path(computed, 'sentiment', 'pos_avg'),
            'neg_sentiment': get_path(computed, 'sentiment', 'neg_avg'),
            'mentionCount': get_field(computed, 'mentions'),
            'tileId': tile_id,
        }))
    return features


def map_rows_to_edges(rows):
    '''Sum the mentions of every keyword over the rows. Edges are ordered by mention
    count, most mentioned first'''
    mentions = dict()
    for row in rows:
        keyword = get_field(row, 'keyword')
        if keyword is None:
            continue
        count = get_path(row, 'computedfeatures', 'mentions') or 0
        mentions[keyword] = mentions.get(keyword, 0) + count
    ranked = sorted(mentions.items(), key=lambda item: (-item[1], item[0]))
    return [{'type': EDGE_TYPE, 'name': name, 'mentionCount': count} for name, count in ranked]
