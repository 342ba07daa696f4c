'''Build the filter queries run against the computed tiles table. Every value is
passed as a bind parameter, in the same order as the ? placeholders'''

from collections import namedtuple

from geotiles import cfgparser

QuerySpec = namedtuple('QuerySpec', ['query', 'params'])

TILE_CLAUSE = '(tilex = ? AND tiley = ? AND tilez = ?)'
KEYWORD_CLAUSE = '(keyword = ?)'
PIPELINE_CLAUSE = '(pipeline = ?)'
FROM_DATE_CLAUSE = '(periodstartdate >= ?)'
TO_DATE_CLAUSE = '(periodenddate <= ?)'
TIMESPAN_CLAUSE = '(periodtype = ?)'

PS_SELECT_TILES = '''SELECT tileid, computedfeatures FROM {table} WHERE {clauses}'''
PS_SELECT_EDGES = '''SELECT tileid, keyword, computedfeatures FROM {table} WHERE {clauses}'''


def _or_group(clause, values):
    return '(%s)' % ' OR '.join(clause for _ in values)


def _tile_group(tiles):
    '''One OR group matching any of the tiles. Duplicate tiles are kept'''
    if not tiles:
        raise ValueError('At least one tile is required to build the query')
    params = []
    for tile in tiles:
        params.extend((tile[0], tile[1], tile[2]))
    return _or_group(TILE_CLAUSE, tiles), params


def _filter_groups(args, keywords):
    '''Optional AND groups, appended only when the filter is present'''
    clauses = []
    params = []

    if keywords:
        clauses.append(_or_group(KEYWORD_CLAUSE, keywords))
        params.extend(keywords)

    source_filter = args.get('sourceFilter')
    if source_filter:
        clauses.append(_or_group(PIPELINE_CLAUSE, source_filter))
        params.extend(source_filter)

    if args.get('fromDate'):
        clauses.append(FROM_DATE_CLAUSE)
        params.append(args['fromDate'])

    if args.get('toDate'):
        clauses.append(TO_DATE_CLAUSE)
        params.append(args['toDate'])

    if args.get('timespan'):
        clauses.append(TIMESPAN_CLAUSE)
        params.append(args['timespan'])

    return clauses, params


def _build(statement, args, tiles, keywords):
    tile_clause, params = _tile_group(tiles)
    clauses, filter_params = _filter_groups(args, keywords)
    table = cfgparser.load_module('queries')['tiles table']
    query = statement.format(table=table, clauses=' AND '.join([tile_clause] + clauses))
    return QuerySpec(query, params + filter_params)


def build_tile_filter_query(args, tiles):
    '''Given the resolver args and the tiles to look up, return the QuerySpec selecting
    the computed features of those tiles. Keywords are filteredEdges plus mainEdge'''
    keywords = list(args.get('filteredEdges') or [])
    if args.get('mainEdge'):
        keywords.append(args['mainEdge'])
    return _build(PS_SELECT_TILES, args, tiles, keywords)


def build_edges_query(args, tiles):
    '''Same filters as build_tile_filter_query but also selecting the keyword, so that
    mentions can be summed per edge. Only mainEdge narrows the keywords here'''
    keywords = [args['mainEdge']] if args.get('mainEdge') else []
    return _build(PS_SELECT_EDGES, args, tiles, keywords)
