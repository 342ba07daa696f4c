'''Errors raised by the resolvers themselves. Failures of the storage and the
feature service are never wrapped and propagate as raised by their clients.'''


class ResolverError(ValueError):
    '''Resolver arguments are missing or malformed. Raised before any I/O'''
