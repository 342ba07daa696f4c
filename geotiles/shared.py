'''Helpers shared by every resolver'''

import functools
import logging
from timeit import default_timer as timer

logger = logging.getLogger(__name__)


def with_run_time(resolver):
    '''Wrap the resolver coroutine so that its result reports runTime, the elapsed
    milliseconds of the call'''

    @functools.wraps(resolver)
    async def run_timer(*args, **kwargs):
        start = timer()
        result = await resolver(*args, **kwargs)
        end = timer()
        result['runTime'] = int(round((end - start) * 1000))
        logger.debug('%s finished in %.5fs', resolver.__name__, end - start)
        return result

    return run_timer
