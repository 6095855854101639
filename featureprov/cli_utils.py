"""
Common error handling for featureprov commands.
"""

import sys
import logging
import click
from functools import wraps

from .errors import FetchOrParseError
from .exit_codes import CommandError, get_exit_code_for_exception
from .output import emit_error

logger = logging.getLogger(__name__)


def handle_command_errors(func):
    """
    Decorator that turns command failures into a JSON error on stderr and
    the matching exit code.

    - FetchOrParseError (the root repository failed): type "fetch_error"
    - CommandError: the error's own exit code, with succeeded/failed
      counts for PartialSuccessError
    - KeyboardInterrupt: INTERRUPTED

    Click's own exceptions pass through so usage errors keep exit code 2.
    Anything else propagates.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except click.ClickException:
            raise
        except KeyboardInterrupt as e:
            logger.error("Interrupted by user")
            sys.exit(get_exit_code_for_exception(e))
        except FetchOrParseError as e:
            emit_error(str(e), type='fetch_error', context={'location': e.location})
            sys.exit(get_exit_code_for_exception(e))
        except CommandError as e:
            context = {'exit_code': e.exit_code}
            if hasattr(e, 'succeeded'):
                context['succeeded'] = e.succeeded
                context['failed'] = e.failed
            emit_error(str(e), type=type(e).__name__, context=context)
            sys.exit(get_exit_code_for_exception(e))

    return wrapper
