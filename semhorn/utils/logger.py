import logging

import __main__ as main
from .. import config

DEBUG = logging.DEBUG
INFO = logging.INFO
WARN = logging.WARN
ERROR = logging.ERROR

_LOGGER_NAME = 'semhorn'

if hasattr(main, '__file__'):
    # Use normal logging
    _log = logging.getLogger(_LOGGER_NAME)

    def set_level(lvl):
        logging.basicConfig(format='%(asctime)s: %(message)s', level=lvl)
        _log.setLevel(lvl)

    def debug(*args):
        _log.debug(*args)
    def info(*args):
        _log.info(*args)
    def warn(*args):
        _log.warning(*args)
    def error(*args):
        _log.error(*args)

    def debug_logging_enabled():
        """Return true iff debug logging is enabled for the package logger"""
        return _log.isEnabledFor(DEBUG)
else:
    level = logging.INFO

    # Interactive mode => Print instead
    def set_level(lvl):
        global level
        level = lvl

    def print_if(lvl, *args):
        if lvl >= level:
            print(", ".join(args))

    def debug(*args):
        print_if(DEBUG, *args)
    def info(*args):
        print_if(INFO, *args)
    def warn(*args):
        print_if(WARN, *args)
    def error(*args):
        print_if(ERROR, *args)

    def debug_logging_enabled():
        return level <= logging.DEBUG

# Set default log level
set_level(config.DEFAULT_LOG_LEVEL)
