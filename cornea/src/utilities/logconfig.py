import logging

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(name='cornea', level=logging.CRITICAL, log_format=DEFAULT_FORMAT, log_file=None):
    '''
    Configure the `name` logger with a stream handler and, when `log_file` is given, a file handler.

    `level` accepts either a logging constant or its name, e.g. 'DEBUG'.
    Reconfiguring replaces previously installed handlers.
    '''
    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)

    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False

    return logger
