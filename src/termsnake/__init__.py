import logging

__version__ = "0.1.0"

# Nothing may print over the game screen unless a log file is configured
logging.getLogger(__name__).addHandler(logging.NullHandler())
