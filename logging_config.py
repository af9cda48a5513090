import logging
import logging.config

def setup_logging(log_level: str = "INFO", trace: bool = False) -> None:
    """
    Configure the ``luna`` logger tree.

    Args:
        log_level: level for the service loggers (DEBUG, INFO, WARNING, ...)
        trace: log every grammar rule entry on ``luna.parser.trace``
    """
    config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {
                'format': '%(asctime)s - %(levelname)s - %(name)s - %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
            'trace': {
                'format': '%(name)s - %(message)s'
            }
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'stream': 'ext://sys.stderr'
            },
            'trace': {
                'class': 'logging.StreamHandler',
                'formatter': 'trace',
                'stream': 'ext://sys.stderr'
            }
        },
        'loggers': {
            'luna': {
                'level': log_level.upper(),
                'handlers': ['console'],
                'propagate': False
            },
            'luna.parser.trace': {
                'level': 'DEBUG' if trace else 'WARNING',
                'handlers': ['trace'],
                'propagate': False
            }
        }
    }
    logging.config.dictConfig(config)
