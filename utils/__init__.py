from .logging import setup_logging, build_loggers, CSVLogger, JSONLLogger
