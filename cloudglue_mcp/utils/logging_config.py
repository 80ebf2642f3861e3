import sys
from loguru import logger


class LoggerManager:
    """Owns the loguru sinks used by the server process.

    stdout carries the stdio JSON-RPC stream, so the console sink writes to stderr.
    """

    def __init__(self):
        self.console_sink_id = None
        self.file_sink_id = None

        # Always remove the default handler
        logger.remove()

    def enable_console(self, level: str = "INFO"):
        if self.console_sink_id is None:
            self.console_sink_id = logger.add(sys.stderr, level=level, colorize=True)

    def disable_console(self):
        if self.console_sink_id is not None:
            logger.remove(self.console_sink_id)
            self.console_sink_id = None

    def enable_file(self, path: str, level: str = "INFO", rotation: str = "10 MB", retention_days: int = 7):
        if self.file_sink_id is None:
            self.file_sink_id = logger.add(
                path,
                level=level,
                rotation=rotation,
                retention=f"{retention_days} days",
                enqueue=True,
            )

    def disable_file(self):
        if self.file_sink_id is not None:
            logger.remove(self.file_sink_id)
            self.file_sink_id = None

    def configure(self, logging_config):
        """Apply a LoggingConfig: console always, file sink when enabled."""
        self.disable_console()
        self.enable_console(level=logging_config.level)
        if logging_config.enable_file and logging_config.file:
            self.disable_file()
            self.enable_file(
                logging_config.file,
                level=logging_config.level,
                rotation=logging_config.max_file_size,
                retention_days=logging_config.retention_days,
            )


log_manager = LoggerManager()
