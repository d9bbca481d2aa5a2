import logging
import logging.handlers


class Log:
    custom_levels = { "DEBUG": logging.DEBUG,
                      "INFO": logging.INFO,
                      "WARNING": logging.WARNING,
                      "ERROR": logging.ERROR,
                      "CRITICAL": logging.CRITICAL }

    def __init__(self, log_level, to_syslog=False, name="knockr"):
        self.log_level = self.custom_levels.get(log_level.upper(), logging.WARNING)
        self.logger = logging.getLogger(name)
        self.logger.setLevel(self.log_level)
        self.logger.propagate = False

        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)

        if to_syslog:
            handler = logging.handlers.SysLogHandler(address = '/dev/log')
            formatter = logging.Formatter('%(name)s: %(levelname)s %(message)s')
        else:
            # stderr, stdout is left alone
            handler = logging.StreamHandler()
            formatter = logging.Formatter('%(asctime)s %(name)s: %(levelname)s %(message)s',
                                          '%Y/%m/%d %H:%M:%S')

        handler.setFormatter(formatter)
        self.logger.addHandler(handler)


    def set_level(self, log_level):
        self.log_level = self.custom_levels.get(log_level.upper(), logging.WARNING)
        self.logger.setLevel(self.log_level)


    def error(self, msg, *args, **kwargs):
        self.logger.error(msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        self.logger.warning(msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs):
        self.logger.info(msg, *args, **kwargs)

    def debug(self, msg, *args, **kwargs):
        self.logger.debug(msg, *args, **kwargs)
