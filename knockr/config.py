from collections import namedtuple
import tomllib

from knockr.knockutil import ConfigError, parse_duration


class Config():

    maincfg = {
        'knock': {
            'network': "tcp",
            'delay': "100ms",
            'timeout': "1s",
            'silent': False,
        },
        'logging': {
            'log_level': "info",
            'syslog': False,
        },
    }


    def __init__(self, toml_file=None, logger=None):
        self.logger = logger
        self.toml_file = toml_file
        self.toml_data = self._load_config(self.toml_file) if toml_file else {}
        self._process_global_config()
        self.logger = None


    def _load_config(self, toml_file):
        try:
            with open(toml_file, "rb") as f:
                data = tomllib.load(f)
        except OSError as e:
            raise ConfigError(f"cannot read config file '{toml_file}': {e.strerror}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"invalid config file '{toml_file}': {e}") from e
        return data


    def _process_global_config(self):
        self.knock = self._process_knock_section()
        self.logging = self._process_main_section('logging')
        self._check_bool('logging', 'syslog', self.logging.syslog)


    def _process_main_section(self, section):
        cfg = dict(self.toml_data.get(section, {}))
        default = self.maincfg.get(section, {})

        unknown = [k for k in cfg if k not in default]
        if unknown and self.logger:
            self.logger.warning(f"Ignoring unknown keys in [{section}]: {', '.join(unknown)}")

        # populate missing config keys with default values
        values = {k: cfg.get(k, v) for k, v in default.items()}
        Obj = namedtuple(section, ' '.join(values.keys()))
        return Obj(**values)


    def _process_knock_section(self):
        knock = self._process_main_section('knock')

        # durations may be "100ms" style strings or plain seconds
        return knock._replace(network=str(knock.network).lower(),
                              delay=parse_duration(knock.delay),
                              timeout=parse_duration(knock.timeout),
                              silent=self._check_bool('knock', 'silent', knock.silent))


    def _check_bool(self, section, key, value):
        # a string like "false" would be truthy
        if not isinstance(value, bool):
            raise ConfigError(f"[{section}] {key} must be true or false, got {value!r}")
        return value
