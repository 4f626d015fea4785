from __future__ import annotations

from collections import ChainMap
from typing import Any, Callable, Iterable, Optional, Iterator
from os import PathLike


class ConfigError(Exception):
    """Exception class for Config related errors."""


class Enum:
    """Variants enumeration.

    Used to define variants for the option.
    """

    def __init__(self, *variants: str | int | bool | None):
        self.variants = variants

    def match(self, value: Any) -> bool:
        return value in self.variants

    def __repr__(self):
        variants = ', '.join(repr(v) for v in self.variants)
        return f"Enum({variants})"

    def __str__(self):
        variants = ' | '.join(str(v) for v in self.variants)
        return f"({variants})"


class Option:
    """Config option.

    Used to define the schema. Immutable.

    Parameters:
        type: Option's type, or an `Enum` of allowed values.
        default: Option's default value.
        required: If the option is required. If the option is required and
                  not assigned, an error will be raised.
        check: Optional predicate the converted value must satisfy.
    """

    default: Any
    required: bool
    type: type | Enum
    check: Optional[Callable[[Any], bool]]

    def __init__(self,
                 type,
                 default=None,
                 required=False,
                 check=None):
        super().__setattr__('default', default)
        super().__setattr__('required', required)
        super().__setattr__('type', type)
        super().__setattr__('check', check)

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"option is immutable: {name!r}")

    def __delattr__(self, name: str):
        raise AttributeError(f"option is immutable: {name!r}")

    def __repr__(self):
        if isinstance(self.type, type):
            tp = self.type.__name__
        else:
            tp = repr(self.type)
        return (f"Option({tp}, default={self.default!r}, "
                f"required={self.required})")


def _positive(value: int) -> bool:
    return value > 0


def _to_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"invalid boolean: {value!r}")


READER_OPTIONS: dict[str, Option] = {
    "bufsize": Option(int, default=4096, check=_positive),
    "max_token_size": Option(int, default=64 * 1024, check=_positive),
    "errors": Option(Enum("strict", "replace", "ignore"), default="strict"),
}


class Config:
    def __init__(self, schema: dict[str, Option], strict=True):
        """Initialize Config instance.

        Args:
            schema: Schema mapping.
            strict: If true, adding options that are not in schema
                    is not allowed.
        """
        self._config = ChainMap(schema)
        self._converters: dict[type, Callable[[str], Any]] = {
            int: int,
            bool: _to_bool,
            str: str,
        }
        self.strict = strict

    @property
    def schema(self) -> dict[str, Option]:
        """Return the schema mapping."""
        return self._config.maps[-1]

    def override(self, options: dict[str, Any]):
        """Assign options to config.

        Each call to `override` adds new option values on the top
        of old values.

        Raises:
            ConfigError
        """
        self._try_insert_map(self._override, options, False)

    def parse(self, it: Iterable[str]):
        """Parse and override options.

        Option string has the format `<option_name>=<value>`.

        Raises:
            ConfigError
        """
        options = {}
        for s in it:
            name, sep, value = s.partition('=')
            if not sep or not name:
                raise ConfigError(f"expected NAME=VALUE, got {s!r}")
            options[name.strip()] = value.strip()
        self._try_insert_map(self._override, options, True)

    def validate(self) -> None:
        """Check that every required option is assigned.

        Raises:
            ConfigError.
        """
        required_options: list[str] = []
        for name, value in self._config.items():
            if isinstance(value, Option) and value.required:
                required_options.append(name)

        if required_options:
            opts = ', '.join(repr(n) for n in required_options)
            raise ConfigError(f"required options: {opts}")

    def _try_insert_map(self, fn: Callable, *args: Any):
        self._config.maps.insert(0, {})
        try:
            fn(*args)
        except Exception:
            self._config.maps.pop(0)
            raise

    def _override(self, options: dict[str, Any], convert: bool):
        schema = self.schema

        for name, value in options.items():
            if name not in schema:
                if self.strict:
                    msg = f"cannot add name {name!r} that is not in config"
                    raise ConfigError(msg)
                self._config[name] = value
                continue

            option = schema[name]
            if convert:
                value = self._convert(name, value, option)
            self._check(name, value, option)
            self._config[name] = value

    def _convert(self, name: str, value: str, option: Option) -> Any:
        if isinstance(option.type, Enum):
            return value
        convert_fn = self._converters.get(option.type)
        if convert_fn is None:
            raise ConfigError(f"option {name!r}: cannot convert {value!r}")
        try:
            return convert_fn(value)
        except ValueError as e:
            raise ConfigError(f"option {name!r}: {e}") from e

    def _check(self, name: str, value: Any, option: Option):
        tp = option.type
        if isinstance(tp, Enum):
            if not tp.match(value):
                raise ConfigError(f"option {name!r} must be one of the "
                                  f"following: {tp}, got {value!r}")
        elif not isinstance(value, tp) or (tp is int and
                                           isinstance(value, bool)):
            raise ConfigError(f"option {name!r} must be of type "
                              f"{tp.__name__}, got {type(value).__name__}: "
                              f"{value!r}")
        if option.check is not None and not option.check(value):
            raise ConfigError(f"invalid value of option {name!r}: {value!r}")

    def items(self) -> Iterator[tuple[str, Any]]:
        for name in self._config:
            yield name, self[name]

    def clear(self):
        """Remove assigned options, preserving the schema.

        After calling this method, `Config.layers` returns 0.
        """
        self._config.maps = self._config.maps[-1:]

    @property
    def layers(self) -> int:
        """Total number of override layers."""
        return len(self._config.maps) - 1

    def pop_layer(self) -> Optional[dict[str, Any]]:
        """Remove the latest override layer, if exists."""
        if len(self._config.maps) == 1:
            return None
        return self._config.maps.pop(0)

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(name)
        if name in self._config:
            value = self._config[name]
            if isinstance(value, Option):
                return value.default
            return value

        raise AttributeError(f"no such config value: {name!r}")

    def copy(self) -> Config:
        """Create a copy of Config object with the same override layers."""
        obj = Config(self.schema, strict=self.strict)
        obj._config.maps[:0] = [dict(m) for m in self._config.maps[:-1]]
        return obj

    def __getitem__(self, name: str) -> Any:
        try:
            return getattr(self, name)
        except AttributeError:
            raise KeyError(name) from None

    def __contains__(self, name: str) -> bool:
        return name in self._config

    def __iter__(self) -> Iterator[str]:
        yield from self._config

    def __repr__(self):
        lines = ["Config({"]
        for name, val in self.schema.items():
            lines.append(f"  {name!r}: {val!r},")
        lines.append("})")
        return '\n'.join(lines)


def default_config() -> Config:
    """Return a reader config holding the default values."""
    return Config(READER_OPTIONS)


def read_file(filename: str | PathLike[str],
              schema: Optional[dict[str, Option]] = None) -> Config:
    """Create Config object from a Python configuration file."""
    namespace = eval_config_file(filename)

    options = {attr: val for attr, val in namespace.items()
               if not attr.startswith('__')}

    cfg = Config(READER_OPTIONS if schema is None else schema)
    cfg.override(options)
    cfg.validate()
    return cfg


def eval_config_file(filename: str | PathLike[str]) -> dict[str, Any]:
    namespace: dict[str, Any] = {}

    try:
        with open(filename, 'rb') as fin:
            code = compile(fin.read(), filename, 'exec')
            exec(code, namespace)
    except SyntaxError as e:
        raise ConfigError(f'syntax error in the config file: {e}') from e
    except SystemExit as e:
        raise ConfigError('the configuration file called sys.exit()') from e
    except OSError as e:
        raise ConfigError(f'cannot read the config file: {e}') from e
    except Exception as e:
        raise ConfigError(f'an exception in the config file: {e}') from e

    return namespace
