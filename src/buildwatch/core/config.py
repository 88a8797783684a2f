"""
Configuration management for BuildWatch
"""

import json
import os
import shlex
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import tomli
import yaml

from ..utils.logging_utils import get_logger

logger = get_logger(__name__)

CONFIG_FILE_NAMES = [
    'buildwatch.config.toml',
    'buildwatch.config.yaml',
    'buildwatch.config.yml',
    'buildwatch.config.json',
    'config.yaml',
]
DEFAULT_CONFIG_FILE = CONFIG_FILE_NAMES[0]
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'default.config.toml'


class ConfigError(Exception):
    """Raised when a configuration file cannot be written or has a bad structure"""


@dataclass(frozen=True)
class Command:
    """A command to execute: an executable (optionally with embedded arguments) plus args"""
    command: str
    args: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Union[Dict[str, Any], str]) -> 'Command':
        if isinstance(data, str):
            return cls(command=data)
        if not isinstance(data, dict) or 'command' not in data:
            raise ConfigError(f"Invalid command entry: {data!r}")
        args = data.get('args') or []
        if not isinstance(args, list):
            raise ConfigError(f"Command args must be a list, got {args!r}")
        return cls(command=str(data['command']), args=[str(arg) for arg in args])

    def argv(self) -> List[str]:
        """Full argument vector, splitting the command string shell-style.

        A command naming an existing file is used as-is, so executable paths
        containing spaces survive.
        """
        if os.path.isfile(self.command):
            return [self.command] + list(self.args)
        return shlex.split(self.command, posix=os.name != 'nt') + list(self.args)

    def __str__(self) -> str:
        return ' '.join([self.command] + list(self.args))


@dataclass(frozen=True)
class WatchConfig:
    """Configuration for a watch session; read-only once loaded"""
    watch_file_types: List[str] = field(default_factory=list)
    include_paths: List[str] = field(default_factory=list)
    exclude_paths: List[str] = field(default_factory=list)
    delay: int = 500
    commands: List[Command] = field(default_factory=list)
    pre_commands: List[Command] = field(default_factory=list)
    post_commands: List[Command] = field(default_factory=list)
    log_level: str = 'info'
    debounce: bool = True
    notify_on_change: bool = True
    build_artifact: str = 'bin/app'
    settle_delay: int = 200
    kill_timeout: int = 5000
    abort_on_failure: bool = False
    run_on_start: bool = True

    def __post_init__(self):
        # Watch everything under the current directory unless told otherwise
        if not self.include_paths:
            object.__setattr__(self, 'include_paths', ['.'])
        if not self.watch_file_types:
            object.__setattr__(self, 'watch_file_types', ['*'])

    @property
    def build_commands(self) -> List[Command]:
        """Every command except the last, which is the run command"""
        return list(self.commands[:-1])

    @property
    def run_command(self) -> Optional[Command]:
        return self.commands[-1] if self.commands else None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WatchConfig':
        """Create WatchConfig instance from dictionary"""
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

        def entries(key: str) -> List[Any]:
            value = data.get(key) or []
            if not isinstance(value, list):
                raise ConfigError(f"'{key}' must be a list, got {value!r}")
            return value

        def flag(key: str, default: bool) -> bool:
            value = data.get(key, default)
            if not isinstance(value, bool):
                raise ConfigError(f"'{key}' must be true or false, got {value!r}")
            return value

        def commands(key: str) -> List[Command]:
            return [Command.from_dict(entry) for entry in entries(key)]

        return cls(
            watch_file_types=[str(ext) for ext in entries('watch_file_types')],
            include_paths=[str(path) for path in entries('include_paths') if path],
            exclude_paths=[str(path) for path in entries('exclude_paths')],
            delay=int(data.get('delay', 500)),
            commands=commands('commands'),
            pre_commands=commands('pre_commands'),
            post_commands=commands('post_commands'),
            log_level=data.get('log_level', 'info'),
            debounce=flag('debounce', True),
            notify_on_change=flag('notify_on_change', True),
            build_artifact=data.get('build_artifact', 'bin/app'),
            settle_delay=int(data.get('settle_delay', 200)),
            kill_timeout=int(data.get('kill_timeout', 5000)),
            abort_on_failure=flag('abort_on_failure', False),
            run_on_start=flag('run_on_start', True),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _parse_file(config_file: Path) -> Dict[str, Any]:
    suffix = config_file.suffix.lower()
    if suffix == '.json':
        with open(config_file, 'r', encoding='utf-8') as f:
            return json.load(f)
    if suffix in ('.yaml', '.yml'):
        with open(config_file, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    # Default to TOML
    with open(config_file, 'rb') as f:
        return tomli.load(f)


def load_config(config_path: str) -> Optional[WatchConfig]:
    """Load configuration from a TOML, YAML or JSON file"""
    try:
        config_file = Path(config_path)
        if not config_file.exists() or config_file.is_dir():
            return None

        data = _parse_file(config_file)

        # Handle both flat and nested config formats
        if isinstance(data, dict) and 'buildwatch' in data:
            data = data['buildwatch']

        return WatchConfig.from_dict(data)

    except (OSError, ValueError, TypeError, yaml.YAMLError, ConfigError) as e:
        logger.error(f"Error loading config {config_path}: {e}")
        return None


def find_config_file(search_dir: Path) -> Optional[Path]:
    """Return the first known config file present in search_dir"""
    for name in CONFIG_FILE_NAMES:
        candidate = search_dir / name
        if candidate.is_file():
            return candidate
    return None


def load_default_config() -> WatchConfig:
    """Load the default configuration from the package"""
    try:
        with open(DEFAULT_CONFIG_PATH, 'rb') as f:
            data = tomli.load(f)
        return WatchConfig.from_dict(data.get('buildwatch', data))
    except (OSError, tomli.TOMLDecodeError, ConfigError) as e:
        logger.debug(f"Packaged default config unavailable ({e}), using built-in defaults")
        return WatchConfig(
            watch_file_types=['*.go', '*.html'],
            include_paths=['./src', './templates'],
            exclude_paths=['./build', './vendor'],
            delay=500,
            commands=[
                Command('go build', ['-o', 'bin/app']),
                Command('./bin/app'),
            ],
            pre_commands=[Command('echo', ['Running pre-build commands...'])],
            post_commands=[Command('echo', ['App restarted successfully!'])],
        )


def write_default_config(config_path: str, force: bool = False) -> Path:
    """Write the default configuration to config_path.

    The format follows the file suffix: .json and .yaml/.yml are rendered from
    the default values, anything else receives a copy of the packaged TOML file.
    """
    target = Path(config_path)
    if target.is_dir():
        raise ConfigError(f"The config path should not be a directory: {target}")
    if target.exists() and not force:
        raise ConfigError(f"The config file already exists: {target}. Use --force to overwrite it.")

    suffix = target.suffix.lower()
    if suffix == '.json':
        with open(target, 'w', encoding='utf-8') as f:
            json.dump(load_default_config().to_dict(), f, indent=2)
            f.write('\n')
    elif suffix in ('.yaml', '.yml'):
        with open(target, 'w', encoding='utf-8') as f:
            yaml.safe_dump(load_default_config().to_dict(), f, sort_keys=False)
    else:
        target.write_text(DEFAULT_CONFIG_PATH.read_text(encoding='utf-8'), encoding='utf-8')

    return target
