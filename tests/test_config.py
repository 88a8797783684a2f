"""
Tests for the config module
"""

import dataclasses
import json
import tempfile

import pytest
import yaml

from buildwatch.core.config import (
    Command,
    ConfigError,
    WatchConfig,
    find_config_file,
    load_config,
    load_default_config,
    write_default_config,
)


class TestCommand:
    """Test the Command value type"""

    def test_argv_splits_embedded_arguments(self):
        """Test that a command string with spaces is split before args are appended"""
        command = Command('go build', ['-o', 'bin/app'])
        assert command.argv() == ['go', 'build', '-o', 'bin/app']

    def test_from_dict(self):
        command = Command.from_dict({'command': 'echo', 'args': ['hi', 3]})
        assert command == Command('echo', ['hi', '3'])

    def test_from_dict_string_entry(self):
        assert Command.from_dict('./bin/app') == Command('./bin/app', [])

    def test_from_dict_missing_command(self):
        with pytest.raises(ConfigError):
            Command.from_dict({'args': ['x']})

    def test_from_dict_rejects_scalar_args(self):
        with pytest.raises(ConfigError):
            Command.from_dict({'command': 'go build', 'args': '-o bin/app'})

    def test_argv_keeps_existing_path_with_spaces(self, tmp_path):
        """Test that an executable path containing spaces is not split"""
        app = tmp_path / 'my apps' / 'app'
        app.parent.mkdir()
        app.write_text('')

        assert Command(str(app), ['--port', '8080']).argv() == [str(app), '--port', '8080']

    def test_str(self):
        assert str(Command('go build', ['-o', 'bin/app'])) == 'go build -o bin/app'


class TestWatchConfig:
    """Test the WatchConfig class"""

    def test_empty_paths_and_types_get_defaults(self):
        """Test that include paths and watched types default to '.' and '*'"""
        config = WatchConfig()

        assert config.include_paths == ['.']
        assert config.watch_file_types == ['*']

    def test_config_is_read_only(self):
        config = WatchConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.delay = 10

    def test_from_dict(self):
        """Test creating WatchConfig from dictionary"""
        data = {
            'watch_file_types': ['*.go'],
            'include_paths': ['./src'],
            'exclude_paths': ['./build'],
            'delay': 250,
            'commands': [
                {'command': 'go build', 'args': ['-o', 'bin/app']},
                {'command': './bin/app', 'args': []},
            ],
            'pre_commands': [{'command': 'echo', 'args': ['pre']}],
            'post_commands': [{'command': 'echo', 'args': ['post']}],
            'log_level': 'debug',
            'debounce': False,
            'notify_on_change': False,
        }

        config = WatchConfig.from_dict(data)

        assert config.watch_file_types == ['*.go']
        assert config.include_paths == ['./src']
        assert config.exclude_paths == ['./build']
        assert config.delay == 250
        assert config.build_commands == [Command('go build', ['-o', 'bin/app'])]
        assert config.run_command == Command('./bin/app', [])
        assert config.pre_commands == [Command('echo', ['pre'])]
        assert config.post_commands == [Command('echo', ['post'])]
        assert config.log_level == 'debug'
        assert config.debounce is False
        assert config.notify_on_change is False

    def test_from_dict_defaults(self):
        """Test WatchConfig defaults when keys are missing"""
        config = WatchConfig.from_dict({})

        assert config.include_paths == ['.']
        assert config.watch_file_types == ['*']
        assert config.delay == 500
        assert config.commands == []
        assert config.run_command is None
        assert config.build_commands == []
        assert config.debounce is True
        assert config.build_artifact == 'bin/app'
        assert config.abort_on_failure is False
        assert config.run_on_start is True

    def test_from_dict_drops_empty_include_paths(self):
        config = WatchConfig.from_dict({'include_paths': ['', None]})
        assert config.include_paths == ['.']

    def test_from_dict_rejects_non_mapping(self):
        with pytest.raises(ConfigError):
            WatchConfig.from_dict(['not', 'a', 'mapping'])

    @pytest.mark.parametrize('key', ['watch_file_types', 'include_paths', 'exclude_paths', 'commands'])
    def test_from_dict_rejects_scalar_lists(self, key):
        """Test that a bare string is rejected instead of split into characters"""
        with pytest.raises(ConfigError):
            WatchConfig.from_dict({key: './src'})

    @pytest.mark.parametrize('key', ['debounce', 'notify_on_change', 'abort_on_failure', 'run_on_start'])
    def test_from_dict_rejects_non_bool_flags(self, key):
        with pytest.raises(ConfigError):
            WatchConfig.from_dict({key: 'false'})

    def test_single_command_is_run_command(self):
        config = WatchConfig(commands=[Command('python', ['app.py'])])
        assert config.build_commands == []
        assert config.run_command == Command('python', ['app.py'])


class TestLoadConfig:
    """Test the load_config function"""

    def test_load_toml_config(self, tmp_path):
        """Test loading a nested TOML configuration"""
        config_file = tmp_path / 'buildwatch.config.toml'
        config_file.write_text('''
[buildwatch]
watch_file_types = ["*.go"]
include_paths = ["./src"]
delay = 100

[[buildwatch.commands]]
command = "./bin/app"
args = ["--port", "8080"]
''')

        config = load_config(str(config_file))

        assert config is not None
        assert config.watch_file_types == ['*.go']
        assert config.include_paths == ['./src']
        assert config.delay == 100
        assert config.run_command == Command('./bin/app', ['--port', '8080'])

    def test_load_flat_toml_config(self, tmp_path):
        config_file = tmp_path / 'settings.toml'
        config_file.write_text('watch_file_types = [".py"]\nlog_level = "warning"\n')

        config = load_config(str(config_file))

        assert config is not None
        assert config.watch_file_types == ['.py']
        assert config.log_level == 'warning'

    def test_load_yaml_config(self, tmp_path):
        """Test loading a plain config.yaml file"""
        config_file = tmp_path / 'config.yaml'
        config_file.write_text('''
watch_file_types:
  - "*.go"
  - "*.html"
include_paths:
  - "./src"
exclude_paths:
  - "./vendor"
commands:
  - command: "go build"
    args: ["-o", "bin/app"]
  - command: "./bin/app"
    args: []
delay: 1000
debounce: true
notify_on_change: true
''')

        config = load_config(str(config_file))

        assert config is not None
        assert config.watch_file_types == ['*.go', '*.html']
        assert config.exclude_paths == ['./vendor']
        assert config.delay == 1000
        assert config.build_commands == [Command('go build', ['-o', 'bin/app'])]

    def test_load_json_config(self):
        """Test loading JSON configuration"""
        json_data = {
            'watch_file_types': ['.js'],
            'include_paths': ['lib'],
            'log_level': 'error',
        }

        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            json.dump(json_data, f)
            f.flush()

            config = load_config(f.name)

            assert config is not None
            assert config.watch_file_types == ['.js']
            assert config.include_paths == ['lib']
            assert config.log_level == 'error'

    def test_load_nonexistent_config(self):
        """Test loading config from non-existent file"""
        assert load_config('/nonexistent/config.toml') is None

    def test_load_invalid_toml(self, tmp_path):
        config_file = tmp_path / 'broken.toml'
        config_file.write_text('invalid toml content ][')
        assert load_config(str(config_file)) is None

    def test_load_invalid_yaml(self, tmp_path):
        config_file = tmp_path / 'broken.yaml'
        config_file.write_text('commands: [unclosed')
        assert load_config(str(config_file)) is None

    def test_load_bad_command_entry(self, tmp_path):
        config_file = tmp_path / 'bad.json'
        config_file.write_text(json.dumps({'commands': [{'args': ['x']}]}))
        assert load_config(str(config_file)) is None


    def test_load_yaml_with_scalar_lists(self, tmp_path):
        config_file = tmp_path / 'config.yaml'
        config_file.write_text('include_paths: ./src\nwatch_file_types: "*.go"\nexclude_paths: ./build\n')

        assert load_config(str(config_file)) is None


class TestFindConfigFile:
    """Test config file discovery"""

    def test_prefers_toml(self, tmp_path):
        (tmp_path / 'config.yaml').write_text('delay: 1\n')
        (tmp_path / 'buildwatch.config.toml').write_text('delay = 1\n')

        assert find_config_file(tmp_path) == tmp_path / 'buildwatch.config.toml'

    def test_finds_plain_config_yaml(self, tmp_path):
        (tmp_path / 'config.yaml').write_text('delay: 1\n')
        assert find_config_file(tmp_path) == tmp_path / 'config.yaml'

    def test_nothing_found(self, tmp_path):
        assert find_config_file(tmp_path) is None


class TestDefaultConfig:
    """Test the packaged default configuration"""

    def test_load_default_config(self):
        """Test loading the default configuration from package"""
        config = load_default_config()

        assert isinstance(config, WatchConfig)
        assert '*.go' in config.watch_file_types
        assert './src' in config.include_paths
        assert config.delay > 0
        assert config.build_commands == [Command('go build', ['-o', 'bin/app'])]
        assert config.run_command == Command('./bin/app', [])
        assert config.build_artifact == 'bin/app'

    def test_write_toml(self, tmp_path):
        target = tmp_path / 'buildwatch.config.toml'

        write_default_config(str(target))

        assert 'watch_file_types' in target.read_text()
        assert load_config(str(target)) == load_default_config()

    def test_write_json(self, tmp_path):
        target = tmp_path / 'buildwatch.config.json'

        write_default_config(str(target))

        data = json.loads(target.read_text())
        assert data['commands'][0] == {'command': 'go build', 'args': ['-o', 'bin/app']}
        assert load_config(str(target)) == load_default_config()

    def test_write_yaml(self, tmp_path):
        target = tmp_path / 'config.yaml'

        write_default_config(str(target))

        data = yaml.safe_load(target.read_text())
        assert data['watch_file_types'] == ['*.go', '*.html']

    def test_refuses_overwrite(self, tmp_path):
        target = tmp_path / 'buildwatch.config.toml'
        target.write_text('delay = 1\n')

        with pytest.raises(ConfigError):
            write_default_config(str(target))
        assert target.read_text() == 'delay = 1\n'

    def test_force_overwrite(self, tmp_path):
        target = tmp_path / 'buildwatch.config.toml'
        target.write_text('delay = 1\n')

        write_default_config(str(target), force=True)

        assert load_config(str(target)).delay == 500

    def test_refuses_directory(self, tmp_path):
        with pytest.raises(ConfigError):
            write_default_config(str(tmp_path), force=True)
