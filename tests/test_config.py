"""
Unit tests for featureprov.config module
"""
import unittest
import tempfile
import os
import shutil
import json
import logging
from pathlib import Path
from unittest.mock import patch

import yaml

from featureprov.config import (
    load_config,
    save_config,
    get_config_path,
    get_default_config,
    merge_configs,
    apply_env_overrides,
    configure_logging,
    DEBUG_FORMAT,
)


class TestConfigManagement(unittest.TestCase):
    """Test configuration management functionality"""

    def setUp(self):
        """Set up test environment"""
        self.temp_dir = tempfile.mkdtemp()
        self.env = patch.dict(os.environ, {'HOME': self.temp_dir}, clear=False)
        self.env.start()
        for key in list(os.environ):
            if key.startswith('FEATUREPROV_'):
                del os.environ[key]

    def tearDown(self):
        """Clean up test environment"""
        self.env.stop()
        shutil.rmtree(self.temp_dir)

    def test_get_default_config(self):
        """Test default configuration structure"""
        config = get_default_config()

        self.assertEqual(config['resolver']['default_start_level'], 60)
        self.assertEqual(config['resolver']['working_directory'], '')
        self.assertEqual(config['fetch']['timeout_seconds'], 30)
        self.assertIn('level', config['logging'])

    def test_load_config_no_file(self):
        """Test loading config when no file exists"""
        config = load_config()

        self.assertEqual(config, get_default_config())

    def test_default_config_path(self):
        path = get_config_path()

        self.assertEqual(path, Path(self.temp_dir) / '.featureprov' / 'config.json')

    def test_load_json_config(self):
        config_dir = Path(self.temp_dir) / '.featureprov'
        config_dir.mkdir()
        (config_dir / 'config.json').write_text(json.dumps({'resolver': {'default_start_level': 80}}))

        config = load_config()

        self.assertEqual(config['resolver']['default_start_level'], 80)
        # Untouched defaults survive the merge
        self.assertEqual(config['resolver']['working_directory'], '')
        self.assertEqual(config['fetch']['timeout_seconds'], 30)

    def test_load_yaml_config(self):
        config_dir = Path(self.temp_dir) / '.featureprov'
        config_dir.mkdir()
        (config_dir / 'config.yaml').write_text(yaml.safe_dump({'fetch': {'timeout_seconds': 5}}))

        config = load_config()

        self.assertEqual(config['fetch']['timeout_seconds'], 5)

    def test_load_toml_config(self):
        config_dir = Path(self.temp_dir) / '.featureprov'
        config_dir.mkdir()
        (config_dir / 'config.toml').write_text('[resolver]\nworking_directory = "/tmp/runtime"\n')

        config = load_config()

        self.assertEqual(config['resolver']['working_directory'], '/tmp/runtime')

    def test_env_config_path(self):
        custom = Path(self.temp_dir) / 'custom.json'
        custom.write_text(json.dumps({'logging': {'level': 'DEBUG'}}))

        with patch.dict(os.environ, {'FEATUREPROV_CONFIG': str(custom)}):
            self.assertEqual(get_config_path(), custom)
            self.assertEqual(load_config()['logging']['level'], 'DEBUG')

    def test_invalid_config_file_falls_back_to_defaults(self):
        config_dir = Path(self.temp_dir) / '.featureprov'
        config_dir.mkdir()
        (config_dir / 'config.json').write_text('{not json')

        config = load_config()

        self.assertEqual(config, get_default_config())

    def test_save_and_reload(self):
        config = get_default_config()
        config['resolver']['default_start_level'] = 55

        for name in ['saved.json', 'saved.yaml', 'saved.toml']:
            path = Path(self.temp_dir) / name
            save_config(config, path)
            self.assertTrue(path.exists())
            self.assertEqual(load_config(path)['resolver']['default_start_level'], 55)

    def test_env_overrides(self):
        config = get_default_config()

        with patch.dict(os.environ, {
            'FEATUREPROV_RESOLVER_DEFAULT_START_LEVEL': '80',
            'FEATUREPROV_RESOLVER_WORKING_DIRECTORY': '/tmp/wd',
            'FEATUREPROV_FETCH_USER_AGENT': 'ci-agent',
            'FEATUREPROV_UNKNOWN_KEY': 'ignored',
        }):
            config = apply_env_overrides(config)

        self.assertEqual(config['resolver']['default_start_level'], 80)
        self.assertEqual(config['resolver']['working_directory'], '/tmp/wd')
        self.assertEqual(config['fetch']['user_agent'], 'ci-agent')
        self.assertNotIn('unknown', config)

    def test_merge_configs(self):
        base = {'a': {'b': 1, 'c': 2}, 'd': 3}
        merged = merge_configs(base, {'a': {'b': 10}, 'e': 4})

        self.assertEqual(merged, {'a': {'b': 10, 'c': 2}, 'd': 3, 'e': 4})
        self.assertEqual(base['a']['b'], 1)


class TestConfigureLogging(unittest.TestCase):
    """Test configure_logging"""

    def setUp(self):
        self.handler = logging.StreamHandler()
        logging.getLogger().addHandler(self.handler)
        self.previous_level = logging.getLogger('featureprov').level

    def tearDown(self):
        logging.getLogger().removeHandler(self.handler)
        logging.getLogger('featureprov').setLevel(self.previous_level)

    def test_level_and_format_from_config(self):
        config = {'logging': {'level': 'warning', 'format': '[%(levelname)s] %(message)s'}}

        level = configure_logging(config)

        self.assertEqual(level, logging.WARNING)
        self.assertEqual(logging.getLogger('featureprov').level, logging.WARNING)
        self.assertEqual(self.handler.formatter._fmt, '[%(levelname)s] %(message)s')

    def test_debug_adds_timestamps(self):
        level = configure_logging(get_default_config(), debug=True)

        self.assertEqual(level, logging.DEBUG)
        self.assertEqual(self.handler.formatter._fmt, DEBUG_FORMAT)
        self.assertIn('asctime', self.handler.formatter._fmt)

    def test_unknown_level_falls_back_to_info(self):
        self.assertEqual(configure_logging({'logging': {'level': 'chatty'}}), logging.INFO)


if __name__ == '__main__':
    unittest.main()
