"""Tests for configuration loading and merging."""

import json

import pytest
import yaml

from taskrank.utils.config import get_default_config, load_config, merge_config, resolve_config


class TestLoadConfig:
    """Test reading configuration files."""

    def test_yaml_overrides_merge_over_defaults(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text(yaml.safe_dump({'ranking': {'pareto_boost': 1.3}, 'preferences': {'blocked_task_penalty': 60}}))

        config = load_config(str(path))
        assert config['ranking']['pareto_boost'] == 1.3
        assert config['ranking']['default_block_minutes'] == 60
        assert config['preferences']['blocked_task_penalty'] == 60
        assert config['urgency'] == get_default_config()['urgency']

    def test_json(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'clustering': {'max_clusters': 3}}))
        assert load_config(str(path))['clustering']['max_clusters'] == 3

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / 'empty.yml'
        path.write_text('')
        assert load_config(str(path)) == get_default_config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / 'nope.yaml'))

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / 'config.ini'
        path.write_text('[ranking]')
        with pytest.raises(ValueError):
            load_config(str(path))

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text('- just\n- a list\n')
        with pytest.raises(ValueError):
            load_config(str(path))


class TestMergeConfig:
    """Test deep merging."""

    def test_merge_does_not_mutate_base(self):
        base = {'a': {'b': 1, 'c': 2}}
        merged = merge_config(base, {'a': {'b': 5}})
        assert merged == {'a': {'b': 5, 'c': 2}}
        assert base == {'a': {'b': 1, 'c': 2}}

    def test_non_dict_values_replace(self):
        assert merge_config({'tiers': [[1, 3.0]]}, {'tiers': [[2, 1.0]]}) == {'tiers': [[2, 1.0]]}

    def test_resolve_config(self):
        assert resolve_config(None) == get_default_config()
        assert resolve_config({'weights': {'base': {'importance': 0.9}}})['weights']['base']['effort'] == 0.3

    def test_default_sections(self):
        config = get_default_config()
        for section in ('urgency', 'importance', 'effort', 'context_fit', 'energy', 'momentum',
                        'dependency', 'staleness', 'opportunity_cost', 'batching', 'similarity',
                        'weights', 'aggregation', 'ranking', 'recency', 'critical_path',
                        'clustering', 'preferences', 'evaluation'):
            assert section in config
