"""Configuration management."""

import copy
import json
import logging
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file, merged over the defaults."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            overrides = yaml.safe_load(f)
        elif path.suffix.lower() == '.json':
            overrides = json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

    if overrides is None:
        overrides = {}
    if not isinstance(overrides, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    logger.debug("Loaded config overrides from %s: %s", config_path, sorted(overrides))
    return merge_config(get_default_config(), overrides)


def merge_config(base: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Deep-merge overrides into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def resolve_config(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Return config completed with defaults for any missing keys."""
    if config is None:
        return get_default_config()
    return merge_config(get_default_config(), config)


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        'preferences': {
            'due_date_urgency_weight': 70,
            'context_grouping_weight': 50,
            'energy_matching_weight': 50,
            'similar_work_grouping_weight': 50,
            'stakeholder_grouping_weight': 30,
            'tag_similarity_weight': 40,
            'blocked_task_penalty': 100,
            'default_task_duration_minutes': 30,
            'morning_energy_peak': 10,
            'afternoon_energy_peak': 15,
        },
        'urgency': {
            'undated_midpoint_days': 14,
            'undated_steepness': 0.15,
            'undated_scale': 0.5,
            'overdue_base': 1.0,
            'overdue_scale': 0.3,
            'overdue_max': 0.5,
            'near_midpoint_days': 3,
            'near_steepness': 0.8,
            'half_life_days': 7,
            'blend_midpoint_days': 7,
            'blend_steepness': 0.5,
        },
        'importance': {
            'priority_scale': 3.0,
            'stakeholder_weight': 1.0,
            'self_stakeholder_factor': 0.5,
            'project_score': 0.7,
            'project_max': 1.0,
            'critical_path_bonus': 1.0,
            'deep_work_weight': 0.5,
            'blocking_step': 0.3,
            'neutral': 0.5,
        },
        'effort': {
            'overflow_scale': 0.1,
            'log_divisor_minutes': 5.0,
            'log_factor': 0.3,
            'tight_fit_min': 0.8,
            'tight_fit_max': 1.0,
            'tight_fit_bonus': 1.15,
        },
        'context_fit': {
            'universal': 0.6,
            'unconstrained': 0.8,
            'exact_match_bonus': 0.2,
        },
        'energy': {
            'neutral': 0.7,
            'alignment_sigma': 1.5,
            'trough_level': 2,
            'demanding_level': 4,
            'demanding_penalty': 0.5,
            'trough_bonus': 1.1,
            'morning_sigma': 2.0,
            'morning_amplitude': 5.0,
            'afternoon_sigma': 2.5,
            'afternoon_amplitude': 4.0,
            'lunch_start_hour': 12.5,
            'lunch_end_hour': 14.5,
            'lunch_center_hour': 13.5,
            'lunch_sigma': 1.0,
            'lunch_amplitude': 1.5,
            'ultradian_amplitude': 0.3,
            'ultradian_period_minutes': 90,
            'baseline': 2.5,
            'min_level': 1.0,
            'max_level': 5.0,
        },
        'momentum': {
            'neutral': 0.5,
            'recency_decay': 0.3,
            'same_project_boost': 1.3,
        },
        'dependency': {
            'floor': 0.01,
            'base': 0.7,
            'unblock_factor': 0.15,
            'unblock_cap': 0.3,
            'critical_path_boost': 1.2,
            'parent_priority_boost': 1.1,
        },
        'staleness': {
            'fresh_days': 1,
            'half_life_days': 14,
            'exponent': 1.5,
            'neglect_after_days': 30,
            'neglect_midpoint_days': 30,
            'neglect_steepness': 0.1,
            'neglect_floor_scale': 0.4,
        },
        'opportunity_cost': {
            'max_weight': 0.7,
            'average_weight': 0.3,
            'priority_pivot': 4,
            'priority_step': 2.0,
            'overdue_value': 5.0,
            'due_tiers': [[1, 3.0], [3, 2.0], [7, 1.0]],
            'blocking_value': 1.5,
            'project_value': 1.0,
            'stakeholder_value': 0.5,
        },
        'batching': {
            'baseline': 0.5,
            'category_bonus': 0.2,
            'project_bonus': 0.25,
            'tag_bonus': 0.15,
            'stakeholder_bonus': 0.15,
            'context_bonus': 0.1,
        },
        'similarity': {
            'category_weight': 2.0,
            'project_weight': 3.0,
            'context_weight': 1.5,
            'tag_weight': 1.5,
            'stakeholder_weight': 1.0,
            'energy_weight': 0.5,
            'text_weight': 1.0,
            'energy_span': 4.0,
            'text_default': 0.3,
            'default': 0.3,
        },
        'weights': {
            'base': {
                'importance': 0.5,
                'effort': 0.3,
                'momentum': 0.3,
                'dependency': 0.4,
                'staleness': 0.2,
                'opportunity_cost': 0.3,
            },
            'time_pressure': {
                'urgency': 1.5,
                'effort': 1.3,
                'batching_affinity': 0.7,
            },
            'low_energy': {
                'threshold': 2,
                'multipliers': {'energy_alignment': 1.5, 'effort': 1.2},
            },
            'large_backlog': {
                'threshold': 50,
                'multipliers': {'importance': 1.2, 'urgency': 1.1, 'staleness': 0.8},
            },
            'deep_work': {
                'window_hours': 2,
                'multipliers': {'importance': 1.3, 'effort': 0.8, 'momentum': 1.2},
            },
            'end_of_day': {
                'hour': 16,
                'multipliers': {'effort': 1.4, 'urgency': 1.2},
            },
        },
        'aggregation': {
            'score_floor': 0.001,
            'scale': 100.0,
        },
        'ranking': {
            'pareto_boost': 1.15,
            'time_pressure_due_days': 1,
            'time_pressure_task_count': 3,
            'default_block_minutes': 60,
        },
        'recency': {
            'categories': 5,
            'projects': 3,
            'tags': 10,
            'contexts': 5,
            'completed': 10,
            'tags_per_pick': 3,
            'contexts_per_pick': 2,
        },
        'critical_path': {
            'default_minutes': 30,
            'priority_pivot': 4,
            'priority_step': 10,
        },
        'clustering': {
            'max_clusters': 7,
        },
        'evaluation': {
            'task_count': 40,
            'due_date_range_days': 21,
            'max_age_days': 60,
            'blocker_probability': 0.15,
        },
    }
