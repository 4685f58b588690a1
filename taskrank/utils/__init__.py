"""Utility functions."""

from .config import get_default_config, load_config, merge_config, resolve_config
from .datetime_utils import days_between, parse_datetime, start_of_day, to_naive_utc
from .math_utils import (
    exponential_decay,
    gaussian_score,
    hyperbolic_growth,
    jaccard,
    sigmoid_decay,
)
from .text import extract_salient_tokens

__all__ = [
    'get_default_config',
    'load_config',
    'merge_config',
    'resolve_config',
    'days_between',
    'parse_datetime',
    'start_of_day',
    'to_naive_utc',
    'exponential_decay',
    'gaussian_score',
    'hyperbolic_growth',
    'jaccard',
    'sigmoid_decay',
    'extract_salient_tokens',
]
