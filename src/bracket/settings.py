"""
Display settings for bracket rendering, stored as YAML.
"""
import copy
import logging
import os

import yaml

logger = logging.getLogger(__name__)

# Placeholders each template is formatted with
TEMPLATE_SAMPLES = {
    'round_label_template': {'number': 1},
    'winner_label_template': {'round': 1, 'match': 1},
}


def get_default_settings():
    """Return default settings."""
    return {
        'round_labels': {
            4: 'Quarterfinal',
            2: 'Semifinal',
            1: 'Final',
        },
        'round_label_template': 'Round {number}',
        'winner_label_template': 'Winner R{round}-M{match}',
        'bye_label': 'BYE',
    }


def merge_settings(overrides=None):
    """Merge user settings over the defaults, ignoring unknown keys."""
    settings = get_default_settings()
    if not overrides:
        return settings
    if not isinstance(overrides, dict):
        logger.warning(f'Ignoring settings of type {type(overrides).__name__}; expected a mapping')
        return settings

    labels = overrides.get('round_labels')
    if isinstance(labels, dict):
        merged_labels = {}
        for key, value in labels.items():
            try:
                merged_labels[int(key)] = str(value)
            except (TypeError, ValueError):
                logger.warning(f'Ignoring round label with non-numeric match count: {key!r}')
        settings['round_labels'] = merged_labels
    elif labels is not None:
        logger.warning('Ignoring round_labels: expected a mapping of match count to label')

    for key in ('round_label_template', 'winner_label_template', 'bye_label'):
        value = overrides.get(key)
        if not isinstance(value, str) or not value:
            continue
        if key in TEMPLATE_SAMPLES:
            try:
                value.format(**TEMPLATE_SAMPLES[key])
            except (KeyError, IndexError, ValueError, AttributeError) as e:
                logger.warning(f'Ignoring {key} {value!r}: {e!r}; using {settings[key]!r}')
                continue
        settings[key] = value
    return settings


def load_settings(file_path):
    """Load settings from YAML, falling back to defaults when missing or unreadable."""
    if not file_path or not os.path.exists(file_path):
        return get_default_settings()
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f'Failed to parse {file_path}: {e}')
        return get_default_settings()
    return merge_settings(data)


def save_settings(file_path, settings):
    """Write settings to YAML."""
    os.makedirs(os.path.dirname(file_path) or '.', exist_ok=True)
    data = copy.deepcopy(settings)
    with open(file_path, 'w', encoding='utf-8') as f:
        yaml.dump(data, f, default_flow_style=False, allow_unicode=True)
