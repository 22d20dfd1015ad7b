import json
import logging
import os

from .models import PracticePattern, SATURDAY

DEFAULT_ANCHOR = '1404-07-27'


def _defaults():
    return {
        'anchor_date': DEFAULT_ANCHOR,
        'practice_offsets': [1, 3, 5],   # Sonntag, Dienstag, Donnerstag
        'week_start': SATURDAY,
        'db_path': None,
    }


def config_dir():
    base = os.environ.get('DOJOCOMPASS_HOME') or os.path.join(os.path.expanduser('~'), '.dojocompass')
    os.makedirs(base, exist_ok=True)
    return base


def _config_path():
    return os.path.join(config_dir(), 'dojocompass_config.json')


def load_config():
    path = _config_path()
    cfg = _defaults()
    if not os.path.exists(path):
        return cfg
    try:
        with open(path, 'r', encoding='utf-8') as f:
            cfg.update(json.load(f))
    except (OSError, ValueError, TypeError) as e:
        logging.warning(f"Konfiguration {path} nicht lesbar, verwende Standardwerte: {e}")
        return _defaults()
    return cfg


def save_config(cfg: dict):
    path = _config_path()
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)


def practice_pattern_from_config(cfg: dict) -> PracticePattern:
    offsets = cfg.get('practice_offsets') or [1, 3, 5]
    return PracticePattern(
        offsets={int(o): 'practice' for o in offsets},
        week_start=int(cfg.get('week_start', SATURDAY)),
    )


def db_path_from_config(cfg: dict):
    return cfg.get('db_path') or os.path.join(config_dir(), 'dojocompass.db')
