from __future__ import annotations

import logging
from pathlib import Path

import tomlkit

from domain.models import ProfilerSettings

logger = logging.getLogger(__name__)


def load_settings(path: str | Path | None = None) -> ProfilerSettings:
    """
    Load ProfilerSettings from a TOML file.

    Without a path the defaults are returned; an explicit path that does not
    exist raises FileNotFoundError.
    """
    if path is None:
        return ProfilerSettings()
    p = Path(path)
    if not p.exists():
        msg = f'Settings file not found: {p}'
        raise FileNotFoundError(msg)
    data = tomlkit.parse(p.read_text(encoding='utf-8'))
    settings = ProfilerSettings.model_validate(data)
    logger.info('Settings loaded from %s', p)
    return settings


def save_settings(settings: ProfilerSettings, path: str | Path) -> None:
    """Write settings to a TOML file, creating parent directories."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    doc = tomlkit.document()
    for key, value in settings.model_dump().items():
        doc.add(key, value)
    p.write_text(tomlkit.dumps(doc), encoding='utf-8')
