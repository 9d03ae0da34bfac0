"""Configuration and logging setup.

Settings come from an INI file (section [shifttrades]). The path is taken from
the SHIFTTRADES_CONFIG environment variable, falling back to
config/shifttrades.ini; when the file does not exist the defaults apply.
"""
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional
import configparser
import logging
import os

from .columns import ColumnMode

CONFIG_ENV = 'SHIFTTRADES_CONFIG'
DEFAULT_CONFIG_PATH = Path('config/shifttrades.ini')
SECTION = 'shifttrades'
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    log_level: str = 'INFO'
    log_file: Optional[str] = None
    max_upload_bytes: int = 10 * 1024 * 1024
    workbook_mode: ColumnMode = ColumnMode.POSITIONAL
    paste_mode: ColumnMode = ColumnMode.POSITIONAL


def config_path() -> Path:
    return Path(os.environ.get(CONFIG_ENV, DEFAULT_CONFIG_PATH))


def load_settings(path: Optional[Path] = None) -> Settings:
    path = Path(path) if path is not None else config_path()
    config = configparser.ConfigParser()
    read = config.read(path, encoding='utf-8')
    if not read or not config.has_section(SECTION):
        return Settings()

    defaults = Settings()
    section = config[SECTION]
    return Settings(
        log_level=section.get('log_level', fallback=defaults.log_level).upper(),
        log_file=section.get('log_file', fallback=None) or None,
        max_upload_bytes=section.getint('max_upload_bytes', fallback=defaults.max_upload_bytes),
        workbook_mode=ColumnMode.parse(section.get('workbook_mode', fallback=defaults.workbook_mode.value)),
        paste_mode=ColumnMode.parse(section.get('paste_mode', fallback=defaults.paste_mode.value)),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def setup_logging(settings: Optional[Settings] = None):
    settings = settings or get_settings()
    kwargs = {'level': getattr(logging, settings.log_level, logging.INFO), 'format': LOG_FORMAT}
    if settings.log_file:
        kwargs['filename'] = settings.log_file
    logging.basicConfig(**kwargs)
    logger.info("logging configured (level=%s, file=%s)", settings.log_level, settings.log_file or 'stderr')
