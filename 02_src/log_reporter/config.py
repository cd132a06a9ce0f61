"""Settings loading and project-level path helpers."""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Union

from sentry_sdk.utils import BadDsn, Dsn

from .classification import DEFAULT_TIMEOUT_CODES
from .errors import ConfigError
from .logging_config import get_logger
from .models import Destination
from .normalization import OPAQUE_RULES

logger = get_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"

MAPPING_PREFIX = "SENTRY_MAPPING_"


PathLike = Union[str, Path]


def resolve_log_path(env_value: PathLike | None = None) -> Path | None:
    """Resolve LOG_FILE to an absolute path, or None for console-only logging."""
    if not env_value:
        return None

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


@dataclass(frozen=True)
class Settings:
    """Process settings, built once at startup and never mutated."""

    port: int = 3000
    host: str = "0.0.0.0"
    sentry_dsn: str | None = None
    sentry_debug: bool = False
    sentry_traces_sample_rate: float = 0.0
    release: str | None = None
    destinations: Mapping[str, Destination] = field(
        default_factory=lambda: MappingProxyType({})
    )
    timeout_codes: frozenset[str] = DEFAULT_TIMEOUT_CODES
    path_id_patterns: tuple[str, ...] = ()
    path_id_regexes: tuple[str, ...] = ()
    send_timeout: float = 10.0
    max_concurrent_sends: int = 16
    log_level: str = "INFO"
    log_file: Path | None = None
    problems: tuple[str, ...] = ()


def _parse_number(environ: Mapping[str, str], name: str, default, cast):
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError as e:
        raise ConfigError(f"could not parse {name}={raw!r}") from e
    if value < 0:
        raise ConfigError(f"{name} must not be negative")
    return value


def _split_list(raw: str | None, sep: str | None = ",") -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(item.strip() for item in raw.split(sep) if item.strip())


def parse_mappings(
    environ: Mapping[str, str],
) -> tuple[dict[str, Destination], list[str]]:
    """
    Collect destinations from SENTRY_MAPPING_* variables.

    Each value has the form ``<drain token>|<sentry environment>|<sentry dsn>``.
    Lines that are malformed, carry an invalid DSN or repeat a token are
    skipped and described in the returned problem list.
    """
    destinations: dict[str, Destination] = {}
    problems: list[str] = []

    for name in sorted(environ):
        if not name.startswith(MAPPING_PREFIX):
            continue

        pieces = [piece.strip() for piece in environ[name].strip().split("|")]
        if len(pieces) < 3 or not all(pieces[:3]):
            problems.append(f"{name}: wrong sentry mapping line format")
            continue

        token, environment, dsn = pieces[:3]
        try:
            Dsn(dsn)
        except BadDsn as e:
            problems.append(f"{name}: invalid sentry dsn ({e})")
            continue

        if token in destinations:
            problems.append(f"{name}: duplicate drain token")
            continue

        destinations[token] = Destination(
            token=token, environment=environment, dsn=dsn
        )
        logger.info(
            "Loaded drain mapping",
            extra={"context": {"variable": name, "environment": environment}},
        )

    return destinations, problems


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Variables to read. Defaults to os.environ.

    Raises:
        ConfigError: A scalar setting could not be parsed.
    """
    if environ is None:
        environ = os.environ

    destinations, problems = parse_mappings(environ)

    pattern_names = []
    for name in _split_list(environ.get("PATH_ID_PATTERNS")):
        if name in OPAQUE_RULES:
            pattern_names.append(name)
        else:
            problems.append(f"PATH_ID_PATTERNS: unknown pattern {name!r}")

    regexes = []
    for regex in _split_list(environ.get("PATH_ID_REGEXES"), sep=None):
        try:
            re.compile(regex)
        except re.error as e:
            problems.append(f"PATH_ID_REGEXES: invalid regex {regex!r} ({e})")
        else:
            regexes.append(regex)

    for problem in problems:
        logger.error("Invalid configuration: %s", problem)

    timeout_codes = frozenset(
        code.upper() for code in _split_list(environ.get("TIMEOUT_CODES"))
    )

    return Settings(
        port=_parse_number(environ, "PORT", 3000, int),
        host=environ.get("HOST", "0.0.0.0"),
        sentry_dsn=environ.get("SENTRY_DSN") or None,
        sentry_debug=bool(environ.get("SENTRY_DEBUG", "").strip()),
        sentry_traces_sample_rate=_parse_number(
            environ, "SENTRY_TRACES_SAMPLE_RATE", 0.0, float
        ),
        release=environ.get("HEROKU_RELEASE_VERSION") or None,
        destinations=MappingProxyType(destinations),
        timeout_codes=timeout_codes or DEFAULT_TIMEOUT_CODES,
        path_id_patterns=tuple(pattern_names),
        path_id_regexes=tuple(regexes),
        send_timeout=_parse_number(environ, "REPORT_SEND_TIMEOUT", 10.0, float),
        max_concurrent_sends=max(
            1, _parse_number(environ, "REPORT_MAX_CONCURRENCY", 16, int)
        ),
        log_level=environ.get("LOG_LEVEL", "INFO"),
        log_file=resolve_log_path(environ.get("LOG_FILE")),
        problems=tuple(problems),
    )
