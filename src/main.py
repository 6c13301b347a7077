"""Command line entry point: elevation profile of a GeoJSON LineString."""

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from domain.errors import ElevationProfileError
from domain.models import MinSpacingPolicy
from infrastructure.http.client import mask_api_key, validate_terrain_api
from services.profile_service import get_line_string_elevation_points
from services.settings_service import load_settings, save_settings
from shared.constants import ACCESS_TOKEN_ENV, DEFAULT_NUMBER_OF_POINTS, LOG_FORMAT

logger = logging.getLogger(__name__)

# Token files looked up in the working directory, first match wins
ENV_FILE_CANDIDATES = ('.secrets.env', '.env')


def setup_logging(level: str = 'INFO', log_file: Path | None = None) -> None:
    """Configure logging to stderr and, optionally, a file."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(log_file), encoding='utf-8'))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def load_token_env(env_file: Path | None = None) -> Path | None:
    """Load the first existing env file; an explicit one must exist."""
    if env_file is not None:
        if not env_file.exists():
            msg = f'Env file not found: {env_file}'
            raise FileNotFoundError(msg)
        load_dotenv(env_file)
        return env_file
    for name in ENV_FILE_CANDIDATES:
        p = Path.cwd() / name
        if p.exists():
            load_dotenv(p)
            return p
    return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='elevation-profile',
        description='Elevation profile along a GeoJSON LineString from Terrain-RGB tiles',
    )
    parser.add_argument('line', type=Path, help='GeoJSON file with a LineString or a Feature')
    parser.add_argument(
        '-n',
        '--points',
        type=int,
        default=DEFAULT_NUMBER_OF_POINTS,
        help='Maximum number of points to sample (>= 2)',
    )
    parser.add_argument(
        '--token',
        default=None,
        help=f'Mapbox access token (default: ${ACCESS_TOKEN_ENV})',
    )
    parser.add_argument(
        '--min-spacing',
        default='auto',
        help="Minimum meters between samples: 'auto', 'none' or a number",
    )
    parser.add_argument(
        '--env-file',
        type=Path,
        default=None,
        help=f'File defining {ACCESS_TOKEN_ENV} (default: .secrets.env or .env in the working directory)',
    )
    parser.add_argument('--config', type=Path, default=None, help='TOML settings file')
    parser.add_argument(
        '--write-config',
        type=Path,
        default=None,
        help='Write the effective settings to this TOML file and continue',
    )
    parser.add_argument('-o', '--output', type=Path, default=None, help='Output GeoJSON file')
    parser.add_argument('--log-file', type=Path, default=None)
    parser.add_argument(
        '--check-token',
        action='store_true',
        help='Validate the token against the tile server before sampling',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser


async def _run(args: argparse.Namespace) -> int:
    settings = load_settings(args.config)
    setup_logging('DEBUG' if args.verbose else settings.log_level, args.log_file)
    if args.write_config is not None:
        save_settings(settings, args.write_config)
        logger.info('Settings written to %s', args.write_config)

    env_path = load_token_env(args.env_file)
    if env_path is not None:
        logger.debug('Environment loaded from %s', env_path)
    token = args.token or os.getenv(ACCESS_TOKEN_ENV, '').strip()
    if not token:
        logger.error('No access token: pass --token or set %s', ACCESS_TOKEN_ENV)
        return 2
    logger.info('Using access token %s', mask_api_key(token))

    min_spacing = MinSpacingPolicy.parse(args.min_spacing)
    line = json.loads(args.line.read_text(encoding='utf-8'))

    if args.check_token:
        await validate_terrain_api(token, settings.terrain_url, verify_ssl=settings.verify_ssl)

    result = await get_line_string_elevation_points(
        line, args.points, token, min_spacing, settings=settings
    )
    text = json.dumps(result, indent=2)
    if args.output is None:
        sys.stdout.write(text + '\n')
    else:
        args.output.write_text(text, encoding='utf-8')
        logger.info('Profile written to %s', args.output)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging('DEBUG' if args.verbose else 'INFO', args.log_file)
    try:
        return asyncio.run(_run(args))
    except ElevationProfileError as e:
        logger.error('Profile failed: %s', e)
        return 1
    except (OSError, ValueError, RuntimeError) as e:
        logger.error('%s', e, exc_info=args.verbose)
        return 1


if __name__ == '__main__':
    sys.exit(main())
