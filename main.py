"""Application entry point for Brain Dump.

Updates:
  v0.2.0 - 2026-09-28 - Dispatch keybinding commands and first-run tutorial.
  v0.1.1 - 2026-09-24 - Configure logging from the loaded settings' log level.
  v0.1.0 - 2026-09-21 - Wire settings, services, and CLI commands.
"""

from __future__ import annotations

import logging

from cli.commands import COMMAND_SPECS, EXIT_STORAGE_ERROR
from cli.parser import parse_args
from cli.runtime import setup_logging
from cli.settings_summary import print_settings_summary
from config import BrainDumpSettings, PreferenceStorageError, SettingsError, load_settings
from core import BrainDumpError, BrainDumpServices, build_services

EXIT_SETTINGS_ERROR = 2
EXIT_INIT_ERROR = 3


def _initialise_services(
    settings: BrainDumpSettings,
    logger: logging.Logger,
) -> BrainDumpServices | None:
    try:
        return build_services(settings)
    except (BrainDumpError, OSError) as exc:  # pragma: no cover - surfaced to CLI
        logger.error("Failed to initialise services: %s", exc)
        return None


def main(argv: list[str] | None = None) -> int:
    """Entrypoint that wires settings, services, and CLI commands."""
    args = parse_args(argv)
    logger = logging.getLogger("brain_dump.main")
    try:
        settings = load_settings()
    except SettingsError as exc:
        setup_logging(args.logging_config)
        cause = f" ({exc.__cause__})" if exc.__cause__ else ""
        logger.error("Failed to load settings: %s%s", exc, cause)
        return EXIT_SETTINGS_ERROR
    setup_logging(args.logging_config, settings.log_level)

    if args.print_settings:
        print_settings_summary(settings)
        return 0

    services = _initialise_services(settings, logger)
    if services is None:
        return EXIT_INIT_ERROR

    command_spec = COMMAND_SPECS[getattr(args, "command", None)]
    try:
        return command_spec.handler(services, args, logger)
    except (BrainDumpError, PreferenceStorageError) as exc:
        logger.error("Command failed: %s", exc)
        return EXIT_STORAGE_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
