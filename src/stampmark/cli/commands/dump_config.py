# topmark:header:start
#
#   project      : StampMark
#   file         : dump_config.py
#   file_relpath : src/stampmark/cli/commands/dump_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StampMark `dump-config` command.

Emits the effective configuration as TOML after applying defaults, discovered
and explicit config files, and CLI overrides. The output is wrapped between
``# === BEGIN ===`` and ``# === END ===`` markers for easy parsing in tests or
tooling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from stampmark.cli.cmd_common import build_config, get_effective_verbosity
from stampmark.cli.console import get_console_safely
from stampmark.cli.options import common_config_options, common_filter_options, stamp_toggle_options
from stampmark.cli.utils import render_toml_block
from stampmark.config.loaders import to_toml
from stampmark.config.logging import get_logger

if TYPE_CHECKING:
    from stampmark.cli.console import ClickConsole
    from stampmark.config import Config
    from stampmark.config.logging import StampmarkLogger

logger: StampmarkLogger = get_logger(__name__)


@click.command(
    name="dump-config",
    help="Dump the final merged StampMark configuration as TOML.",
)
@common_config_options
@common_filter_options
@stamp_toggle_options
def dump_config_command(
    *,
    no_config: bool,
    config_paths: tuple[str, ...],
    include_patterns: tuple[str, ...],
    exclude_patterns: tuple[str, ...],
    enable_created: bool | None,
    enable_modified: bool | None,
) -> None:
    """Dump the final merged configuration as TOML."""
    ctx: click.Context = click.get_current_context()
    console: ClickConsole = get_console_safely()

    config: Config = build_config(
        ctx,
        no_config=no_config,
        config_paths=config_paths,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
        enable_created=enable_created,
        enable_modified=enable_modified,
    )
    for source in config.config_files:
        logger.info("Config source: %s", source)

    render_toml_block(
        console=console,
        title="StampMark Config Dump:",
        toml_text=to_toml(config.to_toml_dict()),
        verbosity=max(get_effective_verbosity(ctx), 1),
    )
