# topmark:header:start
#
#   project      : StampMark
#   file         : settings.py
#   file_relpath : src/stampmark/cli/commands/settings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StampMark `settings` command.

Shows the effective timestamp settings with labels in the active locale
(``--lang``, the ``locale`` config key, ``STAMPMARK_LANG`` or the POSIX locale).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from stampmark.cli.cmd_common import build_config, get_effective_verbosity
from stampmark.cli.console import get_console_safely
from stampmark.cli.options import common_config_options
from stampmark.i18n import get_messages

if TYPE_CHECKING:
    from stampmark.cli.console import ClickConsole
    from stampmark.config import Config
    from stampmark.i18n import Messages


def _on_off(value: bool) -> str:
    return "✔" if value else "✘"


@click.command(
    name="settings",
    help="Show the effective timestamp settings (localized).",
)
@common_config_options
def settings_command(*, no_config: bool, config_paths: tuple[str, ...]) -> None:
    """Print each setting with its localized name, value and description."""
    ctx: click.Context = click.get_current_context()
    console: ClickConsole = get_console_safely()
    vlevel: int = get_effective_verbosity(ctx)

    config: Config = build_config(ctx, no_config=no_config, config_paths=config_paths)
    messages: Messages = get_messages(config.locale)

    if vlevel > 0:
        console.print(messages.plugin_description)
        console.print()
    console.print(console.styled(messages.settings_title, bold=True, underline=True))

    rows: list[tuple[str, str, str]] = [
        (
            messages.enable_created_time_name,
            _on_off(config.enable_created),
            messages.enable_created_time_desc,
        ),
        (
            messages.enable_modified_time_name,
            _on_off(config.enable_modified),
            messages.enable_modified_time_desc,
        ),
        (
            messages.modify_interval_name,
            str(config.modify_interval),
            messages.modify_interval_desc,
        ),
    ]
    for name, value, desc in rows:
        console.print(f"  {console.styled(name, bold=True)}: {value}")
        console.print(console.styled(f"    {desc}", dim=True))
