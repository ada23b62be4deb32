# topmark:header:start
#
#   project      : StampMark
#   file         : locales.py
#   file_relpath : src/stampmark/i18n/locales.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Display strings per locale."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class Messages:
    """Fixed set of user-facing labels for one locale."""

    settings_title: str
    enable_created_time_name: str
    enable_created_time_desc: str
    enable_modified_time_name: str
    enable_modified_time_desc: str
    modify_interval_name: str
    modify_interval_desc: str
    plugin_description: str


EN: Final[Messages] = Messages(
    settings_title="Timestamp Settings",
    enable_created_time_name="Enable Created Time",
    enable_created_time_desc="Toggle adding creation time to documents",
    enable_modified_time_name="Enable Modified Time",
    enable_modified_time_desc="Toggle adding modification time to updated documents",
    modify_interval_name="Modification Interval (seconds)",
    modify_interval_desc=(
        "Set the interval (in seconds) to ignore updates after the last modification"
    ),
    plugin_description="Automatically add creation and modification timestamps to documents",
)

ZH: Final[Messages] = Messages(
    settings_title="时间戳设置",
    enable_created_time_name="启用创建时间",
    enable_created_time_desc="开启或关闭为文档添加创建时间",
    enable_modified_time_name="启用修改时间",
    enable_modified_time_desc="开启或关闭为修改的文档添加更新时间",
    modify_interval_name="修改时间间隔（秒）",
    modify_interval_desc="设置忽略最后一次修改后的时间间隔（秒）",
    plugin_description="自动为文档添加创建时间和修改时间的时间戳",
)
