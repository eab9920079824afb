# SPDX-License-Identifier: Apache-2.0
"""Network environment report for troubleshooting."""

from __future__ import annotations

import os
import platform
import sys
from datetime import datetime, timezone
from typing import Mapping

PROXY_VARIABLES = ("HTTP_PROXY", "HTTPS_PROXY", "NO_PROXY")


def collect_network_diagnostics(
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Snapshot of the runtime and proxy settings."""
    env = os.environ if environ is None else environ
    info = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "python_version": sys.version.split()[0],
        "platform": sys.platform,
        "architecture": platform.machine() or "unknown",
    }
    for name in PROXY_VARIABLES:
        info[name] = env.get(name) or env.get(name.lower()) or "Not set"
    return info


def format_diagnostics(info: Mapping[str, str], **extra: object) -> str:
    """Render diagnostics as a Markdown list."""
    lines = [
        "### Network Diagnostics",
        f"- **Time**: {info.get('timestamp', '')}",
        f"- **Python Version**: {info.get('python_version', '')}",
        f"- **Platform**: {info.get('platform', '')}",
        f"- **Architecture**: {info.get('architecture', '')}",
        "- **Proxy Settings**:",
    ]
    for name in PROXY_VARIABLES:
        lines.append(f"  - {name}: {info.get(name, 'Not set')}")
    for key, value in extra.items():
        label = key.replace("_", " ").title()
        lines.append(f"- **{label}**: {value}")
    return "\n".join(lines)
