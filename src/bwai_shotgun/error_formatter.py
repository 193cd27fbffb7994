# Area: Shared
"""Error formatting for structured match setup error logs."""

from __future__ import annotations
import json
from typing import Any, Dict, Optional


def format_error_block(
    error_type: str,
    message: str,
    bot: Optional[str],
    stage: Optional[str],
    path: Optional[str],
    details: Optional[Dict[str, Any]] = None,
) -> str:
    """Format a structured error block naming the bot, stage and path."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " MATCH SETUP ERROR — PROCESS TERMINATED",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Bot:          {bot or 'N/A'}",
        f" Stage:        {stage or 'N/A'}",
    ]

    if path is not None:
        lines.append(f" Path:         {path}")

    lines.append("")
    lines.append(" ── MESSAGE " + "─" * 52)
    lines.append(f" {message}")

    if details:
        lines.append("")
        lines.append(" ── DETAILS " + "─" * 52)
        lines.append(indent_json(details))

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
