"""
Reporting and export utilities.
"""

from __future__ import annotations

import json
from typing import Dict, Iterable, List, TextIO

import pandas as pd

from .models import BehindFinding, CheckResult, OutdatedFinding


SHORT_HASH_LENGTH = 7


def short_hash(value: str) -> str:
    return value[:SHORT_HASH_LENGTH]


def outdated_frame(findings: Iterable[OutdatedFinding]) -> pd.DataFrame:
    rows = [
        {
            "File": finding.file,
            "Action": finding.name,
            "Current": finding.current_version,
            "Latest": finding.latest_version,
        }
        for finding in findings
    ]
    return pd.DataFrame(rows, columns=["File", "Action", "Current", "Latest"])


def behind_frame(findings: Iterable[BehindFinding]) -> pd.DataFrame:
    rows = [
        {
            "File": finding.file,
            "Action": finding.name,
            "Current SHA": short_hash(finding.current_hash),
            "Latest SHA": short_hash(finding.latest_hash),
            "Behind": finding.commits_behind,
        }
        for finding in findings
    ]
    return pd.DataFrame(rows, columns=["File", "Action", "Current SHA", "Latest SHA", "Behind"])


def _render_table(df: pd.DataFrame) -> str:
    return df.to_string(index=False, justify="left")


def render_text(result: CheckResult) -> str:
    """Render findings as plain-text tables; empty when up to date."""
    sections: List[str] = []
    if result.outdated:
        sections.append("Outdated actions:\n" + _render_table(outdated_frame(result.outdated)))
    if result.behind:
        sections.append(
            "SHA-pinned actions behind default branch:\n" + _render_table(behind_frame(result.behind))
        )
    return "\n\n".join(sections)


def result_to_dict(result: CheckResult) -> Dict[str, List[Dict]]:
    return {
        "outdated": [
            {
                "file": finding.file,
                "action": finding.name,
                "current": finding.current_version,
                "latest": finding.latest_version,
            }
            for finding in result.outdated
        ],
        "sha_pinned": [
            {
                "file": finding.file,
                "action": finding.name,
                "current_sha": finding.current_hash,
                "latest_sha": finding.latest_hash,
                "commits_behind": finding.commits_behind,
            }
            for finding in result.behind
        ],
    }


def render_json(result: CheckResult) -> str:
    return json.dumps(result_to_dict(result), indent=2)


def print_warnings(warnings: Iterable[str], stream: TextIO) -> None:
    for warning in warnings:
        print(f"warning: {warning}", file=stream)
