"""
Locate workflow files and extract the actions they use.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Tuple, Union

import yaml

from .errors import ProjectRootNotFound, WorkflowParseError
from .models import ActionReference


logger = logging.getLogger(__name__)

_ROOT_MARKERS = (".git", ".github")
_WORKFLOW_SUFFIXES = (".yml", ".yaml")
_SKIPPED_PREFIXES = ("./", "docker://")


def find_project_root(start: Union[str, Path]) -> Path:
    """Walk up from ``start`` to the first directory holding .git or .github."""
    current = Path(start).resolve()
    for directory in (current, *current.parents):
        if any((directory / marker).exists() for marker in _ROOT_MARKERS):
            return directory
    raise ProjectRootNotFound(f"could not find project root above {current}")


def extract_action_uses(document: Any) -> List[Tuple[str, str]]:
    """Recursively collect (name, version) pairs from ``uses`` keys."""
    refs: List[Tuple[str, str]] = []

    if isinstance(document, dict):
        for key, value in document.items():
            if key == "uses":
                if isinstance(value, str) and "@" in value and not value.startswith(_SKIPPED_PREFIXES):
                    name, version = value.split("@", 1)
                    refs.append((name, version))
            else:
                refs.extend(extract_action_uses(value))
    elif isinstance(document, list):
        for item in document:
            refs.extend(extract_action_uses(item))

    return refs


def find_action_references(start: Union[str, Path]) -> List[ActionReference]:
    """Return the unique action references in the project's workflows."""
    root = find_project_root(start)
    workflow_dir = root / ".github" / "workflows"
    if not workflow_dir.is_dir():
        logger.info("No workflows directory at %s", workflow_dir)
        return []

    references: List[ActionReference] = []
    seen = set()
    for path in sorted(workflow_dir.rglob("*")):
        if not path.is_file() or path.suffix not in _WORKFLOW_SUFFIXES:
            continue

        try:
            with open(path, "rb") as f:
                document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise WorkflowParseError(f"Invalid workflow {path}: {e}") from e
        except OSError as e:
            raise WorkflowParseError(f"Could not read workflow {path}: {e}") from e

        relative = path.relative_to(root).as_posix()
        for name, version in extract_action_uses(document):
            reference = ActionReference(name=name, version=version, file=relative)
            if reference not in seen:
                seen.add(reference)
                references.append(reference)

    logger.debug("Found %d action references under %s", len(references), workflow_dir)
    return references
