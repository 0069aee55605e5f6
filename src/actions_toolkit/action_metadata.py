"""Load action.yml metadata and check a step's inputs against it.

Only the parts of the metadata that describe inputs are parsed; the rest of
the document is kept in ActionMetadata.raw.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from actions_toolkit.core import Core


METADATA_FILENAMES = ("action.yml", "action.yaml")


@dataclass
class InputSpec:
    """A single input declared by an action."""

    name: str
    description: str = ""
    required: bool = False
    default: str | None = None


@dataclass
class ActionMetadata:
    """Parsed action metadata."""

    name: str
    description: str
    inputs: list[InputSpec] = field(default_factory=list)
    raw: dict = field(default_factory=dict)  # Original parsed YAML
    source_path: str = "<string>"


class MetadataError(Exception):
    """An action.yml that cannot be turned into ActionMetadata.

    Every problem found in the document is listed in `errors`.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        problems = "; ".join(errors)
        super().__init__(f"Cannot use action metadata: {problems}")


def find_metadata_file(path: str) -> str:
    """Resolve `path` to an action metadata file.

    A file path is taken as is. For a directory, action.yml wins over
    action.yaml; neither is searched for in subdirectories.
    """
    p = Path(path)
    if p.is_file():
        return str(p)

    candidates = [p / filename for filename in METADATA_FILENAMES] if p.is_dir() else []
    for candidate in candidates:
        if candidate.is_file():
            return str(candidate)

    raise FileNotFoundError(f"Action metadata not found at '{path}'")


def _read_document(source: object, source_path: str) -> ActionMetadata:
    try:
        raw = yaml.safe_load(source)
    except yaml.YAMLError as e:
        raise MetadataError([f"Invalid YAML in {source_path}: {e}"]) from e

    if not isinstance(raw, dict):
        raise MetadataError([f"{source_path} does not contain a YAML mapping"])

    return parse_metadata(raw, source_path)


def load_metadata(path: str) -> ActionMetadata:
    """Read the metadata of the action at `path` (file or directory).

    Raises FileNotFoundError when there is no metadata file, and
    MetadataError when its contents are unusable.
    """
    file_path = find_metadata_file(path)
    with open(file_path) as f:
        return _read_document(f, file_path)


def load_metadata_from_string(content: str, source: str = "<string>") -> ActionMetadata:
    return _read_document(content, source)


def parse_metadata(raw: dict, source_path: str) -> ActionMetadata:
    """Parse a raw YAML dict into ActionMetadata."""
    errors: list[str] = []

    name = raw.get("name")
    if name is None or not str(name).strip():
        errors.append("Missing required field: 'name'")

    inputs: list[InputSpec] = []
    inputs_raw = raw.get("inputs")
    if inputs_raw is not None:
        if not isinstance(inputs_raw, dict):
            errors.append("'inputs' must be a mapping of input definitions")
        else:
            for input_name, input_def in inputs_raw.items():
                spec, input_errors = _parse_input(str(input_name), input_def)
                errors.extend(input_errors)
                if spec is not None:
                    inputs.append(spec)

    if errors:
        raise MetadataError(errors)

    return ActionMetadata(
        name=str(name),
        description=str(raw.get("description") or ""),
        inputs=inputs,
        raw=raw,
        source_path=source_path,
    )


def _parse_input(input_name: str, input_def: object) -> tuple[InputSpec | None, list[str]]:
    """Parse a single input definition."""
    if input_def is None:
        return InputSpec(name=input_name), []

    if not isinstance(input_def, dict):
        return None, [f"Input '{input_name}' definition must be a mapping"]

    required_raw = input_def.get("required", False)
    if isinstance(required_raw, bool):
        required = required_raw
    elif isinstance(required_raw, str) and required_raw.lower() in ("true", "false"):
        required = required_raw.lower() == "true"
    else:
        return None, [f"Input '{input_name}': 'required' must be a boolean, got {required_raw!r}"]

    default_raw = input_def.get("default")
    if default_raw is None:
        default = None
    elif isinstance(default_raw, bool):
        default = str(default_raw).lower()
    else:
        default = str(default_raw)

    return InputSpec(
        name=input_name,
        description=str(input_def.get("description") or ""),
        required=required,
        default=default,
    ), []


def missing_inputs(metadata: ActionMetadata, core: Core) -> list[str]:
    """Return required inputs without a default that are blank in the step."""
    return [
        spec.name
        for spec in metadata.inputs
        if spec.required and spec.default is None and not core.get_input(spec.name)
    ]
