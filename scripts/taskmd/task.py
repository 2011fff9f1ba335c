"""Typed records for the parts of a Tekton Task that end up in the documentation.

Decoding is permissive: unknown fields are ignored and missing fields take
their zero value. Fields that are present but have the wrong shape raise
ManifestDecodeError.
"""

import datetime
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from scripts.taskmd.errors import ManifestDecodeError

PARAM_TYPE_STRING = "string"
PARAM_TYPE_ARRAY = "array"
PARAM_TYPE_OBJECT = "object"
PARAM_TYPES = (PARAM_TYPE_STRING, PARAM_TYPE_ARRAY, PARAM_TYPE_OBJECT)

# Payload key carried next to the explicit `type` discriminator
PAYLOAD_KEYS = {
    PARAM_TYPE_STRING: "stringVal",
    PARAM_TYPE_ARRAY: "arrayVal",
    PARAM_TYPE_OBJECT: "objectVal",
}


def _get_mapping(data: Mapping[str, Any], key: str, where: str) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestDecodeError(f"{where}.{key}: expected a mapping, got {type(value).__name__}")
    return value


def _get_list(data: Mapping[str, Any], key: str, where: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ManifestDecodeError(f"{where}.{key}: expected a list, got {type(value).__name__}")
    return value


def _date_to_str(value: Any) -> Any:
    """Turn a YAML timestamp back into text; any other value is returned unchanged."""
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return value


def _get_str(data: Mapping[str, Any], key: str, where: str) -> str:
    value = _date_to_str(data.get(key))
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ManifestDecodeError(f"{where}.{key}: expected a string, got {type(value).__name__}")
    return value


def _get_bool(data: Mapping[str, Any], key: str, where: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ManifestDecodeError(f"{where}.{key}: expected a boolean, got {type(value).__name__}")
    return value


def _require_mapping(item: Any, where: str) -> Dict[str, Any]:
    if not isinstance(item, dict):
        raise ManifestDecodeError(f"{where}: expected a mapping, got {type(item).__name__}")
    return item


@dataclass(frozen=True)
class ParamValue:
    """A typed parameter value: a string, an array of strings or an object of strings."""

    type: str
    string_val: str = ""
    array_val: Tuple[str, ...] = ()
    object_val: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self):
        if self.type not in PARAM_TYPES:
            raise ValueError(f"Unknown parameter type '{self.type}', expected one of {', '.join(PARAM_TYPES)}")

    @classmethod
    def string(cls, value: str) -> "ParamValue":
        return cls(type=PARAM_TYPE_STRING, string_val=value)

    @classmethod
    def array(cls, values: List[str]) -> "ParamValue":
        return cls(type=PARAM_TYPE_ARRAY, array_val=tuple(values))

    @classmethod
    def object(cls, values: Mapping[str, str]) -> "ParamValue":
        return cls(type=PARAM_TYPE_OBJECT, object_val=tuple(values.items()))

    @classmethod
    def from_manifest(cls, raw: Any, where: str, declared_type: str = "") -> "ParamValue":
        """Decode a default value.

        Accepts the explicit encoding (``{type: array, arrayVal: [...]}``) as
        well as the plain YAML shape Tekton manifests are written in. A mapping
        default of a parameter declared ``type: object`` is always an object.

        Args:
            raw: The decoded YAML value of the ``default`` field.
            where: Location of the value, used in error messages.
            declared_type: The ``type`` field of the parameter, if any.

        Returns:
            The decoded ParamValue.

        Raises:
            ManifestDecodeError: If the value has an unsupported shape.
        """
        if isinstance(raw, dict) and declared_type == PARAM_TYPE_OBJECT:
            return cls.object(_decode_object(raw, where))

        if isinstance(raw, dict) and _is_explicit_encoding(raw):
            param_type = raw["type"]
            if param_type not in PARAM_TYPES:
                raise ManifestDecodeError(f"{where}.type: unknown parameter type '{param_type}'")
            payload = raw.get(PAYLOAD_KEYS[param_type])
            if param_type == PARAM_TYPE_STRING:
                return cls.string(_scalar_to_str(payload, where))
            if param_type == PARAM_TYPE_ARRAY:
                return cls.array(_decode_array(payload or [], where))
            return cls.object(_decode_object(payload or {}, where))

        if isinstance(raw, list):
            return cls.array(_decode_array(raw, where))
        if isinstance(raw, dict):
            return cls.object(_decode_object(raw, where))
        return cls.string(_scalar_to_str(raw, where))


def _is_explicit_encoding(raw: Mapping[str, Any]) -> bool:
    """Check whether a mapping is a serialised ParamValue rather than an object value."""
    if "type" not in raw:
        return False
    return set(raw) <= {"type", *PAYLOAD_KEYS.values()}


def _scalar_to_str(value: Any, where: str) -> str:
    value = _date_to_str(value)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        # Non-string scalars keep their literal JSON text
        return json.dumps(value)
    raise ManifestDecodeError(f"{where}: expected a string, got {type(value).__name__}")


def _decode_array(values: Any, where: str) -> List[str]:
    if not isinstance(values, list):
        raise ManifestDecodeError(f"{where}: expected a list of strings, got {type(values).__name__}")
    decoded = []
    for index, item in enumerate(values):
        item = _date_to_str(item)
        if not isinstance(item, str):
            raise ManifestDecodeError(f"{where}[{index}]: expected a string, got {type(item).__name__}")
        decoded.append(item)
    return decoded


def _decode_object(values: Any, where: str) -> Dict[str, str]:
    if not isinstance(values, dict):
        raise ManifestDecodeError(f"{where}: expected a mapping of strings, got {type(values).__name__}")
    decoded = {}
    for key, item in values.items():
        item = _date_to_str(item)
        if not isinstance(item, str):
            raise ManifestDecodeError(f"{where}.{key}: expected a string, got {type(item).__name__}")
        decoded[str(key)] = item
    return decoded


@dataclass(frozen=True)
class Param:
    """A Task parameter. A missing default means the parameter is required."""

    name: str
    description: str = ""
    default: Optional[ParamValue] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], where: str) -> "Param":
        raw_default = data.get("default")
        default = None
        if raw_default is not None:
            declared_type = _get_str(data, "type", where)
            default = ParamValue.from_manifest(raw_default, f"{where}.default", declared_type)
        return cls(
            name=_get_str(data, "name", where),
            description=_get_str(data, "description", where),
            default=default,
        )


@dataclass(frozen=True)
class Workspace:
    """A Task workspace."""

    name: str
    description: str = ""
    optional: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], where: str) -> "Workspace":
        return cls(
            name=_get_str(data, "name", where),
            description=_get_str(data, "description", where),
            optional=_get_bool(data, "optional", where),
        )


@dataclass(frozen=True)
class Result:
    """A Task result."""

    name: str
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], where: str) -> "Result":
        return cls(
            name=_get_str(data, "name", where),
            description=_get_str(data, "description", where),
        )


@dataclass(frozen=True)
class Task:
    """The documented view of a Tekton Task."""

    name: str
    description: str = ""
    params: Tuple[Param, ...] = ()
    workspaces: Tuple[Workspace, ...] = ()
    results: Tuple[Result, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Task":
        """Decode a parsed manifest into a Task.

        The name is read from ``metadata.name``, falling back to a top-level
        ``name`` field. Everything else lives under ``spec``.

        Args:
            data: The parsed YAML/JSON document.

        Returns:
            The decoded Task.

        Raises:
            ManifestDecodeError: If the document does not have the shape of a Task.
        """
        if not isinstance(data, dict):
            raise ManifestDecodeError(f"expected a Task mapping, got {type(data).__name__}")

        metadata = _get_mapping(data, "metadata", "task")
        name = _get_str(metadata, "name", "metadata") or _get_str(data, "name", "task")
        spec = _get_mapping(data, "spec", "task")

        params = tuple(
            Param.from_dict(_require_mapping(item, f"spec.params[{i}]"), f"spec.params[{i}]")
            for i, item in enumerate(_get_list(spec, "params", "spec"))
        )
        workspaces = tuple(
            Workspace.from_dict(_require_mapping(item, f"spec.workspaces[{i}]"), f"spec.workspaces[{i}]")
            for i, item in enumerate(_get_list(spec, "workspaces", "spec"))
        )
        results = tuple(
            Result.from_dict(_require_mapping(item, f"spec.results[{i}]"), f"spec.results[{i}]")
            for i, item in enumerate(_get_list(spec, "results", "spec"))
        )

        return cls(
            name=name,
            description=_get_str(spec, "description", "spec"),
            params=params,
            workspaces=workspaces,
            results=results,
        )


@dataclass(frozen=True)
class TaskBundle:
    """A Task paired with the manifest file it was loaded from and that file's bytes."""

    task: Task
    source_path: Path
    source_bytes: bytes = b""
