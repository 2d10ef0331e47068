"""Partial-update merging over pydantic request models.

Every management resource (categories, triggers, monitor trigger bindings) is
updated the same way: the request body is validated by the resource's
``RequestModel``, the fields it supplied are laid over a copy of the stored
record, and the merged record is returned for the caller to persist. Nothing
here touches the database.

A field counts as supplied when its key is present with a non-null value, so
PUT and PATCH bodies behave identically.
"""
import json
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Sequence, Tuple, Type

from pydantic import BaseModel, ConfigDict, ValidationError


class MergeValidationError(ValueError):
    """A supplied field failed validation."""

    def __init__(self, field: Optional[str], message: str):
        super().__init__(message)
        self.field = field
        self.message = message

    def prefixed(self, prefix: str) -> "MergeValidationError":
        """Return a copy whose message is qualified by ``prefix``."""
        return MergeValidationError(self.field, f"{prefix}: {self.message}")


def describe_validation_errors(errors: Sequence[Mapping[str, Any]]) -> str:
    """Render the first pydantic error as ``loc: msg``."""
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    msg = first.get("msg", "Invalid value")
    return f"{loc}: {msg}" if loc else msg


def stripped_identifier(value: Optional[str]) -> Optional[str]:
    """Trim a name; a name that is only whitespace is rejected."""
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


def json_text(value: Any) -> Any:
    """Serialize dicts and lists; a string must already parse, blank means ``{}``."""
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    if isinstance(value, str):
        if not value.strip():
            return "{}"
        json.loads(value)
    return value


class RequestModel(BaseModel):
    """Strictly typed request body with client-facing error messages.

    ``error_messages`` maps a field to the message reported when it fails.
    ``required_messages`` takes over when the field is missing or blank.
    Fields without an entry fall back to pydantic's own wording.
    """

    model_config = ConfigDict(strict=True)

    error_messages: ClassVar[Dict[str, str]] = {}
    required_messages: ClassVar[Dict[str, str]] = {}
    not_object_message: ClassVar[str] = "Request body must be an object"

    @classmethod
    def parse(cls, payload: Any) -> "RequestModel":
        """Validate a decoded JSON body.

        Raises:
            MergeValidationError: the body is not an object or a field is invalid.
        """
        if not isinstance(payload, Mapping):
            raise MergeValidationError(None, cls.not_object_message)
        try:
            return cls.model_validate(dict(payload))
        except ValidationError as e:
            raise cls._to_merge_error(e, payload) from e

    @classmethod
    def _to_merge_error(cls, exc: ValidationError, payload: Mapping[str, Any]) -> MergeValidationError:
        first = exc.errors()[0]
        name = str(first["loc"][0]) if first["loc"] else None

        blank = first["type"] == "missing" or payload.get(name) in (None, "")
        if blank and name in cls.required_messages:
            return MergeValidationError(name, cls.required_messages[name])
        if name in cls.error_messages:
            return MergeValidationError(name, cls.error_messages[name])
        return MergeValidationError(name, describe_validation_errors(exc.errors()))


def _nothing_protected(record: Mapping[str, Any]) -> Tuple[str, ...]:
    return ()


@dataclass(frozen=True)
class MergeRules:
    """Request model for one resource plus the fields a record may not change.

    ``protected`` is called with the stored record and names the fields whose
    value must survive the merge unchanged.
    """

    model: Type[RequestModel]
    protected: Callable[[Mapping[str, Any]], Tuple[str, ...]] = field(default=_nothing_protected)
    protected_message: str = "{field} cannot be changed"


def merge(existing: Mapping[str, Any], updates: Any, rules: MergeRules) -> Dict[str, Any]:
    """Merge ``updates`` onto ``existing`` and return the validated record.

    Raises:
        MergeValidationError: the payload is not an object, a supplied field
            is invalid, or a protected field would change.
    """
    supplied = rules.model.parse(updates).model_dump(exclude_none=True)

    merged = dict(existing)
    merged.update(supplied)

    for name in rules.protected(existing):
        if merged.get(name) != existing.get(name):
            raise MergeValidationError(
                name, rules.protected_message.format(field=name, value=existing.get(name))
            )

    return merged
