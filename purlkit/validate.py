"""Lint-style validation of purl strings.

`validate_string` never raises. Hard parse failures become a single
error diagnostic; in strict mode a successfully parsed purl is also
checked for forms the parser accepts but that are not canonical.
"""
from __future__ import annotations

import enum
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from .codec import Direction, quote, unquote
from .config import PURL_CONFIG
from .exceptions import PurlError
from .normalize import normalize_name, normalize_namespace, normalize_version
from .parser import RawComponents, split_purl
from .purl import PackageURL
from .types import get_type_rule

logger = logging.getLogger(__name__)


class ValidationSeverity(str, enum.Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationMessage(BaseModel):
    """One diagnostic produced by `validate_string`.

    Attributes:
        severity: How serious the finding is.
        message: Human readable description.
        component: The purl component the finding is about, if any.
    """

    model_config = ConfigDict(frozen=True)

    severity: ValidationSeverity
    message: str
    component: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        return self.model_dump(mode="json", exclude_none=True)


def _error(message: str, component: Optional[str] = None) -> ValidationMessage:
    return ValidationMessage(severity=ValidationSeverity.ERROR, message=message, component=component)


def _warning(message: str, component: Optional[str] = None) -> ValidationMessage:
    return ValidationMessage(severity=ValidationSeverity.WARNING, message=message, component=component)


def _check_namespace_requirement(purl: PackageURL) -> List[ValidationMessage]:
    rule = get_type_rule(purl.type)
    if rule.namespace_requirement == "required" and not purl.namespace:
        return [_error(f"Namespace is required for purl type: {purl.type!r}", "namespace")]
    if rule.namespace_requirement == "prohibited" and purl.namespace:
        return [_error(f"Namespace is prohibited for purl type: {purl.type!r}", "namespace")]
    return []


def _check_case(raw: RawComponents, purl: PackageURL) -> List[ValidationMessage]:
    messages = []
    if raw.type != purl.type:
        messages.append(_warning(f"Type is not lowercased: {raw.type!r}", "type"))

    rule = get_type_rule(purl.type)

    namespace = normalize_namespace(raw.namespace, None, Direction.DECODE)
    if namespace != purl.namespace:
        folding = "uppercased" if rule.namespace_case == "upper" else "lowercased"
        messages.append(_warning(f"Namespace is not {folding} for purl type: {purl.type!r}", "namespace"))

    name = normalize_name(raw.name, None, None, Direction.DECODE)
    if name != purl.name:
        if name is not None and name.lower() == purl.name:
            message = f"Name is not lowercased for purl type: {purl.type!r}"
        else:
            message = f"Name is not normalized for purl type: {purl.type!r}"
        messages.append(_warning(message, "name"))

    version = normalize_version(raw.version, None, Direction.DECODE)
    if version != purl.version:
        messages.append(_warning(f"Version is not lowercased for purl type: {purl.type!r}", "version"))

    return messages


def _check_qualifier_keys(raw: RawComponents) -> List[ValidationMessage]:
    if not raw.qualifiers:
        return []
    messages = []
    for pair in raw.qualifiers.split("&"):
        key = pair.partition("=")[0].strip()
        if key != key.lower():
            messages.append(_warning(f"Qualifier key is not lowercased: {key!r}", "qualifiers"))
    return messages


def _check_encoding(raw: RawComponents) -> List[ValidationMessage]:
    segments = []
    if raw.namespace:
        segments.extend(("namespace", segment) for segment in raw.namespace.split("/") if segment.strip())
    segments.append(("name", raw.name))
    if raw.version:
        segments.append(("version", raw.version))
    if raw.subpath:
        segments.extend(
            ("subpath", segment) for segment in raw.subpath.split("/")
            if segment.strip() and segment not in (".", "..")
        )

    messages = []
    for component, segment in segments:
        segment = segment.strip()
        if quote(unquote(segment)) != segment:
            messages.append(
                _warning(f"{component.capitalize()} is not canonically percent-encoded: {segment!r}", component)
            )
    return messages


def _check_subpath_segments(raw: RawComponents) -> List[ValidationMessage]:
    if raw.subpath is None:
        return []
    if any(segment in ("", ".", "..") for segment in raw.subpath.split("/")):
        return [_warning("Subpath contains empty, '.' or '..' segments", "subpath")]
    return []


def validate_string(purl: Any, strict: Optional[bool] = None) -> List[ValidationMessage]:
    """Validates a purl string and reports diagnostics instead of raising.

    Args:
        purl: The purl string. Any other value yields an error diagnostic.
        strict: Also report non-canonical but parseable forms. Defaults to
            the `strict_validation` setting.

    Returns:
        A list of diagnostics, empty when nothing was found.
    """
    if strict is None:
        strict = PURL_CONFIG["strict_validation"]

    messages: List[ValidationMessage] = []
    if not isinstance(purl, str) or not purl.strip():
        messages.append(_error("A purl string argument is required."))
    else:
        try:
            raw = split_purl(purl)
            parsed = PackageURL.from_raw_components(raw)
        except PurlError as e:
            messages.append(_error(str(e), getattr(e, "component", None)))
        else:
            if strict:
                messages.extend(_check_namespace_requirement(parsed))
                messages.extend(_check_case(raw, parsed))
                messages.extend(_check_qualifier_keys(raw))
                messages.extend(_check_encoding(raw))
                messages.extend(_check_subpath_segments(raw))

    for message in messages:
        logger.debug(f"{purl!r}: {message.severity.value}: {message.message}")
    return messages
