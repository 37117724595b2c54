"""Purlkit: package URL parsing, normalization and validation."""

from .codec import Direction, get_quoter, quote, unquote
from .config import PURL_CONFIG, configure_logging
from .exceptions import (
    InvalidPackageURL,
    InvalidQualifierKey,
    InvalidQualifierString,
    InvalidRemainder,
    InvalidType,
    MissingName,
    MissingScheme,
    MissingType,
    PackageURLArgumentError,
    PurlError,
)
from .purl import PackageURL, parse
from .types import TYPE_RULES, PurlTypeRule, get_type_rule
from .validate import ValidationMessage, ValidationSeverity, validate_string

configure_logging()

__all__ = [
    "configure_logging",
    "Direction",
    "get_quoter",
    "get_type_rule",
    "InvalidPackageURL",
    "InvalidQualifierKey",
    "InvalidQualifierString",
    "InvalidRemainder",
    "InvalidType",
    "MissingName",
    "MissingScheme",
    "MissingType",
    "PackageURL",
    "PackageURLArgumentError",
    "parse",
    "PURL_CONFIG",
    "PurlError",
    "PurlTypeRule",
    "quote",
    "TYPE_RULES",
    "unquote",
    "validate_string",
    "ValidationMessage",
    "ValidationSeverity",
]
