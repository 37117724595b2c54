"""Per-type normalization rules.

Each package type that needs special handling has exactly one
`PurlTypeRule` entry in `TYPE_RULES`. Types that are not listed keep all
components as given and place no requirement on the namespace.
"""
from __future__ import annotations

from typing import Dict, Literal

from pydantic import BaseModel, ConfigDict

NamespaceCase = Literal["preserve", "lower", "upper"]
ComponentCase = Literal["preserve", "lower"]
NameRule = Literal["none", "pypi", "hackage", "pub", "mlflow"]
NamespaceRequirement = Literal["optional", "required", "prohibited"]


class PurlTypeRule(BaseModel):
    """Normalization behavior for one package type.

    Attributes:
        type: The lowercase package type this rule applies to.
        namespace_case: Case folding applied to the namespace.
        name_case: Case folding applied to the name.
        version_case: Case folding applied to the version.
        name_rule: Extra name rewriting, applied after `name_case`.
        namespace_requirement: Whether the namespace must be present or
            absent. Only checked by strict validation.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    namespace_case: NamespaceCase = "preserve"
    name_case: ComponentCase = "preserve"
    version_case: ComponentCase = "preserve"
    name_rule: NameRule = "none"
    namespace_requirement: NamespaceRequirement = "optional"


def _rule(type: str, **flags) -> PurlTypeRule:
    return PurlTypeRule(type=type, **flags)


TYPE_RULES: Dict[str, PurlTypeRule] = {
    rule.type: rule
    for rule in (
        _rule("alpm", namespace_case="lower", name_case="lower", namespace_requirement="required"),
        _rule("apk", namespace_case="lower", name_case="lower", namespace_requirement="required"),
        _rule("bitbucket", namespace_case="lower", name_case="lower", namespace_requirement="required"),
        _rule("bitnami", name_case="lower", namespace_requirement="prohibited"),
        _rule("cargo", namespace_requirement="prohibited"),
        _rule("cocoapods", namespace_requirement="prohibited"),
        _rule("composer", namespace_case="lower", name_case="lower", namespace_requirement="required"),
        _rule("conda", namespace_requirement="prohibited"),
        _rule("cpan", namespace_case="upper", namespace_requirement="required"),
        _rule("cran", namespace_requirement="prohibited"),
        _rule("deb", namespace_requirement="required"),
        _rule("gem", namespace_requirement="prohibited"),
        _rule("github", namespace_case="lower", name_case="lower", namespace_requirement="required"),
        _rule("gitlab", namespace_case="lower", name_case="lower", namespace_requirement="required"),
        _rule("hackage", name_rule="hackage", namespace_requirement="prohibited"),
        _rule("hex", namespace_case="lower", name_case="lower"),
        _rule("huggingface", version_case="lower"),
        _rule("luarocks", namespace_case="lower", name_case="lower"),
        _rule("maven", namespace_requirement="required"),
        _rule("mlflow", name_rule="mlflow", namespace_requirement="prohibited"),
        _rule("npm", name_case="lower"),
        _rule("nuget", namespace_requirement="prohibited"),
        _rule("oci", name_case="lower", version_case="lower", namespace_requirement="prohibited"),
        _rule("pub", name_case="lower", name_rule="pub", namespace_requirement="prohibited"),
        _rule("pypi", namespace_case="lower", name_case="lower", name_rule="pypi", namespace_requirement="prohibited"),
        _rule("qpkg", namespace_case="lower", namespace_requirement="required"),
        _rule("rpm", namespace_requirement="required"),
        _rule("swift", namespace_requirement="required"),
    )
}


def get_type_rule(ptype: str | None) -> PurlTypeRule:
    """Looks up the rule for a package type.

    Args:
        ptype: The package type. Lookup is case-insensitive.

    Returns:
        The registered rule, or a preserve-everything rule for unknown types.
    """
    key = (ptype or "").lower()
    rule = TYPE_RULES.get(key)
    if rule is None:
        return PurlTypeRule(type=key)
    return rule
