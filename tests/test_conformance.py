"""Runs the purl-spec style JSON test cases in tests/data."""
import json
from pathlib import Path

import pytest

from purlkit import PackageURL, validate_string

DATA_DIR = Path(__file__).parent / "data"


def load_test_cases():
    cases = []
    for path in sorted(DATA_DIR.glob("*.json")):
        data = json.loads(path.read_text(encoding="utf-8"))
        for case in data["tests"]:
            cases.append(pytest.param(case, id=f"{path.stem}: {case['description']}"))
    return cases


def run_test_case(case):
    test_type = case["test_type"]
    expected = case.get("expected_output")

    if test_type == "parse":
        purl = PackageURL.from_string(case["input"])
        assert purl.type == expected["type"]
        assert purl.namespace == expected["namespace"]
        assert purl.name == expected["name"]
        assert purl.version == expected["version"]
        if expected["qualifiers"]:
            assert purl.qualifiers == expected["qualifiers"]
        else:
            assert not purl.qualifiers
        assert purl.subpath == expected["subpath"]

    elif test_type == "roundtrip":
        assert PackageURL.from_string(case["input"]).to_string() == expected

    elif test_type == "build":
        assert PackageURL(**case["input"]).to_string() == expected

    elif test_type == "validation":
        test_group = case["test_group"]
        assert test_group in ("base", "advanced"), f"Unknown test group: {test_group}"
        messages = validate_string(case["input"], strict=test_group == "base")
        assert [message.to_dict() for message in messages] == (expected or [])

    else:
        raise AssertionError(f"Unknown test type: {test_type}")


@pytest.mark.parametrize("case", load_test_cases())
def test_conformance(case):
    if case.get("expected_failure"):
        with pytest.raises(ValueError):
            run_test_case(case)
    else:
        run_test_case(case)
