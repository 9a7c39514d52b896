from __future__ import annotations

import pytest

from core.domain.package_name import validate_npm_name


@pytest.mark.parametrize("name", ["my-odd-app", "odd.notes", "app_2", "@scope/app", "x" * 214])
def test_valid_names(name):
    result = validate_npm_name(name)
    assert result.valid
    assert result.problems == []


@pytest.mark.parametrize(
    ("name", "problem"),
    [
        ("", "name length must be greater than zero"),
        (".hidden", "name cannot start with a period"),
        ("_private", "name cannot start with an underscore"),
        (" padded ", "name cannot contain leading or trailing spaces"),
        ("node_modules", "node_modules is not a valid package name"),
        ("http", "http is a core module name"),
        ("MyApp", "name can no longer contain capital letters"),
        ("what!", "name can no longer contain special characters (\"~'!()*\")"),
        ("my app", "name can only contain URL-friendly characters"),
        ("x" * 215, "name can no longer contain more than 214 characters"),
    ],
)
def test_invalid_names(name, problem):
    result = validate_npm_name(name)
    assert not result.valid
    assert problem in result.problems


def test_errors_are_listed_before_warnings():
    result = validate_npm_name("_My App")
    assert result.problems[0] == "name cannot start with an underscore"
    assert "name can no longer contain capital letters" in result.problems
    assert result.problems.index("name can only contain URL-friendly characters") < result.problems.index(
        "name can no longer contain capital letters"
    )
