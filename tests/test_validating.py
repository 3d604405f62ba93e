## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from bracefmt.validating import validate
from bracefmt.errors import UnexpectedClosingBrace, UnclosedBrace


@pytest.mark.parametrize("format", ["", "plain", "{}", "{{}}", "{a} {b:>5|red}", "{{ {x} }}", "{a{b}"])
def test_balanced_formats(format):
    assert validate(format) is None


@pytest.mark.parametrize(
    "format, error, position",
    [
        ("a } b", UnexpectedClosingBrace, 2),
        ("{a}}", UnexpectedClosingBrace, 3),
        ("}", UnexpectedClosingBrace, 0),
        ("Hello {name", UnclosedBrace, 6),
        ("{a} {", UnclosedBrace, 4),
    ]
)
def test_unbalanced_formats(format, error, position):
    problem = validate(format)
    assert isinstance(problem, error)
    assert problem.position == position
    assert problem.format == format


def test_validation_does_not_change_rendering():
    from bracefmt.runtime import Runtime, RenderConfig
    rt = Runtime(config=RenderConfig(color=False))
    assert rt.render("a } b") == "a } b"
    assert rt.render("Hello {name") == "Hello {name"
