## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from __future__ import annotations

from collections import namedtuple
from dataclasses import dataclass, field

from bracefmt.structs import as_mapping, lookup_field, NOT_FOUND
from bracefmt.runtime import Runtime, RenderConfig


@dataclass
class Audit:
    Created: str
    Updated: str


@dataclass
class Member:
    Name: str
    Password: str = field(default="", metadata={'fmt': '-'})
    Email: str = field(default="", metadata={'fmt': 'Mail'})
    Audit: Audit | None = field(default=None, metadata={'embed': True})


class Slotted:
    __slots__ = ('x', '_y')
    def __init__(self):
        self.x, self._y = 1, 2


Point = namedtuple('Point', 'x y')


def _member():
    return Member("Ann", Password="hunter2", Email="ann@example.com", Audit=Audit("mon", "tue"))


def test_projection_honors_field_metadata():
    assert as_mapping(_member()) == {'Name': "Ann", 'Mail': "ann@example.com", 'Created': "mon", 'Updated': "tue"}


def test_embed_without_value_keeps_the_field():
    assert as_mapping(Member("Bob")) == {'Name': "Bob", 'Mail': "", 'Audit': None}


def test_projection_of_other_records():
    assert as_mapping(Point(1, 2)) == {'x': 1, 'y': 2}
    assert as_mapping({'k': 'v'}) == {'k': 'v'}
    assert as_mapping(Slotted()) == {'x': 1}


def test_lookup_uses_exposed_names():
    member = _member()
    assert lookup_field(member, 'Mail') == "ann@example.com"
    assert lookup_field(member, 'Created') == "mon"
    assert lookup_field(member, 'Email') is NOT_FOUND
    assert lookup_field(member, 'Password') is NOT_FOUND


def test_rendering_follows_field_metadata():
    rt = Runtime(config=RenderConfig(color=False))
    member = _member()
    assert rt.render("{0}", member) == "Member{Name: Ann, Mail: ann@example.com, Created: mon, Updated: tue}"
    assert rt.render("{Mail} / {Password}", member) == "ann@example.com / <invalid field>"
    assert rt.render("{:json}", member) == '{"Name": "Ann", "Mail": "ann@example.com", "Created": "mon", "Updated": "tue"}'
