## bracefmt — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import weakref
from dataclasses import dataclass, field
from collections import namedtuple

from bracefmt.parser import parse_placeholder
from bracefmt.resolver import resolve, walk
from bracefmt.types import AutoCounter, Ref, Unresolvable, MISSING, INVALID


@dataclass
class Address:
    City: str
    Zip: str = "00000"


@dataclass
class User:
    Name: str
    Email: str
    Detail: Address | None = None
    Manager: Ref = field(default_factory=Ref)

    @property
    def Initial(self) -> str:
        return self.Name[0]

    def Shout(self) -> str:
        return self.Name.upper()


Point = namedtuple('Point', 'x y')


def _resolve(content: str, *args, counter=None, **kwargs):
    return resolve(parse_placeholder(content), args, kwargs, counter)


def test_auto_references_consume_the_counter():
    counter = AutoCounter()
    assert _resolve("", "a", "b", counter=counter) == "a"
    assert _resolve("", "a", "b", counter=counter) == "b"
    assert _resolve("", "a", "b", counter=counter) is MISSING


def test_explicit_index_and_out_of_range():
    assert _resolve("1", "a", "b") == "b"
    assert _resolve("2", "a", "b") == Unresolvable("no value")


def test_named_lookup_in_keyword_arguments():
    assert _resolve("name", name="Alice") == "Alice"
    assert _resolve("age", name="Alice") is INVALID


def test_named_lookup_in_first_argument():
    assert _resolve("name", {"name": "Alice"}) == "Alice"
    assert _resolve("Name", User("Bob", "bob@example.com")) == "Bob"
    assert _resolve("x", Point(3, 4)) == 3


def test_named_lookup_without_any_container():
    assert _resolve("name") is MISSING
    assert _resolve("name", 42) is MISSING


def test_field_chain_through_records_and_maps():
    user = User("Bob", "bob@example.com", Detail=Address("Paris"))
    assert _resolve("0.Detail.City", user) == "Paris"
    assert _resolve("user.Detail.Zip", user=user) == "00000"
    assert _resolve("cfg.db.host", cfg={"db": {"host": "localhost"}}) == "localhost"


def test_field_chain_is_transitive():
    user = User("Bob", "bob@example.com", Detail=Address("Paris"))
    detail = _resolve("0.Detail", user)
    assert walk(detail, ["City"]) == _resolve("0.Detail.City", user)


def test_field_lookup_is_case_sensitive():
    user = User("Bob", "bob@example.com")
    assert _resolve("0.name", user) is INVALID
    assert _resolve("0.NAME", user) is INVALID


def test_nil_indirection_is_invalid_field():
    user = User("Bob", "bob@example.com")
    assert _resolve("0.Manager.Name", user) is INVALID
    assert _resolve("0.Detail.City", user) is INVALID


def test_indirections_are_followed():
    boss = User("Carol", "carol@example.com")
    user = User("Bob", "bob@example.com", Manager=Ref(boss))
    assert _resolve("0.Manager.Name", user) == "Carol"
    assert _resolve("0.Name", Ref(user)) == "Bob"
    assert _resolve("0.Name", weakref.ref(boss)) == "Carol"


def test_properties_and_method_calls():
    user = User("Bob", "bob@example.com")
    assert _resolve("0.Initial", user) == "B"
    assert _resolve("0.Shout()", user) == "BOB"
    # Methods are only reachable through an explicit call.
    assert _resolve("0.Shout", user) is INVALID
    assert _resolve("0.Missing()", user) is INVALID


def test_private_attributes_are_hidden():
    class Thing:
        def __init__(self):
            self._secret = 1
            self.shown = 2

    assert _resolve("0._secret", Thing()) is INVALID
    assert _resolve("0.shown", Thing()) == 2


def test_wrong_container_shapes_are_invalid():
    assert _resolve("0.x", [1, 2]) is INVALID
    assert _resolve("0.x", "text") is INVALID
    assert _resolve("0.x", {1: "a"}) is INVALID
    assert _resolve("0.", {"": 1}) == 1


def test_chain_stops_at_first_failure():
    assert _resolve("0.a.b.c", {"a": {}}) is INVALID
    assert _resolve("5.a.b") is MISSING
