"""Tests for ``collect_base_paths``."""

from array import array
from dataclasses import dataclass, field
from functools import cached_property

import pytest

from beanwalk.features.graph import collect_base_paths
from beanwalk.features.introspection import PropertyDescriptor
from beanwalk.features.path import Index, PropertyPath
from beanwalk.shared.errors import InvocationError


class Node:
    name: str
    self_ref: "Node | None"
    children: list["Node"]

    def __init__(self, name: str = "node") -> None:
        self.name = name
        self.self_ref = None
        self.children = []


@dataclass
class Address:
    city: str = ""


@dataclass
class Person:
    name: str = ""
    address: Address | None = None


@dataclass
class Team:
    lead: Person | None = None
    members: list[Person] = field(default_factory=list)
    offices: dict[object, Address] = field(default_factory=dict)
    tags: tuple[str, ...] = ()


@dataclass
class Sensor:
    readings: array = field(default_factory=lambda: array("d", [1.5, 2.5]))


class Faulty:
    @property
    def value(self) -> Address:
        raise RuntimeError("unavailable")


class Survey:
    def __init__(self) -> None:
        self.computed = 0

    @cached_property
    def results(self) -> list[Address]:
        self.computed += 1
        return [Address("Lima")]


@pytest.fixture
def team() -> Team:
    lead = Person("Ann", Address("Oslo"))
    other = Person("Bob", Address("Rome"))
    return Team(
        lead=lead,
        members=[lead, other],
        offices={"hq": Address("Bergen"), (1, 2): Address("Nowhere")},
        tags=("core",),
    )


def test_self_reference_is_visited_once() -> None:
    node = Node("a")
    node.self_ref = node

    result = collect_base_paths(node)

    assert len(result) == 2
    assert result[node] == PropertyPath.ROOT
    assert result[node.children] == PropertyPath.of("children")


def test_paths_follow_depth_first_declaration_order(team: Team) -> None:
    result = collect_base_paths(team)

    assert [str(path) for path in result.values()] == [
        "",
        "lead",
        "lead.address",
        "members",
        "members[1]",
        "members[1].address",
        "offices",
        "offices[hq]",
    ]


def test_shared_object_keeps_first_discovered_path(team: Team) -> None:
    result = collect_base_paths(team)

    assert result[team.members[0]] == PropertyPath.of("lead")


def test_unsuitable_map_keys_are_skipped(team: Team) -> None:
    result = collect_base_paths(team)

    assert team.offices[(1, 2)] not in result


def test_predicate_prunes_properties(team: Team) -> None:
    def skip_lead(owner: type, prop: PropertyDescriptor) -> bool:
        return not (owner is Team and prop.name == "lead")

    result = collect_base_paths(team, skip_lead)

    assert result[team.members[0]] == PropertyPath.of("members", 0)
    assert all("lead" not in path.segments for path in result.values())


def test_leaf_root_maps_to_root_path() -> None:
    result = collect_base_paths("text")

    assert list(result.values()) == [PropertyPath.ROOT]


def test_equal_but_distinct_containers_are_both_collected() -> None:
    root = {"a": [], "b": []}

    result = collect_base_paths(root)

    assert result[root["a"]] == PropertyPath.of(Index("a"))
    assert result[root["b"]] == PropertyPath.of(Index("b"))


def test_array_is_a_base_but_its_items_are_not() -> None:
    sensor = Sensor()

    result = collect_base_paths(sensor)

    assert len(result) == 2
    assert result[sensor.readings] == PropertyPath.of("readings")


def test_deep_chains_do_not_hit_the_recursion_limit() -> None:
    head = Node("0")
    current = head
    for index in range(1, 1200):
        current.self_ref = Node(str(index))
        current = current.self_ref

    result = collect_base_paths(head)

    assert result[current].segments == ("self_ref",) * 1199


def test_getter_failure_propagates() -> None:
    with pytest.raises(InvocationError) as exc_info:
        _ = collect_base_paths(Faulty())

    assert exc_info.value.member == "value"


def test_map_keys_render_as_indices(team: Team) -> None:
    """Identifier-like map keys stay distinguishable from bean properties."""

    result = collect_base_paths(team)
    path = result[team.offices["hq"]]

    assert path == PropertyPath.of("offices", Index("hq"))
    assert PropertyPath.parse(str(path)) == path


def test_uncomputed_cached_property_is_left_untouched() -> None:
    survey = Survey()

    result = collect_base_paths(survey)

    assert "results" not in vars(survey)
    assert survey.computed == 0
    assert list(result.values()) == [PropertyPath.ROOT]


def test_computed_cached_property_is_walked() -> None:
    survey = Survey()
    first = survey.results[0]

    result = collect_base_paths(survey)

    assert result[survey.results] == PropertyPath.of("results")
    assert result[first] == PropertyPath.of("results", 0)
    assert survey.computed == 1
