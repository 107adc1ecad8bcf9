"""
Summary: Tests for auto-vivifying batch writes and path reads on object graphs.
Why: Flat request data must land in nested beans, lists, maps and arrays.
"""

from array import array
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any

import pytest
from pytest_mock import MockerFixture

from beanwalk.config import settings
from beanwalk.features.graph import (
    GraphWriter,
    apply_properties,
    get_property,
    required_sizes,
)
from beanwalk.features.path import PropertyPath
from beanwalk.shared.errors import (
    CoercionError,
    InvalidPathError,
    InvocationError,
    PropertyNotFoundError,
)


class Color(Enum):
    RED = "red"
    GREEN = "green"


@dataclass
class Address:
    street: str | None = None
    city: str | None = None


@dataclass
class Person:
    name: str | None = None
    age: int | None = None
    born: date | None = None
    score: Decimal | None = None
    height: float | None = None
    active: bool | None = None
    color: Color | None = None
    address: Address | None = None
    nicknames: list[str] | None = None


@dataclass
class Team:
    name: str | None = None
    persons: list[Person] = field(default_factory=list)
    lead: Person | None = None
    by_role: dict[str, Person] | None = None
    ratings: Annotated[array, "d"] | None = None
    counts: array | None = None
    extra: dict | None = None
    scores_by_year: dict[int, float] = field(default_factory=dict)
    matrix: list[list[int]] | None = None


class Badge:
    @property
    def label(self) -> str:
        return "fixed"


class NeedsArgs:
    value: int

    def __init__(self, value: int) -> None:
        self.value = value


@dataclass
class Holder:
    item: NeedsArgs | None = None


@pytest.fixture
def team() -> Team:
    return Team()


class TestRoundTrip:
    """Values written at a path read back unchanged."""

    @pytest.mark.parametrize(
        ("path", "value"),
        [
            ("name", "Tigers"),
            ("lead.age", 41),
            ("lead.born", date(2020, 1, 2)),
            ("lead.score", Decimal("1.5")),
            ("lead.height", 1.8),
            ("lead.active", False),
            ("lead.color", Color.GREEN),
            ("lead.address.city", "Oslo"),
            ("persons[0].address.street", "Main St"),
            ("by_role[captain].name", "Cap"),
        ],
    )
    def test_write_then_read(self, team: Team, path: str, value: Any) -> None:
        apply_properties(team, {path: value})

        assert get_property(team, path) == value

    def test_property_path_keys_are_accepted(self, team: Team) -> None:
        apply_properties(
            team,
            {
                PropertyPath.of("persons", 0, "name"): "Zoe",
                PropertyPath.of("persons", "1", "name"): "Yan",
            },
        )

        assert [person.name for person in team.persons] == ["Zoe", "Yan"]


class TestVivification:
    """Missing intermediates are created from declared types."""

    def test_optional_bean_is_created(self, team: Team) -> None:
        apply_properties(team, {"lead.address.city": "Oslo"})

        assert team.lead == Person(address=Address(city="Oslo"))

    @pytest.mark.parametrize(
        "values",
        [
            {"persons[2].name": "A", "persons[0].name": "B"},
            {"persons[0].name": "B", "persons[2].name": "A"},
        ],
    )
    def test_list_sizing_does_not_depend_on_input_order(
        self, team: Team, values: dict[str, str]
    ) -> None:
        apply_properties(team, values)

        assert team.persons == [Person(name="B"), Person(), Person(name="A")]

    def test_map_of_beans(self, team: Team) -> None:
        apply_properties(team, {"by_role[captain].name": "Cap"})

        assert team.by_role == {"captain": Person(name="Cap")}

    def test_unknown_value_types_pick_container_from_next_segment(self, team: Team) -> None:
        apply_properties(team, {"extra.items[1].label": "x"})

        assert team.extra == {"items": [None, {"label": "x"}]}

    def test_nested_lists(self, team: Team) -> None:
        apply_properties(team, {"matrix[1][2]": 5})

        assert team.matrix == [None, [None, None, 5]]

    def test_list_of_leaves_is_padded_with_none(self, team: Team) -> None:
        apply_properties(team, {"lead.nicknames[1]": "Bo"})

        assert team.lead is not None
        assert team.lead.nicknames == [None, "Bo"]

    def test_annotated_array_uses_its_typecode(self, team: Team) -> None:
        apply_properties(team, {"ratings[2]": "4.5"})

        assert team.ratings == array("d", [0.0, 0.0, 4.5])

    def test_plain_array_uses_configured_typecode(self, team: Team) -> None:
        apply_properties(team, {"counts[1]": 7})

        assert team.counts is not None
        assert team.counts.typecode == settings.ARRAY_TYPECODE
        assert list(team.counts) == [0, 7]

    def test_list_root(self) -> None:
        root: list[Any] = []

        apply_properties(root, {"[1]": "x"})

        assert root == [None, "x"]


class TestCoercion:
    """Text values are converted to declared types on the final write."""

    def test_bean_properties(self, team: Team) -> None:
        apply_properties(
            team,
            {
                "lead.age": "42",
                "lead.born": "2021-03-04",
                "lead.color": "GREEN",
                "lead.active": "yes",
            },
        )

        assert team.lead == Person(
            age=42, born=date(2021, 3, 4), color=Color.GREEN, active=True
        )

    def test_map_keys_and_values(self, team: Team) -> None:
        apply_properties(
            team,
            {"scores_by_year[2024]": "9.5", PropertyPath.of("scores_by_year", "2023"): 8},
        )

        assert team.scores_by_year == {2024: 9.5, 2023: 8}

    def test_numeric_segment_addresses_text_keyed_map(self, team: Team) -> None:
        """``by_role[0]`` parses to the int 0 but the map is keyed by ``str``."""

        team.by_role = {"0": Person(name="old")}

        apply_properties(team, {"by_role[0].name": "new", "by_role[1]": Person(name="b")})

        assert list(team.by_role) == ["0", "1"]
        assert team.by_role["0"].name == "new"
        assert get_property(team, "by_role[0].name") == "new"

    def test_untyped_map_reuses_existing_text_key(self, team: Team) -> None:
        team.extra = {"7": {"label": "old"}}

        apply_properties(team, {"extra[7].label": "new"})

        assert team.extra == {"7": {"label": "new"}}
        assert get_property(team, "extra[7].label") == "new"

    def test_unparsable_text_raises(self, team: Team) -> None:
        with pytest.raises(CoercionError):
            apply_properties(team, {"lead.age": "old"})


class TestOrdering:
    """Writes run longest path first, higher indices first."""

    def test_writes_run_in_descending_path_order(
        self, team: Team, mocker: MockerFixture
    ) -> None:
        spy = mocker.spy(GraphWriter, "write")

        apply_properties(
            team,
            {"name": "T", "persons[1].name": "b", "persons[4].name": "e"},
        )

        written = [call.args[1] for call in spy.call_args_list]
        assert written == [
            PropertyPath.of("persons", 4, "name"),
            PropertyPath.of("persons", 1, "name"),
            PropertyPath.of("name"),
        ]

    def test_required_sizes_track_largest_index_per_prefix(self) -> None:
        sizes = required_sizes(
            [
                PropertyPath.parse("persons[3].nicknames[1]"),
                PropertyPath.parse("persons[0].nicknames[5]"),
                PropertyPath.parse("by_role[x]"),
            ]
        )

        assert sizes == {
            PropertyPath.of("persons"): 4,
            PropertyPath.of("persons", 3, "nicknames"): 2,
            PropertyPath.of("persons", 0, "nicknames"): 6,
        }


class TestErrors:
    """Failures surface as the matching error type."""

    def test_unknown_final_property(self, team: Team) -> None:
        with pytest.raises(PropertyNotFoundError) as exc_info:
            apply_properties(team, {"lead.unknown": 1})

        assert exc_info.value.name == "unknown"

    def test_read_only_final_property(self) -> None:
        with pytest.raises(PropertyNotFoundError):
            apply_properties(Badge(), {"label": "new"})

    def test_traversing_through_a_leaf(self) -> None:
        with pytest.raises(InvalidPathError):
            apply_properties(Team(name="T"), {"name.first": "x"})

    def test_vivifying_a_leaf_type(self, team: Team) -> None:
        with pytest.raises(InvalidPathError):
            apply_properties(team, {"name.first": "x"})

    def test_non_index_segment_on_list(self, team: Team) -> None:
        with pytest.raises(InvalidPathError) as exc_info:
            apply_properties(team, {"persons[x].name": "a"})

        assert exc_info.value.segment == "x"

    def test_index_above_maximum(self, team: Team, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "MAX_INDEX", 10)

        with pytest.raises(InvalidPathError):
            apply_properties(team, {"persons[11].name": "a"})
        assert team.persons == []

    def test_root_path_cannot_be_assigned(self, team: Team) -> None:
        with pytest.raises(InvalidPathError):
            apply_properties(team, {PropertyPath.ROOT: team})

    def test_malformed_text_key(self, team: Team) -> None:
        with pytest.raises(InvalidPathError):
            apply_properties(team, {"persons..name": "a"})

    def test_bean_without_no_arg_constructor(self) -> None:
        with pytest.raises(InvocationError) as exc_info:
            apply_properties(Holder(), {"item.value": 1})

        assert exc_info.value.owner is NeedsArgs
        assert isinstance(exc_info.value.__cause__, TypeError)


class TestGetProperty:
    """Path reads without vivification."""

    def test_empty_path_returns_root(self, team: Team) -> None:
        assert get_property(team, "") is team

    def test_missing_index_raises(self, team: Team) -> None:
        with pytest.raises(PropertyNotFoundError):
            _ = get_property(team, "persons[0]")

    def test_missing_map_key_raises(self) -> None:
        with pytest.raises(PropertyNotFoundError):
            _ = get_property(Team(by_role={}), "by_role[captain]")

    def test_unset_intermediate_is_not_created(self, team: Team) -> None:
        with pytest.raises(InvalidPathError):
            _ = get_property(team, "lead.name")

        assert team.lead is None
