from datetime import date

from hypothesis import given
from hypothesis import strategies as st

from postloom.content.parser import parse_entry
from postloom.core.types import Tag
from postloom.listing.grouping import group_by

from conftest import make_entry


def post(slug: str, tags: list[str], day: date = date(2024, 1, 1)):
    return parse_entry(make_entry(day, slug, tags=tags))


def test_post_joins_every_matching_group():
    posts = [post("a", ["Java", "Spring"]), post("b", ["Java"]), post("c", [])]

    groups = {g.group.name: [p.slug for p in g.results] for g in group_by(posts, lambda p: p.tags)}

    assert groups == {"Java": ["a", "b"], "Spring": ["a"]}


def test_groups_keep_input_order_and_first_appearance():
    posts = [post("z", ["Kotlin"]), post("y", ["Java", "Kotlin"]), post("x", ["Java"])]

    groups = group_by(posts, lambda p: p.tags)

    assert [g.group for g in groups] == [Tag.from_name("Kotlin"), Tag.from_name("Java")]
    assert [p.slug for p in groups[0].results] == ["z", "y"]
    assert [p.slug for p in groups[1].results] == ["y", "x"]


def test_keys_compare_by_value():
    posts = [post("a", ["Spring Boot"]), post("b", ["Spring Boot"])]

    [group] = group_by(posts, lambda p: p.tags)

    assert group.group == Tag(name="Spring Boot", path="spring-boot")
    assert len(group.results) == 2


def test_repeated_key_counts_once_per_item():
    [group] = group_by([post("a", ["Java", "Java"])], lambda p: p.tags)
    assert [p.slug for p in group.results] == ["a"]


def test_mapping_keys_compare_structurally():
    items = [
        {"slug": "a", "tags": [{"name": "Java", "path": "java"}]},
        {"slug": "b", "tags": [{"path": "java", "name": "Java"}, {"name": "Spring Boot", "path": "spring-boot"}]},
    ]

    groups = group_by(items, lambda item: item["tags"])

    assert [g.group for g in groups] == [
        {"name": "Java", "path": "java"},
        {"name": "Spring Boot", "path": "spring-boot"},
    ]
    assert [[i["slug"] for i in g.results] for g in groups] == [["a", "b"], ["b"]]


def test_repeated_mapping_key_counts_once_per_item():
    item = {"tags": [{"name": "Java", "path": "java"}] * 2}

    [group] = group_by([item, item], lambda i: i["tags"])

    assert group.results == [item, item]


def test_no_items_no_groups():
    assert group_by([], lambda p: p.tags) == []


def test_items_without_keys_produce_no_groups():
    assert group_by([post("a", []), post("b", [])], lambda p: p.tags) == []


@given(st.lists(st.lists(st.sampled_from("abcdef"), max_size=4), max_size=30))
def test_grouping_completeness(keys_per_item):
    items = list(enumerate(keys_per_item))

    groups = group_by(items, lambda item: item[1])

    keys = [g.group for g in groups]
    assert len(keys) == len(set(keys))
    assert all(g.results for g in groups)
    by_key = {g.group: g.results for g in groups}
    for item in items:
        for key in set(item[1]):
            assert by_key[key].count(item) == 1
        for key, results in by_key.items():
            if key not in item[1]:
                assert item not in results
    for results in by_key.values():
        assert results == sorted(results)
