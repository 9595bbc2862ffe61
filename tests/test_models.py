# tests/test_models.py

from scraper_autoconfig.models import (
    FieldCandidate,
    FieldExample,
    Node,
    copy_path,
    path_distance,
    path_string,
    trim_prefix,
)


def _candidate(path, value, emission_index=0, text_index=0, attr=""):
    return FieldCandidate(
        path=path,
        attr=attr,
        text_index=text_index,
        examples=[FieldExample(value, emission_index)],
        emission_index=emission_index,
    )


def test_node_string_escapes_classes():
    node = Node("div", ["a:b", "w-1/2", "1col"], ["nth-child(2)"])
    assert str(node) == "div.a\\:b.w-1\\/2.\\31 col:nth-child(2)"


def test_node_equality_ignores_order():
    assert Node("div", ["a", "b"]) == Node("div", ["b", "a"])
    assert Node("div", ["a"]) != Node("span", ["a"])
    assert Node("li", [], ["nth-child(2)"]) != Node("li", [], [])


def test_path_string_and_distance():
    a = [Node("body"), Node("div", ["card"]), Node("h2")]
    b = [Node("body"), Node("div", ["card"]), Node("h3")]
    assert path_string(a) == "body > div.card > h2"
    assert path_distance(a, a) == 0
    assert path_distance(a, b) == 1


def test_copy_path_is_deep():
    path = [Node("body"), Node("div", ["card"])]
    copy = copy_path(path)
    copy[1].classes.append("x")
    assert path[1].classes == ["card"]


def test_trim_prefix():
    path = [Node("body"), Node("div", ["a", "b"]), Node("ul"), Node("li", ["c"])]
    assert path_string(trim_prefix(path, 3)) == "div.a.b > ul > li.c"
    assert path_string(trim_prefix(path, 1)) == "li.c"
    assert trim_prefix(path, 10) == path


def test_strip_nth_child_clears_position_and_everything_above():
    fc = _candidate(
        [
            Node("body"),
            Node("div", [], ["nth-child(25)"]),
            Node("ul"),
            Node("li", [], ["nth-child(30)"]),
            Node("span", [], ["nth-child(2)"]),
        ],
        "x",
    )
    fc.strip_nth_child(20)

    assert fc.strip_index == 3
    assert [n.pseudo_classes for n in fc.path] == [[], [], [], [], ["nth-child(2)"]]


def test_strip_nth_child_keeps_small_positions_and_last_node():
    fc = _candidate(
        [Node("body"), Node("li", [], ["nth-child(3)"]), Node("span", [], ["nth-child(40)"])],
        "x",
    )
    fc.strip_nth_child(20)

    assert fc.strip_index == 0
    assert fc.path[1].pseudo_classes == ["nth-child(3)"]
    assert fc.path[2].pseudo_classes == ["nth-child(40)"]


def test_strip_nth_child_small_threshold_clears_second_to_last():
    fc = _candidate(
        [
            Node("body"),
            Node("div", ["list"], ["nth-child(3)"]),
            Node("div", ["card"], ["nth-child(4)"]),
            Node("span", ["t"], ["nth-child(5)"]),
        ],
        "x",
    )
    fc.strip_nth_child(3)

    assert fc.strip_index == 2
    assert path_string(fc.path) == "body > div.list > div.card > span.t:nth-child(5)"


def test_absorb_intersects_classes():
    group = _candidate([Node("body"), Node("div", ["card", "red"]), Node("h2")], "A", 0)
    other = _candidate([Node("body"), Node("div", ["card", "blue"]), Node("h2")], "B", 5)

    assert group.absorb(other)
    assert group.count == 2
    assert group.path[1].classes == ["card"]
    assert group.example_values() == ["A", "B"]
    assert group.emission_index == 0


def test_absorb_rejects_mismatches():
    group = _candidate([Node("body"), Node("div", ["card"]), Node("h2")], "A")

    assert not group.absorb(_candidate([Node("body"), Node("div", ["other"]), Node("h2")], "B"))
    assert not group.absorb(_candidate([Node("body"), Node("div", ["card"]), Node("h3")], "B"))
    assert not group.absorb(_candidate([Node("body"), Node("div", ["card"])], "B"))
    assert not group.absorb(
        _candidate([Node("body"), Node("div", ["card"]), Node("h2")], "B", text_index=2)
    )
    assert group.count == 1


def test_absorb_compares_pseudo_classes_below_strip_index():
    group = _candidate([Node("body"), Node("ul"), Node("li", [], ["nth-child(2)"])], "A")
    other = _candidate([Node("body"), Node("ul"), Node("li", [], ["nth-child(3)"])], "B")
    assert not group.absorb(other)

    group.strip_index = 2
    assert group.absorb(other)
    assert group.path[2].pseudo_classes == ["nth-child(2)"]
