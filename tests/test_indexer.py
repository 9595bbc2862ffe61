# tests/test_indexer.py

from scraper_autoconfig.indexer import extract_candidates, normalize_html
from scraper_autoconfig.models import path_string


def _summary(candidates):
    return [(path_string(c.path), c.attr, c.text_index, c.example_values()) for c in candidates]


def test_text_and_attributes_in_document_order():
    html = (
        "<html><head><title>ignored</title></head><body>"
        "<div class='card'><h2>Title</h2><a href='/x'>Link</a></div>"
        "</body></html>"
    )
    candidates = extract_candidates(html)

    assert _summary(candidates) == [
        ("body > div.card > h2", "", 0, ["Title"]),
        ("body > div.card > a", "href", 0, ["/x"]),
        ("body > div.card > a", "", 0, ["Link"]),
    ]
    assert [c.emission_index for c in candidates] == [0, 1, 2]
    assert all(c.count == 1 for c in candidates)


def test_nth_child_only_for_repeated_tags():
    candidates = extract_candidates("<body><ul><li>a</li><li>b</li><li>c</li></ul></body>")
    assert [path_string(c.path) for c in candidates] == [
        "body > ul > li",
        "body > ul > li:nth-child(2)",
        "body > ul > li:nth-child(3)",
    ]


def test_nth_child_counts_every_element_sibling():
    candidates = extract_candidates("<body><div><h2>t</h2><p>a</p><p>b</p></div></body>")
    assert [path_string(c.path) for c in candidates] == [
        "body > div > h2",
        "body > div > p",
        "body > div > p:nth-child(3)",
    ]


def test_text_index_counts_text_comments_and_elements():
    candidates = extract_candidates("<body><p>one<br>two<!-- c -->three</p></body>")
    assert [(c.example_values()[0], c.text_index) for c in candidates] == [
        ("one", 0),
        ("two", 2),
        ("three", 4),
    ]


def test_void_img_emits_against_synthetic_node():
    candidates = extract_candidates("<body><div><img class='pic' src='a.png'><span>x</span></div></body>")
    assert _summary(candidates) == [
        ("body > div > img.pic", "src", 0, ["a.png"]),
        ("body > div > span", "", 0, ["x"]),
    ]


def test_classes_with_dots_are_dropped_and_body_classes_ignored():
    candidates = extract_candidates("<body class='home'><p class='a b.c d'>x</p></body>")
    assert path_string(candidates[0].path) == "body > p.a.d"


def test_whitespace_only_text_is_not_emitted():
    candidates = extract_candidates("<body><p>   </p><p> x </p></body>")
    assert _summary(candidates) == [("body > p:nth-child(2)", "", 0, ["x"])]


def test_malformed_html_does_not_raise():
    candidates = extract_candidates("<div><p>unclosed<span>text</div></i><table><td>cell")
    values = [c.example_values()[0] for c in candidates]
    assert values == ["unclosed", "text", "cell"]


def test_candidates_do_not_share_nodes():
    candidates = extract_candidates("<body><div class='a'><p>x</p><p>y</p></div></body>")
    candidates[0].path[1].classes.append("changed")
    assert candidates[1].path[1].classes == ["a"]


def test_normalize_wraps_fragment_in_body():
    html = normalize_html("<p>x</p>")
    assert "<body><p>x</p></body>" in html


def test_normalize_inserts_tbody():
    assert "<tbody><tr><td>x</td></tr></tbody>" in normalize_html("<table><tr><td>x</td></tr></table>")


def test_table_rows_get_tbody_in_path():
    html = (
        "<html><body><table class='events'>"
        "<tr><td>A</td></tr>"
        "<tr><td>B</td></tr>"
        "</table></body></html>"
    )
    candidates = extract_candidates(html)
    assert [path_string(c.path) for c in candidates] == [
        "body > table.events > tbody > tr > td",
        "body > table.events > tbody > tr:nth-child(2) > td",
    ]


def test_empty_input():
    assert extract_candidates("") == []
