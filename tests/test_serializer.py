"""Tests for rendering block trees as Logseq Markdown."""

from athens_logseq.export.references import ReferenceResolver, RewriteMap, derive_identifier
from athens_logseq.export.serializer import BlockSerializer, convert_task_markers, to_document
from athens_logseq.models import Block


def render_page(store, title):
    rewrite_map = ReferenceResolver(store).resolve()
    serializer = BlockSerializer(store, rewrite_map)
    return serializer.render_page(store.page_by_title(title))


def test_nesting_and_sibling_order(make_store):
    store = make_store([
        Block(eid=1, title="Page", children=[2, 3]),
        Block(eid=2, uid="b2", string="second", order=1),
        Block(eid=3, uid="b3", string="first", order=0, children=[4]),
        Block(eid=4, uid="b4", string="child", order=0, children=[5]),
        Block(eid=5, uid="b5", string="grandchild", order=0),
    ])

    assert render_page(store, "Page") == [
        "- first",
        "  - child",
        "    - grandchild",
        "- second",
    ]


def test_referenced_block_gets_id_line(make_store):
    store = make_store([
        Block(eid=1, title="Page", children=[2, 3]),
        Block(eid=2, uid="a1", string="target", order=0),
        Block(eid=3, uid="b2", string="see ((a1))", order=1),
    ])
    identifier = derive_identifier("a1")

    assert render_page(store, "Page") == [
        "- target",
        f"  id:: {identifier}",
        f"- see (({identifier}))",
    ]


def test_multiline_text_stays_inside_its_bullet(make_store):
    store = make_store([
        Block(eid=1, title="Page", children=[2]),
        Block(eid=2, uid="b2", string="line one\nline two", order=0, children=[3]),
        Block(eid=3, uid="b3", string="child", order=0),
    ])

    assert render_page(store, "Page") == [
        "- line one",
        "  line two",
        "  - child",
    ]


def test_block_without_text_emits_no_bullet(make_store):
    store = make_store([
        Block(eid=1, title="Page", children=[2]),
        Block(eid=2, uid="b2", string="parent", order=0, children=[3]),
        Block(eid=3, uid="b3", order=0, children=[4]),
        Block(eid=4, uid="b4", string="inside container", order=0),
    ])

    lines = render_page(store, "Page")

    assert lines == ["- parent", "    - inside container"]
    assert all(line.strip() != "-" for line in lines)


def test_referenced_block_without_text_still_carries_id(make_store):
    store = make_store([
        Block(eid=1, title="Page", children=[2, 3]),
        Block(eid=2, uid="e1", order=0),
        Block(eid=3, uid="b2", string="((e1))", order=1),
    ])

    assert render_page(store, "Page")[0] == f"- id:: {derive_identifier('e1')}"


def test_reference_cycle_terminates(make_store):
    store = make_store([
        Block(eid=1, title="Page", children=[2, 3]),
        Block(eid=2, uid="aa", string="A -> ((bb))", order=0),
        Block(eid=3, uid="bb", string="B -> ((aa))", order=1),
    ])
    id_a, id_b = derive_identifier("aa"), derive_identifier("bb")

    assert render_page(store, "Page") == [
        f"- A -> (({id_b}))",
        f"  id:: {id_a}",
        f"- B -> (({id_a}))",
        f"  id:: {id_b}",
    ]


def test_child_cycle_renders_each_block_once(make_store):
    store = make_store([
        Block(eid=1, title="Page", children=[2]),
        Block(eid=2, uid="b2", string="loop", order=0, children=[3]),
        Block(eid=3, uid="b3", string="back", order=0, children=[2]),
    ])

    assert render_page(store, "Page") == ["- loop", "  - back"]


def test_page_root_with_text_is_a_bullet(make_store):
    store = make_store([
        Block(eid=1, title="Page", string="root text", children=[2]),
        Block(eid=2, uid="b2", string="child", order=0),
    ])

    assert render_page(store, "Page") == ["- root text", "  - child"]


def test_custom_indent(make_store):
    store = make_store([
        Block(eid=1, title="Page", children=[2]),
        Block(eid=2, uid="b2", string="parent", order=0, children=[3]),
        Block(eid=3, uid="b3", string="child", order=0),
    ])
    serializer = BlockSerializer(store, RewriteMap({}), indent="\t")

    assert serializer.render_page(store.page_by_title("Page")) == ["- parent", "\t- child"]


def test_task_markers_are_replaced_in_place():
    text = "- {{[[TODO]]}} first\n- call {{TODO}} later\n- {{[[DONE]]}} and {{DONE}}"

    assert convert_task_markers(text) == "- TODO first\n- call TODO later\n- DONE and DONE"


def test_task_markers_leave_other_macros_alone():
    assert convert_task_markers("{{[[embed]]: ((abc))}} {{[[TODO]]x}}") == "{{[[embed]]: ((abc))}} {{[[TODO]]x}}"


def test_to_document_with_preamble():
    assert to_document(["- a", "  - {{[[TODO]]}} b"], "title:: A/B") == "title:: A/B\n\n- a\n  - TODO b"


def test_to_document_without_preamble_or_conversion():
    assert to_document(["- {{TODO}} a"], None, task_markers=False) == "- {{TODO}} a"
    assert to_document([], None) == ""


def test_referenced_page_root_without_text_keeps_children_at_margin(make_store):
    store = make_store([
        Block(eid=1, uid="abc123", title="Page", children=[2]),
        Block(eid=2, uid="b2", string="child", order=0),
        Block(eid=3, title="Other", children=[4]),
        Block(eid=4, uid="b4", string="see ((abc123))", order=0),
    ])

    assert render_page(store, "Page") == [
        f"id:: {derive_identifier('abc123')}",
        "- child",
    ]
