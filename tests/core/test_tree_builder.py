import logging

from layout_toolkit.config import ConfigManager
from layout_toolkit.core.converter import (
    TreeBuilder,
    build_tree,
    compute_style,
    normalize_batch,
    prepare_markup,
)
from layout_toolkit.core.generators import print_tree
from layout_toolkit.core.models import (
    AttributePrecedence,
    Degraded,
    Parsed,
    PlacedElement,
    TreeNode,
)


class TestStyleComposition:
    def test_position_and_offsets(self):
        style = compute_style(PlacedElement(x="10", y="20"))
        assert style == {"position": "absolute", "left": "10px", "top": "20px"}

    def test_override_wins(self):
        style = compute_style(PlacedElement(x="10", y="20", style_overrides={"top": "99px"}))
        assert style == {"position": "absolute", "left": "10px", "top": "99px"}

    def test_empty_offsets_are_omitted(self):
        assert compute_style(PlacedElement(x="", y="")) == {"position": "absolute"}

    def test_size_is_included(self):
        style = compute_style(PlacedElement(x="", y="", width="100px", height="20px"))
        assert style == {"position": "absolute", "width": "100px", "height": "20px"}

    def test_position_is_always_populated(self):
        style = compute_style(PlacedElement(position="", style_overrides={"position": ""}))
        assert style["position"] == "absolute"


class TestTableWrapping:
    def test_rows_are_wrapped(self):
        element = PlacedElement(element_kind="table", markup="<tr><td>1</td></tr>")
        assert prepare_markup(element) == "<table><tr><td>1</td></tr></table>"

    def test_no_double_wrap(self):
        element = PlacedElement(element_kind="TABLE", markup="  <TABLE><tr></tr></TABLE> ")
        assert prepare_markup(element) == "<TABLE><tr></tr></TABLE>"

    def test_other_kinds_untouched(self):
        element = PlacedElement(element_kind="div", markup="<tr><td>1</td></tr>")
        assert prepare_markup(element) == "<tr><td>1</td></tr>"

    def test_tree_for_wrapped_table(self, builder):
        [node] = builder.build([PlacedElement(element_kind="table", markup="<tr><td>1</td></tr>")])
        assert node.tag == "table"
        table = node.children[0]
        assert table.tag == "table"
        assert table.children[0].tag == "tr"
        assert table.children[0].children == (TreeNode(tag="td", children=("1",)),)

    def test_tree_for_complete_table(self, builder):
        markup = "<table><tr><td>1</td></tr></table>"
        [node] = builder.build([PlacedElement(element_kind="table", markup=markup)])
        assert len(node.children) == 1
        assert node.children[0].tag == "table"
        assert node.children[0].children[0].tag == "tr"


class TestBuildTree:
    def test_end_to_end(self, builder):
        elements = normalize_batch([
            {"html": "<span>Hi</span>", "id": "e1", "x": "5", "y": "5", "type": "div"}
        ])
        [node] = builder.build(elements)
        assert node == TreeNode(
            tag="div",
            attributes={"id": "e1", "style": {"position": "absolute", "left": "5px", "top": "5px"}},
            children=(TreeNode(tag="span", children=("Hi",)),),
        )
        assert node.to_dict() == {
            "tag": "div",
            "attributes": {"id": "e1", "style": {"position": "absolute", "left": "5px", "top": "5px"}},
            "children": [{"tag": "span", "children": ["Hi"]}],
        }

    def test_order_is_preserved(self, builder):
        elements = [PlacedElement(id=str(i), element_kind=kind)
                    for i, kind in enumerate(["p", "section", "div", "span"])]
        nodes = builder.build(elements)
        assert [n.attributes["id"] for n in nodes] == ["0", "1", "2", "3"]
        assert [n.tag for n in nodes] == ["p", "section", "div", "span"]

    def test_empty_input(self, builder):
        assert builder.build([]) == []

    def test_plain_text_markup(self, builder):
        [node] = builder.build([PlacedElement(markup="  Hello world ")])
        assert node.children == ("Hello world",)

    def test_unterminated_tag_is_plain_text(self, builder):
        [node] = builder.build([PlacedElement(markup="<div oops")])
        assert node.children == ("<div oops",)

    def test_empty_markup_omits_children(self, builder):
        [node] = builder.build([PlacedElement(markup="   ")])
        assert node.children is None
        assert "children" not in node.to_dict()

    def test_root_tag_is_lower_cased(self, builder):
        [node] = builder.build([PlacedElement(element_kind="Section")])
        assert node.tag == "section"

    def test_empty_kind_defaults_to_div(self, builder):
        [node] = builder.build([PlacedElement(element_kind="")])
        assert node.tag == "div"

    def test_style_is_not_aliased(self, builder):
        element = PlacedElement(style_overrides={"color": "red"}, extra_attributes={"data": {"k": "v"}})
        [node] = builder.build([element])
        element.style_overrides["color"] = "blue"
        element.extra_attributes["data"]["k"] = "changed"
        assert node.attributes["style"]["color"] == "red"
        assert node.attributes["data"] == {"k": "v"}

    def test_build_tree_function(self, builder):
        nodes = build_tree([PlacedElement(id="x")], builder=builder)
        assert nodes[0].attributes["id"] == "x"

    def test_print_tree_contains_root_tag(self, builder):
        nodes = builder.build([PlacedElement(element_kind="article", markup="<p>a</p>")])
        assert "article" in print_tree(nodes)


class TestAttributePrecedence:
    def _element(self):
        return PlacedElement(id="e1", extra_attributes={"id": "other", "style": "x", "class": "c"})

    def test_extra_attributes_win_by_default(self, builder):
        [node] = builder.build([self._element()])
        assert node.attributes["id"] == "other"
        assert node.attributes["style"] == "x"
        assert node.attributes["class"] == "c"
        assert list(node.attributes) == ["id", "style", "class"]

    def test_reserved_keys_protected(self):
        builder = TreeBuilder(precedence=AttributePrecedence.RESERVED_WINS, max_depth=64,
                              default_position="absolute")
        [node] = builder.build([self._element()])
        assert node.attributes["id"] == "e1"
        assert node.attributes["style"]["position"] == "absolute"
        assert node.attributes["class"] == "c"


class TestDegradation:
    def test_failure_is_isolated_to_one_element(self):
        builder = TreeBuilder(precedence=AttributePrecedence.EXTRA_WINS, max_depth=2,
                              default_position="absolute")
        elements = [
            PlacedElement(id="ok1", markup="<p>a</p>"),
            PlacedElement(id="deep", markup=" <a><b><c>x</c></b></a> "),
            PlacedElement(id="ok2", markup="<p>b</p>"),
        ]
        report = builder.build_report(elements)

        assert report.nodes[0].children == (TreeNode(tag="p", children=("a",)),)
        assert report.nodes[1].children == ("<a><b><c>x</c></b></a>",)
        assert report.nodes[2].children == (TreeNode(tag="p", children=("b",)),)

        [(index, element_id, outcome)] = report.degraded
        assert (index, element_id) == (1, "deep")
        assert isinstance(outcome, Degraded)
        assert "FragmentParseError" in outcome.reason
        assert isinstance(report.outcomes[0], Parsed)

    def test_non_string_markup_degrades(self, builder):
        node, outcome = builder.build_node(PlacedElement(id="bad", markup=None))
        assert isinstance(outcome, Degraded)
        assert node.attributes["id"] == "bad"
        assert outcome.text == ""
        assert node.children is None

    def test_non_string_markup_keeps_its_text(self, builder):
        node, outcome = builder.build_node(PlacedElement(id="num", markup=42))
        assert isinstance(outcome, Degraded)
        assert node.children == ("42",)


class TestBuilderConfiguration:
    def test_options_from_packaged_config(self):
        builder = TreeBuilder()
        assert builder.precedence is AttributePrecedence.EXTRA_WINS
        assert builder.default_position == "absolute"

    def test_options_from_user_override(self, isolated_config):
        isolated_config.mkdir(parents=True)
        (isolated_config / "tree_builder.yml").write_text(
            "attribute_precedence: reserved_wins\n", encoding="utf-8"
        )
        ConfigManager.reset()
        builder = TreeBuilder()
        assert builder.precedence is AttributePrecedence.RESERVED_WINS

    def test_invalid_max_depth_override_falls_back(self, isolated_config, caplog):
        isolated_config.mkdir(parents=True)
        (isolated_config / "tree_builder.yml").write_text(
            "parser:\n  max_depth: lots\n", encoding="utf-8"
        )
        ConfigManager.reset()
        with caplog.at_level(logging.WARNING, logger="layout_toolkit.core.converter.tree_builder"):
            builder = TreeBuilder()
        assert builder._parser.max_depth == 256
        assert "invalid parser.max_depth" in caplog.text
        [node] = builder.build([PlacedElement(id="e", markup="<p>x</p>")])
        assert node.children == (TreeNode(tag="p", children=("x",)),)

    def test_non_mapping_parser_override_falls_back(self, isolated_config):
        isolated_config.mkdir(parents=True)
        (isolated_config / "tree_builder.yml").write_text("parser: 7\n", encoding="utf-8")
        ConfigManager.reset()
        assert TreeBuilder()._parser.max_depth == 256

    def test_zero_max_depth_override_falls_back(self, isolated_config):
        isolated_config.mkdir(parents=True)
        (isolated_config / "tree_builder.yml").write_text(
            "parser:\n  max_depth: -3\n", encoding="utf-8"
        )
        ConfigManager.reset()
        assert TreeBuilder()._parser.max_depth == 256

    def test_unknown_precedence_falls_back(self, isolated_config):
        isolated_config.mkdir(parents=True)
        (isolated_config / "tree_builder.yml").write_text(
            "attribute_precedence: whoever\n", encoding="utf-8"
        )
        ConfigManager.reset()
        assert TreeBuilder().precedence is AttributePrecedence.EXTRA_WINS
