"""Unit tests for AST utility functions."""

import pytest

from mdcomponents.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    Image,
    List,
    ListItem,
    Paragraph,
    Strong,
    Text,
    ThematicBreak,
    extract_text,
    NodeVisitor,
    get_node_children,
    tree_depth,
)


@pytest.mark.unit
class TestGetNodeChildren:
    """Test child lookup."""

    def test_block_container(self) -> None:
        """Test that block containers return their children."""
        paragraph = Paragraph(content=[Text("a")])
        assert get_node_children(Document(children=[paragraph])) == [paragraph]

    def test_inline_container(self) -> None:
        """Test that inline containers return their content."""
        text = Text("a")
        assert get_node_children(Heading(level=1, content=[text])) == [text]

    def test_list(self) -> None:
        """Test that lists return their items."""
        item = ListItem(children=[])
        assert get_node_children(List(ordered=False, items=[item])) == [item]

    def test_leaf(self) -> None:
        """Test that leaves have no children."""
        assert get_node_children(ThematicBreak()) == []

    def test_returns_copy(self) -> None:
        """Test that mutating the result leaves the node alone."""
        document = Document(children=[ThematicBreak()])
        get_node_children(document).clear()
        assert len(document.children) == 1


@pytest.mark.unit
class TestExtractText:
    """Test plain-text extraction."""

    def test_nested_inlines(self) -> None:
        """Test that markup is dropped."""
        node = Paragraph(content=[Text("a "), Strong(content=[Emphasis(content=[Text("b")])]), Code(content=" c")])
        assert extract_text(node) == "a b c"

    def test_image_alt_text(self) -> None:
        """Test that images contribute alt text."""
        assert extract_text(Paragraph(content=[Image(url="a.png", alt_text="logo")])) == "logo"

    def test_list_of_nodes_with_joiner(self) -> None:
        """Test joining sibling nodes."""
        nodes = [Paragraph(content=[Text("a")]), CodeBlock(content="b")]
        assert extract_text(nodes, joiner="\n") == "a\nb"


@pytest.mark.unit
class TestTreeDepth:
    """Test tree depth measurement."""

    def test_leaf(self) -> None:
        """Test that a lone leaf has depth one."""
        assert tree_depth(Text("a")) == 1

    def test_nested_quotes(self) -> None:
        """Test depth through nested containers."""
        node = Document(children=[BlockQuote(children=[BlockQuote(children=[Paragraph(content=[Text("x")])])])])
        assert tree_depth(node) == 5

    def test_deepest_branch_wins(self) -> None:
        """Test that the deepest branch sets the depth."""
        shallow = Paragraph(content=[Text("a")])
        deep = List(ordered=False, items=[ListItem(children=[Paragraph(content=[Strong(content=[Text("b")])])])])
        assert tree_depth(Document(children=[shallow, deep])) == 6


class _HeadingCounter(NodeVisitor):
    def __init__(self) -> None:
        self.headings = 0

    def visit_heading(self, node: Heading) -> str:
        self.headings += 1
        return "heading"


@pytest.mark.unit
class TestVisitorDispatch:
    """Test how nodes pick a visitor method."""

    def test_dedicated_method(self) -> None:
        """Test that a node calls the method named after its visit_name."""
        visitor = _HeadingCounter()
        assert Heading(level=2).accept(visitor) == "heading"
        assert visitor.headings == 1

    def test_missing_method_falls_back(self) -> None:
        """Test that nodes without a dedicated method reach visit_node."""
        with pytest.raises(NotImplementedError, match="ThematicBreak"):
            ThematicBreak().accept(_HeadingCounter())

    def test_visit_names_are_snake_case(self) -> None:
        """Test the visit names of multi-word node types."""
        assert CodeBlock(content="").visit_name == "code_block"
        assert ListItem().visit_name == "list_item"
        assert BlockQuote().visit_name == "block_quote"
