"""Unit tests for the component compiler."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from rich.text import Text as RichText

from mdcomponents.ast import Document, Image, List, ListItem, Paragraph, Text
from mdcomponents.compiler import ComponentCompiler, compile_markdown, resolve_image_url
from mdcomponents.components import ExtensionComponent, ExtensionKind, StyledText, URLReference, join_components
from mdcomponents.exceptions import ParsingError, RenderingError, ValidationError
from mdcomponents.options import CompilerOptions, StyleConfig


def plains(components: list) -> list:
    """Describe components as plain strings, URLs and extension names."""
    described = []
    for component in components:
        if isinstance(component, StyledText):
            described.append(component.plain)
        elif isinstance(component, URLReference):
            described.append(("url", component.url))
        else:
            described.append(("ext", component.name))
    return described


@pytest.mark.unit
class TestResolveImageUrl:
    """Test image URL resolution."""

    def test_absolute(self) -> None:
        """Test absolute URLs pass through."""
        assert resolve_image_url("https://example.com/a.png") == "https://example.com/a.png"

    def test_relative_with_base(self) -> None:
        """Test relative URLs resolve against the base."""
        assert resolve_image_url("img/a.png", "https://example.com/docs/") == "https://example.com/docs/img/a.png"

    def test_absolute_ignores_base(self) -> None:
        """Test absolute URLs are not re-based."""
        assert resolve_image_url("https://cdn.example.com/a.png", "https://example.com/") == (
            "https://cdn.example.com/a.png"
        )

    def test_relative_without_base(self) -> None:
        """Test relative URLs without a base are kept as written."""
        assert resolve_image_url("a.png") == "a.png"

    @pytest.mark.parametrize("url", ["", None, "a b.png", "a\tb", "http://[::1"])
    def test_unusable(self, url) -> None:
        """Test missing and malformed URLs."""
        assert resolve_image_url(url) is None


@pytest.mark.unit
class TestPlainDocuments:
    """Test documents without images or extensions."""

    def test_single_paragraph(self, plain_style: StyleConfig) -> None:
        """Test that plain text compiles to one styled text."""
        assert compile_markdown("Hello world", plain_style) == [StyledText.from_plain("Hello world")]

    def test_blocks_joined(self, plain_style: StyleConfig) -> None:
        """Test that blocks are joined with the paragraph separator."""
        assert plains(compile_markdown("# Title\n\nBody", plain_style)) == ["Title\u2029Body"]

    def test_inline_formatting_folds(self, plain_style: StyleConfig) -> None:
        """Test that inline runs fold into one component."""
        assert plains(compile_markdown("a *b* **c** `d` ~~e~~", plain_style)) == ["a b c d e"]

    def test_soft_break(self, plain_style: StyleConfig) -> None:
        """Test that soft breaks use the configured text."""
        assert plains(compile_markdown("a\nb", plain_style)) == ["a b"]
        assert plains(compile_markdown("a\nb", plain_style.create_updated(soft_break="\n"))) == ["a\nb"]

    def test_thematic_break(self, plain_style: StyleConfig) -> None:
        """Test thematic breaks between paragraphs."""
        assert plains(compile_markdown("a\n\n---\n\nb", plain_style)) == ["a\u2029\u2014\u2014\u2014\u2029b"]

    def test_code_block(self, plain_style: StyleConfig) -> None:
        """Test that a code block is one run of text."""
        assert plains(compile_markdown("```python\nprint(1)\n```", plain_style)) == ["print(1)"]

    def test_empty_document(self) -> None:
        """Test that empty input compiles to nothing."""
        assert compile_markdown("") == []

    def test_styles_applied(self) -> None:
        """Test that default styles reach the produced text."""
        [component] = compile_markdown("> quoted")
        assert component.plain == "quoted"
        assert all(span.style.italic for span in component.text.spans)

    def test_heading_style(self) -> None:
        """Test that heading content sees the heading style."""
        [component] = compile_markdown("## Sub")
        assert component.text.spans
        assert component.text.spans[0].style.bold


@pytest.mark.unit
class TestImages:
    """Test image handling."""

    def test_image_alone(self) -> None:
        """Test that an image compiles to its URL."""
        assert compile_markdown("![alt](https://example.com/a.png)") == [URLReference("https://example.com/a.png")]

    def test_image_splits_text(self, plain_style: StyleConfig) -> None:
        """Test that an image breaks a text run."""
        result = compile_markdown("before ![x](a.png) after", plain_style)
        assert plains(result) == ["before ", ("url", "a.png"), " after"]

    def test_base_url(self) -> None:
        """Test relative image URLs against the configured base."""
        style = StyleConfig(base_url="https://example.com/docs/")
        assert compile_markdown("![x](img/a.png)", style) == [URLReference("https://example.com/docs/img/a.png")]

    def test_unusable_image_dropped(self, plain_style: StyleConfig) -> None:
        """Test that an image with an unusable URL yields nothing."""
        compiler = ComponentCompiler(plain_style)
        assert compiler.compile(Image(url="", alt_text="x")) == []
        assert compiler.compile(Paragraph(content=[Text("a"), Image(url=""), Text("b")])) == [
            StyledText.from_plain("ab")
        ]


@pytest.mark.unit
class TestLists:
    """Test list markers and folding."""

    def test_bullets(self, plain_style: StyleConfig) -> None:
        """Test bullet markers and item joins."""
        assert plains(compile_markdown("- one\n- two", plain_style)) == ["\u2022\tone\u2029\u2022\ttwo"]

    def test_ordinals_from_start(self, plain_style: StyleConfig) -> None:
        """Test ordinal markers."""
        assert plains(compile_markdown("3. a\n4. b", plain_style)) == ["3.\ta\u20294.\tb"]

    def test_nested(self, plain_style: StyleConfig) -> None:
        """Test indentation of nested lists."""
        result = compile_markdown("- a\n  - b", plain_style)
        assert plains(result) == ["\u2022\ta\u2029\t\u2022\tb"]

    def test_task_items(self, plain_style: StyleConfig) -> None:
        """Test checkbox glyphs in markers."""
        result = compile_markdown("- [x] done\n- [ ] todo", plain_style)
        assert plains(result) == ["\u2022\t\u2611 done\u2029\u2022\t\u2610 todo"]

    def test_item_with_image(self, plain_style: StyleConfig) -> None:
        """Test that an image inside an item splits the list text."""
        result = compile_markdown("1. Text\n![](url)\n1. More", plain_style)
        assert plains(result) == ["1.\tText ", ("url", "url"), "2.\tMore"]

    def test_item_starting_with_image(self, plain_style: StyleConfig) -> None:
        """Test that the marker stands alone before a leading image."""
        result = compile_markdown("- ![](a.png)", plain_style)
        assert plains(result) == ["\u2022\t", ("url", "a.png")]

    def test_item_starting_with_extension(self, plain_style: StyleConfig) -> None:
        """Test that the marker stands alone before a leading extension."""
        result = compile_markdown("1. !Icon{name=star}", plain_style)
        assert plains(result) == ["1.\t", ("ext", "Icon")]
        assert result[1].properties == {"name": "star"}

    def test_empty_items_skipped(self, plain_style: StyleConfig) -> None:
        """Test that an item producing nothing gets no marker."""
        items = [
            ListItem(children=[Paragraph(content=[Image(url="")])]),
            ListItem(children=[Paragraph(content=[Text("b")])]),
        ]
        result = ComponentCompiler(plain_style).compile(Document(children=[List(ordered=False, items=items)]))
        assert plains(result) == ["\u2022\tb"]


@pytest.mark.unit
class TestExtensions:
    """Test extension recognition."""

    def test_inline_extension(self, plain_style: StyleConfig) -> None:
        """Test an inline extension with surrounding text."""
        result = compile_markdown("Intro !Note[Careful](warn){level=2}", plain_style)

        assert len(result) == 2
        assert result[0].plain.strip() == "Intro"
        ext = result[1]
        assert isinstance(ext, ExtensionComponent)
        assert ext.kind is ExtensionKind.INLINE
        assert ext.name == "Note"
        assert ext.argument == "warn"
        assert ext.properties == {"level": "2"}
        assert plains(list(ext.content)) == ["Careful"]

    def test_block_extension(self, plain_style: StyleConfig) -> None:
        """Test a block extension with quoted and lone properties."""
        result = compile_markdown('Name: Arg\n:::\nContent\n:::\n{k="v" bare}', plain_style)

        assert len(result) == 1
        ext = result[0]
        assert ext.kind is ExtensionKind.BLOCK
        assert ext.name == "Name"
        assert ext.argument == "Arg"
        assert ext.properties == {"k": "v", "bare": ""}
        assert plains(list(ext.content)) == ["Content"]

    def test_block_extension_with_surrounding_blocks(self, plain_style: StyleConfig) -> None:
        """Test that text around a block extension compiles in order."""
        result = compile_markdown("Intro\n\nNote: tip\n:::\nBody\n:::\n\nOutro", plain_style)
        assert plains(result) == ["Intro", ("ext", "Note"), "Outro"]
        assert result[1].argument == "tip"

    def test_block_body_with_paragraphs_and_image(self, plain_style: StyleConfig) -> None:
        """Test that a multi-paragraph body keeps images as URLs."""
        result = compile_markdown("Gallery:\n:::\nFirst\n\n![](a.png)\n\nLast\n:::", plain_style)

        [ext] = result
        assert plains(list(ext.content)) == ["First", ("url", "a.png"), "Last"]

    def test_body_is_not_scanned_for_extensions(self, plain_style: StyleConfig) -> None:
        """Test that extensions never nest."""
        [ext] = compile_markdown("Outer:\n:::\nsee !Inner[x]\n:::", plain_style)

        assert all(not isinstance(c, ExtensionComponent) for c in ext.content)
        assert plains(list(ext.content)) == ["see !Inner[x]"]

    def test_escaped_punctuation_restored(self, plain_style: StyleConfig) -> None:
        """Test that properties with escaped punctuation match after unescaping."""
        [ext] = compile_markdown('!Tag{label="a*b" x=1}', plain_style)
        assert ext.properties == {"label": "a*b", "x": "1"}

    def test_extension_in_heading(self, plain_style: StyleConfig) -> None:
        """Test extensions inside heading content."""
        [ext] = compile_markdown("# !Badge[new]", plain_style)
        assert ext.name == "Badge"
        assert plains(list(ext.content)) == ["new"]

    def test_extension_in_block_quote(self, plain_style: StyleConfig) -> None:
        """Test extensions inside block quotes."""
        result = compile_markdown("> !Cite[source]", plain_style)
        assert plains(result) == [("ext", "Cite")]

    def test_extension_in_code_block(self, plain_style: StyleConfig) -> None:
        """Test that code blocks are scanned for extensions."""
        [ext] = compile_markdown("```\n!Run(script.sh)\n```", plain_style)
        assert ext.name == "Run"
        assert ext.argument == "script.sh"

    def test_code_span_not_unescaped(self, plain_style: StyleConfig) -> None:
        """Test that backslashes in code survive extension matching."""
        [ext] = compile_markdown("!Shell[`a\\*b`]", plain_style)
        assert plains(list(ext.content)) == ["a\\*b"]


@pytest.mark.unit
class TestCharacterReferences:
    """Test that decoded text flows through compilation."""

    def test_plain_text(self, plain_style: StyleConfig) -> None:
        """Test that references in plain text compile to their characters."""
        assert plains(compile_markdown("Fish &amp; Chips &copy; 2024", plain_style)) == ["Fish & Chips \u00a9 2024"]

    def test_text_beside_extension(self, plain_style: StyleConfig) -> None:
        """Test that text before an extension is decoded."""
        result = compile_markdown('a &amp; b !X[c]{k="v"}', plain_style)

        assert len(result) == 2
        assert result[0].plain.strip() == "a & b"
        assert result[1].name == "X"
        assert result[1].properties == {"k": "v"}

    def test_extension_body(self, plain_style: StyleConfig) -> None:
        """Test that references in an extension body are decoded."""
        result = compile_markdown("!Note[Q&amp;A]", plain_style)

        assert plains(list(result[0].content)) == ["Q&A"]

    def test_code_span_literal(self, plain_style: StyleConfig) -> None:
        """Test that code spans keep references as written."""
        assert plains(compile_markdown("`&amp;` &amp;", plain_style)) == ["&amp; &"]

    def test_escaped_reference_literal(self, plain_style: StyleConfig) -> None:
        """Test that an escaped ampersand keeps the reference as text."""
        assert plains(compile_markdown(r"\&copy; &copy;", plain_style)) == ["&copy; \u00a9"]

    def test_html_container(self, plain_style: StyleConfig) -> None:
        """Test that decoded text is not escaped twice on the HTML path."""
        assert plains(compile_markdown("Fish &amp; <b>Chips</b>", plain_style)) == ["Fish & Chips"]


@pytest.mark.unit
class TestExtensionArguments:
    """Test that arguments keep the characters the author typed."""

    def test_non_ascii_argument(self) -> None:
        """Test a non-ASCII argument that is also a link destination."""
        result = compile_markdown("!Tooltip[x](Caf\u00e9)")

        assert len(result) == 1
        assert result[0].name == "Tooltip"
        assert result[0].argument == "Caf\u00e9"

    def test_angle_bracket_argument(self) -> None:
        """Test an argument written as an angle-bracket destination."""
        assert compile_markdown("!X[c](<a b>)")[0].argument == "<a b>"

    def test_percent_escape_typed_by_author(self) -> None:
        """Test that a percent escape of a safe character is kept."""
        assert compile_markdown("!X[c](a%2Fb)")[0].argument == "a%2Fb"


@pytest.mark.unit
class TestHtml:
    """Test raw HTML handling."""

    def test_html_block(self, plain_style: StyleConfig) -> None:
        """Test that a document with an HTML block is rendered through HTML."""
        assert plains(compile_markdown("<div>\n<b>Hi</b>\n</div>", plain_style)) == ["Hi"]

    def test_inline_html(self, plain_style: StyleConfig) -> None:
        """Test that a paragraph with inline HTML is rendered through HTML."""
        assert plains(compile_markdown("a <b>bold</b> c", plain_style)) == ["a bold c"]

    def test_inline_html_not_scanned(self, plain_style: StyleConfig) -> None:
        """Test that HTML paragraphs never become extensions."""
        assert plains(compile_markdown("<i>x</i> !Tag", plain_style)) == ["x !Tag"]


@pytest.mark.unit
class TestCollaborators:
    """Test injected collaborators and error propagation."""

    def test_custom_renderer(self) -> None:
        """Test that the styled-text renderer can be replaced."""
        compiler = ComponentCompiler(renderer=lambda node, style: RichText("X"))
        assert plains(compiler.compile_source("a\n\nb")) == ["X\u2029X"]

    def test_renderer_failure_propagates(self) -> None:
        """Test that renderer errors abort compilation."""

        def failing(node, style):
            raise RenderingError("cannot render", rendering_stage="styled_text")

        with pytest.raises(RenderingError):
            ComponentCompiler(renderer=failing).compile_source("text")

    def test_sub_document_parse_failure_propagates(self) -> None:
        """Test that a failing sub-document parse aborts compilation."""
        compiler = ComponentCompiler()
        real_parse = compiler.parse
        calls = []

        def parse(source):
            calls.append(source)
            if len(calls) > 1 and source == "Careful":
                raise ParsingError("boom", parsing_stage="tokenization")
            return real_parse(source)

        compiler.parse = parse
        with pytest.raises(ParsingError):
            compiler.compile_source("!Note[Careful]")

    def test_non_string_source(self) -> None:
        """Test that non-string input is a parsing error."""
        with pytest.raises(ParsingError):
            compile_markdown(None)  # type: ignore[arg-type]

    def test_max_depth(self) -> None:
        """Test the nesting depth limit."""
        with pytest.raises(ValidationError):
            compile_markdown("> > > deep", options=CompilerOptions(max_depth=3))
        assert compile_markdown("> > > deep", options=CompilerOptions(max_depth=10))

    def test_compiler_reusable(self, plain_style: StyleConfig) -> None:
        """Test that one compiler gives the same result twice."""
        compiler = ComponentCompiler(plain_style)
        assert compiler.compile_source("- a\n  - b") == compiler.compile_source("- a\n  - b")

    def test_compiler_reusable_after_failure(self) -> None:
        """Test that a failed call leaves no state behind for the next one."""
        default_renderer = ComponentCompiler().renderer
        calls = []

        def fails_once(node, style):
            calls.append(node)
            if len(calls) == 1:
                raise RenderingError("once", rendering_stage="styled_text")
            return default_renderer(node, style)

        compiler = ComponentCompiler(renderer=fails_once)
        with pytest.raises(RenderingError):
            compiler.compile_source("!Note[Careful]")

        result = compiler.compile_source("!Note[Careful]")
        assert plains(result) == [("ext", "Note")]
        assert plains(list(result[0].content)) == ["Careful"]

    def test_compile_markdown_from_threads(self) -> None:
        """Test that concurrent calls each get their own compiler."""
        sources = [f"Item {i} !Badge[n{i}]{{k={i}}}\n\n- a\n  - b" for i in range(16)]

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(compile_markdown, sources))

        assert results == [compile_markdown(source) for source in sources]


@pytest.mark.unit
class TestFolding:
    """Test the folding invariant on compiled output."""

    @pytest.mark.parametrize(
        "markdown",
        [
            "a ![x](a.png) b\n\nc",
            "1. Text\n![](url)\n1. More",
            "Intro !Note[x] outro\n\nNext",
            "- ![](a.png)\n- b",
        ],
    )
    def test_no_adjacent_styled_text(self, markdown: str, plain_style: StyleConfig) -> None:
        """Test that compiled output is already fully folded."""
        result = compile_markdown(markdown, plain_style)
        assert join_components(result) == result
