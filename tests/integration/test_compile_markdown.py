"""Integration tests for compiling whole documents into components.

Covers documents that mix headings, images, block and inline extensions and
lists, plus property-based checks of the invariants every compiled document
satisfies.
"""

import json

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from mdcomponents import (
    ComponentCompiler,
    ExtensionComponent,
    ExtensionKind,
    StyleConfig,
    StyledText,
    URLReference,
    compile_markdown,
    components_to_json,
    join_components,
)

WORDS = r"[A-Za-z]+( [A-Za-z]+){0,8}"
NAMES = r"[A-Za-z][A-Za-z0-9]{0,8}"

DOCUMENT = """# Welcome

Intro paragraph with **bold** text.

![Banner](https://example.com/banner.png)

Video: intro
:::
Watch the *intro* first.
:::
{autoplay loop="yes"}

- First !Badge[new]{color=green}
- Second

Closing line.
"""


@pytest.mark.integration
class TestMixedDocument:
    """Test a document exercising every component type."""

    def test_component_sequence(self, plain_style: StyleConfig) -> None:
        """Test the order and kinds of components."""
        result = compile_markdown(DOCUMENT, plain_style)

        assert [type(c).__name__ for c in result] == [
            "StyledText",
            "URLReference",
            "ExtensionComponent",
            "StyledText",
            "ExtensionComponent",
            "StyledText",
        ]
        assert result[0].plain == "Welcome\u2029Intro paragraph with bold text."
        assert result[1] == URLReference("https://example.com/banner.png")
        assert result[3].plain == "\u2022\tFirst"
        assert result[5].plain == "\u2022\tSecond\u2029Closing line."

    def test_block_extension(self, plain_style: StyleConfig) -> None:
        """Test the block extension in the document."""
        video = compile_markdown(DOCUMENT, plain_style)[2]

        assert video.kind is ExtensionKind.BLOCK
        assert (video.name, video.argument) == ("Video", "intro")
        assert video.properties == {"autoplay": "", "loop": "yes"}
        assert [c.plain for c in video.content] == ["Watch the intro first."]

    def test_inline_extension_in_list(self, plain_style: StyleConfig) -> None:
        """Test the inline extension inside a list item."""
        badge = compile_markdown(DOCUMENT, plain_style)[4]

        assert badge.kind is ExtensionKind.INLINE
        assert badge.name == "Badge"
        assert badge.properties == {"color": "green"}
        assert [c.plain for c in badge.content] == ["new"]

    def test_default_styles_survive_serialization(self) -> None:
        """Test that styled text keeps its styles through JSON."""
        payload = json.loads(components_to_json(compile_markdown(DOCUMENT)))

        first = payload["components"][0]
        assert first["plain"] == "Welcome\u2029Intro paragraph with bold text."
        assert "[bold" in first["markup"]
        assert payload["components"][2]["content"][0]["markup"].count("[italic]") == 1

    def test_ordered_list_with_image(self, plain_style: StyleConfig) -> None:
        """Test that an image inside an ordered item splits the list."""
        result = compile_markdown("1. Text\n![](url)\n1. More", plain_style)

        assert len(result) == 3
        assert result[0].plain == "1.\tText "
        assert result[1] == URLReference("url")
        assert result[2].plain == "2.\tMore"


@pytest.mark.integration
class TestCompiledInvariants:
    """Property-based tests of compiled output."""

    @given(st.from_regex(WORDS, fullmatch=True))
    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_plain_text_is_one_component(self, text: str) -> None:
        """Property: plain words compile to one styled text with the same text."""
        result = compile_markdown(text)

        assert len(result) == 1
        assert isinstance(result[0], StyledText)
        assert result[0].plain == text

    @given(st.from_regex(r"https://example\.com/[a-z0-9]{1,12}\.png", fullmatch=True))
    def test_image_is_one_url(self, url: str) -> None:
        """Property: a lone image compiles to its URL."""
        assert compile_markdown(f"![alt]({url})") == [URLReference(url)]

    @given(
        name=st.from_regex(NAMES, fullmatch=True),
        content=st.from_regex(WORDS, fullmatch=True),
        argument=st.from_regex(r"[a-z0-9]{1,8}", fullmatch=True),
        key=st.from_regex(r"[a-z]{1,6}", fullmatch=True),
        value=st.from_regex(r"[a-z0-9]{1,6}", fullmatch=True),
    )
    def test_inline_extension(self, name: str, content: str, argument: str, key: str, value: str) -> None:
        """Property: a lone inline extension compiles to one extension component."""
        [component] = compile_markdown(f'!{name}[{content}]({argument}){{{key}="{value}"}}')

        assert isinstance(component, ExtensionComponent)
        assert component.kind is ExtensionKind.INLINE
        assert (component.name, component.argument) == (name, argument)
        assert component.properties == {key: value}
        assert [c.plain for c in component.content] == [content]

    @given(
        name=st.from_regex(NAMES, fullmatch=True),
        argument=st.from_regex(WORDS, fullmatch=True),
        body=st.from_regex(WORDS, fullmatch=True),
    )
    def test_block_extension(self, name: str, argument: str, body: str) -> None:
        """Property: a lone block extension compiles to one extension component."""
        [component] = compile_markdown(f"{name}: {argument}\n:::\n{body}\n:::")

        assert component.kind is ExtensionKind.BLOCK
        assert (component.name, component.argument) == (name, argument)
        assert component.properties == {}
        assert [c.plain for c in component.content] == [body]

    @given(
        st.lists(
            st.one_of(
                st.from_regex(WORDS, fullmatch=True),
                st.just("![](a.png)"),
                st.just("- item"),
                st.just("> quoted"),
                st.just("!Tag[x]"),
            ),
            max_size=6,
        )
    )
    def test_output_is_folded(self, blocks: list) -> None:
        """Property: compiled output never holds adjacent styled text."""
        result = ComponentCompiler().compile_source("\n\n".join(blocks))
        assert join_components(result) == result
