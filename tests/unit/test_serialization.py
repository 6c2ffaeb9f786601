"""Unit tests for component serialization."""

import json

import pytest

from mdcomponents import compile_markdown
from mdcomponents.components import ExtensionComponent, ExtensionKind, StyledText, URLReference
from mdcomponents.serialization import component_to_dict, components_to_json


@pytest.mark.unit
class TestComponentToDict:
    """Test conversion of single components."""

    def test_styled_text(self) -> None:
        """Test that styled text carries plain text and markup."""
        assert component_to_dict(StyledText.from_plain("hi", "bold")) == {
            "type": "styled_text",
            "plain": "hi",
            "markup": "[bold]hi[/bold]",
        }

    def test_unstyled_text(self) -> None:
        """Test that unstyled text has markup equal to its plain text."""
        assert component_to_dict(StyledText.from_plain("hi"))["markup"] == "hi"

    def test_url(self) -> None:
        """Test URL references."""
        assert component_to_dict(URLReference("a.png")) == {"type": "url", "url": "a.png"}

    def test_extension(self) -> None:
        """Test that extensions serialize their content recursively."""
        component = ExtensionComponent(
            kind=ExtensionKind.INLINE,
            name="Note",
            argument="warn",
            properties={"level": "2"},
            content=(StyledText.from_plain("Careful"), URLReference("a.png")),
        )
        assert component_to_dict(component) == {
            "type": "extension",
            "kind": "inline",
            "name": "Note",
            "argument": "warn",
            "properties": {"level": "2"},
            "content": [
                {"type": "styled_text", "plain": "Careful", "markup": "Careful"},
                {"type": "url", "url": "a.png"},
            ],
        }

    def test_unknown_type(self) -> None:
        """Test that non-components are rejected."""
        with pytest.raises(ValueError, match="Unknown component type"):
            component_to_dict("not a component")  # type: ignore[arg-type]


@pytest.mark.unit
class TestComponentsToJson:
    """Test JSON documents."""

    def test_schema_version(self) -> None:
        """Test the envelope of the JSON document."""
        payload = json.loads(components_to_json([URLReference("a.png")]))
        assert payload == {"schema_version": 1, "components": [{"type": "url", "url": "a.png"}]}

    def test_empty(self) -> None:
        """Test an empty component list."""
        assert json.loads(components_to_json([])) == {"schema_version": 1, "components": []}

    def test_non_ascii_kept(self) -> None:
        """Test that non-ASCII text is written as-is."""
        output = components_to_json([StyledText.from_plain("\u2022 item")])
        assert "\u2022 item" in output

    def test_indent(self) -> None:
        """Test indented output."""
        assert "\n  " in components_to_json([URLReference("a.png")], indent=2)

    def test_compiled_document(self) -> None:
        """Test serializing the output of the compiler."""
        payload = json.loads(components_to_json(compile_markdown("Hi\n\n![x](a.png)\n\n!Tag{k=v}")))
        assert [c["type"] for c in payload["components"]] == ["styled_text", "url", "extension"]
        assert payload["components"][2]["properties"] == {"k": "v"}
