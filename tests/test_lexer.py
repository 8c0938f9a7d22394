"""
Lexer tests

Tests token classification, priority between overlapping patterns, and
the handling of characters no rule matches.
"""

import types

import pytest

from escmark.lib.lexer import tokens_scan, LexicalError, MarkdownLexer
from escmark.models.tokens import TokenKind


def kinds(text, **kwargs):
    return [t.kind for t in tokens_scan(text, **kwargs)]


class TestInlineMarkers:
    """Test bold, italic and underline markers"""

    def test_bold(self):
        """** produces Bold around text"""
        tokens = list(tokens_scan("**bold text**"))

        assert tokens[0].kind == TokenKind.BOLD
        assert tokens[-1].kind == TokenKind.BOLD
        assert "".join(t.text for t in tokens[1:-1]) == "bold text"
        assert all(t.kind == TokenKind.TEXT for t in tokens[1:-1])

    def test_italic(self):
        """Single * produces Italic"""
        assert kinds("*a*") == [TokenKind.ITALIC, TokenKind.TEXT, TokenKind.ITALIC]

    def test_double_star_before_single(self):
        """*** is Bold followed by Italic"""
        assert kinds("***") == [TokenKind.BOLD, TokenKind.ITALIC]

    def test_underline(self):
        """__ produces Underline"""
        assert kinds("__u__") == [TokenKind.UNDERLINE, TokenKind.TEXT, TokenKind.UNDERLINE]


class TestHeaders:
    """Test header marker runs"""

    def test_top_header_includes_spaces(self):
        """'# ' is one TopHeader token"""
        tokens = list(tokens_scan("# Title"))

        assert tokens[0].kind == TokenKind.TOP_HEADER
        assert tokens[0].text == "# "
        assert tokens[1].text == "Title"

    def test_top_header_without_space(self):
        """A lone # is still a TopHeader"""
        assert kinds("#x") == [TokenKind.TOP_HEADER, TokenKind.TEXT]

    @pytest.mark.parametrize("marker", ["## ", "### ", "######   "])
    def test_lower_header_runs(self, marker):
        """Two or more # are a single LowerHeader, never a TopHeader"""
        tokens = list(tokens_scan(marker + "Title"))

        assert tokens[0].kind == TokenKind.LOWER_HEADER
        assert tokens[0].text == marker


class TestNewlines:
    """Test removable newlines and paragraph breaks"""

    def test_single_newline_is_removable(self):
        """One newline between text is RemovableNewline"""
        assert kinds("a\nb") == [TokenKind.TEXT, TokenKind.REMOVABLE_NEWLINE, TokenKind.TEXT]

    def test_newline_runs_collapse(self):
        """Three newlines are one ActiveNewline token"""
        tokens = list(tokens_scan("a\n\n\nb"))

        assert [t.kind for t in tokens] == [TokenKind.TEXT, TokenKind.ACTIVE_NEWLINE, TokenKind.TEXT]
        assert tokens[1].text == "\n\n\n"


class TestPassThroughConstructs:
    """Test constructs matched whole and copied verbatim"""

    def test_link_matched_whole(self):
        """A link's label is not tokenized as markup"""
        tokens = list(tokens_scan("see [**site**](http://example.com)"))

        assert tokens[-1].kind == TokenKind.LINK
        assert tokens[-1].text == "[**site**](http://example.com)"

    def test_link_with_nested_brackets_is_not_a_link(self):
        """Brackets inside the label break the link pattern"""
        assert TokenKind.LINK not in kinds("[a[b]](c)")

    def test_codeblock_matched_whole(self):
        """Markup inside a fenced block is not interpreted"""
        tokens = list(tokens_scan("```\n*code* __here__\n```"))

        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.CODEBLOCK

    def test_codeblock_absorbs_surrounding_newlines(self):
        """One newline either side of the fence belongs to the block"""
        tokens = list(tokens_scan("text\n```x```\nmore"))

        assert [t.kind for t in tokens] == [TokenKind.TEXT, TokenKind.CODEBLOCK, TokenKind.TEXT]
        assert tokens[1].text == "\n```x```\n"

    @pytest.mark.parametrize("marker", ["-", "*", "+"])
    def test_unordered_list_line(self, marker):
        """A list line runs through its newline"""
        tokens = list(tokens_scan(f"{marker} item one\n"))

        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.UNORDERED_LIST
        assert tokens[0].text == f"{marker} item one\n"

    def test_list_marker_mid_line_is_text(self):
        """A dash after other text does not start a list"""
        assert TokenKind.UNORDERED_LIST not in kinds("a - b\n")

    def test_list_on_second_line(self):
        """List items are recognized after a newline"""
        assert kinds("intro\n- item\n") == [
            TokenKind.TEXT,
            TokenKind.REMOVABLE_NEWLINE,
            TokenKind.UNORDERED_LIST,
        ]


class TestTags:
    """Test {#id} annotations"""

    def test_tag_with_leading_space(self):
        """The space before a tag belongs to the tag"""
        tokens = list(tokens_scan("Heading {#intro}"))

        assert tokens[-1].kind == TokenKind.TAG
        assert tokens[-1].text == " {#intro}"

    def test_tag_stops_at_line_end(self):
        """A tag never spans a newline"""
        tokens = list(tokens_scan("{#a}\nb}"))

        assert tokens[0].text == "{#a}"
        assert tokens[1].kind == TokenKind.REMOVABLE_NEWLINE


class TestCoverage:
    """Test that tokens tile the input"""

    def test_slices_reassemble_input(self):
        """Concatenated slices equal the input when everything matches"""
        source = "# Title {#t}\n\nSome **bold** and *it* (aside) [l](u)\n- item\n"
        tokens = list(tokens_scan(source))

        assert "".join(t.text for t in tokens) == source

    def test_positions_are_contiguous(self):
        """Each token starts where the previous one ended"""
        tokens = list(tokens_scan("a **b** c\nd"))

        for previous, current in zip(tokens, tokens[1:]):
            assert current.position == previous.end

    def test_empty_input(self):
        """Empty input yields no tokens"""
        assert list(tokens_scan("")) == []

    def test_scan_is_lazy(self):
        """tokens_scan returns a generator"""
        assert isinstance(tokens_scan("abc"), types.GeneratorType)


class TestUnmatchedCharacters:
    """Test characters no rule matches"""

    def test_lone_underscore_skipped(self):
        """A single _ is dropped by default"""
        tokens = list(tokens_scan("snake_case", strict=False))

        assert "".join(t.text for t in tokens) == "snakecase"

    def test_control_whitespace_skipped(self):
        """Tabs and carriage returns are dropped"""
        tokens = list(tokens_scan("a\tb\r", strict=False))

        assert "".join(t.text for t in tokens) == "ab"

    def test_strict_mode_raises(self):
        """Strict mode reports the offending position"""
        with pytest.raises(LexicalError) as excinfo:
            list(tokens_scan("snake_case", strict=True))

        assert excinfo.value.position == 5
        assert excinfo.value.character == "_"
        assert "line 1" in str(excinfo.value)

    def test_lexical_error_is_syntax_error(self):
        """LexicalError can be handled as SyntaxError"""
        assert issubclass(LexicalError, SyntaxError)


class TestPygmentsIntegration:
    """Test the lexer as a regular Pygments lexer"""

    def test_lexer_metadata(self):
        """Lexer exposes Pygments name and aliases"""
        lexer = MarkdownLexer()

        assert lexer.name == "Escmark"
        assert "escmark" in lexer.aliases
