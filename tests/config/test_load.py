import pytest

from lexkit import LocationRange, PatternDefinitionError, TokenType
from lexkit.config import ConfigLoadError, load_grammar, load_grammar_text
from tests.infrastructure import write_grammar


def test_load_grammar_file(grammar_file):
    grammar = load_grammar(grammar_file)
    assert [k.display_name() for k in grammar.table] == ["Ws", "Let", "Eq", "Ident", "Number"]
    assert grammar.skip == TokenType.of(grammar["Ws"])
    assert grammar["Let"].__doc__ == "Binding keyword"


def test_priority_follows_file_order(grammar_file):
    grammar = load_grammar(grammar_file)
    src = "let letter = 12px"
    tokens = grammar.tokenize(src)
    assert [t.token_type.display_name() for t in tokens] == [
        "Let", "Let", "Ident", "Eq", "Number", "Ident", "end-of-file"
    ]


def test_capture_group_from_file(grammar_file):
    grammar = load_grammar(grammar_file)
    tokens = grammar.tokenize("12px")
    assert tokens[0].range == LocationRange.of(0, 2)


def test_kinds_are_fresh_per_load(grammar_file):
    first = load_grammar(grammar_file)
    second = load_grammar(grammar_file)
    assert TokenType.of(first["Let"]) != TokenType.of(second["Let"])


def test_missing_file(tmp_path):
    with pytest.raises(ConfigLoadError, match="Grammar file not found"):
        load_grammar(tmp_path / "absent.yaml")


def test_not_a_mapping(tmp_path):
    path = write_grammar(tmp_path, "- just\n- a list\n")
    with pytest.raises(ConfigLoadError, match="YAML must be a mapping"):
        load_grammar(path)


def test_invalid_yaml():
    with pytest.raises(ConfigLoadError, match="invalid YAML"):
        load_grammar_text("tokens: [unclosed", source="broken.yaml")


def test_empty_document():
    grammar = load_grammar_text("")
    assert len(grammar.table) == 0
    assert grammar.skip is None


def test_unknown_key_names_field():
    with pytest.raises(ConfigLoadError) as ei:
        load_grammar_text("tokens:\n  - name: A\n    exact: a\n    priority: 3\n", source="g.yaml")
    assert str(ei.value).startswith("g.yaml.tokens[0]:")


def test_bad_regex_is_a_definition_error():
    with pytest.raises(PatternDefinitionError) as ei:
        load_grammar_text("tokens:\n  - name: Bad\n    regex: '[a-'\n")
    assert ei.value.pattern == "[a-"


def test_bad_capture_is_a_definition_error():
    with pytest.raises(PatternDefinitionError, match="Capture group 2"):
        load_grammar_text("tokens:\n  - name: Bad\n    regex: '(a)'\n    capture: 2\n")
