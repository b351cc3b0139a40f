import orjson
import pytest

from repairer.src.processing.normalizer import JSONNormalizer, normalize


def test_code_fence_markers_are_removed():
    assert normalize('```json\n{"a": 1}\n```').strip() == '{"a": 1}'


def test_smart_quotes_become_ascii():
    assert normalize("{“name”: “Bob”, ‘role’: ‘dev’}") == '{"name": "Bob", "role": "dev"}'


def test_smart_quotes_inside_strings_are_kept():
    text = '{"q": "he said “hi” and ‘bye’"}'
    assert normalize(text) == text


def test_comments_are_stripped():
    text = '{\n  // the id\n  "id": 1, /* inline */ "n": 2\n}'
    assert orjson.loads(normalize(text)) == {"id": 1, "n": 2}


def test_comment_markers_inside_strings_are_kept():
    text = '{"url": "http://example.com/a", "glob": "/* all */"}'
    assert normalize(text) == text


def test_single_quoted_strings_become_double_quoted():
    result = normalize("{'a': 'say \"hi\"'}")
    assert result == '{"a": "say \\"hi\\""}'
    assert orjson.loads(result) == {"a": 'say "hi"'}


def test_escaped_apostrophe_is_unescaped():
    assert orjson.loads(normalize('{"a": "it\\\'s"}')) == {"a": "it's"}


def test_bare_keys_are_quoted():
    assert normalize('{a: 1, b: "x"}') == '{"a": 1, "b": "x"}'
    assert normalize("{\n  first_name: 1,\n  $ref: 2\n}") == '{\n  "first_name": 1,\n  "$ref": 2\n}'


def test_key_like_text_inside_strings_is_untouched():
    text = '{"text": "note: ok, a: b"}'
    assert normalize(text) == text


def test_literals_in_value_position_are_not_quoted():
    text = '{"a": true, "b": null, "c": false}'
    assert normalize(text) == text


@pytest.mark.parametrize(
    "text,expected",
    [
        ('{"a": 1, "b": 2,}', '{"a": 1, "b": 2}'),
        ("[1, 2, ]", "[1, 2 ]"),
        ('{"a": [1,],}', '{"a": [1]}'),
    ],
)
def test_trailing_commas_are_removed(text, expected):
    assert normalize(text) == expected


def test_commas_inside_strings_survive():
    text = '{"a": ",}", "b": ",]"}'
    assert normalize(text) == text


def test_missing_commas_between_elements_are_inserted():
    assert normalize('[{"a": 1} {"b": 2}]') == '[{"a": 1}, {"b": 2}]'
    assert normalize("[[1]\n[2]]") == "[[1],\n[2]]"
    assert normalize('[{"a": 1}[2]]') == '[{"a": 1},[2]]'


def test_markup_is_stripped_outside_strings():
    text = '{"a": <b>1</b>, **"b"**: 2, "c": ~~3~~}'
    assert normalize(text) == '{"a": 1, "b": 2, "c": 3}'


def test_markup_inside_strings_is_kept():
    text = '{"html": "<b>bold</b> **x** ~~y~~"}'
    assert normalize(text) == text


def test_raw_control_characters_in_strings_are_escaped():
    result = normalize('{"a": "line1\nline2\ttab"}')
    assert result == '{"a": "line1\\nline2\\ttab"}'
    assert orjson.loads(result) == {"a": "line1\nline2\ttab"}


def test_unterminated_string_is_left_open():
    assert normalize('{"a": "unfinished') == '{"a": "unfinished'


def test_valid_json_passes_unchanged():
    text = '{"list": [1, 2.5, -3e2], "nested": {"s": "\\"q\\" \\\\ \\u00e9", "e": []}, "t": true}'
    assert JSONNormalizer.normalize(text) == text


def test_smart_quoted_string_keeps_ascii_quotes_as_content():
    result = normalize('{“a”: “he said "x" ok”}')
    assert result == '{"a": "he said \\"x\\" ok"}'
    assert orjson.loads(result) == {"a": 'he said "x" ok'}
