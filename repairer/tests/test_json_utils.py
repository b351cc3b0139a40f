import pytest

from repairer.src.exceptions import InputTooLargeError
from repairer.src.utils import TextUtils
from repairer.src.utils.json_utils import dumps_pretty, safe_loads, strict_parse


def test_safe_loads_accepts_bytes():
    data = b'{"k":"v"}'
    parsed = safe_loads(data)
    assert parsed["k"] == "v"


def test_strict_parse_valid():
    outcome = strict_parse('[{"a": 1}]')
    assert outcome.valid
    assert outcome.value == [{"a": 1}]
    assert outcome.position is None


@pytest.mark.parametrize(
    "text",
    ['{"a": 1,}', "{a: 1}", '{"a": 1} // note', '{"a": NaN}', "[Infinity]", "{'a': 1}"],
)
def test_strict_parse_rejects_lenient_syntax(text):
    outcome = strict_parse(text)
    assert not outcome.valid
    assert outcome.message
    assert isinstance(outcome.position, int)


def test_dumps_pretty_indents():
    assert dumps_pretty({"a": [1]}) == '{\n  "a": [\n    1\n  ]\n}'


def test_truncate_text():
    assert TextUtils.truncate_text("abcdef", 3) == "abc... [truncated 3 chars]"
    assert TextUtils.truncate_text("abc", 10) == "abc"
    assert TextUtils.truncate_text({"a": 1}, 0) == '{"a":1}'


def test_preview_is_single_line():
    assert "\n" not in TextUtils.preview("line1\nline2")


def test_enforce_size_limit():
    assert TextUtils.enforce_size_limit("abc", 3) == "abc"
    assert TextUtils.enforce_size_limit("abc" * 1000, 0)
    with pytest.raises(InputTooLargeError) as excinfo:
        TextUtils.enforce_size_limit("abcd", 3)
    assert excinfo.value.size == 4
    assert excinfo.value.limit == 3


def test_strict_parse_rejects_lone_surrogate():
    outcome = strict_parse('{"a": "\\ud800", "b": 1}')
    assert not outcome.valid
    assert outcome.message
