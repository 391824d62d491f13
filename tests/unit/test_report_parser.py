import pytest

from viva.errors import ReportFormatError
from viva.report_parser import clean_report_text, parse_report, parse_report_or_raise

VALID = (
    '{"strengths":["clear","concise"],"improvements":["depth","examples"],'
    '"overallPerformance":"Good","score":70}'
)


def test_valid_report_parses():
    result = parse_report(VALID)
    assert result.ok
    assert result.report.score == 70
    assert result.report.strengths == ["clear", "concise"]
    assert result.error is None


def test_code_fences_and_smart_quotes_are_cleaned():
    fenced = "```json\n" + VALID.replace('"Good"', "“Good”") + "\n```"
    assert clean_report_text(fenced) == VALID
    assert parse_report_or_raise(fenced).overallPerformance == "Good"


def test_single_line_fence_is_removed():
    text = "Here you go: ```json" + VALID + "```"
    assert parse_report(text).ok is False
    assert parse_report("```" + VALID + "```").ok
    assert parse_report("```JSON " + VALID + " ```").ok


def test_backticks_inside_values_are_kept():
    text = (
        '{"strengths":["uses ```code``` blocks","b"],"improvements":["c","d"],'
        '"overallPerformance":"x","score":50}'
    )
    assert parse_report_or_raise(text).strengths[0] == "uses ```code``` blocks"
    fenced = "```json\n" + text + "\n```"
    assert parse_report_or_raise(fenced).strengths[0] == "uses ```code``` blocks"


@pytest.mark.parametrize(
    "text",
    [
        "not json at all",
        "",
        "[1, 2]",
        '{"strengths":["one"],"improvements":["a","b"],"overallPerformance":"x","score":50}',
        '{"strengths":["a","b"],"improvements":["a"],"overallPerformance":"x","score":50}',
        '{"strengths":["a","b"],"improvements":["a","b"],"overallPerformance":3,"score":50}',
        '{"strengths":["a","b"],"improvements":["a","b"],"overallPerformance":"x","score":101}',
        '{"strengths":["a","b"],"improvements":["a","b"],"overallPerformance":"x","score":-1}',
        '{"strengths":["a","b"],"improvements":["a","b"],"overallPerformance":"x","score":70.5}',
        '{"strengths":["a","b"],"improvements":["a","b"],"overallPerformance":"x","score":"70"}',
        '{"strengths":["a","b"],"improvements":["a","b"],"overallPerformance":"x","score":true}',
        '{"strengths":["a",2],"improvements":["a","b"],"overallPerformance":"x","score":50}',
        '{"strengths":"ab","improvements":["a","b"],"overallPerformance":"x","score":50}',
        '{"improvements":["a","b"],"overallPerformance":"x","score":50}',
    ],
)
def test_invalid_reports_are_rejected(text):
    result = parse_report(text)
    assert not result.ok
    assert result.report is None
    assert isinstance(result.error, ReportFormatError)
    with pytest.raises(ReportFormatError):
        parse_report_or_raise(text)


def test_score_bounds_are_inclusive():
    for score in (0, 100):
        text = VALID.replace('"score":70', f'"score":{score}')
        assert parse_report_or_raise(text).score == score
