import pytest

from vouch.capture import TurnCapture
from vouch.errors import PolicyRejectedError
from vouch.policy import (
    DEFAULT_RULES,
    FALLBACK_INDICATORS,
    Accepted,
    PolicyRule,
    Rejected,
    RejectionReason,
    extract_source_urls,
    require_accepted,
    verify,
)
from vouch.prompts import NATIVE_WEB_SEARCH_UNAVAILABLE

CITED = "Sunny, 72°F. Source: https://weather.example/nyc"


def test_cited_answer_without_tools_is_accepted() -> None:
    verdict = verify(TurnCapture(text=CITED))

    assert verdict == Accepted(CITED)
    assert verdict.accepted


def test_any_local_tool_rejects_even_good_output() -> None:
    verdict = verify(TurnCapture(text=CITED, used_tools=frozenset({"bash"})))

    assert isinstance(verdict, Rejected)
    assert verdict.reason is RejectionReason.LOCAL_TOOLS_USED
    assert verdict.tools == ("bash",)
    assert not verdict.accepted


def test_local_tools_are_listed_sorted_in_message() -> None:
    verdict = verify(TurnCapture(text="", used_tools=frozenset({"read", "bash", "grep"})))

    assert verdict.tools == ("bash", "grep", "read")
    assert verdict.message.endswith(": bash, grep, read")


def test_unavailable_sentinel_rejects() -> None:
    verdict = verify(TurnCapture(text=f"{NATIVE_WEB_SEARCH_UNAVAILABLE} https://example.com"))

    assert verdict.reason is RejectionReason.CAPABILITY_REPORTED_UNAVAILABLE


def test_sentinel_match_is_case_sensitive() -> None:
    verdict = verify(TurnCapture(text="native_web_search_unavailable? no. https://example.com"))

    assert verdict == Accepted("native_web_search_unavailable? no. https://example.com")


def test_fallback_language_rejects_with_matched_phrase() -> None:
    verdict = verify(TurnCapture(text="I don't have native web search, so I'll guess."))

    assert verdict.reason is RejectionReason.FALLBACK_LANGUAGE_DETECTED
    assert verdict.phrase == "don't have native web search"
    assert "don't have native web search" in verdict.message


@pytest.mark.parametrize("phrase", FALLBACK_INDICATORS)
def test_every_fallback_phrase_is_detected_case_insensitively(phrase: str) -> None:
    text = f"Note: {phrase.upper()}. See https://example.com/forecast"

    verdict = verify(TurnCapture(text=text))

    assert verdict.reason is RejectionReason.FALLBACK_LANGUAGE_DETECTED


def test_paraphrased_disclaimer_is_not_detected() -> None:
    text = "Web browsing is not something I can do natively. https://example.com"

    assert verify(TurnCapture(text=text)).accepted


def test_answer_without_url_is_rejected() -> None:
    verdict = verify(TurnCapture(text="It will be sunny all week."))

    assert verdict.reason is RejectionReason.NO_SOURCES_CITED


def test_bare_scheme_is_not_a_source() -> None:
    verdict = verify(TurnCapture(text="Source: https:// (see above)"))

    assert verdict.reason is RejectionReason.NO_SOURCES_CITED


def test_empty_text_is_rejected_for_missing_sources() -> None:
    assert verify(TurnCapture(text="")).reason is RejectionReason.NO_SOURCES_CITED


def test_strongest_signal_wins() -> None:
    text = f"{NATIVE_WEB_SEARCH_UNAVAILABLE}: I can't access the web"

    assert verify(TurnCapture(text=text, used_tools=frozenset({"bash"}))).reason is RejectionReason.LOCAL_TOOLS_USED
    assert verify(TurnCapture(text=text)).reason is RejectionReason.CAPABILITY_REPORTED_UNAVAILABLE


def test_verify_is_deterministic() -> None:
    result = TurnCapture(text="Using the bash tool I found https://x.example", used_tools=frozenset())

    assert verify(result) == verify(result)


def test_rules_are_ordered_as_documented() -> None:
    assert [rule.name for rule in DEFAULT_RULES] == [
        "local_tools",
        "unavailable_sentinel",
        "fallback_language",
        "source_urls",
    ]


def test_custom_rule_table() -> None:
    def no_weather(result: TurnCapture) -> Rejected | None:
        if "weather" in result.text:
            return None
        return Rejected(RejectionReason.NO_SOURCES_CITED, "not a forecast")

    rules = (*DEFAULT_RULES[:1], PolicyRule("weather", no_weather))

    assert verify(TurnCapture(text="hello"), rules).message == "not a forecast"
    assert verify(TurnCapture(text="weather"), rules) == Accepted("weather")


def test_require_accepted_returns_text() -> None:
    assert require_accepted(Accepted(CITED)) == CITED


def test_require_accepted_raises_with_verdict() -> None:
    verdict = verify(TurnCapture(text="It will be sunny all week."))

    with pytest.raises(PolicyRejectedError) as exc_info:
        require_accepted(verdict)

    assert exc_info.value.verdict is verdict
    assert "no source URLs" in str(exc_info.value)


def test_extract_source_urls_in_order_without_duplicates() -> None:
    text = (
        "Highs near 70 (https://weather.example/nyc). "
        "Rain later, see HTTP://forecast.example/a, and https://weather.example/nyc."
    )

    assert extract_source_urls(text) == ["https://weather.example/nyc", "HTTP://forecast.example/a"]
