"""Tests for the Telegram message formats."""
import re
from types import SimpleNamespace

from notification.message_builder import (
    NotificationMessageBuilder,
    escape_html,
    truncate_message,
    TELEGRAM_MESSAGE_LIMIT,
)


def make_job(**overrides):
    data = dict(
        id="job-1", title="Frontend <Lead>", service_category="WEB_DEVELOPMENT",
        experience_level="SENIOR", engagement_type="CONTRACT", duration="3 months",
        required_skills=["React", "TypeScript"], description="Build & ship",
    )
    data.update(overrides)
    return SimpleNamespace(**data)


def make_talent(**overrides):
    data = dict(
        id="t-1", name="Ada", bio=None, service_category=["WEB_DEVELOPMENT", "DESIGN"],
        experience_level="SENIOR", skills=["React", "Figma"],
    )
    data.update(overrides)
    return SimpleNamespace(**data)


def test_escape_html():
    assert escape_html("a < b & c > d") == "a &lt; b &amp; c &gt; d"


def test_truncate_message_respects_limit():
    long_text = "x" * (TELEGRAM_MESSAGE_LIMIT + 50)

    truncated = truncate_message(long_text)

    assert len(truncated) == TELEGRAM_MESSAGE_LIMIT
    assert truncated.endswith("...")
    assert truncate_message("short") == "short"


def test_job_post():
    message = NotificationMessageBuilder.build_job_post(make_job())

    assert "Title: Frontend &lt;Lead&gt;" in message
    assert "Duration: 3 months" in message
    assert "• React" in message
    assert "Build &amp; ship" in message
    assert message.endswith("/apply_job-1")


def test_job_post_without_optional_fields():
    message = NotificationMessageBuilder.build_job_post(
        make_job(duration=None, required_skills=[], description=None)
    )

    assert "Duration" not in message
    assert "Required Skills" not in message
    assert "Description" not in message


def test_talent_post_joins_categories():
    message = NotificationMessageBuilder.build_talent_post(make_talent(bio="Ten years of UI"))

    assert "Category: WEB_DEVELOPMENT, DESIGN" in message
    assert "Skills: React, Figma" in message
    assert "Ten years of UI" in message
    assert message.endswith("/talent_t-1")


def test_match_notification_formats_score():
    message = NotificationMessageBuilder.build_match_notification(make_talent(), make_job(), 63.3333)

    assert "Match Score: 63.3%" in message
    assert "(Ada)" in message
    assert message.endswith("/job_job-1")


def test_truncation_never_splits_an_entity():
    message = NotificationMessageBuilder.build_job_post(make_job(description="&" * 5000))

    assert len(message) <= TELEGRAM_MESSAGE_LIMIT
    assert message.endswith("&amp;...")
    assert re.search(r"&(?!amp;|lt;|gt;)", message[:-3]) is None


def test_truncation_of_mixed_entities_at_the_limit():
    for pad in range(6):
        text = "x" * pad + "<&>" * 2000

        truncated = truncate_message(escape_html(text))

        assert len(truncated) <= TELEGRAM_MESSAGE_LIMIT
        assert re.search(r"&(?!amp;|lt;|gt;)", truncated[:-3]) is None
