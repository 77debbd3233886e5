"""
Tests for the queue task functions.

Each test installs a TaskContext built from mocks; the unit of work yields
a MagicMock record store.
"""
import contextlib
import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock, Mock

from core.config_loader import AppConfig
from notification.rate_limiter import RateLimitDecision
from notification.tasks import (
    TaskContext,
    TaskProcessingError,
    set_task_context,
    publish_talent_task,
    publish_job_task,
    notify_talent_task,
)


def make_talent(**overrides):
    data = dict(
        id="t-1", telegram_id="555", name="Ada", bio=None, status="APPROVED",
        service_category=["WEB_DEVELOPMENT"], skills=["React"],
        experience_level="SENIOR", availability="AVAILABLE",
    )
    data.update(overrides)
    return SimpleNamespace(**data)


def make_job(**overrides):
    data = dict(
        id="j-1", title="Frontend Engineer", description=None, status="PUBLISHED",
        service_category="WEB_DEVELOPMENT", required_skills=["React"],
        experience_level="SENIOR", engagement_type="CONTRACT", duration=None,
    )
    data.update(overrides)
    return SimpleNamespace(**data)


@pytest.fixture
def store():
    store = MagicMock()
    store.get_talent.return_value = make_talent()
    store.get_job.return_value = make_job()
    return store


@pytest.fixture
def channel():
    channel = Mock()
    channel.send.return_value = "101"
    return channel


@pytest.fixture
def rate_limiter():
    limiter = Mock()
    limiter.try_acquire.return_value = RateLimitDecision(allowed=True, count=1)
    return limiter


@pytest.fixture(autouse=True)
def context(store, channel, rate_limiter):
    @contextlib.contextmanager
    def uow():
        yield store

    ctx = TaskContext(config=AppConfig(), channel=channel, rate_limiter=rate_limiter, uow=uow)
    set_task_context(ctx)
    yield ctx
    set_task_context(None)


class TestPublishTasks:

    def test_01_publish_talent_posts_to_talents_channel(self, channel):
        result = publish_talent_task({'talentId': 't-1'})

        assert result == {'success': True, 'talentId': 't-1', 'messageId': '101'}
        destination, text = channel.send.call_args.args
        assert destination == "-1003451753461"
        assert "/talent_t-1" in text

    def test_02_publish_job_posts_to_jobs_channel(self, channel):
        result = publish_job_task({'jobId': 'j-1'})

        assert result['messageId'] == '101'
        destination, text = channel.send.call_args.args
        assert destination == "-1002985721031"
        assert "/apply_j-1" in text

    def test_03_missing_record_raises_for_retry(self, store, channel):
        store.get_job.return_value = None

        with pytest.raises(TaskProcessingError, match="Job j-1 not found"):
            publish_job_task({'jobId': 'j-1'})
        channel.send.assert_not_called()

    def test_04_delivery_failure_raises(self, channel):
        channel.send.return_value = None

        with pytest.raises(TaskProcessingError):
            publish_talent_task({'talentId': 't-1'})


class TestNotifyTalentTask:

    PAYLOAD = {'talentId': 't-1', 'jobId': 'j-1', 'matchScore': 82.5}

    def test_01_sends_direct_message(self, channel, rate_limiter):
        result = notify_talent_task(dict(self.PAYLOAD))

        assert result == {'success': True, 'talentId': 't-1', 'jobId': 'j-1', 'matchScore': 82.5}
        destination, text = channel.send.call_args.args
        assert destination == "555"
        assert "Match Score: 82.5%" in text
        rate_limiter.try_acquire.assert_called_once_with('t-1')
        rate_limiter.release.assert_not_called()

    def test_02_rate_limited_is_skipped_not_failed(self, channel, rate_limiter, store):
        rate_limiter.try_acquire.return_value = RateLimitDecision(allowed=False, count=10)

        result = notify_talent_task(dict(self.PAYLOAD))

        assert result == {
            'success': False,
            'talentId': 't-1',
            'jobId': 'j-1',
            'reason': 'rate_limit_exceeded',
            'skipped': True,
        }
        channel.send.assert_not_called()
        store.get_talent.assert_not_called()

    def test_03_delivery_failure_releases_slot_and_raises(self, channel, rate_limiter):
        channel.send.return_value = None

        with pytest.raises(TaskProcessingError):
            notify_talent_task(dict(self.PAYLOAD))

        rate_limiter.release.assert_called_once_with('t-1')

    def test_04_missing_talent_raises(self, store, rate_limiter):
        store.get_talent.return_value = None

        with pytest.raises(TaskProcessingError, match="not found"):
            notify_talent_task(dict(self.PAYLOAD))
        rate_limiter.release.assert_called_once_with('t-1')

    def test_05_talent_without_telegram_id(self, store, channel):
        store.get_talent.return_value = make_talent(telegram_id=None)

        with pytest.raises(TaskProcessingError, match="no Telegram id"):
            notify_talent_task(dict(self.PAYLOAD))
        channel.send.assert_not_called()

    def test_06_release_error_does_not_mask_original(self, channel, rate_limiter):
        channel.send.side_effect = RuntimeError("socket closed")
        rate_limiter.release.side_effect = ConnectionError("redis gone")

        with pytest.raises(RuntimeError, match="socket closed"):
            notify_talent_task(dict(self.PAYLOAD))

    def test_07_limiter_unavailable_raises(self, rate_limiter, channel):
        rate_limiter.try_acquire.side_effect = ConnectionError("redis gone")

        with pytest.raises(ConnectionError):
            notify_talent_task(dict(self.PAYLOAD))
        channel.send.assert_not_called()


class TestTaskContextBuild:

    def test_01_worker_sessions_use_configured_database(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'env-default.db'}")
        config_url = f"sqlite:///{tmp_path / 'worker-config.db'}"

        ctx = TaskContext.build(AppConfig(database={'url': config_url}))

        with ctx.uow() as store:
            assert str(store.db.get_bind().url) == config_url
