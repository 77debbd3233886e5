"""Tests for the worker entry point."""
import pytest
from unittest.mock import patch, Mock

from notification import worker
from notification.queues import QUEUE_NAMES


@patch('notification.worker.set_task_context')
@patch('notification.worker.TaskContext')
@patch('notification.worker.Worker')
@patch('notification.worker.Redis')
def test_burst_worker_listens_on_all_queues(redis_class, worker_class, context_class, set_context):
    redis_conn = Mock()
    redis_class.from_url.return_value = redis_conn

    worker.start_worker(burst=True)

    worker_class.assert_called_once_with(list(QUEUE_NAMES), connection=redis_conn)
    worker_class.return_value.work.assert_called_once_with(burst=True, with_scheduler=True)
    set_context.assert_called_once_with(context_class.build.return_value)


def test_unknown_queue_rejected():
    with pytest.raises(ValueError, match="Unknown queues"):
        worker.start_worker(queues=['send-email'])


@patch('notification.worker.start_worker')
def test_cli_arguments(start_worker):
    with patch('sys.argv', ['worker', '--burst', '--queues', 'notify-talent']):
        worker.main()

    start_worker.assert_called_once_with(burst=True, queues=['notify-talent'], config_path='config.yaml')
