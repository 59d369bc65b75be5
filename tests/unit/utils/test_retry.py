import pytest
import requests

from feedsmith.utils.retry import fetch_retryer


def flaky(failures, error):
    calls = []

    def call():
        calls.append(1)
        if len(calls) <= failures:
            raise error
        return 'ok'

    return call, calls


def test_retries_network_errors(mocker):
    warn = mocker.patch('feedsmith.utils.retry.logfire.warn')
    call, calls = flaky(2, requests.ConnectionError('reset'))

    assert fetch_retryer(3, wait_min=0, wait_max=0)(call) == 'ok'

    assert len(calls) == 3
    assert [c.kwargs['attempt'] for c in warn.call_args_list] == [1, 2]
    assert warn.call_args.kwargs['error_type'] == 'ConnectionError'


def test_reraises_last_network_error():
    call, calls = flaky(5, requests.Timeout('slow'))

    with pytest.raises(requests.Timeout, match='slow'):
        fetch_retryer(2, wait_min=0, wait_max=0)(call)

    assert len(calls) == 2


def test_other_errors_are_not_retried():
    call, calls = flaky(1, ValueError('bad payload'))

    with pytest.raises(ValueError):
        fetch_retryer(3, wait_min=0, wait_max=0)(call)

    assert len(calls) == 1
