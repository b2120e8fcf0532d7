# Path: cdr_monitor/tests/test_api_client.py
"""CDRAPIClient against a local aiohttp application."""

import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer as LocalServer

from cdr_monitor.client.api_client import CDRAPIClient, CDRClientError, CDRResponseError
from cdr_monitor.core.config_loader import ConfigLoader
from cdr_monitor.tests.fixtures import make_raw_records


def _run_against(app: web.Application, scenario, retry_attempts: int = 3):
    """Serve app locally and run scenario(client) against it."""
    async def runner():
        async with LocalServer(app) as server:
            client = CDRAPIClient(
                ConfigLoader(),
                base_url=str(server.make_url('')),
                retry_attempts=retry_attempts,
                retry_delay=0,
            )
            try:
                return await scenario(client)
            finally:
                await client.close()

    return asyncio.run(runner())


def _json_handler(payload, status=200):
    async def handler(request):
        return web.json_response(payload, status=status)
    return handler


def test_list_records_reads_cdrs_key():
    app = web.Application()
    app.router.add_get('/cdrs', _json_handler({'cdrs': make_raw_records()}))

    records = _run_against(app, lambda client: client.list_records())

    assert [r['caller'] for r in records] == ['Alice', 'Carol', 'Erin', 'Grace']


def test_list_records_missing_key_is_empty():
    app = web.Application()
    app.router.add_get('/cdrs', _json_handler({'count': 0}))

    assert _run_against(app, lambda client: client.list_records()) == []


def test_list_records_rejects_non_list_payload():
    app = web.Application()
    app.router.add_get('/cdrs', _json_handler({'cdrs': 'nope'}))

    with pytest.raises(CDRResponseError):
        _run_against(app, lambda client: client.list_records())


def test_invalid_json_raises_response_error():
    async def handler(request):
        return web.Response(text='<html>oops</html>', content_type='text/html')

    app = web.Application()
    app.router.add_get('/cdrs', handler)

    with pytest.raises(CDRResponseError):
        _run_against(app, lambda client: client.list_records())


def test_verify_record_sends_index_and_cid():
    seen = []

    async def handler(request):
        seen.append((request.match_info['index'], request.query.get('cid')))
        return web.json_response({'verified': request.match_info['index'] == '0'})

    app = web.Application()
    app.router.add_get('/verify/{index}', handler)

    async def scenario(client):
        return (
            await client.verify_record(0, 'QmAlpha'),
            await client.verify_record(2, None),
        )

    first, second = _run_against(app, scenario)

    assert first is True
    assert second is False
    assert seen == [('0', 'QmAlpha'), ('2', None)]


def test_verify_record_without_flag_raises():
    app = web.Application()
    app.router.add_get('/verify/{index}', _json_handler({'status': 'ok'}))

    with pytest.raises(CDRResponseError):
        _run_against(app, lambda client: client.verify_record(1, 'QmBeta'))


def test_server_error_is_retried_until_success():
    calls = []

    async def handler(request):
        calls.append(1)
        if len(calls) < 3:
            return web.json_response({'error': 'busy'}, status=503)
        return web.json_response({'cdrs': []})

    app = web.Application()
    app.router.add_get('/cdrs', handler)

    assert _run_against(app, lambda client: client.list_records()) == []
    assert len(calls) == 3


def test_retries_exhausted_raise_client_error():
    calls = []

    async def handler(request):
        calls.append(1)
        return web.json_response({}, status=500)

    app = web.Application()
    app.router.add_get('/cdrs', handler)

    with pytest.raises(CDRClientError) as excinfo:
        _run_against(app, lambda client: client.list_records(), retry_attempts=2)

    assert excinfo.value.status == 500
    assert len(calls) == 2


def test_not_found_is_not_retried():
    calls = []

    async def handler(request):
        calls.append(1)
        return web.json_response({}, status=404)

    app = web.Application()
    app.router.add_get('/verify/{index}', handler)

    with pytest.raises(CDRClientError) as excinfo:
        _run_against(app, lambda client: client.verify_record(5))

    assert excinfo.value.status == 404
    assert len(calls) == 1


def test_health_check_reports_status():
    healthy_app = web.Application()
    healthy_app.router.add_get('/health', _json_handler({'status': 'ok'}))
    sick_app = web.Application()
    sick_app.router.add_get('/health', _json_handler({'status': 'down'}, status=503))

    assert _run_against(healthy_app, lambda client: client.health_check()) is True
    assert _run_against(sick_app, lambda client: client.health_check()) is False
