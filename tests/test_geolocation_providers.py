import asyncio
import json
import time

import httpx
import pytest
from prometheus_client import REGISTRY
from pydantic import SecretStr

from app.core.configs import GeolocationConfiguration
from app.infrastructure.geolocation import (
    DisabledLocationProvider,
    IpApiComProvider,
    IpApiCoProvider,
    build_http_client,
    build_location_provider,
)

DEFAULT = 'Unknown location'


def _json(payload, status_code: int = 200):
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return _handler


def _ipapi_co(client: httpx.AsyncClient, **kwargs) -> IpApiCoProvider:
    return IpApiCoProvider(
        client,
        base_url='https://geo.test/',
        timeout=kwargs.pop('timeout', 0.5),
        default_location=DEFAULT,
        **kwargs,
    )


def _ip_api_com(client: httpx.AsyncClient) -> IpApiComProvider:
    return IpApiComProvider(
        client, base_url='http://geo.test', timeout=0.5, default_location=DEFAULT
    )


def _lookups(provider: str, outcome: str) -> float:
    value = REGISTRY.get_sample_value(
        'geolocation_lookups_total', {'provider': provider, 'outcome': outcome}
    )
    return value or 0.0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    'ip', [None, '', '   ', '127.0.0.1', '::1', '0:0:0:0:0:0:0:1', 'localhost']
)
async def test_local_or_empty_input_short_circuits(make_http_client, requests_seen, ip):
    provider = _ipapi_co(make_http_client(_json({'city': 'Lima'})))

    assert await provider.resolve(ip) == DEFAULT
    assert requests_seen == []


@pytest.mark.asyncio
async def test_ipapi_co_city_and_country(make_http_client, requests_seen):
    provider = _ipapi_co(
        make_http_client(_json({'city': 'Lima', 'country_name': 'Peru', 'error': False}))
    )

    assert await provider.resolve('203.0.113.5') == 'Lima, Peru'
    assert len(requests_seen) == 1
    assert str(requests_seen[0].url) == 'https://geo.test/203.0.113.5/json/'
    assert requests_seen[0].method == 'GET'


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ('payload', 'expected'),
    [
        ({'country_name': 'Peru'}, 'Peru'),
        ({'city': 'Lima', 'country_name': ''}, 'Lima'),
        ({'city': None, 'region': 'Arequipa', 'country_name': 'Peru'}, 'Arequipa, Peru'),
        ({'city': 'Cusco', 'region': 'Cusco Region', 'country_name': 'Peru'}, 'Cusco, Peru'),
        (
            {'city': 'Lima', 'country_name': 'Peru', 'latitude': -12.04, 'org': 'ACME'},
            'Lima, Peru',
        ),
        ({}, DEFAULT),
        ({'city': '', 'country_name': '  '}, DEFAULT),
        ({'error': True, 'reason': 'Reserved IP Address'}, DEFAULT),
        ({'city': 'Lima', 'country_name': 'Peru', 'error': True}, DEFAULT),
    ],
)
async def test_ipapi_co_field_composition(make_http_client, payload, expected):
    provider = _ipapi_co(make_http_client(_json(payload)))

    assert await provider.resolve('203.0.113.5') == expected


@pytest.mark.asyncio
async def test_ip_api_com_success(make_http_client, requests_seen):
    provider = _ip_api_com(
        make_http_client(
            _json(
                {
                    'status': 'success',
                    'country': 'Peru',
                    'regionName': 'Lima Region',
                    'city': 'Lima',
                }
            )
        )
    )

    assert await provider.resolve('203.0.113.5') == 'Lima, Peru'
    assert requests_seen[0].url.path == '/json/203.0.113.5'
    assert requests_seen[0].url.params['fields'] == 'status,message,country,regionName,city'


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ('ip', 'raw_path'),
    [
        ('8.8.8.8/../../admin', b'/8.8.8.8%2F..%2F..%2Fadmin/json/'),
        ('8.8.8.8#', b'/8.8.8.8%23/json/'),
        ('8.8.8.8?x=1', b'/8.8.8.8%3Fx%3D1/json/'),
        ('2001:db8::1', b'/2001:db8::1/json/'),
    ],
)
async def test_ipapi_co_ip_stays_within_its_path_segment(
    make_http_client, requests_seen, ip, raw_path
):
    provider = _ipapi_co(make_http_client(_json({'city': 'Lima', 'country_name': 'Peru'})))

    await provider.resolve(ip)

    assert len(requests_seen) == 1
    assert requests_seen[0].url.host == 'geo.test'
    assert requests_seen[0].url.raw_path == raw_path


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ('ip', 'raw_path'),
    [
        ('8.8.8.8/../../admin', b'/json/8.8.8.8%2F..%2F..%2Fadmin?'),
        ('8.8.8.8#', b'/json/8.8.8.8%23?'),
    ],
)
async def test_ip_api_com_ip_stays_within_its_path_segment(
    make_http_client, requests_seen, ip, raw_path
):
    provider = _ip_api_com(make_http_client(_json({'status': 'success', 'city': 'Lima'})))

    await provider.resolve(ip)

    assert requests_seen[0].url.raw_path.startswith(raw_path)
    assert requests_seen[0].url.params['fields'] == 'status,message,country,regionName,city'


@pytest.mark.asyncio
async def test_ip_api_com_region_fallback(make_http_client):
    provider = _ip_api_com(
        make_http_client(_json({'status': 'success', 'regionName': 'Lima Region', 'country': 'Peru'}))
    )

    assert await provider.resolve('203.0.113.5') == 'Lima Region, Peru'


@pytest.mark.asyncio
async def test_ip_api_com_failure_status(make_http_client):
    provider = _ip_api_com(
        make_http_client(_json({'status': 'fail', 'message': 'invalid query'}))
    )
    before = _lookups('ip_api_com', 'provider_failure')

    assert await provider.resolve('203.0.113.5') == DEFAULT
    assert _lookups('ip_api_com', 'provider_failure') == before + 1


@pytest.mark.asyncio
@pytest.mark.parametrize('status_code', [400, 403, 429, 500, 503])
async def test_non_success_status_maps_to_default(make_http_client, status_code):
    provider = _ipapi_co(
        make_http_client(_json({'city': 'Lima', 'country_name': 'Peru'}, status_code))
    )

    assert await provider.resolve('203.0.113.5') == DEFAULT


@pytest.mark.asyncio
@pytest.mark.parametrize(
    'error', [httpx.ConnectError, httpx.ReadTimeout, httpx.ConnectTimeout]
)
async def test_transport_errors_map_to_default(make_http_client, error):
    def _handler(request: httpx.Request) -> httpx.Response:
        raise error('boom', request=request)

    provider = _ipapi_co(make_http_client(_handler))
    before = _lookups('ipapi_co', 'transport_failure')

    assert await provider.resolve('203.0.113.5') == DEFAULT
    assert _lookups('ipapi_co', 'transport_failure') == before + 1


@pytest.mark.asyncio
async def test_slow_provider_is_cut_off_at_timeout(make_http_client):
    async def _slow(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return httpx.Response(200, json={'city': 'Lima', 'country_name': 'Peru'})

    provider = _ipapi_co(make_http_client(_slow), timeout=0.2)

    started = time.perf_counter()
    assert await provider.resolve('203.0.113.5') == DEFAULT
    assert time.perf_counter() - started < 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    'content', [b'not json', b'[1, 2, 3]', b'"Lima"', b'{"city": 42}']
)
async def test_malformed_body_maps_to_default(make_http_client, content):
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=content)

    provider = _ipapi_co(make_http_client(_handler))
    before = _lookups('ipapi_co', 'unexpected_failure')

    assert await provider.resolve('203.0.113.5') == DEFAULT
    assert _lookups('ipapi_co', 'unexpected_failure') == before + 1


@pytest.mark.asyncio
async def test_resolved_lookups_are_counted(make_http_client):
    provider = _ipapi_co(make_http_client(_json({'city': 'Lima', 'country_name': 'Peru'})))
    before = _lookups('ipapi_co', 'resolved')

    await provider.resolve('203.0.113.5')

    assert _lookups('ipapi_co', 'resolved') == before + 1


@pytest.mark.asyncio
async def test_api_key_is_sent_as_query_parameter(make_http_client, requests_seen):
    provider = _ipapi_co(
        make_http_client(_json({'city': 'Lima', 'country_name': 'Peru'})),
        api_key=SecretStr('s3cr3t'),
    )

    await provider.resolve('203.0.113.5')

    assert requests_seen[0].url.params['key'] == 's3cr3t'


@pytest.mark.asyncio
async def test_disabled_provider_never_calls_out():
    provider = DisabledLocationProvider(DEFAULT)

    assert await provider.resolve('203.0.113.5') == DEFAULT


@pytest.mark.asyncio
async def test_build_http_client_sets_client_identifier(geolocation_config):
    client = build_http_client(geolocation_config)
    try:
        assert client.headers['User-Agent'] == 'tests'
        assert client.timeout.read == geolocation_config.timeout
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_build_location_provider_selects_by_configuration(
    geolocation_config, make_http_client, requests_seen
):
    client = make_http_client(
        lambda request: httpx.Response(
            200, content=json.dumps({'status': 'success', 'city': 'Quito', 'country': 'Ecuador'})
        )
    )

    ipapi = build_location_provider(geolocation_config, client)
    assert isinstance(ipapi, IpApiCoProvider)

    ip_api = build_location_provider(
        geolocation_config.model_copy(update={'provider': 'ip_api_com'}), client
    )
    assert isinstance(ip_api, IpApiComProvider)
    assert await ip_api.resolve('190.152.0.1') == 'Quito, Ecuador'
    assert str(requests_seen[0].url).startswith('https://geo.test/json/190.152.0.1')

    disabled = build_location_provider(
        geolocation_config.model_copy(update={'provider': 'disabled'}), client
    )
    assert isinstance(disabled, DisabledLocationProvider)
    assert disabled.default_location == DEFAULT
