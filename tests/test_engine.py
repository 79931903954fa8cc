"""End-to-end tests for subsift.core.engine with scripted upstream responses."""

from __future__ import annotations

import json

import aiohttp
import pytest

from conftest import ok
from subsift.core.config import Config, GeneralConfig, SourcesConfig
from subsift.core.engine import EnumerationEngine, EnumerationResult
from subsift.utils.helpers import JUNK_SEQUENCE

ANUBIS_URL = "https://jldc.me/anubis/subdomains/example.com"
CRTSH_URL = "https://crt.sh/?q=%25.example.com&output=json"

ANUBIS_BODY = '["a.example.com","www.example.com","b.example.com"]'
CRTSH_BODY = json.dumps([
    {"name_value": "*.example.com"},
    {"name_value": "b.example.com"},
    {"name_value": "c.example.com" + JUNK_SEQUENCE},
    {"issuer_name": "C=US, O=Let's Encrypt"},
    {"name_value": "a.example.com"},
])


@pytest.mark.asyncio
async def test_run_merges_sources_in_order(fake_http, fast_config, tmp_path):
    client = fake_http({ANUBIS_URL: [ok(ANUBIS_BODY)], CRTSH_URL: [ok(CRTSH_BODY)]})
    output = tmp_path / "out" / "subs.txt"

    result = await EnumerationEngine("example.com", str(output), config=fast_config).run()

    assert isinstance(result, EnumerationResult)
    assert client.calls == [ANUBIS_URL, CRTSH_URL]
    assert result.sources == {
        "anubis": ["a.example.com", "www.example.com", "b.example.com"],
        "crt.sh": ["example.com", "b.example.com", "c.example.com", "a.example.com"],
    }
    assert output.read_text(encoding="utf-8") == (
        "a.example.com\nwww.example.com\nb.example.com\nexample.com\nc.example.com\n"
    )
    assert result.finished_at is not None
    assert result.duration >= 0


@pytest.mark.asyncio
async def test_run_writes_empty_file_when_both_sources_fail(fake_http, fast_config, tmp_path):
    client = fake_http({
        ANUBIS_URL: [aiohttp.ClientConnectionError("down")] * 3,
        CRTSH_URL: [ok("<html>error</html>")] * 3,
    })
    output = tmp_path / "subs.txt"

    result = await EnumerationEngine("example.com", str(output), config=fast_config).run()

    assert result.subdomains == []
    assert output.exists()
    assert output.read_bytes() == b""
    assert len(client.calls) == 6


@pytest.mark.asyncio
async def test_run_keeps_anubis_wildcards_by_default(fake_http, fast_config, tmp_path):
    fake_http({
        ANUBIS_URL: [ok('["*.a.example.com"]')],
        CRTSH_URL: [ok('[{"name_value":"*.a.example.com"}]')],
    })
    output = tmp_path / "subs.txt"
    await EnumerationEngine("example.com", str(output), config=fast_config).run()
    assert output.read_text() == "*.a.example.com\na.example.com\n"


@pytest.mark.asyncio
async def test_run_normalize_all_collapses_duplicates(fake_http, tmp_path):
    cfg = Config(
        general=GeneralConfig(retry_delay=0.0),
        sources=SourcesConfig(normalize_all=True),
    )
    fake_http({
        ANUBIS_URL: [ok('["*.a.example.com"]')],
        CRTSH_URL: [ok('[{"name_value":"*.a.example.com"}]')],
    })
    output = tmp_path / "subs.txt"
    await EnumerationEngine("example.com", str(output), config=cfg).run()
    assert output.read_text() == "a.example.com\n"


@pytest.mark.asyncio
async def test_run_is_idempotent(fake_http, fast_config, tmp_path):
    output = tmp_path / "subs.txt"
    contents = []
    for _ in range(2):
        fake_http({ANUBIS_URL: [ok(ANUBIS_BODY)], CRTSH_URL: [ok(CRTSH_BODY)]})
        await EnumerationEngine("example.com", str(output), config=fast_config).run()
        contents.append(output.read_bytes())
    assert contents[0] == contents[1]


@pytest.mark.asyncio
async def test_run_fails_before_network_on_bad_directory(fake_http, fast_config, tmp_path):
    client = fake_http({ANUBIS_URL: [ok(ANUBIS_BODY)], CRTSH_URL: [ok(CRTSH_BODY)]})
    blocker = tmp_path / "blocker"
    blocker.write_text("")

    with pytest.raises(OSError):
        await EnumerationEngine(
            "example.com", str(blocker / "sub" / "subs.txt"), config=fast_config
        ).run()
    assert client.calls == []


@pytest.mark.asyncio
async def test_run_with_single_source(fake_http, tmp_path):
    cfg = Config(general=GeneralConfig(retry_delay=0.0), sources=SourcesConfig(anubis=False))
    client = fake_http({CRTSH_URL: [ok('[{"name_value":"z.example.com"}]')]})
    output = tmp_path / "subs.txt"
    result = await EnumerationEngine("example.com", str(output), config=cfg).run()
    assert client.calls == [CRTSH_URL]
    assert list(result.sources) == ["crt.sh"]
    assert output.read_text() == "z.example.com\n"


def test_engine_loads_config_file(tmp_path):
    config_file = tmp_path / "subsift.yaml"
    config_file.write_text("general:\n  retries: 4\n")
    engine = EnumerationEngine("example.com", "subs.txt", config_path=str(config_file))
    assert engine.config.general.retries == 4
