from __future__ import annotations

import json

import httpx
import pytest

from adapters.file_providers import LocalAdsTxtProvider, LocalSellersDirectoryProvider
from adapters.http_providers import HttpAdsTxtProvider, HttpSellersDirectoryProvider
from adapters.json_exporter import export_report_json
from core.config import AppSettings
from core.domain.codes import WarningCode
from core.errors import DirectoryFetchError, ProviderError
from core.interfaces import AdsTxtCacheProvider, SellersDirectoryProvider
from core.services import cross_check_records, parse_content, summarize


def _settings() -> AppSettings:
    return AppSettings(_env_file=None, max_concurrency=2, http_timeout_seconds=1)


class TestFileProviders:
    @pytest.mark.asyncio
    async def test_sellers_directory_by_domain(self, tmp_path):
        (tmp_path / "google.com.json").write_text(
            json.dumps({"sellers": [{"seller_id": "pub-1", "seller_type": "PUBLISHER", "domain": "example.com"}]}),
            encoding="utf-8",
        )
        provider = LocalSellersDirectoryProvider(tmp_path)

        found = await provider.get_by_domain("Google.com")
        missing = await provider.get_by_domain("openx.com")

        assert isinstance(provider, SellersDirectoryProvider)
        assert found.is_usable
        assert provider.parse_content(found.content)["sellers"][0]["seller_id"] == "pub-1"
        assert missing is None

    @pytest.mark.asyncio
    async def test_previous_ads_txt(self, tmp_path):
        previous = tmp_path / "ads.txt"
        previous.write_text("google.com, pub-1, DIRECT\n", encoding="utf-8")
        provider = LocalAdsTxtProvider(previous)

        entries = parse_content("google.com, pub-1, DIRECT\n")
        result = await cross_check_records("example.com", entries, ads_txt_cache=provider)

        assert isinstance(provider, AdsTxtCacheProvider)
        assert result[0].warning_code is WarningCode.DUPLICATE
        assert await LocalAdsTxtProvider(None).get_by_domain("example.com") is None


class TestHttpProviders:
    @pytest.mark.asyncio
    async def test_fetches_well_known_paths(self):
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            if request.url.path == "/sellers.json":
                return httpx.Response(200, json={"sellers": []})
            return httpx.Response(404)

        transport = httpx.MockTransport(handler)
        sellers = HttpSellersDirectoryProvider(_settings(), transport=transport)
        ads_txt = HttpAdsTxtProvider(_settings(), transport=transport)

        directory = await sellers.get_by_domain("Google.com")
        previous = await ads_txt.get_by_domain("example.com")

        assert seen == ["https://google.com/sellers.json", "https://example.com/ads.txt"]
        assert directory.is_usable
        assert sellers.parse_content(directory.content) == {"sellers": []}
        assert previous.status == "error"
        assert not previous.is_usable

    @pytest.mark.asyncio
    async def test_transport_error_becomes_warning(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        provider = HttpSellersDirectoryProvider(_settings(), transport=httpx.MockTransport(handler))

        with pytest.raises(DirectoryFetchError) as excinfo:
            await provider.get_by_domain("google.com")
        assert isinstance(excinfo.value, ProviderError)
        assert excinfo.value.domain == "google.com"

        entries = parse_content("google.com, pub-1, DIRECT\n")
        result = await cross_check_records("example.com", entries, sellers_provider=provider)
        assert result[0].warning_code is WarningCode.DIRECTORY_VALIDATION_ERROR
        assert "ConnectError" in result[0].validation_error


class TestJsonExporter:
    def test_export_report(self, tmp_path):
        report = summarize(parse_content("google.com, pub-1, DIRECT\nbad\n"))

        path = export_report_json(report=report, output_path=tmp_path / "out" / "report.json")

        payload = json.loads(path.read_text(encoding="utf-8"))
        assert payload["is_valid"] is False
        assert payload["summary"]["error_count"] == 1
        assert [entry["entry_type"] for entry in payload["entries"]] == ["record", "record"]
        assert payload["errors"][0]["code"] == "MISSING_FIELDS"
