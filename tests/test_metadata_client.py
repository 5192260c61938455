import pytest
import requests

from charity_nft import metadata_client
from charity_nft.errors import MetadataStoreError


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


def test_build_token_metadata():
    doc = metadata_client.build_token_metadata("Wave", "Blue wave", "ipfs://QmImage", "digital-art", "0xabc")

    assert doc["name"] == "Wave"
    assert doc["image"] == "ipfs://QmImage"
    assert {"trait_type": "category", "value": "digital-art"} in doc["attributes"]

def test_upload_returns_ipfs_uri(monkeypatch):
    sent = {}

    def fake_post(url, json=None, timeout=None):
        sent["url"] = url
        sent["json"] = json
        return FakeResponse({"cid": "QmTestCid", "type": "json"})

    monkeypatch.setattr(metadata_client.requests, "post", fake_post)

    uri = metadata_client.upload_token_metadata({"name": "Wave"}, backend_url="http://pin.local")

    assert uri == "ipfs://QmTestCid"
    assert sent == {"url": "http://pin.local/upload_json", "json": {"name": "Wave"}}

def test_upload_wraps_http_errors(monkeypatch):
    monkeypatch.setattr(metadata_client.requests, "post",
                        lambda url, json=None, timeout=None: FakeResponse({"error": "boom"}, 500))

    with pytest.raises(MetadataStoreError):
        metadata_client.upload_token_metadata({"name": "Wave"})

def test_upload_wraps_connection_errors(monkeypatch):
    def refuse(url, json=None, timeout=None):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(metadata_client.requests, "post", refuse)

    with pytest.raises(MetadataStoreError):
        metadata_client.upload_token_metadata({"name": "Wave"})

def test_upload_rejects_response_without_cid(monkeypatch):
    monkeypatch.setattr(metadata_client.requests, "post",
                        lambda url, json=None, timeout=None: FakeResponse({"type": "json"}))

    with pytest.raises(MetadataStoreError):
        metadata_client.upload_token_metadata({"name": "Wave"})

def test_fetch_resolves_through_viewer(monkeypatch):
    requested = []

    def fake_get(url, timeout=None):
        requested.append(url)
        return FakeResponse({"name": "Wave"})

    monkeypatch.setattr(metadata_client.requests, "get", fake_get)

    doc = metadata_client.fetch_token_metadata("ipfs://QmTestCid", viewer_url="http://pin.local/view/")

    assert doc == {"name": "Wave"}
    assert requested == ["http://pin.local/view/QmTestCid"]

def test_fetch_requires_ipfs_uri():
    with pytest.raises(ValueError):
        metadata_client.fetch_token_metadata("https://example.com/art1.json")

def test_pinned_uri_is_minted(monkeypatch, chain, seller):
    from charity_nft.chain import Tx

    monkeypatch.setattr(metadata_client.requests, "post",
                        lambda url, json=None, timeout=None: FakeResponse({"cid": "QmArt"}))
    doc = metadata_client.build_token_metadata("Wave", "Blue wave", "ipfs://QmImage", "digital-art", seller.address)
    uri = metadata_client.upload_token_metadata(doc)

    chain.mine_block([Tx.contract_call("mint", [uri, "digital-art"], seller.address)])

    assert chain.call_read_only("get-token-uri", [1]) == "ipfs://QmArt"
