"""
Tests for embedding providers.

Network calls are served by httpx.MockTransport, so the ESM-2 provider is
exercised end to end (headers, payload, response decoding, retries and
caching) without reaching the real API.
"""

import json

import httpx
import numpy as np
import pytest

from protfunc.embeddings import (
    DEFAULT_DIMENSION,
    EmbeddingConfig,
    EmbeddingProvider,
    EmbeddingProviderError,
    EmbeddingTransientError,
    ESM2Provider,
    MockEmbeddingProvider,
    build_esm2_response,
    generate_mock_embedding,
    get_provider,
    list_providers,
    parse_esm2_response,
)

SEQUENCE = "MVLSPADKTNVKAAWGKVGAHAGEYGAEALERMFLSFPTTKTYFPHFDLSH"


def esm2_payload(embedding, layer=12):
    return {
        "results": [
            {"sequence_index": 0, "embeddings": [{"layer": layer, "embedding": embedding}]}
        ]
    }


def make_esm2(handler, tmp_path=None, **config_kwargs):
    config_kwargs.setdefault("api_key", "secret")
    config_kwargs.setdefault("retry_delay", 0.0)
    if tmp_path is None:
        config_kwargs.setdefault("use_cache", False)
    else:
        config_kwargs.setdefault("cache_dir", tmp_path)
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return ESM2Provider(EmbeddingConfig(**config_kwargs), client=client)


class TestMockEmbedding:
    """The offline generator must be deterministic and ESM-2 shaped."""

    def test_dimension(self):
        assert len(generate_mock_embedding(SEQUENCE)) == DEFAULT_DIMENSION
        assert len(generate_mock_embedding(SEQUENCE, dimension=320)) == 320

    def test_deterministic(self):
        assert generate_mock_embedding(SEQUENCE) == generate_mock_embedding(SEQUENCE)

    def test_distinct_sequences(self):
        assert generate_mock_embedding(SEQUENCE) != generate_mock_embedding("MKTAYIAKQRQISFVK")

    def test_z_normalized(self):
        arr = np.asarray(generate_mock_embedding(SEQUENCE))

        assert arr.mean() == pytest.approx(0.0, abs=1e-6)
        assert arr.std() == pytest.approx(1.0, abs=1e-6)

    def test_provider(self):
        provider = MockEmbeddingProvider()

        vector = provider.embed(SEQUENCE.lower())
        assert vector == generate_mock_embedding(SEQUENCE)
        assert provider.get_info()["cached"] is False

    def test_provider_dimension_from_config(self):
        provider = MockEmbeddingProvider(EmbeddingConfig(dimension=480))
        assert len(provider.embed(SEQUENCE)) == 480


class TestParseESM2Response:

    def test_selects_layer(self):
        payload = {
            "results": [{
                "sequence_index": 0,
                "embeddings": [
                    {"layer": 6, "embedding": [9.0, 9.0]},
                    {"layer": 12, "embedding": [0.1, -0.2]},
                ],
            }]
        }
        assert parse_esm2_response(payload, layer=12) == [0.1, -0.2]
        assert parse_esm2_response(payload, layer=6) == [9.0, 9.0]

    def test_no_results(self):
        with pytest.raises(EmbeddingProviderError, match="No results in ESM-2 response"):
            parse_esm2_response({"results": []})

    def test_missing_layer(self):
        with pytest.raises(EmbeddingProviderError, match="Layer 12 not found"):
            parse_esm2_response(esm2_payload([0.1], layer=33))

    def test_malformed(self):
        with pytest.raises(EmbeddingProviderError, match="Failed to parse ESM-2 response"):
            parse_esm2_response({"results": "nope"})

    def test_accepts_decoded_model(self):
        response = build_esm2_response([1.0, 2.0], layer=12)
        assert parse_esm2_response(response) == [1.0, 2.0]


class TestESM2Provider:
    """Tests for the network provider against a mock transport."""

    def test_request_shape(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=esm2_payload([0.5] * 4))

        with make_esm2(handler) as provider:
            vector = provider.embed(SEQUENCE)

        assert vector == [0.5] * 4
        assert seen["url"] == "https://biolm.ai/api/v3/esm2-35m/encode/"
        assert seen["auth"] == "Token secret"
        assert seen["body"] == {"items": [{"sequence": SEQUENCE}], "params": {}}

    def test_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("LM_API_KEY", "from-env")
        assert EmbeddingConfig().api_key == "from-env"

    def test_error_message_from_body(self):
        def handler(request):
            return httpx.Response(429, json={"error": "quota exceeded"})

        with make_esm2(handler, max_retries=1) as provider:
            with pytest.raises(EmbeddingProviderError, match="quota exceeded"):
                provider.embed(SEQUENCE)

    def test_error_without_body(self):
        def handler(request):
            return httpx.Response(502, text="Bad Gateway")

        with make_esm2(handler, max_retries=1) as provider:
            with pytest.raises(EmbeddingProviderError, match="HTTP 502"):
                provider.embed(SEQUENCE)

    def test_retries_then_succeeds(self):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) < 3:
                return httpx.Response(503, json={"error": "busy"})
            return httpx.Response(200, json=esm2_payload([1.0] * 4))

        with make_esm2(handler, max_retries=3) as provider:
            assert provider.embed(SEQUENCE) == [1.0] * 4
        assert len(calls) == 3

    def test_gives_up_after_max_retries(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500, json={"error": "boom"})

        with make_esm2(handler, max_retries=2) as provider:
            with pytest.raises(EmbeddingProviderError, match="after 2 attempts"):
                provider.embed(SEQUENCE)
        assert len(calls) == 2

    @pytest.mark.parametrize("status,body", [
        (401, {"error": "Invalid token"}),
        (403, {"error": "Forbidden"}),
        (400, {"error": "Invalid sequence"}),
    ])
    def test_client_errors_not_retried(self, status, body):
        """A bad token or request fails the same way every time."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(status, json=body)

        with make_esm2(handler) as provider:
            assert provider.config.max_retries == 3
            with pytest.raises(EmbeddingProviderError, match=body["error"]) as excinfo:
                provider.embed(SEQUENCE)

        assert len(calls) == 1
        assert not isinstance(excinfo.value, EmbeddingTransientError)

    @pytest.mark.parametrize("payload", [
        {"results": []},
        esm2_payload([0.1] * 4, layer=33),
        {"results": "nope"},
    ])
    def test_undecodable_response_not_retried(self, payload):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=payload)

        with make_esm2(handler) as provider:
            with pytest.raises(EmbeddingProviderError, match="Failed to parse ESM-2 response"):
                provider.embed(SEQUENCE)

        assert len(calls) == 1

    def test_server_error_then_success(self):
        responses = iter([
            httpx.Response(503, json={"error": "busy"}),
            httpx.Response(200, json=esm2_payload([0.5] * 4)),
        ])
        calls = []

        def handler(request):
            calls.append(request)
            return next(responses)

        with make_esm2(handler) as provider:
            assert provider.embed(SEQUENCE) == [0.5] * 4
        assert len(calls) == 2

    def test_rate_limit_is_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(429, json={"error": "slow down"})

        with make_esm2(handler) as provider:
            with pytest.raises(EmbeddingProviderError, match="after 3 attempts: slow down"):
                provider.embed(SEQUENCE)
        assert len(calls) == 3

    def test_transport_error_is_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ReadTimeout("read timed out", request=request)

        with make_esm2(handler) as provider:
            with pytest.raises(EmbeddingProviderError, match="read timed out"):
                provider.embed(SEQUENCE)
        assert len(calls) == 3

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with make_esm2(handler, max_retries=1) as provider:
            with pytest.raises(EmbeddingProviderError, match="connection refused"):
                provider.embed(SEQUENCE)

    def test_cache_avoids_second_request(self, tmp_path):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=esm2_payload([0.25] * 4))

        with make_esm2(handler, tmp_path=tmp_path) as provider:
            first = provider.embed(SEQUENCE)
            second = provider.embed(SEQUENCE)
            assert provider.get_info()["cached"] is True

        assert first == second == [0.25] * 4
        assert len(calls) == 1

    def test_clear_cache(self, tmp_path):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=esm2_payload([0.25] * 4))

        with make_esm2(handler, tmp_path=tmp_path) as provider:
            provider.embed(SEQUENCE)
            provider.clear_cache()
            provider.embed(SEQUENCE)

        assert len(calls) == 2


class TestRegistry:

    def test_get_provider(self):
        provider = get_provider("mock")
        assert isinstance(provider, MockEmbeddingProvider)
        assert isinstance(provider, EmbeddingProvider)

    def test_unknown_provider(self):
        with pytest.raises(KeyError, match="not found"):
            get_provider("nonexistent")

    def test_list_providers(self):
        names = {info["name"] for info in list_providers()}
        assert {"mock", "esm2"} <= names

    def test_provider_info(self):
        info = {i["name"]: i for i in list_providers()}["esm2"]

        assert info["model"] == "esm2-35m"
        assert info["layer"] == 12
        assert info["dimension"] == 1280
