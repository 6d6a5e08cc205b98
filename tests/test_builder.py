import pytest

from conftest import ListTransport
from shopify_storefront_gql.client import ClientBuilder, GraphClient
from shopify_storefront_gql.errors import ConfigurationError
from shopify_storefront_gql.transport import RequestsTransport

SHOP_DOMAIN = "shopDomain"
ACCESS_TOKEN = "shpat-secret-123"
ENDPOINT_URL = f"https://{SHOP_DOMAIN}/api/2025-01/graphql"


def test_build_with_custom_transport():
    transport = ListTransport([])
    client = ClientBuilder(SHOP_DOMAIN, ACCESS_TOKEN, "2025-01").transport(transport).build()
    assert isinstance(client, GraphClient)
    assert client.endpoint_url == ENDPOINT_URL
    assert client.transport is transport


def test_build_with_default_transport():
    client = ClientBuilder(SHOP_DOMAIN, ACCESS_TOKEN, "2025-01").build()
    assert client.endpoint_url == ENDPOINT_URL
    assert isinstance(client.transport, RequestsTransport)
    assert client.transport.timeout == 30
    assert client.transport.cache_dir is None


def test_build_with_cache_dir(tmp_path):
    client = ClientBuilder(SHOP_DOMAIN, ACCESS_TOKEN, "2025-01", cache_dir=tmp_path).build()
    assert client.transport.cache_dir == tmp_path


@pytest.mark.parametrize(
    "shop_domain, access_token, api_version",
    [
        ("", ACCESS_TOKEN, "2025-01"),
        ("   ", ACCESS_TOKEN, "2025-01"),
        (SHOP_DOMAIN, "", "2025-01"),
        (SHOP_DOMAIN, "\t", "2025-01"),
        (SHOP_DOMAIN, ACCESS_TOKEN, ""),
    ],
)
def test_build_fails_with_blank_fields(shop_domain, access_token, api_version):
    with pytest.raises(ConfigurationError):
        ClientBuilder(shop_domain, access_token, api_version).build()


def test_blank_setter_fails_at_build():
    builder = ClientBuilder(SHOP_DOMAIN, ACCESS_TOKEN, "2025-01").access_token(" ")
    with pytest.raises(ValueError, match="Access token must be provided"):
        builder.build()


@pytest.mark.parametrize("max_retries", [0, -1])
def test_build_rejects_non_positive_retries(max_retries):
    with pytest.raises(ConfigurationError):
        ClientBuilder(SHOP_DOMAIN, ACCESS_TOKEN, "2025-01", max_retries=max_retries).build()


def test_max_retries_defaults(monkeypatch):
    monkeypatch.delenv("SHOPIFY_STOREFRONT_MAX_RETRIES", raising=False)
    client = ClientBuilder(SHOP_DOMAIN, ACCESS_TOKEN, "2025-01", transport=ListTransport([])).build()
    assert client.config.max_retries == 3


def test_max_retries_from_env(monkeypatch):
    monkeypatch.setenv("SHOPIFY_STOREFRONT_MAX_RETRIES", "5")
    client = ClientBuilder(SHOP_DOMAIN, ACCESS_TOKEN, "2025-01", transport=ListTransport([])).build()
    assert client.config.max_retries == 5
    client = (
        ClientBuilder(SHOP_DOMAIN, ACCESS_TOKEN, "2025-01", transport=ListTransport([]))
        .max_retries(2)
        .build()
    )
    assert client.config.max_retries == 2


def test_invalid_max_retries_env(monkeypatch):
    monkeypatch.setenv("SHOPIFY_STOREFRONT_MAX_RETRIES", "many")
    with pytest.raises(ConfigurationError):
        ClientBuilder(SHOP_DOMAIN, ACCESS_TOKEN, "2025-01").build()


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("SHOPIFY_STOREFRONT_DOMAIN", "env.myshopify.com")
    monkeypatch.setenv("SHOPIFY_STOREFRONT_ACCESS_TOKEN", "env-token")
    monkeypatch.setenv("SHOPIFY_STOREFRONT_API_VERSION", "2024-10")
    monkeypatch.setenv("SHOPIFY_STOREFRONT_CACHE_DIR", str(tmp_path))
    client = ClientBuilder.from_env().build()
    assert client.endpoint_url == "https://env.myshopify.com/api/2024-10/graphql"
    assert client.config.access_token == "env-token"
    assert str(client.transport.cache_dir) == str(tmp_path)


def test_from_env_missing_token(monkeypatch):
    monkeypatch.setenv("SHOPIFY_STOREFRONT_DOMAIN", "env.myshopify.com")
    monkeypatch.delenv("SHOPIFY_STOREFRONT_ACCESS_TOKEN", raising=False)
    monkeypatch.setenv("SHOPIFY_STOREFRONT_API_VERSION", "2024-10")
    with pytest.raises(ConfigurationError):
        ClientBuilder.from_env().build()


def test_config_repr_hides_token():
    client = ClientBuilder(SHOP_DOMAIN, ACCESS_TOKEN, "2025-01", transport=ListTransport([])).build()
    assert ACCESS_TOKEN not in repr(client.config)
    assert "access_token='***'" in repr(client.config)


def test_config_is_immutable():
    client = ClientBuilder(SHOP_DOMAIN, ACCESS_TOKEN, "2025-01", transport=ListTransport([])).build()
    with pytest.raises(AttributeError):
        client.config.endpoint_url = "https://other/api/2025-01/graphql"


@pytest.mark.parametrize(
    "shop_domain",
    ["https://shopDomain", "http://shopDomain/", "shopDomain/", "  shopDomain  "],
)
def test_shop_domain_is_normalized(shop_domain):
    client = ClientBuilder(shop_domain, ACCESS_TOKEN, "2025-01", transport=ListTransport([])).build()
    assert client.endpoint_url == ENDPOINT_URL


@pytest.mark.parametrize(
    "shop_domain",
    ["shopDomain/admin", "shopDomain:443", "ftp://shopDomain", "shop domain", "https://"],
)
def test_build_rejects_invalid_shop_domain(shop_domain):
    with pytest.raises(ConfigurationError, match="host name"):
        ClientBuilder(shop_domain, ACCESS_TOKEN, "2025-01", transport=ListTransport([])).build()
