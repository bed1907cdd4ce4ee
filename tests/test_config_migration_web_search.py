import copy
import json

from metasearch.config.loader import _migrate_config, load_config, save_config
from metasearch.config.schema import Config


def test_migrate_legacy_api_keys_to_providers() -> None:
    raw = {
        "search": {
            "serperApiKey": "legacy-serper-key",
            "braveApiKey": "legacy-brave-key",
            "searxngUrl": "http://localhost:8888",
        }
    }

    migrated = _migrate_config(copy.deepcopy(raw))
    providers = migrated["search"]["providers"]
    assert providers["serper"]["apiKey"] == "legacy-serper-key"
    assert providers["brave"]["apiKey"] == "legacy-brave-key"
    assert providers["searxng"]["baseUrl"] == "http://localhost:8888"
    assert "serperApiKey" not in migrated["search"]


def test_migrate_does_not_override_new_provider_key() -> None:
    raw = {
        "search": {
            "braveApiKey": "legacy-brave-key",
            "providers": {
                "brave": {
                    "apiKey": "new-brave-key",
                }
            },
        }
    }

    migrated = _migrate_config(copy.deepcopy(raw))
    assert migrated["search"]["providers"]["brave"]["apiKey"] == "new-brave-key"


def test_migrate_fills_default_provider_base_urls() -> None:
    raw = {
        "search": {
            "providers": {
                "tavily": {
                    "apiKey": "tvly-xxx",
                    "baseUrl": "",
                }
            }
        }
    }

    migrated = _migrate_config(copy.deepcopy(raw))
    providers = migrated["search"]["providers"]
    assert providers["brave"]["baseUrl"] == "https://api.search.brave.com/res/v1/web/search"
    assert providers["tavily"]["baseUrl"] == "https://api.tavily.com/search"
    assert providers["serper"]["baseUrl"] == "https://google.serper.dev/search"
    assert providers["serpapi"]["baseUrl"] == "https://serpapi.com/search"
    assert providers["duckduckgo"]["baseUrl"] == "https://api.duckduckgo.com/"
    assert "searxng" not in providers


def test_migrate_moves_root_rate_limit() -> None:
    migrated = _migrate_config({"rateLimit": {"maxRequests": 3, "windowMs": 1000}})
    assert migrated["search"]["rateLimit"] == {"maxRequests": 3, "windowMs": 1000}
    assert "rateLimit" not in migrated


def test_load_config_accepts_camel_case(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "search": {
                    "serpApiKey": "serpapi-key",
                    "rateLimit": {"maxRequests": 2, "windowMs": 500},
                    "ranking": {"agreementWeight": 60},
                    "maxResultsCap": 50,
                }
            }
        ),
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.search.providers.serpapi.api_key == "serpapi-key"
    assert config.search.rate_limit.max_requests == 2
    assert config.search.rate_limit.window_ms == 500
    assert config.search.ranking.agreement_weight == 60
    assert config.search.ranking.position_weight == 30
    assert config.search.max_results_cap == 50


def test_load_config_falls_back_to_defaults_on_invalid_file(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    config = load_config(path)
    assert config == Config()


def test_load_config_rejects_invalid_rate_limit(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"search": {"rateLimit": {"maxRequests": 0}}}), encoding="utf-8")

    config = load_config(path)
    assert config.search.rate_limit.max_requests == 10


def test_save_config_writes_camel_case(tmp_path) -> None:
    config = Config()
    config.search.providers.brave.api_key = "brave-key"
    path = tmp_path / "nested" / "config.json"

    save_config(config, path)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["search"]["providers"]["brave"]["apiKey"] == "brave-key"
    assert data["search"]["rateLimit"]["windowMs"] == 60000
    assert load_config(path).search.providers.brave.api_key == "brave-key"
