"""Tests for configuration and the entry point."""

import pytest
from datetime import timedelta
from pydantic import ValidationError

from config import Config, load_config
from shortener.common.auth import hash_token


DIGEST = hash_token("secret")


class TestConfig:
    
    def test_defaults(self, monkeypatch):
        for name in ("HOST", "PORT", "BASE_URL", "URL_TTL_SECONDS", "REAPER_INTERVAL_SECONDS", "MAX_COLLISION_RETRIES"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("TOKEN_SHA256", DIGEST)
        
        config = load_config()
        
        assert config.host == "localhost"
        assert config.port == 443
        assert config.base_url == "https://localhost"
        assert config.url_ttl == timedelta(hours=1)
        assert config.reaper_interval_seconds == 30
        assert config.max_collision_retries == 2
    
    def test_base_url_includes_non_default_port(self):
        config = Config(token_sha256=DIGEST, host="short.example", port=8443)
        
        assert config.base_url == "https://short.example:8443"
    
    def test_explicit_base_url(self):
        config = Config(token_sha256=DIGEST, base_url="https://s.example/")
        
        assert config.base_url == "https://s.example"
    
    def test_token_digest_normalized(self):
        config = Config(token_sha256=f"  {DIGEST.upper()}  ")
        
        assert config.token_sha256 == DIGEST
    
    @pytest.mark.parametrize("overrides", [
        {"token_sha256": "not-a-digest"},
        {"token_sha256": DIGEST, "port": 0},
        {"token_sha256": DIGEST, "url_ttl_seconds": 0},
        {"token_sha256": DIGEST, "reaper_interval_seconds": -1},
        {"token_sha256": DIGEST, "host": ""},
        {"token_sha256": DIGEST, "max_collision_retries": -1},
    ])
    def test_invalid(self, overrides):
        with pytest.raises(ValidationError):
            Config(**overrides)


class TestEntryPoint:
    
    def test_hash_token(self, capsys):
        from app import main
        
        main(["--hash-token", "secret"])
        
        assert capsys.readouterr().out.strip() == DIGEST
    
    def test_invalid_config_exits(self, monkeypatch):
        from app import main
        
        monkeypatch.setenv("TOKEN_SHA256", "bogus")
        
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert "Invalid configuration" in str(exc_info.value.code)
