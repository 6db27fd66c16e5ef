from mapgate.config import Settings


def test_defaults_omit_empty_values():
    assert Settings(api_key="", language="", region="").default_params() == {}


def test_default_params_order():
    s = Settings(api_key="k", language="fr", region="ca")
    assert list(s.default_params().items()) == [("key", "k"), ("language", "fr"), ("region", "ca")]


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("MAPGATE_API_KEY", "from-env")
    monkeypatch.setenv("MAPGATE_LANGUAGE", "de")
    monkeypatch.setenv("MAPGATE_TIMEOUT_S", "2.5")
    s = Settings()
    assert s.api_key == "from-env"
    assert s.language == "de"
    assert s.timeout_s == 2.5
    assert s.default_params() == {"key": "from-env", "language": "de"}


def test_base_url_default(monkeypatch):
    monkeypatch.delenv("MAPGATE_BASE_URL", raising=False)
    assert Settings().base_url == "https://maps.googleapis.com/maps/api"
