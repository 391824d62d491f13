from config import RUN_CODE_GENERATION, VIVA_GENERATION, GenerationConfig, route_from_settings
from config.settings import Settings


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    cfg = Settings(_env_file=None)
    assert cfg.GEMINI_API_KEY is None
    assert cfg.COMPLETION_MAX_RETRIES == 2
    assert cfg.HISTORY_KEY == "vivaHistory"
    assert cfg.HISTORY_LIMIT == 10
    assert cfg.DB_PATH.endswith(".db")


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    monkeypatch.setenv("COMPLETION_MODEL", "gemini-1.5-pro")
    cfg = Settings(_env_file=None)
    route = route_from_settings(cfg)
    assert route.api_key == "abc"
    assert route.url.endswith("/models/gemini-1.5-pro:generateContent")


def test_generation_payload_uses_wire_names():
    payload = GenerationConfig(temperature=0.2, top_k=5, top_p=0.5, max_output_tokens=64).to_payload()
    assert payload == {
        "temperature": 0.2,
        "topK": 5,
        "topP": 0.5,
        "maxOutputTokens": 64,
        "candidateCount": 1,
    }


def test_presets():
    assert VIVA_GENERATION.temperature == 0.7
    assert RUN_CODE_GENERATION.top_k == 1
