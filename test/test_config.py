"""Test loading wordlang.toml"""

import pytest

from wordlang import config
from wordlang.config_classes import Settings


def test_defaults():
    settings = Settings()
    assert settings.print_style == "legacy"
    assert settings.decode_escapes is False
    assert settings.encoding == "utf-8"


def test_missing_default_file_is_fine(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert config.load({"--config": "wordlang.toml"}) == Settings()
    assert config.load({}) == Settings()


def test_missing_explicit_file(tmp_path):
    with pytest.raises(config.ConfigError):
        config.load({"--config": str(tmp_path / "other.toml")})


def test_load_file(tmp_path):
    path = tmp_path / "wordlang.toml"
    path.write_text(
        '[wordlang]\nprint_style = "clean"\ndecode_escapes = true\nencoding = "latin-1"\n'
    )
    settings = config.load_file(path)
    assert settings == Settings(print_style="clean", decode_escapes=True, encoding="latin-1")


def test_empty_file(tmp_path):
    path = tmp_path / "wordlang.toml"
    path.write_text("")
    assert config.load_file(path) == Settings()


@pytest.mark.parametrize(
    "text",
    [
        '[wordlang]\nprint_style = "fancy"\n',
        '[wordlang]\ndecode_escapes = "yes"\n',
        '[wordlang]\nencoding = "no-such-codec"\n',
        "[wordlang]\ncolour = true\n",
        "[wordlang\n",
    ],
)
def test_bad_config(tmp_path, text):
    path = tmp_path / "wordlang.toml"
    path.write_text(text)
    with pytest.raises(config.ConfigError):
        config.load_file(path)
