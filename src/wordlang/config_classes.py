"""WordLang configuration data, usually stored in wordlang.toml"""

from dataclasses import dataclass, fields

# Constants
DEFAULT_CONFIG_FILE = "wordlang.toml"
DEFAULT_ENCODING = "utf-8"

PRINT_STYLES = ("legacy", "clean")


@dataclass(frozen=True)
class Settings:
    # legacy: "[,a,b ]", clean: "[a, b]"
    print_style: str = "legacy"
    decode_escapes: bool = False
    encoding: str = DEFAULT_ENCODING

    def __post_init__(self):
        if self.print_style not in PRINT_STYLES:
            raise ValueError(
                f"print_style must be one of {PRINT_STYLES}, not {self.print_style!r}"
            )
        if not isinstance(self.decode_escapes, bool):
            raise ValueError("decode_escapes must be true or false")
        if not isinstance(self.encoding, str) or not self.encoding:
            raise ValueError("encoding must be a non-empty string")

    @classmethod
    def keys(cls):
        return [f.name for f in fields(cls)]
