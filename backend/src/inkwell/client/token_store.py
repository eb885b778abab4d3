"""Token persistence for the CLI: a single file in the working directory."""
from pathlib import Path

DEFAULT_TOKEN_FILE = Path(".blog_token")


class TokenStore:
    def __init__(self, path: Path = DEFAULT_TOKEN_FILE) -> None:
        self.path = Path(path)

    def load(self) -> str | None:
        """The stored token, or None when the file is missing or blank."""
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return token or None

    def save(self, token: str) -> None:
        self.path.write_text(token, encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
