from __future__ import annotations

import os
from typing import List, Literal, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .rules import DEFAULT_COUNT_WEIGHT, DEFAULT_SIZE_WEIGHT

OutputFormat = Literal["text", "html", "svg"]


def _lookup(environ: Mapping[str, str], *names: str) -> Optional[str]:
    """First non-empty value among INPUT_<NAME> then <NAME>, for each name."""
    for name in names:
        for key in (f"INPUT_{name}", name):
            value = environ.get(key, "").strip()
            if value:
                return value
    return None


class Settings(BaseModel):
    github_token: Optional[str] = None
    username: Optional[str] = None
    readme_path: str = "README.md"
    size_weight: float = Field(default=DEFAULT_SIZE_WEIGHT, ge=0)
    count_weight: float = Field(default=DEFAULT_COUNT_WEIGHT, ge=0)
    exclude_repos: List[str] = Field(default_factory=list)
    output_format: OutputFormat = "text"

    @field_validator("exclude_repos", mode="before")
    @classmethod
    def split_repos(cls, value):
        if isinstance(value, str):
            return [name.strip() for name in value.split(",") if name.strip()]
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from the process environment.

        GitHub Actions passes inputs as INPUT_<NAME>; those win over the plain
        variable so the same names work in a local .env file.
        """
        environ = os.environ if environ is None else environ
        fields = {
            "github_token": _lookup(environ, "PAT", "GITHUB_TOKEN"),
            "username": _lookup(environ, "USERNAME"),
            "readme_path": _lookup(environ, "README_PATH", "README-PATH"),
            "size_weight": _lookup(environ, "SIZE_WEIGHT"),
            "count_weight": _lookup(environ, "COUNT_WEIGHT"),
            "exclude_repos": _lookup(environ, "EXCLUDE_REPOS"),
            "output_format": _lookup(environ, "FORMAT"),
        }
        return cls(**{k: v for k, v in fields.items() if v is not None})
