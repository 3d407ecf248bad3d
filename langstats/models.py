from __future__ import annotations

from typing import Dict, List, Optional, Union
from pydantic import BaseModel, Field


class LanguageTotal(BaseModel):
    name: str
    color: Optional[str] = None
    size: int = 0
    count: int = 0


class LanguageTotals(BaseModel):
    languages: Dict[str, LanguageTotal] = Field(default_factory=dict)
    total_repos: int = 0


class LanguageShare(BaseModel):
    language: str
    size: Union[int, float] = Field(examples=[123456])
    percentage: float = Field(examples=[57.2])


class GitHubUser(BaseModel):
    login: str
    name: Optional[str] = None
    public_repos: int = 0

    @property
    def display_name(self) -> str:
        return self.name or self.login


class LanguageReport(BaseModel):
    username: str
    display_name: str
    total_repos: int
    languages: List[LanguageShare] = Field(default_factory=list)


class HealthResponse(BaseModel):
    ok: bool = True
