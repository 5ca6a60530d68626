from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

VcsKind = Literal["git", "hg", "svn", "bzr", "fossil"]


class ListenRules(BaseModel):
    addr: str = ":http"
    tls: bool = False
    cert_dir: str = "."


class ResponseRules(BaseModel):
    strategy: Literal["html", "redirect"] = "html"
    cache_control: bool = True
    cache_max_age: int = Field(default=300, ge=0)


class RedirectorRules(BaseModel):
    import_path: str = Field(alias="import")
    repo_path: str = Field(alias="repo")
    vcs: VcsKind = "git"
    godoc: str = "https://pkg.go.dev/"
    listen: ListenRules = Field(default_factory=ListenRules)
    response: ResponseRules = Field(default_factory=ResponseRules)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("import_path", "repo_path")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @field_validator("godoc")
    @classmethod
    def http_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("godoc address must be an http or https URL")
        return value
