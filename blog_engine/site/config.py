"""Hugo site configuration (config.toml).

Only the keys the builder and templates use are modelled; the rest of
``[params]`` is kept as raw values.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from blog_engine.common.exceptions import ConfigurationError

DEFAULT_PAGER_SIZE = 10


class MenuEntry(BaseModel):
    """One ``[[menu.main]]`` item."""
    identifier: str = ""
    name: str
    url: str
    weight: int = 0
    parent: str | None = None
    children: list[MenuEntry] = Field(default_factory=list)


class SocialLink(BaseModel):
    icon: str = ""
    name: str = ""
    url: str


class SiteParams(BaseModel):
    """Theme parameters from ``[params]``."""
    author: str = ""
    description: str = ""
    avatar: str = ""
    social: list[SocialLink] = Field(default_factory=list)
    extra: dict[str, Any] = Field(default_factory=dict)


class SiteConfig(BaseModel):
    """Site-wide settings shared by every page."""
    base_url: str = "/"
    title: str = ""
    theme: str = ""
    pager_size: int = Field(default=DEFAULT_PAGER_SIZE, ge=1)
    menu: list[MenuEntry] = Field(default_factory=list)
    params: SiteParams = Field(default_factory=SiteParams)

    @classmethod
    def from_dict(cls, data: dict) -> SiteConfig:
        """Map Hugo's camelCase keys onto the model."""
        pagination = data.get("pagination") or {}
        pager_size = pagination.get("pagerSize", data.get("paginate", DEFAULT_PAGER_SIZE))

        raw_params = dict(data.get("params") or {})
        params = {
            "author": raw_params.pop("author", ""),
            "description": raw_params.pop("description", ""),
            "avatar": raw_params.pop("avatar", ""),
            "social": raw_params.pop("social", []),
            "extra": raw_params,
        }

        menu = (data.get("menu") or {}).get("main", [])

        return cls(
            base_url=data.get("baseURL", data.get("baseurl", "/")),
            title=data.get("title", ""),
            theme=data.get("theme", ""),
            pager_size=pager_size,
            menu=menu,
            params=params,
        )

    @classmethod
    def load(cls, path: Path | str) -> SiteConfig:
        """Read a Hugo ``config.toml``.

        Raises:
            ConfigurationError: If the file is missing, is not valid TOML, or
                holds values of the wrong type.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Site config not found: {path}")
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            return cls.from_dict(data)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"{path}: invalid TOML: {e}") from e
        except ValidationError as e:
            raise ConfigurationError(f"{path}: {e}") from e

    def main_menu(self) -> list[MenuEntry]:
        """Top-level menu entries by weight, children attached by ``parent``."""
        ordered = sorted(self.menu, key=lambda m: (m.weight, m.name))
        entries = {m.identifier: m.model_copy(update={"children": []}) for m in ordered if m.identifier}

        top = []
        for item in ordered:
            entry = entries.get(item.identifier, item) if item.identifier else item
            if item.parent and item.parent in entries:
                entries[item.parent].children.append(entry)
            else:
                top.append(entry)
        return top

    def absolute_url(self, path: str) -> str:
        """Join ``base_url`` and a site path."""
        return self.base_url.rstrip("/") + "/" + path.lstrip("/")
