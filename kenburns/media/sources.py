# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

from dataclasses import dataclass
from enum import Enum

from ..utils.helpers import display_name, is_http_url, resolve_local_path


class LocationKind(Enum):
    PATH = "path"
    HTTP = "http"


@dataclass(frozen=True)
class Location:
    """A root or discovered source, tagged once as a local path or an HTTP(S) URL."""

    value: str
    kind: LocationKind

    @classmethod
    def parse(cls, src: str) -> "Location":
        """Tag a location string. file:// URLs become plain paths; the value is never case-normalized."""
        if is_http_url(src):
            return cls(src, LocationKind.HTTP)
        local_path = resolve_local_path(src)
        return cls(local_path if local_path is not None else src, LocationKind.PATH)

    @classmethod
    def path(cls, path: str) -> "Location":
        return cls(path, LocationKind.PATH)

    @property
    def is_http(self) -> bool:
        return self.kind is LocationKind.HTTP

    @property
    def display_name(self) -> str:
        return display_name(self.value)

    def __str__(self) -> str:
        return self.value
