"""Record types shared by the test suite (importable as ``tests.records``)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Annotated

from pydantic import BaseModel, Field

from fieldfill import Float32, Int8, Tags, UInt, UInt8, tagged


@dataclass
class Scalars:
    flag: bool = tagged("true", default=False)
    count: int = tagged("42", default=0)
    small: Int8 = tagged("-7", default=0)
    size: UInt = tagged("1024", default=0)
    byte: UInt8 = tagged("255", default=0)
    ratio: float = tagged("0.5", default=0.0)
    narrow: Float32 = tagged("0.1", default=0.0)
    name: str = tagged("fieldfill", default="")
    untagged: int = 0


@dataclass
class Timing:
    timeout: timedelta = tagged("1m30s", default=timedelta(0))
    started: datetime | None = tagged("2024-03-01 10:30:00")
    day: datetime | None = tagged("01/03/2024 10:30 02/01/2006 15:04")


@dataclass
class Payload:
    raw: bytes | None = tagged("a\\nb")
    kept: bytes | None = tagged("ignored", default=b"")


@dataclass
class Lists:
    ints: list[int] = tagged("[1,2,3]", default_factory=list)
    empty: list[int] | None = tagged("[]")
    words: list[str] = tagged("[a|,b,c]", default_factory=list)
    broken: list[int] = tagged("[1,x,3]", default_factory=list)
    bare: list[int] = tagged("1,2,3", default_factory=list)
    waits: list[timedelta] = tagged("[1s,2m]", default_factory=list)


@dataclass
class Leaf:
    path: str = tagged("/", default="")
    retries: int = tagged("3", default=0)


@dataclass
class Tree:
    name: str = tagged("root", default="")
    leaf: Leaf = field(default_factory=Leaf)
    missing: Leaf | None = None
    leaves: list[Leaf] = field(default_factory=list)


@dataclass
class Aliased:
    mode: Annotated[str, Tags(default="debug", alt="verbose")] = ""
    level: int = field(default=0, metadata={"default": "1", "alt": "5"})


class ServiceModel(BaseModel):
    host: str = Field("", json_schema_extra={"default": "localhost"})
    port: int = Field(0, json_schema_extra={"default": "8080"})
    timeout: timedelta = Field(timedelta(0), json_schema_extra={"default": "30s"})
    tags: list[str] = Field(default_factory=list, json_schema_extra={"default": "[a,b]"})
    mode: Annotated[str, Tags(default="envs|SVC_MODE|dev,debug|prod,info")] = ""


class ClusterModel(BaseModel):
    name: str = Field("", json_schema_extra={"default": "main"})
    services: list[ServiceModel] = Field(default_factory=list)


@dataclass
class Unfillable:
    bad_int: int = tagged("twelve", default=0)
    good: str = tagged("ok", default="")


@dataclass
class ServiceConfig:
    """Zero-argument record used by CLI tests."""

    host: str = tagged("localhost", default="")
    port: int = tagged("8080", default=0)
    level: str = tagged("envs|APP_ENV|dev,debug|prod,info", default="")


@dataclass
class StrictConfig:
    port: int = tagged("eighty", default=0)


@dataclass
class Unencodable:
    raw: bytes | None = tagged("\ud800")
    name: str = tagged("ok", default="")


@dataclass(frozen=True)
class FrozenTree:
    name: str = tagged("root", default="")
    leaf: Leaf = field(default_factory=Leaf)


class FrozenModel(BaseModel):
    model_config = {"frozen": True}

    port: int = Field(0, json_schema_extra={"default": "8080"})


class PinnedModel(BaseModel):
    host: str = Field("", json_schema_extra={"default": "localhost"})
    port: int = Field(0, frozen=True, json_schema_extra={"default": "8080"})
