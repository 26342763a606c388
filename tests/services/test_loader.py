"""Tests for struct loading from the environment."""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from pydantic import BaseModel, Field, field_validator

from envtag.domain.errors import (
    InvalidEmailError,
    InvalidIntError,
    InvalidPortError,
    InvalidTagError,
    InvalidUrlError,
    MissingValueError,
    NotInOneofError,
    SetFieldError,
    UnknownTypeError,
    UnsupportedTypeError,
)
from envtag.infrastructure.fields import env_field
from envtag.services.loader import load, must_load


@dataclass
class NameConfig:
    name: str = env_field("name=APP_NAME, type=string")


@dataclass
class PortDefaultConfig:
    port: int = env_field("name=APP_PORT, type=port, default=3000")


@dataclass
class EnvChoiceConfig:
    env: str = env_field("name=APP_ENV, type=string, oneof=dev|staging|prod")


@dataclass
class AllTypesConfig:
    str_: str = env_field("name=STR, type=string")
    num: int = env_field("name=NUM, type=int")
    ratio: float = env_field("name=FLOAT, type=float")
    flag: bool = env_field("name=BOOL, type=bool")
    port: int = env_field("name=PORT, type=port")
    url: str = env_field("name=URL, type=url")
    email: str = env_field("name=EMAIL, type=email")


@dataclass
class MixedConfig:
    name: str = env_field("name=APP_NAME, type=string")
    ignored: str = ""
    opted_out: str = env_field("-", default="keep")
    unnamed: int = env_field("type=int", default=7)


@dataclass
class OptionalConfig:
    name: str = env_field("name=APP_NAME, type=string, optional")
    workers: int = env_field("name=WORKERS, type=int, optional", default=4)


@dataclass
class EmptyConfig:
    pass


class ModelSettings(BaseModel):
    name: str = Field(json_schema_extra={"env": "name=APP_NAME"})
    port: int = Field(8080, json_schema_extra={"env": "name=APP_PORT, type=port"})
    debug: bool = Field(False, json_schema_extra={"env": "name=DEBUG, type=bool, optional"})

    @field_validator("name")
    @classmethod
    def no_spaces(cls, v: str) -> str:
        if " " in v:
            raise ValueError("name must not contain spaces")
        return v


class TestLoadEndToEnd:
    def test_missing_required_value(self) -> None:
        result = load(NameConfig, environ={})
        assert isinstance(result.error, MissingValueError)
        assert result.error.variable == "APP_NAME"
        assert result.value == NameConfig(name="")

    def test_port_default(self) -> None:
        result = load(PortDefaultConfig, environ={})
        assert result.ok
        assert result.value == PortDefaultConfig(port=3000)
        assert result.sources == {"port": "default"}

    def test_not_in_oneof(self) -> None:
        result = load(EnvChoiceConfig, environ={"APP_ENV": "test"})
        assert isinstance(result.error, NotInOneofError)
        assert result.value == EnvChoiceConfig(env="")

    def test_oneof_member(self) -> None:
        assert must_load(EnvChoiceConfig, environ={"APP_ENV": "prod"}).env == "prod"

    def test_unruled_fields_are_never_read(self) -> None:
        class Recording(dict[str, str]):
            def __init__(self, *args: object) -> None:
                super().__init__(*args)
                self.reads: list[str] = []

            def get(self, key: str, default: object = None) -> object:
                self.reads.append(key)
                return super().get(key, default)

        environ = Recording({"APP_NAME": "svc", "ignored": "x", "opted_out": "x"})
        config = must_load(MixedConfig, environ=environ)
        assert config == MixedConfig(name="svc", ignored="", opted_out="keep", unnamed=7)
        assert environ.reads == ["APP_NAME"]


class TestLoad:
    def test_all_types(self) -> None:
        environ = {
            "STR": "hello",
            "NUM": "42",
            "FLOAT": "3.14",
            "BOOL": "true",
            "PORT": "8080",
            "URL": "https://example.com",
            "EMAIL": "user@example.com",
        }
        config = must_load(AllTypesConfig, environ=environ)
        assert config == AllTypesConfig(
            str_="hello",
            num=42,
            ratio=3.14,
            flag=True,
            port=8080,
            url="https://example.com",
            email="user@example.com",
        )

    def test_env_overrides_default(self) -> None:
        assert must_load(PortDefaultConfig, environ={"APP_PORT": "9000"}).port == 9000

    def test_empty_value_uses_default(self) -> None:
        assert must_load(PortDefaultConfig, environ={"APP_PORT": ""}).port == 3000

    def test_optional_fields_keep_declared_defaults(self) -> None:
        result = load(OptionalConfig, environ={})
        assert result.value == OptionalConfig(name="", workers=4)
        assert result.sources == {"name": "optional", "workers": "optional"}

    def test_mix_of_set_and_unset_optional_fields(self) -> None:
        config = must_load(OptionalConfig, environ={"APP_NAME": "svc"})
        assert config == OptionalConfig(name="svc", workers=4)

    def test_empty_struct(self) -> None:
        assert must_load(EmptyConfig, environ={}) == EmptyConfig()

    @pytest.mark.parametrize(
        ("key", "raw", "kind"),
        [
            ("NUM", "not-a-number", InvalidIntError),
            ("PORT", "99999", InvalidPortError),
            ("URL", "not-a-url", InvalidUrlError),
            ("EMAIL", "not-an-email", InvalidEmailError),
        ],
    )
    def test_invalid_values(self, key: str, raw: str, kind: type[Exception]) -> None:
        environ = {
            "STR": "hello",
            "NUM": "1",
            "FLOAT": "1.0",
            "BOOL": "on",
            "PORT": "80",
            "URL": "http://localhost",
            "EMAIL": "a@b.c",
            key: raw,
        }
        result = load(AllTypesConfig, environ=environ)
        assert isinstance(result.error, kind)
        assert result.error.variable == key

    def test_fail_fast_reports_first_error(self) -> None:
        result = load(AllTypesConfig, environ={"NUM": "x"})
        assert isinstance(result.error, MissingValueError)
        assert result.error.variable == "STR"

    def test_zero_value_is_valid_present_value(self) -> None:
        @dataclass
        class Counts:
            count: int = env_field("name=COUNT, type=int, default=5")
            flag: bool = env_field("name=FLAG, type=bool, default=on")

        config = must_load(Counts, environ={"COUNT": "0", "FLAG": "false"})
        assert config == Counts(count=0, flag=False)

    def test_defaults_to_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_NAME", "from-os")
        assert must_load(NameConfig).name == "from-os"


class TestLoadErrors:
    def test_unsupported_target(self) -> None:
        result = load(dict)  # type: ignore[arg-type]
        assert isinstance(result.error, UnsupportedTypeError)
        assert result.value is None

    def test_invalid_tag_names_field(self) -> None:
        @dataclass
        class Bad:
            port: int = env_field("name=APP_PORT, colour=blue", default=0)

        result = load(Bad, environ={})
        assert isinstance(result.error, InvalidTagError)
        assert result.error.field == "port"
        assert result.value == Bad(port=0)

    def test_unknown_type_with_value(self) -> None:
        @dataclass
        class Unknown:
            ident: str = env_field("name=ID, type=uuid")

        result = load(Unknown, environ={"ID": "abc"})
        assert isinstance(result.error, UnknownTypeError)

    def test_set_field_type_mismatch(self) -> None:
        @dataclass
        class Mismatch:
            port: int = env_field("name=APP_URL, type=url", default=0)

        result = load(Mismatch, environ={"APP_URL": "https://example.com"})
        assert isinstance(result.error, SetFieldError)
        assert result.error.field == "port"

    def test_user_model_validation_becomes_set_field_error(self) -> None:
        result = load(ModelSettings, environ={"APP_NAME": "my app"})
        assert isinstance(result.error, SetFieldError)
        assert result.error.field == "name"

    def test_oversized_integer_keeps_its_kind(self) -> None:
        @dataclass
        class Counter:
            count: int = env_field("name=COUNT, type=int")

        result = load(Counter, environ={"COUNT": "1" * 5000})
        assert isinstance(result.error, InvalidIntError)
        assert result.error.variable == "COUNT"

    def test_target_rejecting_zero_values(self) -> None:
        @dataclass
        class Strict:
            port: int = env_field("name=STRICT_PORT, type=port")

            def __post_init__(self) -> None:
                if self.port == 0:
                    raise ValueError("port required")

        result = load(Strict, environ={})
        assert isinstance(result.error, MissingValueError)
        assert result.error.variable == "STRICT_PORT"
        assert result.value is None
        with pytest.raises(MissingValueError):
            must_load(Strict, environ={})


class TestPydanticTargets:
    def test_loads_model(self) -> None:
        settings = must_load(ModelSettings, environ={"APP_NAME": "svc", "APP_PORT": "9000"})
        assert settings == ModelSettings(name="svc", port=9000, debug=False)

    def test_unset_fields_keep_model_defaults(self) -> None:
        settings = must_load(ModelSettings, environ={"APP_NAME": "svc"})
        assert settings.port == 8080
        assert settings.debug is False

    def test_missing_required(self) -> None:
        result = load(ModelSettings, environ={})
        assert isinstance(result.error, MissingValueError)
        assert result.value.name == ""


class TestMustLoad:
    def test_returns_instance(self) -> None:
        assert must_load(NameConfig, environ={"APP_NAME": "my-app"}).name == "my-app"

    def test_raises_original_error_object(self) -> None:
        with pytest.raises(MissingValueError) as exc_info:
            must_load(NameConfig, environ={})
        assert "APP_NAME" in str(exc_info.value)

    def test_custom_tag(self) -> None:
        @dataclass
        class Tagged:
            name: str = env_field("name=APP_NAME", tag="config", default="")

        assert must_load(Tagged, environ={"APP_NAME": "x"}).name == ""
        assert must_load(Tagged, environ={"APP_NAME": "x"}, tag="config").name == "x"
