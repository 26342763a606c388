"""Tests for field discovery on dataclass and pydantic targets."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest
from pydantic import BaseModel, Field

from envtag.domain.errors import SetFieldError, UnsupportedTypeError
from envtag.infrastructure.fields import (
    DataclassInspector,
    PydanticInspector,
    env_field,
    inspect_target,
    zero_for,
)


@dataclass
class DataclassConfig:
    name: str = env_field("name=APP_NAME, type=string")
    port: int = env_field("name=APP_PORT, type=port", default=8080)
    plain: str = "untouched"
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FrozenConfig:
    debug: bool = env_field("name=DEBUG, type=bool")


class ModelConfig(BaseModel):
    name: str = Field(json_schema_extra={"env": "name=APP_NAME"})
    ratio: float = Field(0.5, json_schema_extra={"env": "name=RATIO, type=float"})
    note: str | None = None


class TestEnvField:
    def test_stores_rule_in_metadata(self) -> None:
        f = env_field("name=X", default="a")
        assert f.metadata["env"] == "name=X"
        assert f.default == "a"

    def test_custom_tag_and_existing_metadata(self) -> None:
        f = env_field("name=X", tag="config", metadata={"doc": "x"})
        assert dict(f.metadata) == {"doc": "x", "config": "name=X"}


class TestZeroFor:
    @pytest.mark.parametrize(
        ("annotation", "expected"),
        [(str, ""), (int, 0), (float, 0.0), (bool, False), (list[str], None), (int | None, None)],
    )
    def test_zero_values(self, annotation: object, expected: object) -> None:
        assert zero_for(annotation) == expected


class TestInspectTarget:
    def test_dataclass(self) -> None:
        assert isinstance(inspect_target(DataclassConfig), DataclassInspector)

    def test_pydantic_model(self) -> None:
        assert isinstance(inspect_target(ModelConfig), PydanticInspector)

    def test_rejects_instances(self) -> None:
        with pytest.raises(UnsupportedTypeError):
            inspect_target(DataclassConfig(name="svc"))

    def test_rejects_plain_classes(self) -> None:
        class Plain:
            name: str = ""

        with pytest.raises(UnsupportedTypeError, match="Plain"):
            inspect_target(Plain)

    def test_rejects_non_types(self) -> None:
        with pytest.raises(UnsupportedTypeError):
            inspect_target(42)


class TestDataclassInspector:
    def test_fields_in_declaration_order(self) -> None:
        fields = inspect_target(DataclassConfig).fields()
        assert [f.name for f in fields] == ["name", "port", "plain", "tags"]
        assert [f.rule for f in fields] == [
            "name=APP_NAME, type=string",
            "name=APP_PORT, type=port",
            None,
            None,
        ]

    def test_annotations_resolved(self) -> None:
        fields = {f.name: f for f in inspect_target(DataclassConfig).fields()}
        assert fields["port"].annotation is int

    def test_other_tag(self) -> None:
        fields = inspect_target(DataclassConfig, tag="config").fields()
        assert all(f.rule is None for f in fields)

    def test_zero_instance(self) -> None:
        zero = inspect_target(DataclassConfig).zero()
        assert zero == DataclassConfig(name="", port=8080, plain="untouched", tags=[])

    def test_build_with_staged_values(self) -> None:
        inspector = inspect_target(DataclassConfig)
        fields = {f.name: f for f in inspector.fields()}
        fields["name"].set("svc")
        fields["port"].set(9000)
        assert inspector.build() == DataclassConfig(name="svc", port=9000)

    def test_build_frozen(self) -> None:
        inspector = inspect_target(FrozenConfig)
        inspector.fields()[0].set(True)
        assert inspector.build() == FrozenConfig(debug=True)

    def test_set_rejects_type_mismatch(self) -> None:
        port = {f.name: f for f in inspect_target(DataclassConfig).fields()}["port"]
        with pytest.raises(SetFieldError) as exc_info:
            port.set("https://example.com")
        assert exc_info.value.field == "port"

    def test_set_rejects_bool_for_int(self) -> None:
        port = {f.name: f for f in inspect_target(DataclassConfig).fields()}["port"]
        with pytest.raises(SetFieldError):
            port.set(True)


class TestPydanticInspector:
    def test_rules_from_json_schema_extra(self) -> None:
        fields = inspect_target(ModelConfig).fields()
        assert [(f.name, f.rule) for f in fields] == [
            ("name", "name=APP_NAME"),
            ("ratio", "name=RATIO, type=float"),
            ("note", None),
        ]

    def test_zero_instance(self) -> None:
        zero = inspect_target(ModelConfig).zero()
        assert zero.name == ""
        assert zero.ratio == 0.5
        assert zero.note is None

    def test_build_validates(self) -> None:
        inspector = inspect_target(ModelConfig)
        fields = {f.name: f for f in inspector.fields()}
        fields["name"].set("svc")
        fields["ratio"].set(0.75)
        model = inspector.build()
        assert model == ModelConfig(name="svc", ratio=0.75)

    def test_set_rejects_type_mismatch(self) -> None:
        name = inspect_target(ModelConfig).fields()[0]
        with pytest.raises(SetFieldError):
            name.set(3000)
