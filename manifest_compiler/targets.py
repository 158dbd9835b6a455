"""Call targets: the method or function a compiled manifest invokes."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from . import constants
from .args import Arg


class TargetKind(str, Enum):
    METHOD = "METHOD"
    FUNCTION = "FUNCTION"


class MethodTarget(BaseModel):
    """A method on an instantiated component.

    ``admin_badge`` names the resource whose proof the method requires;
    ``template`` overrides the template name (defaults to the method name).
    """

    kind: Literal["METHOD"] = TargetKind.METHOD.value
    component: str
    method: str
    args: list[Arg] = []
    admin_badge: str | None = None
    template: str | None = None

    def name(self) -> str:
        return self.template or self.method

    def arguments(self) -> list[Arg]:
        return self.args

    def requires_authorization(self) -> bool:
        return self.admin_badge is not None


class FunctionTarget(BaseModel):
    """A blueprint function of a published package (e.g. an instantiation)."""

    kind: Literal["FUNCTION"] = TargetKind.FUNCTION.value
    package: str
    blueprint: str
    function: str
    args: list[Arg] = []
    template: str | None = None

    def name(self) -> str:
        if self.template:
            return self.template
        return f"{self.blueprint}{constants.FUNCTION_TEMPLATE_SEPARATOR}{self.function}"

    def arguments(self) -> list[Arg]:
        return self.args

    def requires_authorization(self) -> bool:
        return False


CallTarget = Annotated[Union[MethodTarget, FunctionTarget], Field(discriminator="kind")]

_TARGET_ADAPTER: TypeAdapter = TypeAdapter(CallTarget)


def parse_target(data: dict) -> MethodTarget | FunctionTarget:
    """Build a target from its JSON-like description."""
    return _TARGET_ADAPTER.validate_python(data)
