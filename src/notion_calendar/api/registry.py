from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from ..errors import EndpointNotFoundError, InvalidRequestError

INVALID_REQUEST_MESSAGE = "요청 형식이 올바르지 않습니다"


def _field_label(name: str, field: Any) -> str:
    return field.alias or name


def describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return f"{INVALID_REQUEST_MESSAGE} ({'; '.join(problems)})"


@dataclass(frozen=True)
class ApiFunction:
    name: str
    func: Callable[[BaseModel], Dict[str, Any]]
    description: str
    failure_message: str
    request_model: Type[BaseModel]
    aliases: tuple[str, ...]

    @property
    def required_fields(self) -> List[str]:
        return [
            _field_label(name, field)
            for name, field in self.request_model.model_fields.items()
            if field.is_required()
        ]

    @property
    def optional_fields(self) -> List[str]:
        return [
            _field_label(name, field)
            for name, field in self.request_model.model_fields.items()
            if not field.is_required()
        ]

    def parse(self, payload: Optional[Mapping[str, Any]]) -> BaseModel:
        try:
            return self.request_model.model_validate(dict(payload or {}))
        except ValidationError as exc:
            raise InvalidRequestError(describe_validation_error(exc)) from exc

    def invoke(self, payload: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        return self.func(self.parse(payload))

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "aliases": list(self.aliases),
            "description": self.description,
            "required": self.required_fields,
            "optional": self.optional_fields,
        }


REGISTRY: Dict[str, ApiFunction] = {}
ALIASES: Dict[str, str] = {}


def register_api(
    name: str,
    *,
    description: str,
    failure_message: str,
    request_model: Type[BaseModel],
    aliases: Optional[Iterable[str]] = None,
) -> Callable[[Callable[..., Dict[str, Any]]], Callable[..., Dict[str, Any]]]:
    def decorator(func: Callable[..., Dict[str, Any]]) -> Callable[..., Dict[str, Any]]:
        alias_names = tuple(aliases or ())
        for key in (name, *alias_names):
            if key in REGISTRY or key in ALIASES:
                raise ValueError(f"API endpoint '{key}' is already registered.")
        REGISTRY[name] = ApiFunction(
            name=name,
            func=func,
            description=description,
            failure_message=failure_message,
            request_model=request_model,
            aliases=alias_names,
        )
        for alias in alias_names:
            ALIASES[alias] = name
        return func

    return decorator


def get_api_functions() -> List[ApiFunction]:
    return list(REGISTRY.values())


def resolve_api(name: str) -> ApiFunction:
    resolved = ALIASES.get(name, name)
    if resolved not in REGISTRY:
        raise EndpointNotFoundError(f"API endpoint '{name}' is not registered.")
    return REGISTRY[resolved]


def call_api(name: str, payload: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    return resolve_api(name).invoke(payload)
