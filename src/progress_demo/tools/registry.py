"""Unified tool registry."""

from __future__ import annotations

import builtins
import json
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger
from pydantic import BaseModel, ValidationError

from progress_demo.core.cancellation import CancellationSignal
from progress_demo.errors import ToolInputError

type ToolHandler = Callable[[Any, CancellationSignal], Awaitable[str]]
type PrepareHandler = Callable[[Any], str]


def _shorten_text(text: str, width: int = 30, placeholder: str = "...") -> str:
    """Shorten text to width characters, cutting in the middle of words if needed.

    Unlike textwrap.shorten, this function can cut in the middle of a word,
    ensuring long strings without spaces are still truncated properly.
    """
    if len(text) <= width:
        return text

    available = width - len(placeholder)
    if available <= 0:
        return placeholder

    return text[:available] + placeholder


@dataclass(frozen=True)
class ToolDescriptor:
    """Tool metadata and runtime handle."""

    name: str
    short_description: str
    detail: str
    model: type[BaseModel]
    handler: ToolHandler
    prepare: PrepareHandler | None = None
    source: str = "builtin"

    def schema(self) -> dict[str, Any]:
        return self.model.model_json_schema(by_alias=True)


class ToolRegistry:
    """Registry for independently invocable progress tools."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolDescriptor] = {}

    def register(
        self,
        *,
        name: str,
        short_description: str,
        model: type[BaseModel],
        detail: str | None = None,
        prepare: PrepareHandler | None = None,
    ) -> Callable[[ToolHandler], ToolHandler]:
        def decorator(handler: ToolHandler) -> ToolHandler:
            self._tools[name] = ToolDescriptor(
                name=name,
                short_description=short_description,
                detail=detail or (handler.__doc__ or short_description).strip(),
                model=model,
                handler=handler,
                prepare=prepare,
            )
            return handler

        return decorator

    def has(self, name: str) -> bool:
        return name in self._tools

    def get(self, name: str) -> ToolDescriptor | None:
        return self._tools.get(name)

    def descriptors(self) -> builtins.list[ToolDescriptor]:
        return sorted(self._tools.values(), key=lambda item: item.name)

    def detail(self, name: str) -> str:
        descriptor = self._require(name)
        return (
            f"name: {descriptor.name}\n"
            f"source: {descriptor.source}\n"
            f"description: {descriptor.short_description}\n"
            f"detail: {descriptor.detail}\n"
            f"schema: {json.dumps(descriptor.schema(), ensure_ascii=False)}"
        )

    def validate(self, name: str, kwargs: dict[str, Any] | None) -> BaseModel:
        descriptor = self._require(name)
        try:
            return descriptor.model.model_validate(kwargs or {})
        except ValidationError as exc:
            raise ToolInputError(f"invalid input for {name}: {exc}") from exc

    def prepare_invocation(self, name: str, kwargs: dict[str, Any] | None = None) -> str:
        descriptor = self._require(name)
        params = self.validate(name, kwargs)
        if descriptor.prepare is None:
            return f"Running {name}..."
        return descriptor.prepare(params)

    async def execute(
        self,
        name: str,
        *,
        kwargs: dict[str, Any] | None = None,
        signal: CancellationSignal | None = None,
    ) -> str:
        descriptor = self._require(name)
        params = self.validate(name, kwargs)
        self._log_tool_call(name, params.model_dump(by_alias=True))

        start = time.monotonic()
        try:
            return await descriptor.handler(params, signal or CancellationSignal.never())
        except Exception:
            logger.exception("tool.call.error name={}", name)
            raise
        finally:
            duration = time.monotonic() - start
            logger.info("tool.call.end name={} duration={:.3f}ms", name, duration * 1000)

    def _require(self, name: str) -> ToolDescriptor:
        descriptor = self.get(name)
        if descriptor is None:
            raise KeyError(name)
        return descriptor

    def _log_tool_call(self, name: str, kwargs: dict[str, Any]) -> None:
        params: list[str] = []
        for key, value in kwargs.items():
            try:
                rendered = json.dumps(value, ensure_ascii=False)
            except TypeError:
                rendered = repr(value)
            value = _shorten_text(rendered, width=30, placeholder="...")
            if value.startswith('"') and not value.endswith('"'):
                value = value + '"'
            if value.startswith("[") and not value.endswith("]"):
                value = value + "]"
            params.append(f"{key}={value}")
        logger.info("tool.call.start name={} {{ {} }}", name, ", ".join(params))
