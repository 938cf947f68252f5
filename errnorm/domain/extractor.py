"""Derive a flat field -> message map from an arbitrary error payload.

The payload schema is unknown: it may be a plain string, a list of strings or
message objects, or a mapping nested to any depth. ``extract`` always returns
a non-empty ``ErrorMap`` and never raises.

Call context:
    ``errnorm.domain.classifier.classify`` runs it on response bodies and
    ``errnorm.usecases.error_mapping.handle`` on non-transport failures.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional, Set

from .messages import (
    CONTAINER_KEYS,
    DEFAULT_CONFIG,
    ENVELOPE_KEYS,
    GENERAL_KEY,
    MAX_DEPTH,
    MESSAGE_PATHS,
    SERIALIZE_BUDGET,
    HandlerConfig,
)
from .ports import ErrorMap
from .shape import Kind, inspect_shape, is_present, lookup, lookup_path, text_of

log = logging.getLogger(__name__)


def extract(
    value: Any,
    fallback: Optional[str] = None,
    *,
    config: Optional[HandlerConfig] = None,
) -> ErrorMap:
    """Extract field-scoped error messages from ``value``.

    Args:
        value: Raw error payload of any shape.
        fallback: Message used when nothing usable is found. Defaults to
            ``config.default_message``.
        config: Wording and limits, ``DEFAULT_CONFIG`` when omitted.

    Returns:
        Mapping of dotted field paths to messages. ``"general"`` holds
        messages without a field. Never empty.
    """
    cfg = config or DEFAULT_CONFIG
    fallback_text = text_of(fallback) or cfg.default_message
    if not is_present(value):
        return {GENERAL_KEY: fallback_text}

    errors: ErrorMap = {}
    try:
        data = unwrap_envelope(value)
        if not is_present(data):
            return {GENERAL_KEY: fallback_text}
        _Walker(errors, cfg.max_depth).walk(data, "", 0)
        if not errors:
            errors[GENERAL_KEY] = general_message(data, fallback_text, max_depth=cfg.max_depth)
    except Exception:
        # Hostile payloads may raise from their own accessors.
        log.debug("Error extraction aborted for %s", type(value).__name__, exc_info=True)
        errors = {GENERAL_KEY: fallback_text}
    return errors


def unwrap_envelope(value: Any) -> Any:
    """Strip one known envelope layer; the first truthy candidate wins."""
    body = lookup(lookup(value, "response"), "data")
    if is_present(body):
        return body
    for key in ENVELOPE_KEYS:
        candidate = lookup(value, key)
        if is_present(candidate):
            return candidate
    return value


def join_messages(items: Any) -> str:
    """Join the string/``message`` forms of ``items`` with ``", "``."""
    messages: List[str] = []
    for item in items:
        shape = inspect_shape(item)
        if shape.kind is Kind.STRING:
            text = text_of(shape.value)
        else:
            text = text_of(lookup(item, "message"))
        if text:
            messages.append(text)
    return ", ".join(messages)


def general_message(data: Any, fallback: str, *, max_depth: int = MAX_DEPTH) -> str:
    """Pick one message for a payload that yielded no field errors."""
    shape = inspect_shape(data)
    if shape.kind is Kind.STRING:
        return text_of(shape.value) or fallback
    if shape.kind is Kind.NULL:
        return fallback

    if shape.kind is Kind.MAPPING:
        for path in MESSAGE_PATHS:
            message = lookup_path(shape.value, path)
            if isinstance(message, str) and message.strip():
                return message.strip()
        first = next(iter(shape.value.values()), None)
    else:
        first = shape.value[0] if shape.value else None

    first_text = _first_value_text(first)
    if first_text:
        return first_text

    try:
        plain = _plain(data, 0, max_depth, [SERIALIZE_BUDGET])
        serialized = json.dumps(plain, separators=(",", ":"), ensure_ascii=False, default=str)
    except Exception:
        return fallback
    if serialized not in ("{}", "[]"):
        return f"Error: {serialized}"
    return fallback


def _plain(value: Any, depth: int, max_depth: int, budget: List[int]) -> Any:
    """Copy ``value`` into JSON-ready containers within depth/node limits.

    Shared sub-objects are copied once per reference and count against the
    budget each time. Cycles exceed the depth limit.
    """
    budget[0] -= 1
    if budget[0] < 0 or depth > max_depth:
        raise ValueError("payload too large to serialize")
    shape = inspect_shape(value)
    if shape.kind is Kind.MAPPING:
        return {
            str(key): _plain(item, depth + 1, max_depth, budget)
            for key, item in list(shape.value.items())
        }
    if shape.kind is Kind.SEQUENCE:
        return [_plain(item, depth + 1, max_depth, budget) for item in shape.value]
    return value


def _first_value_text(first: Any) -> Optional[str]:
    if isinstance(first, str):
        return first.strip() or None
    if isinstance(first, (list, tuple)) and first:
        head = first[0]
        if isinstance(head, str):
            return head.strip() or None
        return text_of(lookup(head, "message"))
    return None


class _Walker:
    """Depth-bounded, cycle-safe accumulation of field errors."""

    def __init__(self, errors: ErrorMap, max_depth: int) -> None:
        self.errors = errors
        self.max_depth = max_depth
        # ids of the original objects, kept alive by the payload for the walk.
        self._visited: Set[int] = set()

    def walk(self, data: Any, prefix: str, depth: int) -> None:
        if depth > self.max_depth:
            return
        shape = inspect_shape(data)
        target = prefix or GENERAL_KEY

        if shape.kind is Kind.STRING:
            text = text_of(shape.value)
            if text:
                self.errors[target] = text
        elif shape.kind is Kind.SEQUENCE:
            joined = join_messages(shape.value)
            if joined:
                self.errors[target] = joined
        elif shape.kind is Kind.MAPPING:
            # Dataclasses get a fresh field dict per inspection; key on the source.
            node_id = id(data)
            if node_id in self._visited:
                return
            self._visited.add(node_id)
            self._walk_mapping(shape.value, prefix, depth)

    def _walk_mapping(self, mapping: Any, prefix: str, depth: int) -> None:
        for key in CONTAINER_KEYS:
            container = lookup(mapping, key)
            if not is_present(container):
                continue
            before = len(self.errors)
            self.walk(container, prefix, depth + 1)
            if len(self.errors) > before:
                return

        for key, value in list(mapping.items()):
            shape = inspect_shape(value)
            if not _is_error_like(shape):
                continue
            field = f"{prefix}.{key}" if prefix else str(key)
            if shape.kind is Kind.STRING:
                self.errors[field] = text_of(shape.value) or ""
            elif shape.kind is Kind.SEQUENCE:
                joined = join_messages(shape.value)
                if joined:
                    self.errors[field] = joined
            else:
                message = text_of(lookup(value, "message")) or text_of(lookup(value, "error"))
                if message:
                    self.errors[field] = message
                else:
                    self.walk(value, field, depth + 1)


def _is_error_like(shape: Any) -> bool:
    if shape.kind is Kind.STRING:
        return text_of(shape.value) is not None
    if shape.kind is Kind.SEQUENCE:
        return len(shape.value) > 0
    return shape.kind is Kind.MAPPING


__all__ = ["extract", "general_message", "join_messages", "unwrap_envelope"]
