# pos_sdk/decode/event_index.py

from typing import Dict, Iterable, List, Any, Optional, Tuple

from ..core.errors import ConfigurationError, EventNotInAbiError
from ..core.logging import LoggingMixin
from ..types import (
    EventSchema,
    FieldSchema,
    RawEvent,
    SemanticType,
    NAMESPACE_SEPARATOR,
)
from ..utils.felts import parse_word, get_selector_from_name


def short_name(qualified_name: str) -> str:
    return qualified_name.split(NAMESPACE_SEPARATOR)[-1]


def semantic_type_for(cairo_type: str) -> SemanticType:
    if cairo_type == "core::integer::u256" or cairo_type.startswith("Uint256"):
        return SemanticType.WIDE_INTEGER
    if cairo_type.endswith("ContractAddress") or cairo_type.endswith("ClassHash"):
        return SemanticType.ADDRESS
    if cairo_type.startswith("core::integer::"):
        return SemanticType.INTEGER
    return SemanticType.RAW


def event_fields(entry: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Field list of an ABI event entry: Cairo 1 'members', 'inputs', or Cairo 0 'data'"""
    for key in ("members", "inputs", "data"):
        fields = entry.get(key)
        if fields:
            return fields
    return []


def build_event_schema(entry: Dict[str, Any]) -> EventSchema:
    qualified = entry["name"]
    fields = tuple(
        FieldSchema(
            name=field["name"],
            semantic_type=semantic_type_for(field.get("type", "")),
            cairo_type=field.get("type", ""),
            is_key=field.get("kind") == "key",
        )
        for field in event_fields(entry)
    )
    return EventSchema(qualified_name=qualified, name=short_name(qualified), fields=fields)


class EventIndex(LoggingMixin):
    """
    Lookup from raw event records to the decoding schema of the requested events.

    Built once per (ABI, requested names). An ABI event qualifies when its
    qualified name, stripped of namespace segments, is one of the requested
    names. When several ABI events share a short name, the first one in
    declaration order wins; `ambiguous_names` lists those cases.

    Records that carry a qualified name are matched through the
    qualified-to-short name map. Records from a node only carry keys, and
    are matched on their first key, the selector of the short name.
    """

    def __init__(self, abi: List[Dict[str, Any]], event_names: Iterable[str]):
        self.event_names: Tuple[str, ...] = tuple(dict.fromkeys(event_names))
        if not self.event_names:
            raise ConfigurationError("At least one event name is required")

        requested = set(self.event_names)

        self._short_names: Dict[str, str] = {}
        self._schemas: Dict[str, EventSchema] = {}
        self._by_selector: Dict[int, EventSchema] = {}
        self._declared: Dict[str, List[str]] = {}

        for entry in abi:
            if entry.get("type") != "event" or entry.get("kind") == "enum":
                continue
            qualified = entry.get("name")
            if not qualified:
                continue

            name = short_name(qualified)
            self._short_names[qualified] = name
            if name not in requested:
                continue

            self._declared.setdefault(name, []).append(qualified)
            if name in self._schemas:
                continue

            schema = build_event_schema(entry)
            self._schemas[name] = schema
            self._by_selector[get_selector_from_name(name)] = schema

        missing = requested - set(self._schemas)
        if missing:
            raise EventNotInAbiError(missing)

        for name in self.ambiguous_names:
            self.log_warning("Several ABI events share a short name, using the first declared",
                             event_name=name,
                             candidates=self._declared[name])

    @property
    def ambiguous_names(self) -> List[str]:
        return [name for name, declared in self._declared.items() if len(declared) > 1]

    @property
    def schemas(self) -> Dict[str, EventSchema]:
        return dict(self._schemas)

    def get_schema(self, event_name: str) -> Optional[EventSchema]:
        return self._schemas.get(event_name)

    def short_name_of(self, qualified_name: str) -> str:
        name = self._short_names.get(qualified_name)
        if name is None:
            name = short_name(qualified_name)
            self._short_names[qualified_name] = name
        return name

    def match(self, raw: RawEvent) -> Optional[EventSchema]:
        """Schema for a raw record, or None when it is not a requested event"""
        if raw.qualified_name:
            return self._schemas.get(self.short_name_of(raw.qualified_name))

        if not raw.keys:
            return None

        try:
            selector = parse_word(raw.keys[0])
        except ValueError:
            return None
        return self._by_selector.get(selector)

    def __contains__(self, event_name: str) -> bool:
        return event_name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)
