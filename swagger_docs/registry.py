# =============================================================================
# swagger_docs/registry.py - Metadata Store
# =============================================================================
# Keyed storage for the facts recorded by the decorator layer.
#
# Class-level facts (tags, DTO properties) are keyed by the class.
# Method-level facts (route, operation, parameters, body, responses) are keyed
# by the literal (class, method name) pair the decorator was written on.
#
# One store is created per process (`metadata_store`). Controllers and DTOs
# reach it through their `metadata_store` class attribute, and the route
# binder and generator receive it explicitly.
# =============================================================================

from __future__ import annotations

from typing import Any

from swagger_docs.types import (
    FactKind,
    OperationFact,
    ParameterFact,
    PropertyFact,
    RequestBodyFact,
    ResponseFact,
    RouteFact,
)


_Key = tuple[FactKind, type, "str | None"]


class MetadataStore:
    """
    Process-scoped registry of decorator facts.

    All writes happen while modules are imported and controllers are built,
    before any request is served. Reads never raise: an undeclared fact is
    simply None (or empty for the collection helpers).

    Usage:
        store = MetadataStore()
        store.define(FactKind.TAGS, UserController, None, ["Users"])
        store.lookup(FactKind.TAGS, UserController)  # ["Users"]
    """

    def __init__(self) -> None:
        self._facts: dict[_Key, Any] = {}

    # -------------------------------------------------------------------------
    # Generic contract
    # -------------------------------------------------------------------------

    def define(self, kind: FactKind, owner: type, member: str | None, fact: Any) -> None:
        """
        Associate a fact with (kind, owner, member).

        Parameters accumulate in definition order. Responses replace the entry
        for their status code and properties replace the entry for their field
        name. Every other kind replaces the previous fact outright.
        """
        key = (kind, owner, member)

        if kind is FactKind.PARAMETER:
            self._facts.setdefault(key, []).append(fact)
        elif kind is FactKind.RESPONSE:
            self._facts.setdefault(key, {})[fact.status] = fact
        elif kind is FactKind.PROPERTY:
            self._facts.setdefault(key, {})[fact.name] = fact
        else:
            self._facts[key] = fact

    def lookup(self, kind: FactKind, owner: type, member: str | None = None) -> Any:
        """Return the fact(s) for (kind, owner, member), or None if never declared."""
        value = self._facts.get((kind, owner, member))
        if isinstance(value, list):
            return list(value)
        if isinstance(value, dict):
            return dict(value)
        return value

    def clear(self) -> None:
        """Forget every fact."""
        self._facts.clear()

    def __len__(self) -> int:
        return len(self._facts)

    # -------------------------------------------------------------------------
    # Method-level facts
    # -------------------------------------------------------------------------

    def define_route(self, route: RouteFact) -> None:
        self.define(FactKind.ROUTE, route.owner, route.method_name, route)

    def get_route(self, owner: type, method_name: str) -> RouteFact | None:
        return self.lookup(FactKind.ROUTE, owner, method_name)

    def define_operation(self, owner: type, method_name: str, operation: OperationFact) -> None:
        self.define(FactKind.OPERATION, owner, method_name, operation)

    def get_operation(self, owner: type, method_name: str) -> OperationFact | None:
        return self.lookup(FactKind.OPERATION, owner, method_name)

    def add_parameter(self, owner: type, method_name: str, parameter: ParameterFact) -> None:
        self.define(FactKind.PARAMETER, owner, method_name, parameter)

    def get_parameters(self, owner: type, method_name: str) -> list[ParameterFact]:
        return self.lookup(FactKind.PARAMETER, owner, method_name) or []

    def define_request_body(self, owner: type, method_name: str, body: RequestBodyFact) -> None:
        self.define(FactKind.REQUEST_BODY, owner, method_name, body)

    def get_request_body(self, owner: type, method_name: str) -> RequestBodyFact | None:
        return self.lookup(FactKind.REQUEST_BODY, owner, method_name)

    def define_response(self, owner: type, method_name: str, response: ResponseFact) -> None:
        self.define(FactKind.RESPONSE, owner, method_name, response)

    def get_responses(self, owner: type, method_name: str) -> dict[int, ResponseFact]:
        return self.lookup(FactKind.RESPONSE, owner, method_name) or {}

    # -------------------------------------------------------------------------
    # Class-level facts
    # -------------------------------------------------------------------------

    def define_tags(self, owner: type, tags: list[str]) -> None:
        self.define(FactKind.TAGS, owner, None, list(tags))

    def get_tags(self, owner: type) -> list[str]:
        return list(self.lookup(FactKind.TAGS, owner) or [])

    def define_property(self, owner: type, prop: PropertyFact) -> None:
        self.define(FactKind.PROPERTY, owner, None, prop)

    def get_own_properties(self, owner: type) -> dict[str, PropertyFact]:
        """Properties declared directly on owner."""
        return self.lookup(FactKind.PROPERTY, owner) or {}

    def get_properties(self, owner: type) -> dict[str, PropertyFact]:
        """
        Properties of a DTO including those declared on its base classes.

        Bases come first; a subclass redeclaring a field replaces the base
        entry for that field.
        """
        merged: dict[str, PropertyFact] = {}
        for klass in reversed(owner.__mro__):
            merged.update(self.get_own_properties(klass))
        return merged


# Process-wide store used by every controller and DTO unless overridden
metadata_store = MetadataStore()
