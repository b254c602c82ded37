"""Syringe: a path-addressed dependency registry with call-time injection.

A registry holds a tree of named values addressed by delimited paths
(``"data.first.second"``). Functions can be bound to a list of registry
paths; every call of the bound function looks those paths up again and
passes the values ahead of the caller's own arguments.

Key Features:
    - add/get/set/remove by dotted (or custom-delimited) path
    - Call-time dependency injection with placeholder, wildcard, self and
      global tokens
    - Plain function, method (explicit receiver) and factory bindings
    - Listeners for registry actions with exact, shallow and wildcard path filters
    - Loading JSON resources over HTTP into the registry

Basic Usage:
    >>> from syringe.builders import create
    >>>
    >>> registry = create({"first": {"second": "done"}})
    >>> registry.add("func", lambda data, msg: msg + " - " + data, ["first.second"])
    >>> registry.exec("func", ["hello world"])
    'hello world - done'

The library consists of several modules:
    - registry: the Registry and its public operations
    - builders: the ``create`` entry point
    - binder: bound functions and the binding operations
    - resolver: call-time resolution of dependency tokens
    - cabinet: the per-registry table of binding records
    - events: listener registration and dispatch
    - paths: reading and writing nested values by path
    - fetcher: loading JSON resources into a registry
    - config: registry settings and the root namespace
    - domain: core domain models (Kind, BindingRecord, BindingConfig, Listener)
    - errors: library-specific exceptions
"""
